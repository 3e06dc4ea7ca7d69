"""Database layer for chequetrack application."""

from chequetrack.database.base import Database
from chequetrack.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
