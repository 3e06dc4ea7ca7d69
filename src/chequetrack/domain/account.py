"""Account domain service."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from chequetrack.domain.entities import Account as AccountEntity
from chequetrack.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_name,
)

if TYPE_CHECKING:
    from chequetrack.database.base import Database


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, opening_balance: Decimal = Decimal("0")) -> int:
        """Create a new account.

        Args:
            name: Account name
            opening_balance: Starting balance; projections are anchored on it

        Returns:
            Account ID

        Raises:
            ConflictError: If account name already exists
        """
        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        return self.db.create_account(name=name, opening_balance=opening_balance)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def set_opening_balance(self, account_id: int, opening_balance: Decimal) -> None:
        """Change the anchor balance of an account.

        Raises:
            NotFoundError: If account not found
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        self.db.update_opening_balance(account_id, opening_balance)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            NotFoundError: If account not found
            DependencyError: If the account still has instruments
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        instrument_count = self.db.get_account_instrument_count(account_id)
        if instrument_count > 0:
            raise DependencyError(account_delete_blocked(account_id, instrument_count))

        self.db.delete_account(account_id)
