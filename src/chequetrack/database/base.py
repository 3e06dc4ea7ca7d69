"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from chequetrack.domain.entities import (
    Account,
    Instrument,
    InstrumentKind,
    InstrumentStatus,
    StatusUpdate,
)


class Database(ABC):
    """Abstract database interface for chequetrack."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, opening_balance: Decimal) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def update_opening_balance(self, account_id: int, opening_balance: Decimal) -> None:
        """Set an account's opening balance."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_instrument_count(self, account_id: int) -> int:
        """Count instruments belonging to an account."""
        pass

    # Instrument operations
    @abstractmethod
    def create_instrument(
        self,
        account_id: int,
        kind: InstrumentKind,
        amount: Decimal,
        status: InstrumentStatus,
        due_date: date,
        created_date: date,
        cheque_number: Optional[str] = None,
        payee: Optional[str] = None,
        description: Optional[str] = None,
        reference_number: Optional[str] = None,
    ) -> int:
        """Create an instrument. Returns instrument ID."""
        pass

    @abstractmethod
    def get_instrument(self, instrument_id: int) -> Optional[Instrument]:
        """Get instrument by ID."""
        pass

    @abstractmethod
    def list_instruments(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[InstrumentKind] = None,
        status: Optional[InstrumentStatus] = None,
    ) -> list[Instrument]:
        """List instruments with optional filters.

        Date filters apply to the due date (inclusive). Results are ordered
        by due date, then creation time, then ID.

        Args:
            account_id: Optional account ID filter
            start_date: Optional earliest due date
            end_date: Optional latest due date
            kind: Optional kind filter
            status: Optional status filter
        """
        pass

    @abstractmethod
    def update_instrument(
        self,
        instrument_id: int,
        kind: Optional[InstrumentKind] = None,
        amount: Optional[Decimal] = None,
        due_date: Optional[date] = None,
        cheque_number: Optional[str] = None,
        payee: Optional[str] = None,
        description: Optional[str] = None,
        reference_number: Optional[str] = None,
    ) -> None:
        """Update instrument fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def update_instrument_status(self, instrument_id: int, status: InstrumentStatus) -> None:
        """Set an instrument's status unconditionally."""
        pass

    @abstractmethod
    def delete_instrument(self, instrument_id: int) -> None:
        """Delete an instrument."""
        pass

    @abstractmethod
    def apply_status_transitions(self, updates: Sequence[StatusUpdate]) -> int:
        """Persist due-date transitions.

        Each update only applies if the row is still pending, so a repeated
        or concurrent run changes nothing. Returns the number of rows changed.
        """
        pass
