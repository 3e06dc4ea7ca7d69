"""Instrument domain service."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional

from chequetrack.domain.entities import Instrument as InstrumentEntity
from chequetrack.domain.entities import InstrumentKind, InstrumentStatus
from chequetrack.domain.errors import (
    InvalidRangeError,
    NotFoundError,
    ValidationError,
    account_not_found,
    instrument_not_found,
    invalid_range,
    non_positive_amount,
)

if TYPE_CHECKING:
    from chequetrack.database.base import Database


def parse_kind(value: InstrumentKind | str) -> InstrumentKind:
    """Resolve an instrument kind.

    Raises:
        ValidationError: If the value is not a known kind
    """
    if isinstance(value, InstrumentKind):
        return value
    try:
        return InstrumentKind(value.strip().lower())
    except ValueError:
        supported = ", ".join(kind.value for kind in InstrumentKind)
        raise ValidationError(f"Unknown instrument kind: '{value}'. Supported kinds: {supported}")


def parse_status(value: InstrumentStatus | str) -> InstrumentStatus:
    """Resolve an instrument status.

    Raises:
        ValidationError: If the value is not a known status
    """
    if isinstance(value, InstrumentStatus):
        return value
    try:
        return InstrumentStatus(value.strip().lower())
    except ValueError:
        supported = ", ".join(status.value for status in InstrumentStatus)
        raise ValidationError(f"Unknown instrument status: '{value}'. Supported statuses: {supported}")


def validate_amount(amount: Decimal) -> Decimal:
    """Return ``amount`` if it is positive.

    Raises:
        ValidationError: If amount is zero or negative
    """
    if amount <= 0:
        raise ValidationError(non_positive_amount(amount))
    return amount


class InstrumentService:
    """Service for managing instruments."""

    def __init__(self, db: Database, today: Callable[[], date] = date.today):
        """Initialize instrument service.

        Args:
            db: Database instance
            today: Returns the civil date used when created_date is omitted
        """
        self.db = db
        self.today = today

    def create_instrument(
        self,
        account_id: int,
        kind: InstrumentKind | str,
        amount: Decimal,
        due_date: date,
        status: InstrumentStatus | str = InstrumentStatus.PENDING,
        created_date: Optional[date] = None,
        cheque_number: Optional[str] = None,
        payee: Optional[str] = None,
        description: Optional[str] = None,
        reference_number: Optional[str] = None,
    ) -> int:
        """Create an instrument.

        Args:
            account_id: Owning account ID
            kind: deposit, cheque or withdrawal
            amount: Positive amount
            due_date: Date the instrument is expected to take effect
            status: Initial status (defaults to pending)
            created_date: Date recorded; defaults to ``self.today()``
            cheque_number: Optional cheque number
            payee: Optional payee
            description: Optional description
            reference_number: Optional reference number

        Returns:
            Instrument ID

        Raises:
            NotFoundError: If account doesn't exist
            ValidationError: If kind, status or amount is invalid
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        return self.db.create_instrument(
            account_id=account_id,
            kind=parse_kind(kind),
            amount=validate_amount(amount),
            status=parse_status(status),
            due_date=due_date,
            created_date=created_date if created_date is not None else self.today(),
            cheque_number=cheque_number,
            payee=payee,
            description=description,
            reference_number=reference_number,
        )

    def get_instrument(self, instrument_id: int) -> Optional[InstrumentEntity]:
        """Get instrument by ID.

        Args:
            instrument_id: Instrument ID

        Returns:
            Instrument entity or None if not found
        """
        return self.db.get_instrument(instrument_id)

    def require_instrument(self, instrument_id: int) -> InstrumentEntity:
        """Get instrument by ID or raise NotFoundError."""
        instrument = self.db.get_instrument(instrument_id)
        if instrument is None:
            raise NotFoundError(instrument_not_found(instrument_id))
        return instrument

    def list_instruments(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[InstrumentKind | str] = None,
        status: Optional[InstrumentStatus | str] = None,
    ) -> list[InstrumentEntity]:
        """List instruments with filters on due date, kind and status.

        Raises:
            InvalidRangeError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise InvalidRangeError(invalid_range(start_date, end_date))

        return self.db.list_instruments(
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
            kind=parse_kind(kind) if kind is not None else None,
            status=parse_status(status) if status is not None else None,
        )

    def update_instrument(
        self,
        instrument_id: int,
        kind: Optional[InstrumentKind | str] = None,
        amount: Optional[Decimal] = None,
        due_date: Optional[date] = None,
        cheque_number: Optional[str] = None,
        payee: Optional[str] = None,
        description: Optional[str] = None,
        reference_number: Optional[str] = None,
    ) -> None:
        """Update instrument fields. Fields left as None are unchanged.

        Raises:
            NotFoundError: If instrument doesn't exist
            ValidationError: If kind or amount is invalid
        """
        self.require_instrument(instrument_id)

        self.db.update_instrument(
            instrument_id=instrument_id,
            kind=parse_kind(kind) if kind is not None else None,
            amount=validate_amount(amount) if amount is not None else None,
            due_date=due_date,
            cheque_number=cheque_number,
            payee=payee,
            description=description,
            reference_number=reference_number,
        )

    def update_status(self, instrument_id: int, status: InstrumentStatus | str) -> None:
        """Set an instrument's status manually.

        Raises:
            NotFoundError: If instrument doesn't exist
            ValidationError: If status is invalid
        """
        self.require_instrument(instrument_id)
        self.db.update_instrument_status(instrument_id, parse_status(status))

    def delete_instrument(self, instrument_id: int) -> None:
        """Delete an instrument.

        Raises:
            NotFoundError: If instrument doesn't exist
        """
        self.require_instrument(instrument_id)
        self.db.delete_instrument(instrument_id)
