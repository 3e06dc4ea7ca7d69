"""Mapper functions to convert between domain models and SQLAlchemy models.

Kind and status are stored as strings and handed to the entities as read;
``Instrument`` turns known values into enum members and keeps anything else
as a raw string, so the engines can exclude legacy rows instead of the whole
read failing.
"""

from decimal import Decimal

from chequetrack.domain import entities as domain
from chequetrack.database.models import (
    Account as ORMAccount,
    Instrument as ORMInstrument,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        opening_balance=Decimal(orm_account.opening_balance),
        created_at=orm_account.created_at,
    )


def instrument_to_domain(orm_instrument: ORMInstrument) -> domain.Instrument:
    """Convert SQLAlchemy Instrument model to domain Instrument entity."""
    return domain.Instrument(
        id=orm_instrument.id,
        account_id=orm_instrument.account_id,
        kind=orm_instrument.kind,
        amount=Decimal(orm_instrument.amount),
        status=orm_instrument.status,
        due_date=orm_instrument.due_date,
        created_date=orm_instrument.created_date,
        created_at=orm_instrument.created_at,
        updated_at=orm_instrument.updated_at,
        cheque_number=orm_instrument.cheque_number,
        payee=orm_instrument.payee,
        description=orm_instrument.description,
        reference_number=orm_instrument.reference_number,
    )
