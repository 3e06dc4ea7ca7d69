"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidRangeError(ValidationError):
    """A date window or buffer that cannot be computed."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def instrument_not_found(instrument_id: int) -> str:
    """Return message for missing instrument."""
    return f"Instrument {instrument_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for duplicate account name."""
    return f"Account with name '{name}' already exists"


def invalid_range(start_date: date, end_date: date) -> str:
    """Return message for a window whose start is after its end."""
    return (
        f"Start date {start_date.isoformat()} must be on or before "
        f"end date {end_date.isoformat()}"
    )


def negative_buffer(leading_days: int, trailing_days: int) -> str:
    """Return message for negative buffer days."""
    return (
        f"Buffer days cannot be negative (leading={leading_days}, "
        f"trailing={trailing_days})"
    )


def non_positive_amount(amount) -> str:
    """Return message for an amount that is zero or negative."""
    return f"Amount must be greater than zero, got {amount}"


def account_delete_blocked(account_id: int, instrument_count: int) -> str:
    """Return message when account still has instruments."""
    return (
        f"Cannot delete account {account_id}: it has {instrument_count} "
        f"instrument{'s' if instrument_count != 1 else ''}. "
        "Please delete them first."
    )
