"""Balance projection engine.

Pure functions over an in-memory snapshot of instruments. Each call folds its
own input from scratch and returns a new immutable result; nothing is cached
between calls.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from chequetrack.domain.entities import (
    BalanceTotals,
    DayProjection,
    Instrument,
    InstrumentKind,
    InstrumentStatus,
    PendingTotals,
    ProjectionRange,
    ProjectionResult,
)
from chequetrack.domain.errors import (
    InvalidRangeError,
    NotFoundError,
    account_not_found,
    invalid_range,
)
from chequetrack.utils.date_ranges import iter_dates

if TYPE_CHECKING:
    from chequetrack.database.base import Database

logger = logging.getLogger(__name__)

PROJECTION_ELIGIBLE_STATUSES = frozenset(
    {InstrumentStatus.PENDING, InstrumentStatus.DEDUCTED, InstrumentStatus.CLEARED}
)
CURRENT_BALANCE_STATUSES = frozenset({InstrumentStatus.CLEARED})


def is_aggregatable(
    instrument: Instrument,
    statuses: frozenset = PROJECTION_ELIGIBLE_STATUSES,
) -> bool:
    """Return True if the instrument may be folded into totals.

    Requires a recognized kind, a status in ``statuses`` and a positive amount.
    """
    return (
        isinstance(instrument.kind, InstrumentKind)
        and isinstance(instrument.status, InstrumentStatus)
        and instrument.status in statuses
        and instrument.amount > 0
    )


def is_malformed(instrument: Instrument) -> bool:
    """Return True if the instrument can never be aggregated.

    Covers unknown kind or status values and non-positive amounts.
    """
    return not is_aggregatable(instrument)


def _sort_key(instrument: Instrument):
    return (instrument.due_date, instrument.created_at, instrument.id)


def sum_totals(
    instruments: Iterable[Instrument],
    statuses: frozenset = PROJECTION_ELIGIBLE_STATUSES,
) -> BalanceTotals:
    """Fold every aggregatable instrument with a status in ``statuses``."""
    totals = BalanceTotals()
    for instrument in instruments:
        if is_aggregatable(instrument, statuses):
            totals = totals.add(instrument.kind, instrument.amount)
    return totals


def projected_balance(anchor_balance: Decimal, totals: BalanceTotals) -> Decimal:
    """Anchor plus deposits minus cheques and withdrawals."""
    return anchor_balance + totals.net


def calculate_current_balance(
    anchor_balance: Decimal, instruments: Iterable[Instrument]
) -> Decimal:
    """Balance of settled money: only ``cleared`` instruments count.

    Args:
        anchor_balance: Opening balance
        instruments: Instrument snapshot

    Returns:
        Current balance
    """
    return projected_balance(
        anchor_balance, sum_totals(instruments, CURRENT_BALANCE_STATUSES)
    )


def calculate_pending_totals(instruments: Iterable[Instrument]) -> PendingTotals:
    """Sum pending deposits and pending cheques/withdrawals separately."""
    totals = sum_totals(instruments, frozenset({InstrumentStatus.PENDING}))
    return PendingTotals(
        pending_deposits=totals.deposits,
        pending_outflows=totals.outflows,
    )


def project(
    anchor_balance: Decimal,
    instruments: Sequence[Instrument],
    start_date: date,
    end_date: date,
) -> ProjectionResult:
    """Project daily and cumulative totals over ``[start_date, end_date]``.

    Pending, deducted and cleared instruments all count. Instruments due
    before ``start_date`` seed the cumulative totals so a window opened
    mid-stream still reflects earlier obligations. Days without activity
    carry the previous day's totals forward.

    Args:
        anchor_balance: Balance the projection is relative to (may be negative)
        instruments: Full instrument snapshot for the scope
        start_date: First day of the window
        end_date: Last day of the window (inclusive)

    Returns:
        ProjectionResult with one DayProjection per date

    Raises:
        InvalidRangeError: If start_date is after end_date
    """
    if start_date > end_date:
        raise InvalidRangeError(invalid_range(start_date, end_date))

    excluded = tuple(item for item in instruments if is_malformed(item))
    for item in excluded:
        logger.warning(
            "Excluding instrument %s from projection (kind=%r, status=%r, amount=%s)",
            item.id,
            item.kind,
            item.status,
            item.amount,
        )

    eligible = sorted(
        (item for item in instruments if is_aggregatable(item)), key=_sort_key
    )

    cumulative = BalanceTotals()
    index = 0

    while index < len(eligible) and eligible[index].due_date < start_date:
        cumulative = cumulative.add(eligible[index].kind, eligible[index].amount)
        index += 1

    logger.debug(
        "Projecting %s..%s: %d eligible instruments, %d seeded before window",
        start_date,
        end_date,
        len(eligible),
        index,
    )

    days: list[DayProjection] = []
    by_date: dict[str, DayProjection] = {}

    for current in iter_dates(start_date, end_date):
        day_totals = BalanceTotals()
        while index < len(eligible) and eligible[index].due_date == current:
            instrument = eligible[index]
            day_totals = day_totals.add(instrument.kind, instrument.amount)
            cumulative = cumulative.add(instrument.kind, instrument.amount)
            index += 1

        day = DayProjection(
            date=current,
            day_totals=day_totals,
            cumulative_totals=cumulative,
            projected_balance=projected_balance(anchor_balance, cumulative),
        )
        days.append(day)
        by_date[current.isoformat()] = day

    return ProjectionResult(
        range=ProjectionRange(start_date=start_date, end_date=end_date),
        anchor_balance=anchor_balance,
        days=tuple(days),
        by_date=by_date,
        excluded=excluded,
    )


def get_detail_for_date(
    result: ProjectionResult, on_date: date | str
) -> Optional[DayProjection]:
    """Look up one day of a projection.

    Returns None for dates outside the computed window; the projection is
    never extrapolated.
    """
    key = on_date.isoformat() if isinstance(on_date, date) else on_date
    return result.by_date.get(key)


class ProjectionService:
    """Service that loads an account snapshot and projects it."""

    def __init__(self, db: Database):
        """Initialize projection service.

        Args:
            db: Database instance
        """
        self.db = db

    def _load(self, account_id: int):
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account, self.db.list_instruments(account_id=account_id)

    def project_account(
        self, account_id: int, start_date: date, end_date: date
    ) -> ProjectionResult:
        """Project an account's balance over a window.

        The anchor is the account's opening balance and the full instrument
        set is re-read on every call. The window is checked before anything
        is read from storage.

        Raises:
            NotFoundError: If the account does not exist
            InvalidRangeError: If start_date is after end_date
        """
        if start_date > end_date:
            raise InvalidRangeError(invalid_range(start_date, end_date))
        account, instruments = self._load(account_id)
        return project(account.opening_balance, instruments, start_date, end_date)

    def current_balance(self, account_id: int) -> Decimal:
        """Return the account's cleared balance."""
        account, instruments = self._load(account_id)
        return calculate_current_balance(account.opening_balance, instruments)

    def pending_totals(self, account_id: int) -> PendingTotals:
        """Return the account's pending inflow and outflow."""
        _, instruments = self._load(account_id)
        return calculate_pending_totals(instruments)
