"""Due-date status transitions.

``apply_due_transitions`` is a pure function over a snapshot. The service
wraps it with timezone resolution and persistence; persistence only touches
rows that are still pending, so repeated or concurrent runs are safe.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from chequetrack.domain.entities import (
    Instrument,
    InstrumentKind,
    InstrumentStatus,
    StatusUpdate,
    TransitionOutcome,
)
from chequetrack.domain.errors import NotFoundError, account_not_found
from chequetrack.utils.clock import resolve_timezone_name, today_in_timezone

if TYPE_CHECKING:
    from chequetrack.database.base import Database

logger = logging.getLogger(__name__)

SETTLED_STATUS_BY_KIND = {
    InstrumentKind.DEPOSIT: InstrumentStatus.CLEARED,
    InstrumentKind.CHEQUE: InstrumentStatus.DEDUCTED,
    InstrumentKind.WITHDRAWAL: InstrumentStatus.DEDUCTED,
}


def settled_status(kind: InstrumentKind) -> InstrumentStatus:
    """Terminal status a pending instrument of ``kind`` moves to when due."""
    return SETTLED_STATUS_BY_KIND[kind]


def is_due(instrument: Instrument, local_date: date) -> bool:
    """Return True if the instrument is pending and due on ``local_date``."""
    return (
        instrument.status is InstrumentStatus.PENDING
        and isinstance(instrument.kind, InstrumentKind)
        and instrument.due_date == local_date
    )


def apply_due_transitions(
    instruments: Sequence[Instrument], local_date: date
) -> TransitionOutcome:
    """Settle pending instruments due on ``local_date``.

    Cheques and withdrawals become ``deducted``; deposits become ``cleared``.
    Everything else passes through unchanged, which makes a second call with
    the same date a no-op.

    Args:
        instruments: Instrument snapshot
        local_date: "Today" as a civil date in the caller's timezone

    Returns:
        TransitionOutcome with the updated snapshot and per-kind counts
    """
    updated: list[Instrument] = []
    updates: list[StatusUpdate] = []
    outflow_count = 0
    deposit_count = 0

    for instrument in instruments:
        if not is_due(instrument, local_date):
            updated.append(instrument)
            continue

        new_status = settled_status(instrument.kind)
        updated.append(replace(instrument, status=new_status))
        updates.append(StatusUpdate(id=instrument.id, new_status=new_status))
        if instrument.kind is InstrumentKind.DEPOSIT:
            deposit_count += 1
        else:
            outflow_count += 1

    return TransitionOutcome(
        local_date=local_date,
        updated=tuple(updated),
        updates=tuple(updates),
        updated_cheques_withdrawals=outflow_count,
        updated_deposits=deposit_count,
    )


class StatusTransitionService:
    """Service that runs due transitions against storage."""

    def __init__(
        self,
        db: Database,
        clock: Callable[[str], date] = today_in_timezone,
        default_timezone: Optional[str] = None,
    ):
        """Initialize status transition service.

        Args:
            db: Database instance
            clock: Returns today's civil date for an IANA timezone name
            default_timezone: Timezone used when none is passed to a run
        """
        self.db = db
        self.clock = clock
        self.default_timezone = default_timezone

    def run_due_transitions(
        self,
        timezone: Optional[str] = None,
        account_id: Optional[int] = None,
    ) -> TransitionOutcome:
        """Settle instruments due today and persist the new statuses.

        Args:
            timezone: IANA timezone for "today"; falls back to the default
                timezone, then UTC
            account_id: Optional account scope; all accounts when None

        Returns:
            TransitionOutcome for the snapshot that was read

        Raises:
            NotFoundError: If account_id is given and does not exist
            ValidationError: If the timezone is unknown
        """
        if account_id is not None and self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        tz_name = resolve_timezone_name(timezone, self.default_timezone)
        local_date = self.clock(tz_name)

        snapshot = self.db.list_instruments(
            account_id=account_id,
            start_date=local_date,
            end_date=local_date,
            status=InstrumentStatus.PENDING,
        )
        outcome = apply_due_transitions(snapshot, local_date)

        applied = 0
        if outcome.updates:
            applied = self.db.apply_status_transitions(outcome.updates)

        logger.info(
            "Status transitions for %s (%s): %d cheques/withdrawals deducted, "
            "%d deposits cleared, %d rows written",
            local_date,
            tz_name,
            outcome.updated_cheques_withdrawals,
            outcome.updated_deposits,
            applied,
        )
        if applied != outcome.total:
            logger.info(
                "%d of %d transitions were already applied by another run",
                outcome.total - applied,
                outcome.total,
            )

        return outcome
