"""Summary aggregates for reports and exports."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from chequetrack.domain.entities import (
    BalanceTotals,
    Instrument,
    InstrumentKind,
    InstrumentStatus,
    MonthlyBreakdownRow,
    SummaryTotals,
)
from chequetrack.domain.errors import InvalidRangeError, invalid_range
from chequetrack.domain.projection import is_malformed

if TYPE_CHECKING:
    from chequetrack.database.base import Database


def build_summary_totals(instruments: Iterable[Instrument]) -> SummaryTotals:
    """Total amounts and counts by kind and by status.

    Instruments with an unknown kind or status or a non-positive amount are
    skipped, the same way the projection engine skips them.
    """
    by_kind = BalanceTotals()
    kind_counts = {kind: 0 for kind in InstrumentKind}
    status_amounts = {status: Decimal("0") for status in InstrumentStatus}
    status_counts = {status: 0 for status in InstrumentStatus}
    record_count = 0

    for instrument in instruments:
        if is_malformed(instrument):
            continue
        by_kind = by_kind.add(instrument.kind, instrument.amount)
        kind_counts[instrument.kind] += 1
        status_amounts[instrument.status] += instrument.amount
        status_counts[instrument.status] += 1
        record_count += 1

    return SummaryTotals(
        by_kind=by_kind,
        kind_counts=kind_counts,
        status_amounts=status_amounts,
        status_counts=status_counts,
        record_count=record_count,
    )


def build_monthly_breakdown(
    instruments: Iterable[Instrument],
) -> list[MonthlyBreakdownRow]:
    """Group instruments by due month (``YYYY-MM``), oldest month first."""
    months: dict[str, MonthlyBreakdownRow] = {}

    for instrument in instruments:
        if is_malformed(instrument):
            continue
        key = instrument.due_date.strftime("%Y-%m")
        row = months.get(key) or MonthlyBreakdownRow(month=key)
        months[key] = MonthlyBreakdownRow(
            month=key,
            totals=row.totals.add(instrument.kind, instrument.amount),
            instrument_count=row.instrument_count + 1,
        )

    return [months[key] for key in sorted(months)]


class SummaryService:
    """Service for building summary aggregates from storage."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_instruments(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Instrument]:
        """Get instruments matching summary criteria."""
        if start_date is not None and end_date is not None and start_date > end_date:
            raise InvalidRangeError(invalid_range(start_date, end_date))
        return self.db.list_instruments(
            account_id=account_id, start_date=start_date, end_date=end_date
        )

    def summary_totals(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> SummaryTotals:
        """Totals by kind and status for the filtered instruments."""
        return build_summary_totals(
            self.get_instruments(account_id, start_date, end_date)
        )

    def monthly_breakdown(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[MonthlyBreakdownRow]:
        """Per-month totals for the filtered instruments."""
        return build_monthly_breakdown(
            self.get_instruments(account_id, start_date, end_date)
        )
