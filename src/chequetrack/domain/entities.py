"""Domain model entities for chequetrack.

These are pure data classes representing business concepts, independent of
database schema. The projection and transition engines only ever see these
types, so storage can change without touching balance arithmetic.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, TypeVar, Union


class InstrumentKind(str, Enum):
    """Kind of money movement. Determines the sign in aggregation."""

    DEPOSIT = "deposit"
    CHEQUE = "cheque"
    WITHDRAWAL = "withdrawal"

    @property
    def is_outflow(self) -> bool:
        return self is not InstrumentKind.DEPOSIT


class InstrumentStatus(str, Enum):
    """Lifecycle state of an instrument."""

    PENDING = "pending"
    DEDUCTED = "deducted"
    CLEARED = "cleared"

    @property
    def is_terminal(self) -> bool:
        return self is not InstrumentStatus.PENDING


# Legacy rows may carry values outside the closed sets; storage passes them
# through as raw strings and the engines exclude them.
KindValue = Union[InstrumentKind, str]
StatusValue = Union[InstrumentStatus, str]

E = TypeVar("E", bound=Enum)


def coerce_enum(enum_type: type[E], value) -> E | str:
    """Return the enum member for ``value``, or ``value`` itself if unknown."""
    try:
        return enum_type(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class Account:
    """Account domain entity. ``opening_balance`` is the projection anchor."""

    id: int
    name: str
    opening_balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Instrument:
    """A single dated, typed, status-tagged promise of money movement."""

    id: int
    account_id: int
    kind: KindValue
    amount: Decimal
    status: StatusValue
    due_date: date
    created_date: date
    created_at: datetime
    updated_at: datetime
    cheque_number: Optional[str] = None
    payee: Optional[str] = None
    description: Optional[str] = None
    reference_number: Optional[str] = None

    def __post_init__(self):
        # Plain strings naming a known kind or status become enum members
        object.__setattr__(self, "kind", coerce_enum(InstrumentKind, self.kind))
        object.__setattr__(self, "status", coerce_enum(InstrumentStatus, self.status))


@dataclass(frozen=True)
class BalanceTotals:
    """Aggregated amounts split by instrument kind."""

    deposits: Decimal = Decimal("0")
    cheques: Decimal = Decimal("0")
    withdrawals: Decimal = Decimal("0")

    def add(self, kind: InstrumentKind, amount: Decimal) -> "BalanceTotals":
        """Return new totals with ``amount`` folded into the bucket for ``kind``."""
        if kind is InstrumentKind.DEPOSIT:
            return BalanceTotals(self.deposits + amount, self.cheques, self.withdrawals)
        if kind is InstrumentKind.CHEQUE:
            return BalanceTotals(self.deposits, self.cheques + amount, self.withdrawals)
        if kind is InstrumentKind.WITHDRAWAL:
            return BalanceTotals(self.deposits, self.cheques, self.withdrawals + amount)
        raise ValueError(f"Unknown instrument kind: {kind!r}")

    @property
    def outflows(self) -> Decimal:
        return self.cheques + self.withdrawals

    @property
    def net(self) -> Decimal:
        """Deposits minus cheques and withdrawals."""
        return self.deposits - self.outflows


@dataclass(frozen=True)
class ProjectionRange:
    """Inclusive civil-date window."""

    start_date: date
    end_date: date

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class DayProjection:
    """One date's aggregated totals and the resulting projected balance."""

    date: date
    day_totals: BalanceTotals
    cumulative_totals: BalanceTotals
    projected_balance: Decimal


@dataclass(frozen=True)
class ProjectionResult:
    """Day-indexed projection over a window.

    ``by_date`` is keyed by ISO date string (``YYYY-MM-DD``). ``excluded``
    lists instruments that were left out of every total.
    """

    range: ProjectionRange
    anchor_balance: Decimal
    days: tuple[DayProjection, ...]
    by_date: Mapping[str, DayProjection]
    excluded: tuple[Instrument, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "by_date", MappingProxyType(dict(self.by_date)))


@dataclass(frozen=True)
class PendingTotals:
    """Amounts still pending, split into inflow and outflow."""

    pending_deposits: Decimal
    pending_outflows: Decimal


@dataclass(frozen=True)
class StatusUpdate:
    """A single status change to be persisted."""

    id: int
    new_status: InstrumentStatus


@dataclass(frozen=True)
class TransitionOutcome:
    """Result of applying due-date transitions to a snapshot."""

    local_date: date
    updated: tuple[Instrument, ...]
    updates: tuple[StatusUpdate, ...] = ()
    updated_cheques_withdrawals: int = 0
    updated_deposits: int = 0

    @property
    def total(self) -> int:
        return self.updated_cheques_withdrawals + self.updated_deposits


@dataclass(frozen=True)
class SummaryTotals:
    """Totals and counts by kind and by status for a set of instruments."""

    by_kind: BalanceTotals
    kind_counts: Mapping[InstrumentKind, int]
    status_amounts: Mapping[InstrumentStatus, Decimal]
    status_counts: Mapping[InstrumentStatus, int]
    record_count: int

    def __post_init__(self):
        for name in ("kind_counts", "status_amounts", "status_counts"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def deductions(self) -> Decimal:
        return self.by_kind.outflows

    @property
    def net_cash_flow(self) -> Decimal:
        return self.by_kind.net


@dataclass(frozen=True)
class MonthlyBreakdownRow:
    """Per-month aggregate keyed by ``YYYY-MM`` of the due date."""

    month: str
    totals: BalanceTotals = field(default_factory=BalanceTotals)
    instrument_count: int = 0

    @property
    def deductions(self) -> Decimal:
        return self.totals.outflows

    @property
    def net_cash_flow(self) -> Decimal:
        return self.totals.net
