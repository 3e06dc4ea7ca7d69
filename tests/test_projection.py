"""Tests for the balance projection engine."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from chequetrack.domain.entities import (
    BalanceTotals,
    InstrumentKind,
    InstrumentStatus,
)
from chequetrack.domain.errors import InvalidRangeError, NotFoundError
from chequetrack.domain.projection import (
    ProjectionService,
    calculate_current_balance,
    calculate_pending_totals,
    get_detail_for_date,
    project,
)

DEPOSIT = InstrumentKind.DEPOSIT
CHEQUE = InstrumentKind.CHEQUE
WITHDRAWAL = InstrumentKind.WITHDRAWAL
PENDING = InstrumentStatus.PENDING
DEDUCTED = InstrumentStatus.DEDUCTED
CLEARED = InstrumentStatus.CLEARED


@pytest.fixture
def scenario_b(make_instrument):
    """Week of 2026-01-01 with instruments in every status."""
    return [
        make_instrument(DEPOSIT, "100", CLEARED, date(2026, 1, 2)),
        make_instrument(CHEQUE, "50", PENDING, date(2026, 1, 4)),
        make_instrument(WITHDRAWAL, "25", DEDUCTED, date(2026, 1, 4)),
        make_instrument(DEPOSIT, "10", PENDING, date(2026, 1, 6)),
    ]


class TestCurrentBalance:
    """Tests for calculate_current_balance."""

    def test_literal_scenario(self, make_instrument):
        """Opening 1000 with mixed statuses settles at 1175."""
        instruments = [
            make_instrument(DEPOSIT, "300", CLEARED, date(2026, 1, 5)),
            make_instrument(DEPOSIT, "200", PENDING, date(2026, 1, 6)),
            make_instrument(CHEQUE, "125", CLEARED, date(2026, 1, 7)),
            make_instrument(WITHDRAWAL, "50", DEDUCTED, date(2025, 12, 20)),
        ]

        assert calculate_current_balance(Decimal("1000"), instruments) == Decimal("1175")

    def test_only_cleared_counts(self, make_instrument):
        """Changing a non-cleared amount leaves the current balance alone."""
        cleared = make_instrument(DEPOSIT, "300", CLEARED)
        small = [cleared, make_instrument(CHEQUE, "10", PENDING), make_instrument(WITHDRAWAL, "5", DEDUCTED)]
        large = [cleared, make_instrument(CHEQUE, "9999", PENDING), make_instrument(WITHDRAWAL, "777", DEDUCTED)]

        assert calculate_current_balance(Decimal("0"), small) == calculate_current_balance(
            Decimal("0"), large
        )

    def test_empty_returns_anchor(self):
        assert calculate_current_balance(Decimal("-42.50"), []) == Decimal("-42.50")


class TestProject:
    """Tests for project."""

    def test_literal_week(self, scenario_b):
        """Each day of the window has the expected projected balance."""
        result = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))

        balances = {day.date.isoformat(): day.projected_balance for day in result.days}
        assert balances == {
            "2026-01-01": Decimal("1000"),
            "2026-01-02": Decimal("1100"),
            "2026-01-03": Decimal("1100"),
            "2026-01-04": Decimal("1025"),
            "2026-01-05": Decimal("1025"),
            "2026-01-06": Decimal("1035"),
            "2026-01-07": Decimal("1035"),
        }

    def test_day_totals_split_by_kind(self, scenario_b):
        result = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))

        day = result.by_date["2026-01-04"]
        assert day.day_totals == BalanceTotals(
            deposits=Decimal("0"), cheques=Decimal("50"), withdrawals=Decimal("25")
        )
        assert day.cumulative_totals == BalanceTotals(
            deposits=Decimal("100"), cheques=Decimal("50"), withdrawals=Decimal("25")
        )

    def test_result_echoes_window_and_anchor(self, scenario_b):
        result = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))

        assert result.range.start_date == date(2026, 1, 1)
        assert result.range.end_date == date(2026, 1, 7)
        assert result.range.days == 7
        assert result.anchor_balance == Decimal("1000")
        assert [day.date for day in result.days] == [
            date(2026, 1, 1) + timedelta(days=offset) for offset in range(7)
        ]
        assert list(result.by_date) == [day.date.isoformat() for day in result.days]

    def test_carry_forward_on_quiet_days(self, make_instrument):
        """Days with nothing due repeat the previous balance."""
        instruments = [
            make_instrument(DEPOSIT, "500", PENDING, date(2026, 3, 1)),
            make_instrument(CHEQUE, "80", PENDING, date(2026, 3, 20)),
        ]
        result = project(Decimal("0"), instruments, date(2026, 3, 1), date(2026, 3, 31))

        for previous, current in zip(result.days, result.days[1:]):
            if current.date != date(2026, 3, 20):
                assert current.projected_balance == previous.projected_balance
                assert current.cumulative_totals == previous.cumulative_totals
                assert current.day_totals == BalanceTotals()

    def test_instruments_before_window_seed_totals(self, make_instrument):
        """An instrument due before the window counts on every window day."""
        instruments = [
            make_instrument(CHEQUE, "200", DEDUCTED, date(2025, 11, 15)),
            make_instrument(DEPOSIT, "75", CLEARED, date(2025, 12, 31)),
        ]
        result = project(Decimal("1000"), instruments, date(2026, 1, 1), date(2026, 1, 5))

        for day in result.days:
            assert day.day_totals == BalanceTotals()
            assert day.cumulative_totals.cheques == Decimal("200")
            assert day.cumulative_totals.deposits == Decimal("75")
            assert day.projected_balance == Decimal("875")

    def test_instruments_after_window_are_ignored(self, make_instrument):
        instruments = [make_instrument(CHEQUE, "200", PENDING, date(2026, 2, 1))]
        result = project(Decimal("10"), instruments, date(2026, 1, 1), date(2026, 1, 31))

        assert all(day.projected_balance == Decimal("10") for day in result.days)

    def test_empty_instruments_is_flat_line(self):
        result = project(Decimal("250.75"), [], date(2026, 1, 1), date(2026, 1, 10))

        assert len(result.days) == 10
        assert all(day.projected_balance == Decimal("250.75") for day in result.days)
        assert all(day.cumulative_totals == BalanceTotals() for day in result.days)
        assert result.excluded == ()

    def test_single_day_window(self, make_instrument):
        instruments = [
            make_instrument(DEPOSIT, "40", PENDING, date(2026, 1, 1)),
            make_instrument(WITHDRAWAL, "15", PENDING, date(2026, 1, 2)),
        ]
        result = project(Decimal("0"), instruments, date(2026, 1, 2), date(2026, 1, 2))

        assert len(result.days) == 1
        assert result.days[0].day_totals.withdrawals == Decimal("15")
        assert result.days[0].projected_balance == Decimal("25")

    def test_negative_anchor(self, make_instrument):
        instruments = [make_instrument(DEPOSIT, "30", PENDING, date(2026, 1, 2))]
        result = project(Decimal("-100"), instruments, date(2026, 1, 1), date(2026, 1, 2))

        assert result.days[0].projected_balance == Decimal("-100")
        assert result.days[1].projected_balance == Decimal("-70")

    def test_duplicates_stack(self, make_instrument):
        """Identical instruments due the same day are all counted."""
        instruments = [make_instrument(CHEQUE, "20", PENDING, date(2026, 1, 3)) for _ in range(3)]
        result = project(Decimal("100"), instruments, date(2026, 1, 3), date(2026, 1, 3))

        assert result.days[0].day_totals.cheques == Decimal("60")
        assert result.days[0].projected_balance == Decimal("40")

    def test_input_order_does_not_matter(self, scenario_b):
        forward = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))
        backward = project(
            Decimal("1000"), list(reversed(scenario_b)), date(2026, 1, 1), date(2026, 1, 7)
        )

        assert forward.days == backward.days

    def test_recomputation_is_idempotent(self, scenario_b):
        first = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))
        second = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))

        assert first == second

    def test_earlier_days_are_snapshots(self, scenario_b):
        """Later accumulation never changes an earlier day's cumulative totals."""
        result = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))

        assert result.by_date["2026-01-02"].cumulative_totals.cheques == Decimal("0")
        assert result.by_date["2026-01-07"].cumulative_totals.cheques == Decimal("50")

    def test_inverted_range_rejected(self):
        with pytest.raises(InvalidRangeError):
            project(Decimal("0"), [], date(2026, 1, 2), date(2026, 1, 1))

    def test_unknown_status_excluded(self, make_instrument):
        """Legacy statuses are left out of totals and reported."""
        legacy = make_instrument(DEPOSIT, "500", "bounced", date(2026, 1, 1))
        valid = make_instrument(DEPOSIT, "20", PENDING, date(2026, 1, 1))
        result = project(Decimal("0"), [legacy, valid], date(2026, 1, 1), date(2026, 1, 1))

        assert result.days[0].projected_balance == Decimal("20")
        assert result.excluded == (legacy,)

    def test_plain_string_kind_and_status_count(self, make_instrument):
        """Known values given as plain strings are aggregated like enum members."""
        deposit = make_instrument("deposit", "100", "cleared", date(2026, 1, 2))

        result = project(Decimal("1000"), [deposit], date(2026, 1, 1), date(2026, 1, 3))

        assert [day.projected_balance for day in result.days] == [
            Decimal("1000"),
            Decimal("1100"),
            Decimal("1100"),
        ]
        assert result.excluded == ()
        assert deposit.kind is DEPOSIT
        assert deposit.status is CLEARED
        assert calculate_current_balance(Decimal("1000"), [deposit]) == Decimal("1100")

    def test_lookup_is_read_only(self, make_instrument):
        result = project(
            Decimal("0"),
            [make_instrument(DEPOSIT, "5", PENDING, date(2026, 1, 1))],
            date(2026, 1, 1),
            date(2026, 1, 1),
        )

        with pytest.raises(TypeError):
            result.by_date["2026-01-01"] = None
        assert result.by_date["2026-01-01"].projected_balance == Decimal("5")

    def test_unknown_kind_excluded(self, make_instrument):
        legacy = make_instrument("transfer", "500", PENDING, date(2026, 1, 1))
        result = project(Decimal("0"), [legacy], date(2026, 1, 1), date(2026, 1, 1))

        assert result.days[0].projected_balance == Decimal("0")
        assert result.excluded == (legacy,)

    def test_non_positive_amount_excluded(self, make_instrument, caplog):
        zero = make_instrument(CHEQUE, "0", PENDING, date(2026, 1, 1))
        negative = make_instrument(DEPOSIT, "-5", CLEARED, date(2026, 1, 1))

        with caplog.at_level("WARNING", logger="chequetrack.domain.projection"):
            result = project(Decimal("10"), [zero, negative], date(2026, 1, 1), date(2026, 1, 1))

        assert result.days[0].projected_balance == Decimal("10")
        assert set(result.excluded) == {zero, negative}
        assert "Excluding instrument" in caplog.text

    def test_exact_cent_accumulation(self, make_instrument):
        """Many small amounts add up without drift."""
        instruments = [
            make_instrument(DEPOSIT, "0.10", PENDING, date(2026, 1, 1)) for _ in range(1000)
        ]
        result = project(Decimal("0"), instruments, date(2026, 1, 1), date(2026, 1, 1))

        assert result.days[0].projected_balance == Decimal("100.00")


class TestDetailForDate:
    """Tests for get_detail_for_date."""

    def test_inside_window(self, scenario_b):
        result = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))

        detail = get_detail_for_date(result, date(2026, 1, 4))
        assert detail is not None
        assert detail.projected_balance == Decimal("1025")
        assert get_detail_for_date(result, "2026-01-04") == detail

    @pytest.mark.parametrize("outside", [date(2025, 12, 31), date(2026, 1, 8), "2026-02-01"])
    def test_outside_window_is_absent(self, scenario_b, outside):
        result = project(Decimal("1000"), scenario_b, date(2026, 1, 1), date(2026, 1, 7))

        assert get_detail_for_date(result, outside) is None


class TestPendingTotals:
    """Tests for calculate_pending_totals."""

    def test_pending_split(self, make_instrument):
        instruments = [
            make_instrument(DEPOSIT, "200", PENDING),
            make_instrument(DEPOSIT, "300", CLEARED),
            make_instrument(CHEQUE, "40", PENDING),
            make_instrument(WITHDRAWAL, "60", PENDING),
            make_instrument(WITHDRAWAL, "99", DEDUCTED),
        ]

        totals = calculate_pending_totals(instruments)
        assert totals.pending_deposits == Decimal("200")
        assert totals.pending_outflows == Decimal("100")


class TestProjectionService:
    """Tests for ProjectionService against the database."""

    def test_project_account_uses_opening_balance(self, temp_db, sample_account, instrument_service):
        instrument_service.create_instrument(
            account_id=sample_account.id,
            kind=DEPOSIT,
            amount=Decimal("100"),
            due_date=date(2026, 1, 2),
            status=CLEARED,
        )
        instrument_service.create_instrument(
            account_id=sample_account.id,
            kind=CHEQUE,
            amount=Decimal("50"),
            due_date=date(2026, 1, 4),
        )
        service = ProjectionService(temp_db)

        result = service.project_account(sample_account.id, date(2026, 1, 1), date(2026, 1, 5))

        assert result.anchor_balance == Decimal("1000.00")
        assert [day.projected_balance for day in result.days] == [
            Decimal("1000"),
            Decimal("1100"),
            Decimal("1100"),
            Decimal("1050"),
            Decimal("1050"),
        ]
        assert service.current_balance(sample_account.id) == Decimal("1100")
        assert service.pending_totals(sample_account.id).pending_outflows == Decimal("50")

    def test_other_accounts_are_not_mixed_in(self, temp_db, account_service, sample_account, instrument_service):
        other_id = account_service.create_account(name="Other", opening_balance=Decimal("0"))
        instrument_service.create_instrument(
            account_id=other_id, kind=CHEQUE, amount=Decimal("999"), due_date=date(2026, 1, 1)
        )

        result = ProjectionService(temp_db).project_account(
            sample_account.id, date(2026, 1, 1), date(2026, 1, 1)
        )

        assert result.days[0].projected_balance == Decimal("1000")

    def test_missing_account(self, temp_db):
        with pytest.raises(NotFoundError):
            ProjectionService(temp_db).project_account(99, date(2026, 1, 1), date(2026, 1, 2))

    def test_inverted_range(self, temp_db, sample_account):
        with pytest.raises(InvalidRangeError):
            ProjectionService(temp_db).project_account(
                sample_account.id, date(2026, 1, 2), date(2026, 1, 1)
            )

    def test_inverted_range_checked_before_account_lookup(self, temp_db):
        with pytest.raises(InvalidRangeError):
            ProjectionService(temp_db).project_account(99, date(2026, 1, 2), date(2026, 1, 1))
