"""Tests for instrument service and commands."""

from datetime import date
from decimal import Decimal

import pytest
from chequetrack.cli.main import cli
from chequetrack.domain.entities import InstrumentKind, InstrumentStatus
from chequetrack.domain.errors import InvalidRangeError, NotFoundError, ValidationError
from chequetrack.domain.instrument import (
    InstrumentService,
    parse_kind,
    parse_status,
    validate_amount,
)


def test_parse_kind():
    assert parse_kind("Cheque") is InstrumentKind.CHEQUE
    assert parse_kind(InstrumentKind.DEPOSIT) is InstrumentKind.DEPOSIT
    with pytest.raises(ValidationError, match="Supported kinds: deposit, cheque, withdrawal"):
        parse_kind("transfer")


def test_parse_status():
    assert parse_status(" CLEARED ") is InstrumentStatus.CLEARED
    with pytest.raises(ValidationError, match="Unknown instrument status"):
        parse_status("bounced")


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-0.01")])
def test_validate_amount_rejects_non_positive(amount):
    with pytest.raises(ValidationError, match="greater than zero"):
        validate_amount(amount)


class TestInstrumentService:
    """Tests for InstrumentService."""

    def test_create_instrument(self, instrument_service, sample_account):
        instrument_id = instrument_service.create_instrument(
            account_id=sample_account.id,
            kind="cheque",
            amount=Decimal("500.00"),
            due_date=date(2026, 1, 4),
            created_date=date(2026, 1, 1),
            cheque_number="000123",
            payee="Landlord",
        )

        instrument = instrument_service.get_instrument(instrument_id)
        assert instrument.kind is InstrumentKind.CHEQUE
        assert instrument.status is InstrumentStatus.PENDING
        assert instrument.created_date == date(2026, 1, 1)
        assert instrument.payee == "Landlord"

    def test_create_instrument_defaults_created_date(self, instrument_service, sample_account):
        instrument_id = instrument_service.create_instrument(
            account_id=sample_account.id,
            kind=InstrumentKind.DEPOSIT,
            amount=Decimal("1"),
            due_date=date(2026, 1, 4),
        )

        assert instrument_service.get_instrument(instrument_id).created_date == date.today()

    def test_create_instrument_uses_supplied_today(self, temp_db, sample_account):
        service = InstrumentService(temp_db, today=lambda: date(2026, 1, 4))

        instrument_id = service.create_instrument(
            account_id=sample_account.id,
            kind="cheque",
            amount=Decimal("1"),
            due_date=date(2026, 1, 10),
        )

        assert service.get_instrument(instrument_id).created_date == date(2026, 1, 4)

    def test_create_instrument_missing_account(self, instrument_service):
        with pytest.raises(NotFoundError):
            instrument_service.create_instrument(
                account_id=42, kind="deposit", amount=Decimal("1"), due_date=date(2026, 1, 4)
            )

    def test_create_instrument_rejects_zero_amount(self, instrument_service, sample_account):
        with pytest.raises(ValidationError):
            instrument_service.create_instrument(
                account_id=sample_account.id,
                kind="deposit",
                amount=Decimal("0"),
                due_date=date(2026, 1, 4),
            )

    def test_list_instruments_rejects_inverted_range(self, instrument_service):
        with pytest.raises(InvalidRangeError):
            instrument_service.list_instruments(
                start_date=date(2026, 2, 1), end_date=date(2026, 1, 1)
            )

    def test_list_instruments_by_kind_name(self, instrument_service, sample_account):
        for kind in ("deposit", "cheque", "cheque"):
            instrument_service.create_instrument(
                account_id=sample_account.id, kind=kind, amount=Decimal("5"), due_date=date(2026, 1, 4)
            )

        cheques = instrument_service.list_instruments(kind="cheque")

        assert len(cheques) == 2
        assert all(item.kind is InstrumentKind.CHEQUE for item in cheques)

    def test_update_status(self, instrument_service, sample_account):
        instrument_id = instrument_service.create_instrument(
            account_id=sample_account.id, kind="cheque", amount=Decimal("5"), due_date=date(2026, 1, 4)
        )

        instrument_service.update_status(instrument_id, "cleared")

        assert instrument_service.get_instrument(instrument_id).status is InstrumentStatus.CLEARED

    def test_update_missing_instrument(self, instrument_service):
        with pytest.raises(NotFoundError, match="Instrument 5 not found"):
            instrument_service.update_instrument(5, payee="Nobody")

    def test_update_instrument_validates_amount(self, instrument_service, sample_account):
        instrument_id = instrument_service.create_instrument(
            account_id=sample_account.id, kind="cheque", amount=Decimal("5"), due_date=date(2026, 1, 4)
        )

        with pytest.raises(ValidationError):
            instrument_service.update_instrument(instrument_id, amount=Decimal("-5"))

    def test_delete_instrument(self, instrument_service, sample_account):
        instrument_id = instrument_service.create_instrument(
            account_id=sample_account.id, kind="cheque", amount=Decimal("5"), due_date=date(2026, 1, 4)
        )

        instrument_service.delete_instrument(instrument_id)

        assert instrument_service.get_instrument(instrument_id) is None
        with pytest.raises(NotFoundError):
            instrument_service.delete_instrument(instrument_id)


def test_add_command(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "add",
            "--account", "Test Account",
            "--kind", "cheque",
            "--amount", "1,250.5",
            "--due-date", "2026-01-04",
            "--payee", "Landlord",
        ],
    )

    assert result.exit_code == 0
    assert "Created cheque" in result.output
    assert "Amount: 1,250.50" in result.output
    assert "Status: pending" in result.output

    instruments = temp_db.list_instruments(account_id=sample_account.id)
    assert len(instruments) == 1
    assert instruments[0].amount == Decimal("1250.50")
    assert instruments[0].due_date == date(2026, 1, 4)


def test_add_command_rejects_bad_amount(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "add", "--account", "1", "--kind", "deposit", "--amount", "lots", "--due-date", "today",
        ],
    )

    assert result.exit_code == 1
    assert "Invalid amount" in result.output


def test_add_command_rejects_zero_amount(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "add", "--account", "1", "--kind", "deposit", "--amount", "0", "--due-date", "today",
        ],
    )

    assert result.exit_code == 1
    assert "greater than zero" in result.output


def test_add_command_unknown_kind(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "add", "--account", "1", "--kind", "transfer", "--amount", "5", "--due-date", "today",
        ],
    )

    assert result.exit_code != 0


def test_view_command(cli_runner, temp_db, sample_account, instrument_service):
    instrument_service.create_instrument(
        account_id=sample_account.id,
        kind="withdrawal",
        amount=Decimal("75"),
        due_date=date(2026, 1, 10),
        payee="ATM",
    )
    instrument_service.create_instrument(
        account_id=sample_account.id,
        kind="deposit",
        amount=Decimal("300"),
        due_date=date(2026, 2, 10),
    )

    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "view", "--start-date", "2026-01-01", "--end-date", "2026-01-31",
        ],
    )

    assert result.exit_code == 0
    assert "Found 1 instrument(s)" in result.output
    assert "withdrawal" in result.output
    assert "ATM" in result.output


def test_view_command_empty(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "view"])

    assert result.exit_code == 0
    assert "No instruments found." in result.output


def test_instrument_status_command(cli_runner, temp_db, sample_account, instrument_service):
    instrument_id = instrument_service.create_instrument(
        account_id=sample_account.id, kind="cheque", amount=Decimal("5"), due_date=date(2026, 1, 4)
    )

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "instrument", "status", str(instrument_id), "deducted"],
    )

    assert result.exit_code == 0
    assert f"Instrument {instrument_id} is now deducted" in result.output
    assert temp_db.get_instrument(instrument_id).status is InstrumentStatus.DEDUCTED


def test_instrument_delete_missing(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "instrument", "delete", "77"]
    )

    assert result.exit_code == 1
    assert "Instrument 77 not found" in result.output
