"""Tests for LedgerRepository SQL flow against a mocked cursor."""
from decimal import Decimal

import psycopg2
import pytest

from repositories import ledger_repo
from repositories.ledger_repo import LedgerRepository


@pytest.fixture
def repo(fake_db, monkeypatch):
    monkeypatch.setattr(ledger_repo, "transaction", fake_db.transaction)
    return LedgerRepository()


def test_blocked_debit_writes_no_log_row(repo, fake_db):
    fake_db.cursor.fetchone.return_value = None

    assert repo.remove_creds("admin_qr_adjustment", 5, 10, "entry", 1) is False
    assert fake_db.cursor.execute.call_count == 1
    sql, params = fake_db.executed[0]
    assert "balance + %s >= 0" in sql
    assert params == (-10, 5, -10)


def test_debit_updates_balance_and_logs_in_one_transaction(repo, fake_db):
    fake_db.cursor.fetchone.return_value = (Decimal("90"),)

    assert repo.remove_creds("r", 5, 10, "e", 1) is True
    assert fake_db.transactions == 1
    assert fake_db.cursor.execute.call_count == 2
    sql, params = fake_db.executed[1]
    assert "INSERT INTO point_log" in sql
    assert params == (5, "r", -10, "e", 1)


def test_credit_ignores_sign_of_amount(repo, fake_db):
    fake_db.cursor.fetchone.return_value = (Decimal("110"),)

    assert repo.add_creds("r", 5, -10, "e") is True
    assert fake_db.executed[0][1] == (10, 5, 10)
    assert fake_db.executed[1][1] == (5, "r", 10, "e", None)


def test_database_error_propagates(repo, fake_db):
    fake_db.cursor.execute.side_effect = psycopg2.OperationalError("down")

    with pytest.raises(psycopg2.OperationalError):
        repo.add_creds("r", 5, 10, "e")


def test_get_balance_and_exclusion(repo, fake_db):
    fake_db.cursor.fetchone.return_value = (Decimal("12.50"),)
    assert repo.get_balance(5) == Decimal("12.50")

    fake_db.cursor.fetchone.return_value = None
    assert repo.get_balance(5) is None
    assert repo.is_excluded(5) is False

    fake_db.cursor.fetchone.return_value = (True,)
    assert repo.is_excluded(5) is True
