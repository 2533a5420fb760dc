"""Tests for the admin points adjustment flow."""
from unittest.mock import MagicMock

import psycopg2
import pytest

from models.member import Member
from repositories.ledger_repo import LedgerRepository
from services.points_service import ADJUSTMENT_LOG_ENTRY, ADJUSTMENT_REFERENCE, PointsService


@pytest.fixture
def ledger_repo():
    repo = MagicMock(spec=LedgerRepository)
    repo.is_excluded.return_value = False
    repo.add_creds.return_value = True
    repo.remove_creds.return_value = True
    return repo


@pytest.fixture
def service(membership, ledger_repo):
    membership.members[123] = Member(id=5, username="tgvipmem_123", telegram_id=123)
    return PointsService(membership, ledger_repo)


def test_add_points_from_scanned_card(service, ledger_repo):
    result = service.adjust("tgvipmem_user_id:123", "100", "add", admin_id=1)

    assert result.success
    assert result.message == "Success! 100 points were added for user ID 123."
    ledger_repo.add_creds.assert_called_once_with(ADJUSTMENT_REFERENCE, 5, 100, ADJUSTMENT_LOG_ENTRY, 1)


def test_deduct_uses_absolute_amount(service, ledger_repo):
    result = service.adjust("123", -30, "deduct", admin_id=1)

    assert result.success
    assert result.message == "Success! 30 points were deducted for user ID 123."
    ledger_repo.remove_creds.assert_called_once_with(ADJUSTMENT_REFERENCE, 5, 30, ADJUSTMENT_LOG_ENTRY, 1)


@pytest.mark.parametrize("scanned", ["", "0", "abc", "tgvipmem_user_id:", "other:123"])
def test_invalid_member_reference(service, scanned):
    result = service.adjust(scanned, 10, "add", admin_id=1)

    assert not result.success
    assert "Invalid or missing User ID" in result.message


def test_invalid_operation(service, ledger_repo):
    result = service.adjust("123", 10, "multiply", admin_id=1)

    assert not result.success
    assert "Invalid operation" in result.message
    ledger_repo.add_creds.assert_not_called()


@pytest.mark.parametrize("points", [0, "0", "ten", None])
def test_points_must_be_positive(service, points):
    result = service.adjust("123", points, "add", admin_id=1)

    assert not result.success
    assert "positive number" in result.message


def test_points_system_disabled(service, membership):
    membership.points_enabled = False

    result = service.adjust("123", 10, "add", admin_id=1)

    assert not result.success
    assert "not appear to be active" in result.message


def test_unregistered_member(service):
    result = service.adjust("999", 10, "add", admin_id=1)

    assert not result.success
    assert "999" in result.message


def test_excluded_member(service, ledger_repo):
    ledger_repo.is_excluded.return_value = True

    result = service.adjust("123", 10, "add", admin_id=1)

    assert not result.success
    assert "excluded" in result.message
    ledger_repo.add_creds.assert_not_called()


def test_blocked_debit(service, ledger_repo):
    ledger_repo.remove_creds.return_value = False

    result = service.adjust("123", 10_000, "deduct", admin_id=1)

    assert not result.success
    assert "insufficient funds" in result.message


def test_database_failure_is_not_leaked(service, ledger_repo):
    ledger_repo.add_creds.side_effect = psycopg2.OperationalError("connection refused at 10.0.0.5")

    result = service.adjust("123", 10, "add", admin_id=1)

    assert not result.success
    assert "10.0.0.5" not in result.message
