"""
Shared fakes for the test suite. Nothing here touches a database or
the Telegram API.
"""
from contextlib import contextmanager
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from commands.extensions import Extensions
from models.member import Member
from services.membership_service import MembershipError


class RecordingDelivery:
    """Stands in for TelegramDelivery and remembers every send."""

    def __init__(self):
        self.sent = []

    async def send_text(self, chat_id, text, keyboard=None):
        self.sent.append(("text", chat_id, text, keyboard))
        return SimpleNamespace(message_id=len(self.sent))

    async def send_image(self, chat_id, image_url, caption=""):
        self.sent.append(("image", chat_id, image_url, caption))
        return SimpleNamespace(message_id=len(self.sent))

    @property
    def texts(self):
        return [entry[2] for entry in self.sent if entry[0] == "text"]


class InMemoryMembership:
    """Membership collaborator backed by a dict keyed by Telegram ID."""

    def __init__(self, points_enabled=True):
        self.members = {}
        self.balances = {}
        self.points_enabled = points_enabled
        self.created = 0
        self.balance_calls = 0
        self.fail = False

    def find_identity_by_external_id(self, user_id):
        if self.fail:
            raise MembershipError("lookup failed")
        return self.members.get(user_id)

    def create_identity(self, user_id, display_name):
        if self.fail:
            raise MembershipError("insert failed")
        if user_id in self.members:
            return None
        self.created += 1
        member = Member(id=self.created, username=f"tgvipmem_{user_id}", telegram_id=user_id, first_name=display_name)
        self.members[user_id] = member
        return member

    def get_balance(self, member):
        self.balance_calls += 1
        if not self.points_enabled:
            return None
        return self.balances.get(member.telegram_id, Decimal("0"))


@pytest.fixture
def delivery():
    return RecordingDelivery()


@pytest.fixture
def membership():
    return InMemoryMembership()


@pytest.fixture
def extensions():
    return Extensions()


@pytest.fixture
def app_context(delivery, membership, extensions):
    return SimpleNamespace(delivery=delivery, membership=membership, extensions=extensions)


class FakeDatabase:
    """A mocked connection and cursor handed out by a fake ``transaction()``."""

    def __init__(self):
        self.cursor = MagicMock()
        self.conn = MagicMock()
        self.conn.cursor.return_value.__enter__.return_value = self.cursor
        self.transactions = 0

    @contextmanager
    def transaction(self):
        self.transactions += 1
        yield self.conn

    @property
    def executed(self):
        return [c.args for c in self.cursor.execute.call_args_list]


@pytest.fixture
def fake_db():
    return FakeDatabase()
