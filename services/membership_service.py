"""
services/membership_service.py
-------------------------------
Identity and points lookups used by the chat commands.
Storage failures surface as MembershipError so handlers can answer
the user without leaking database details.
"""

from decimal import Decimal
from typing import Optional

import psycopg2

from config import MEMBER_USERNAME_PREFIX, POINTS_ENABLED
from models.member import Member
from repositories.ledger_repo import LedgerRepository
from repositories.member_repo import MemberRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class MembershipError(Exception):
    """The member store or ledger could not complete a request."""


class MembershipService:
    """Finds, creates and reads the balance of bot members."""

    def __init__(
        self,
        member_repo: Optional[MemberRepository] = None,
        ledger_repo: Optional[LedgerRepository] = None,
        points_enabled: bool = POINTS_ENABLED,
        username_prefix: str = MEMBER_USERNAME_PREFIX,
    ):
        self.member_repo = member_repo or MemberRepository()
        self.ledger_repo = ledger_repo or LedgerRepository()
        self._points_enabled = points_enabled
        self.username_prefix = username_prefix

    @property
    def points_enabled(self) -> bool:
        return self._points_enabled

    def username_for(self, user_id: int) -> str:
        return f"{self.username_prefix}{user_id}"

    def find_identity_by_external_id(self, user_id: int) -> Optional[Member]:
        """Return the member registered with this Telegram ID, if any."""
        try:
            return self.member_repo.get_by_username(self.username_for(user_id))
        except psycopg2.Error as e:
            logger.error(f"Member lookup failed for Telegram user {user_id}: {e}")
            raise MembershipError("member lookup failed") from e

    def create_identity(self, user_id: int, display_name: str) -> Optional[Member]:
        """
        Register a new member for a Telegram user.

        Returns:
            The new Member, or None when the user was registered in the
            meantime by a concurrent request.

        Raises:
            MembershipError: If the insert fails.
        """
        try:
            member = self.member_repo.create(self.username_for(user_id), user_id, display_name)
        except psycopg2.Error as e:
            raise MembershipError("member registration failed") from e
        if member:
            logger.info(f"Registered member {member.username} (id={member.id})")
        return member

    def get_balance(self, member: Member) -> Optional[Decimal]:
        """
        Current points balance of a member.

        Returns:
            The balance, or None when the points system is disabled.
        """
        if not self._points_enabled:
            return None
        try:
            balance = self.ledger_repo.get_balance(member.id)
        except psycopg2.Error as e:
            logger.error(f"Balance lookup failed for member {member.id}: {e}")
            raise MembershipError("balance lookup failed") from e
        return balance if balance is not None else Decimal("0")
