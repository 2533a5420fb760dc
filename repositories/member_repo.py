"""
repositories/member_repo.py
----------------------------
Data access layer for member records.
"""

from typing import Optional

from db.connection import transaction
from models.member import Member
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, username, telegram_id, first_name, balance, excluded, created_at"


def _to_member(row) -> Member:
    return Member(
        id=row[0],
        username=row[1],
        telegram_id=row[2],
        first_name=row[3],
        balance=row[4],
        excluded=row[5],
        created_at=row[6],
    )


class MemberRepository:
    """Repository for the members table."""

    def get_by_username(self, username: str) -> Optional[Member]:
        """Fetch a member by internal username."""
        sql = f"SELECT {_COLUMNS} FROM members WHERE username = %s;"
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(sql, (username,))
            row = cur.fetchone()
        return _to_member(row) if row else None

    def create(self, username: str, telegram_id: int, first_name: Optional[str]) -> Optional[Member]:
        """
        Insert a new member.

        The unique constraints on username and telegram_id make this
        at-most-once per Telegram user: if another request registered the
        same user first, nothing is inserted and None is returned.

        Raises:
            psycopg2.Error: On any other database failure.
        """
        sql = f"""
            INSERT INTO members (username, telegram_id, first_name)
            VALUES (%s, %s, %s)
            ON CONFLICT DO NOTHING
            RETURNING {_COLUMNS};
        """
        try:
            with transaction() as conn, conn.cursor() as cur:
                cur.execute(sql, (username, telegram_id, first_name))
                row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to create member {username}: {e}")
            raise
        if row is None:
            logger.info(f"Member {username} already exists, nothing inserted.")
            return None
        return _to_member(row)
