"""
repositories/ledger_repo.py
----------------------------
Data access layer for member points: balances and the point log.
"""

from decimal import Decimal
from typing import Optional

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)


class LedgerRepository:
    """
    Repository for points balances.

    Balance changes and their point_log rows are written in a single
    transaction; the balance itself is updated with one conditional
    UPDATE so concurrent adjustments for the same member serialize on
    the row lock.
    """

    def get_balance(self, member_id: int) -> Optional[Decimal]:
        sql = "SELECT balance FROM members WHERE id = %s;"
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(sql, (member_id,))
            row = cur.fetchone()
        return row[0] if row else None

    def is_excluded(self, member_id: int) -> bool:
        sql = "SELECT excluded FROM members WHERE id = %s;"
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(sql, (member_id,))
            row = cur.fetchone()
        return bool(row and row[0])

    def add_creds(self, reference: str, member_id: int, amount: int, entry: str, ref_id: Optional[int] = None) -> bool:
        """Credit ``amount`` points. Returns False if the member is missing."""
        return self._apply(reference, member_id, abs(amount), entry, ref_id)

    def remove_creds(self, reference: str, member_id: int, amount: int, entry: str, ref_id: Optional[int] = None) -> bool:
        """
        Debit ``amount`` points.

        Returns False without changing anything when the balance would
        drop below zero or the member is missing.
        """
        return self._apply(reference, member_id, -abs(amount), entry, ref_id)

    def _apply(self, reference: str, member_id: int, delta: int, entry: str, ref_id: Optional[int]) -> bool:
        update_sql = """
            UPDATE members SET balance = balance + %s
            WHERE id = %s AND excluded = FALSE AND balance + %s >= 0
            RETURNING balance;
        """
        log_sql = """
            INSERT INTO point_log (member_id, reference, amount, entry, ref_id)
            VALUES (%s, %s, %s, %s, %s);
        """
        try:
            with transaction() as conn, conn.cursor() as cur:
                cur.execute(update_sql, (delta, member_id, delta))
                row = cur.fetchone()
                if row is None:
                    return False
                cur.execute(log_sql, (member_id, reference, delta, entry, ref_id))
        except Exception as e:
            logger.error(f"Failed to apply {delta:+d} points to member {member_id}: {e}")
            raise
        logger.info(f"Applied {delta:+d} points to member {member_id} ({reference}), balance now {row[0]}")
        return True
