"""
services/points_service.py
---------------------------
Business logic for the admin points adjustment flow: an operator scans
a member card and credits or debits that member's balance.
"""

from typing import Optional

import psycopg2

from models.member import AdjustmentResult, PointsOperation
from repositories.ledger_repo import LedgerRepository
from services.membership_service import MembershipError, MembershipService
from services.qrcode_service import parse_member_payload
from utils.logger import get_logger

logger = get_logger(__name__)

ADJUSTMENT_REFERENCE = "admin_qr_adjustment"
ADJUSTMENT_LOG_ENTRY = "Adjusted by Admin via QR Code Scan"


def _fail(message: str) -> AdjustmentResult:
    return AdjustmentResult(success=False, message=message)


class PointsService:
    """
    Validates and applies points adjustments.

    Workflow:
        1. Resolve the scanned card to a Telegram user ID.
        2. Validate operation and amount.
        3. Check the ledger is enabled and the member may hold points.
        4. Credit or debit through the ledger.
        5. Return a message for the admin.
    """

    def __init__(self, membership: MembershipService, ledger_repo: Optional[LedgerRepository] = None):
        self.membership = membership
        self.ledger_repo = ledger_repo or LedgerRepository()

    def adjust(self, scanned: str, points, operation: str, admin_id: int) -> AdjustmentResult:
        """
        Credit or debit points for the member behind a scanned card.

        Args:
            scanned: The decoded QR text, or a bare Telegram user ID.
            points: Amount; the sign is ignored, the operation decides.
            operation: ``"add"`` or ``"deduct"``.
            admin_id: Telegram ID of the operator, stored in the point log.
        """
        user_id = parse_member_payload(str(scanned))
        if user_id is None:
            return _fail("Error: Invalid or missing User ID.")

        try:
            op = PointsOperation(operation)
        except ValueError:
            return _fail('Error: Invalid operation specified. Must be "add" or "deduct".')

        try:
            amount = abs(int(points))
        except (TypeError, ValueError):
            amount = 0
        if amount <= 0:
            return _fail("Error: Points must be a positive number greater than zero.")

        if not self.membership.points_enabled:
            return _fail("Error: The points system does not appear to be active.")

        try:
            member = self.membership.find_identity_by_external_id(user_id)
            if member is None:
                return _fail(f"Error: No member is registered for user ID {user_id}.")
            if self.ledger_repo.is_excluded(member.id):
                return _fail("This user is excluded from the points system.")

            if op is PointsOperation.ADD:
                applied = self.ledger_repo.add_creds(
                    ADJUSTMENT_REFERENCE, member.id, amount, ADJUSTMENT_LOG_ENTRY, admin_id
                )
            else:
                applied = self.ledger_repo.remove_creds(
                    ADJUSTMENT_REFERENCE, member.id, amount, ADJUSTMENT_LOG_ENTRY, admin_id
                )
        except (MembershipError, psycopg2.Error) as e:
            logger.error(f"Points adjustment for user {user_id} failed: {e}")
            return _fail("Failed to adjust points due to a system error. Please try again later.")

        if not applied:
            logger.warning(f"Ledger blocked {op.value} of {amount} points for user {user_id}")
            return _fail(
                "Failed to adjust points. The transaction may have been blocked "
                "by the points system (e.g., insufficient funds)."
            )

        action_text = "added" if op is PointsOperation.ADD else "deducted"
        logger.info(f"Admin {admin_id} {action_text} {amount} points for user {user_id}")
        return AdjustmentResult(
            success=True,
            message=f"Success! {amount} points were {action_text} for user ID {user_id}.",
        )
