"""
handlers/admin_handler.py
--------------------------
Operator command for adjusting member points after scanning a card.

    /adjust add tgvipmem_user_id:123456 100
    /adjust deduct 123456 50
"""

from typing import Optional

from telegram import Update
from telegram.ext import ContextTypes

from security.auth import admin_only
from services.points_service import PointsService
from utils.logger import get_logger

logger = get_logger(__name__)

USAGE_TEXT = (
    "Usage: /adjust <add|deduct> <member card> <points>\n"
    "Example: /adjust add tgvipmem_user_id:123456 100"
)


def make_adjust_command(points_service: PointsService, admin_ids: Optional[list[int]] = None):
    """Build the /adjust CommandHandler callback."""

    @admin_only(admin_ids=admin_ids)
    async def adjust_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        args = context.args or []
        if len(args) != 3:
            await update.effective_message.reply_text(USAGE_TEXT)
            return

        operation, scanned, points = args
        admin_id = update.effective_user.id
        result = points_service.adjust(scanned, points, operation, admin_id)
        if not result.success:
            logger.info(f"Adjustment by admin {admin_id} rejected: {result.message}")
        await update.effective_message.reply_text(result.message)

    return adjust_command
