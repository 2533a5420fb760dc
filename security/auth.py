"""
security/auth.py
-----------------
Access control for operator-only bot commands.
"""

from functools import wraps
from typing import Callable, Optional

from telegram import Update
from telegram.ext import ContextTypes

from config import ADMIN_USER_IDS
from utils.logger import get_logger

logger = get_logger(__name__)


def admin_only(func: Optional[Callable] = None, *, admin_ids: Optional[list[int]] = None):
    """
    Decorator that restricts a handler to the configured admins.

    Usage:
        @admin_only
        async def my_handler(update, context):
            ...

    Behavior:
        - Only users listed in ADMIN_USER_IDS (or ``admin_ids``) pass.
        - An empty list means nobody is an admin.
        - Denied attempts are logged and answered with a short refusal.
    """
    def decorator(inner: Callable):
        @wraps(inner)
        async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
            user = update.effective_user
            if not user:
                return

            allowed = ADMIN_USER_IDS if admin_ids is None else admin_ids
            if user.id not in allowed:
                logger.warning(
                    f"Denied admin command: user_id={user.id}, "
                    f"username={user.username}, name={user.first_name}"
                )
                await update.effective_message.reply_text(
                    "Permission Denied: You do not have sufficient permissions."
                )
                return

            return await inner(update, context, *args, **kwargs)

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
