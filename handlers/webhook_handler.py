"""
handlers/webhook_handler.py
----------------------------
Turns Telegram text updates into dispatcher calls.

Webhook authentication (secret token) and JSON decoding are done by
python-telegram-bot before the update reaches this handler.
"""

from typing import Awaitable, Callable

from telegram import Update
from telegram.ext import ContextTypes

from commands.dispatcher import CommandDispatcher
from utils.logger import get_logger
from utils.text import sanitize_text

logger = get_logger(__name__)

DEFAULT_DISPLAY_NAME = "User"

UpdateCallback = Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]]


def make_message_handler(dispatcher: CommandDispatcher) -> UpdateCallback:
    """
    Build the MessageHandler callback bound to ``dispatcher``.

    Updates without text, chat or sender are dropped with a warning.
    """

    async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        chat = update.effective_chat
        user = update.effective_user
        if message is None or message.text is None or chat is None or user is None:
            logger.warning(f"Ignoring update {update.update_id}: invalid message format.")
            return

        chat_id = int(chat.id)
        user_id = int(user.id)
        text = sanitize_text(message.text)
        display_name = sanitize_text(user.first_name) or DEFAULT_DISPLAY_NAME

        logger.info(f"Message from user {user_id} in chat {chat_id}: {text!r}")
        await dispatcher.handle(chat_id, user_id, text, display_name)

    return handle_text_message
