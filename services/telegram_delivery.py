"""
services/telegram_delivery.py
------------------------------
Outbound delivery of bot replies through the Telegram Bot API.

Both send methods are best-effort: failures are logged and reported as
None, never raised, so a command handler cannot be crashed by the
transport.
"""

from typing import Optional, Sequence

from telegram import Bot, Message, ReplyKeyboardMarkup
from telegram.constants import ParseMode
from telegram.error import TelegramError

from utils.logger import get_logger

logger = get_logger(__name__)

Keyboard = Sequence[Sequence[str]]


class TelegramDelivery:
    """Sends text and photo messages on behalf of the bot."""

    def __init__(self, bot: Optional[Bot]):
        self.bot = bot

    async def send_text(self, chat_id: int, text: str, keyboard: Optional[Keyboard] = None) -> Optional[Message]:
        """
        Send an HTML-formatted text message.

        Callers must escape any user-provided values in ``text``.
        ``keyboard`` rows become a persistent reply keyboard.
        """
        if self.bot is None:
            logger.error("Attempted to send message but Bot Token is not set.")
            return None

        reply_markup = None
        if keyboard:
            reply_markup = ReplyKeyboardMarkup(
                [list(row) for row in keyboard],
                resize_keyboard=True,
                one_time_keyboard=False,
            )
        try:
            return await self.bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.HTML,
                reply_markup=reply_markup,
            )
        except TelegramError as e:
            logger.error(f"Failed to send message to chat {chat_id}: {e}")
            return None

    async def send_image(self, chat_id: int, image_url: str, caption: str = "") -> Optional[Message]:
        """Send a photo by URL; Telegram downloads it."""
        if self.bot is None:
            logger.error("Attempted to send photo but Bot Token is not set.")
            return None
        try:
            return await self.bot.send_photo(chat_id=chat_id, photo=image_url, caption=caption)
        except TelegramError as e:
            logger.error(f"Failed to send photo to chat {chat_id}: {e}")
            return None
