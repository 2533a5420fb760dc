"""
addons/ping.py
--------------
Example add-on: a ``ping`` trigger and a log line for every message
that no trigger matched.
"""

from services.telegram_delivery import TelegramDelivery
from utils.logger import get_logger

logger = get_logger(__name__)

PING_TRIGGER = "ping"


def add_ping(delivery: TelegramDelivery):
    """Command provider adding the ``ping`` trigger."""

    async def ping(chat_id: int, user_id: int, display_name: str) -> None:
        await delivery.send_text(chat_id, "pong")

    def provide(commands: dict) -> dict:
        commands[PING_TRIGGER] = ping
        return commands

    return provide


async def log_unknown_command(text: str, chat_id: int, user_id: int, delivery: TelegramDelivery) -> None:
    logger.info(f"Unrecognized command from user {user_id} in chat {chat_id}: {text!r}")


def setup(context) -> None:
    context.extensions.add_command_provider(add_ping(context.delivery))
    context.extensions.add_unknown_command_observer(log_unknown_command)
