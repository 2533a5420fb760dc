"""
commands/dispatcher.py
-----------------------
Routes one incoming message to its command handler, or runs the
unknown-command chain when nothing matches.
"""

import html
from collections.abc import Mapping
from typing import Awaitable, Callable, Iterable

from commands.extensions import Extensions
from commands.registry import Handler, resolve_commands
from services.telegram_delivery import TelegramDelivery
from utils.logger import get_logger

logger = get_logger(__name__)

UnknownCommandObserver = Callable[[str, int, int, TelegramDelivery], Awaitable[None]]

UNKNOWN_COMMAND_HEADER = "無法識別的指令。請嘗試以下操作："


def unknown_command_message(commands: Mapping[str, Handler]) -> str:
    """List every trigger, one per line, in table order."""
    lines = "\n- ".join(html.escape(trigger) for trigger in commands)
    return f"{UNKNOWN_COMMAND_HEADER}\n\n- {lines}"


async def dispatch(
    commands: Mapping[str, Handler],
    observers: Iterable[UnknownCommandObserver],
    delivery: TelegramDelivery,
    chat_id: int,
    user_id: int,
    text: str,
    display_name: str,
) -> None:
    """
    Run the handler bound to ``text`` or the unknown-command chain.

    Matching is exact string equality, no case folding or trimming.
    A matched handler runs alone; its exceptions are not caught here.

    On a miss every observer runs in registration order, whether or not
    an earlier one replied, and then the default listing is always sent.
    An observer that raises is logged and the chain continues.
    """
    handler = commands.get(text)
    if handler is not None:
        await handler(chat_id, user_id, display_name)
        return

    for observer in observers:
        try:
            await observer(text, chat_id, user_id, delivery)
        except Exception:
            logger.exception(f"Unknown-command observer {observer!r} failed for chat {chat_id}")

    await delivery.send_text(chat_id, unknown_command_message(commands))


class CommandDispatcher:
    """
    Entry point used by the webhook handler.

    Holds the built-in table and the extension registry, and rebuilds
    the command table on every message.
    """

    def __init__(self, builtin: Mapping[str, Handler], extensions: Extensions, delivery: TelegramDelivery):
        self.builtin = dict(builtin)
        self.extensions = extensions
        self.delivery = delivery

    def commands(self) -> dict[str, Handler]:
        return resolve_commands(self.builtin, self.extensions.command_providers)

    async def handle(self, chat_id: int, user_id: int, text: str, display_name: str) -> None:
        await dispatch(
            self.commands(),
            self.extensions.unknown_command_observers,
            self.delivery,
            chat_id,
            user_id,
            text,
            display_name,
        )
