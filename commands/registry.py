"""
commands/registry.py
---------------------
Assembles the trigger -> handler table used for one dispatch.

Every handler, built-in or contributed by an add-on, has the same
signature ``(chat_id, user_id, display_name)``; handlers that need less
simply ignore the rest.
"""

from collections.abc import Mapping
from typing import Awaitable, Callable, Iterable, Optional

from utils.logger import get_logger

logger = get_logger(__name__)

Handler = Callable[[int, int, str], Awaitable[None]]
CommandMap = dict[str, Handler]
CommandProvider = Callable[[CommandMap], Optional[Mapping]]


def _name(obj) -> str:
    return getattr(obj, "__qualname__", None) or repr(obj)


def _report_overrides(current: Mapping, proposed: Mapping, provider: CommandProvider) -> None:
    """Log triggers whose handler a provider replaced. Behavior is unchanged."""
    for trigger, handler in proposed.items():
        previous = current.get(trigger)
        if previous is not None and previous is not handler:
            logger.info(
                f"Trigger {trigger!r} overridden by {_name(provider)}: "
                f"{_name(previous)} -> {_name(handler)}"
            )


def resolve_commands(builtin: Mapping[str, Handler], providers: Iterable[CommandProvider] = ()) -> CommandMap:
    """
    Build the command table for a single dispatch.

    Each provider receives a copy of the table so far and returns the
    table it wants to become current; it may add, replace or drop
    entries. Later providers win on the same trigger. A provider that
    raises or returns something other than a mapping is skipped, so
    this never fails and never calls a handler.

    Args:
        builtin: The fixed built-in triggers, in listing order.
        providers: Registered command providers, in registration order.

    Returns:
        A fresh dict; insertion order is the order used for the
        unknown-command listing.
    """
    commands: CommandMap = dict(builtin)
    for provider in providers:
        try:
            proposed = provider(dict(commands))
        except Exception:
            logger.exception(f"Command provider {_name(provider)} failed; ignoring its contribution.")
            continue
        if not isinstance(proposed, Mapping):
            logger.warning(
                f"Command provider {_name(provider)} returned {type(proposed).__name__}, "
                f"expected a mapping; ignoring it."
            )
            continue
        _report_overrides(commands, proposed, provider)
        commands = dict(proposed)
    return commands
