"""
commands/ - Command Routing
============================
Maps the exact text of an incoming chat message to a command handler.
The set of triggers and the reaction to unknown text are both open to
add-ons through the extension points in ``commands.extensions``.
"""

from commands.dispatcher import CommandDispatcher, dispatch
from commands.extensions import Extensions, load_addons
from commands.registry import Handler, resolve_commands

__all__ = [
    "CommandDispatcher",
    "Extensions",
    "Handler",
    "dispatch",
    "load_addons",
    "resolve_commands",
]
