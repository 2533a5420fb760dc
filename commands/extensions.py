"""
commands/extensions.py
-----------------------
Extension points for add-ons.

Two ordered lists, filled once at startup and then frozen:

* command providers - receive the command table and return the table
  to use (add, replace or drop triggers);
* unknown-command observers - awaited with
  ``(text, chat_id, user_id, delivery)`` when no trigger matches.

An add-on is a module with a ``setup(context)`` function receiving the
``AppContext``, e.g.::

    def setup(context):
        context.extensions.add_command_provider(lambda commands: {**commands, "ping": ping})
"""

import importlib
from typing import Iterable

from utils.logger import get_logger

logger = get_logger(__name__)


class Extensions:
    """Registered add-on callbacks, in registration order."""

    def __init__(self):
        self._command_providers = []
        self._unknown_command_observers = []
        self._frozen = False

    @property
    def command_providers(self) -> tuple:
        return tuple(self._command_providers)

    @property
    def unknown_command_observers(self) -> tuple:
        return tuple(self._unknown_command_observers)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_command_provider(self, provider) -> None:
        self._check_open()
        self._command_providers.append(provider)

    def add_unknown_command_observer(self, observer) -> None:
        self._check_open()
        self._unknown_command_observers.append(observer)

    def freeze(self) -> None:
        """Reject further registrations. Called once startup is complete."""
        self._frozen = True

    def _check_open(self) -> None:
        if self._frozen:
            raise RuntimeError("Extensions are frozen; register add-ons during startup.")


def load_addons(module_names: Iterable[str], context) -> list[str]:
    """
    Import add-on modules and let each register itself.

    ``context`` is the application context; add-ons register through
    ``context.extensions``, which must not be frozen yet.

    A module that cannot be imported, has no ``setup`` or fails inside
    it is logged and skipped.

    Returns:
        Names of the add-ons that loaded.
    """
    loaded = []
    for name in module_names:
        try:
            module = importlib.import_module(name)
        except ImportError:
            logger.exception(f"Could not import add-on {name!r}; skipping.")
            continue

        setup = getattr(module, "setup", None)
        if not callable(setup):
            logger.error(f"Add-on {name!r} has no setup(context) function; skipping.")
            continue

        try:
            setup(context)
        except Exception:
            logger.exception(f"Add-on {name!r} failed during setup; skipping.")
            continue

        loaded.append(name)
        logger.info(f"Loaded add-on {name}")
    return loaded
