"""Tests for the add-on extension points and loader."""
import sys
import types

import pytest

from commands.extensions import load_addons


def test_registration_order_is_kept(extensions):
    first, second = (lambda c: c), (lambda c: c)
    extensions.add_command_provider(first)
    extensions.add_command_provider(second)

    assert extensions.command_providers == (first, second)


def test_empty_extensions_have_no_callbacks(extensions):
    assert extensions.command_providers == ()
    assert extensions.unknown_command_observers == ()


def test_frozen_extensions_reject_registration(extensions):
    extensions.freeze()

    with pytest.raises(RuntimeError):
        extensions.add_command_provider(lambda c: c)
    with pytest.raises(RuntimeError):
        extensions.add_unknown_command_observer(lambda *a: None)


def test_load_bundled_ping_addon(app_context):
    loaded = load_addons(["addons.ping"], app_context)

    assert loaded == ["addons.ping"]
    assert len(app_context.extensions.command_providers) == 1
    assert len(app_context.extensions.unknown_command_observers) == 1


def test_missing_module_is_skipped(app_context):
    loaded = load_addons(["addons.does_not_exist", "addons.ping"], app_context)

    assert loaded == ["addons.ping"]


def test_module_without_setup_is_skipped(app_context):
    assert load_addons(["utils.text"], app_context) == []


def test_failing_setup_is_skipped(app_context, monkeypatch):
    broken = types.ModuleType("broken_addon")

    def setup(context):
        raise ValueError("bad add-on")

    broken.setup = setup
    monkeypatch.setitem(sys.modules, "broken_addon", broken)

    assert load_addons(["broken_addon", "addons.ping"], app_context) == ["addons.ping"]
