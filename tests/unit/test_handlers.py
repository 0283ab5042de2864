# tests/unit/test_handlers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from fsmtransit.core.errors import ConfigurationError
from fsmtransit.core.events import DispatchPath


def first(event):
    pass


def second(event):
    pass


def test_lookup_missing_path_returns_none(registry):
    assert registry.lookup("state.idle.enter") is None


def test_handlers_keep_registration_order(registry):
    registry.add("action.*.start", second)
    registry.add("action.*.start", first)
    registry.add("action.*.start", second)
    assert registry.lookup("action.*.start") == [second, first, second]


def test_string_and_path_keys_are_equivalent(registry):
    registry.add(DispatchPath.parse("state.idle.enter"), first)
    assert registry.lookup("state.idle.enter") == [first]
    assert "state.idle.enter" in registry
    assert DispatchPath.parse("state.idle.enter") in registry
    assert 42 not in registry


def test_lookup_returns_copy(registry):
    registry.add("state.idle.enter", first)
    handlers = registry.lookup("state.idle.enter")
    handlers.append(second)
    assert registry.lookup("state.idle.enter") == [first]


def test_remove_single_handler(registry):
    registry.add("state.idle.enter", first)
    registry.add("state.idle.enter", second)
    registry.remove("state.idle.enter", first)
    assert registry.lookup("state.idle.enter") == [second]
    registry.remove("state.idle.enter", second)
    assert registry.lookup("state.idle.enter") is None
    assert registry.paths() == []


def test_remove_all_handlers_for_path(registry):
    registry.add("state.idle.enter", first)
    registry.add("state.idle.enter", second)
    registry.add("state.idle.leave", first)
    registry.remove("state.idle.enter")
    assert registry.lookup("state.idle.enter") is None
    assert len(registry) == 1


def test_remove_unknown_is_ignored(registry):
    registry.remove("state.nowhere.enter")
    registry.add("state.idle.enter", first)
    registry.remove("state.idle.enter", second)
    assert registry.lookup("state.idle.enter") == [first]


def test_clear(registry):
    registry.add("state.idle.enter", first)
    registry.add("action.go.end", second)
    registry.clear()
    assert len(registry) == 0


def test_add_rejects_malformed_path(registry):
    with pytest.raises(ConfigurationError):
        registry.add("enter.idle", first)
