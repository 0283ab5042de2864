# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, List
from unittest.mock import MagicMock

import pytest

from fsmtransit.core.events import TransitionCallbacks
from fsmtransit.core.handlers import HandlerRegistry
from fsmtransit.core.state_machine import StateMachine


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


class Recorder:
    """Collects handler invocations in call order."""

    def __init__(self) -> None:
        self.calls: List[Any] = []

    def handler(self, label: str, result: Any = None):
        def _handler(event, *params):
            self.calls.append((label, event, params))
            return result

        return _handler

    @property
    def labels(self) -> List[str]:
        return [label for label, _, _ in self.calls]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def mock_callbacks() -> TransitionCallbacks:
    """A callbacks bundle whose four operations are mocks."""
    return TransitionCallbacks(
        cancel=MagicMock(name="cancel"),
        pause=MagicMock(name="pause"),
        resume=MagicMock(name="resume"),
        complete=MagicMock(name="complete"),
    )


@pytest.fixture
def registry() -> HandlerRegistry:
    return HandlerRegistry()


@pytest.fixture
def machine() -> StateMachine:
    """A small player-like machine: idle -> running -> stopped."""
    return StateMachine(
        "idle",
        actions=[
            ("start", "idle", "running"),
            ("stop", ["idle", "running"], "stopped"),
            ("reset", "*", "idle"),
        ],
    )
