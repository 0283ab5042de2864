# fsmtransit/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from fsmtransit.core.errors import ConfigurationError

WILDCARD = "*"


class Category(Enum):
    """The kind of thing a dispatch path is keyed on: an action or a state."""

    ACTION = "action"
    STATE = "state"


class Phase(Enum):
    """
    A lifecycle moment within a transition. Start and end belong to the action
    being performed, leave and enter belong to the states involved.
    """

    START = "start"
    LEAVE = "leave"
    ENTER = "enter"
    END = "end"

    @property
    def category(self) -> Category:
        if self in (Phase.START, Phase.END):
            return Category.ACTION
        return Category.STATE


@dataclass(frozen=True)
class DispatchPath:
    """
    Registry key identifying a group of handlers, e.g. ``state.idle.enter`` or
    ``action.*.start``.
    """

    category: Category
    name: str
    phase: Phase

    def __post_init__(self) -> None:
        if self.phase.category is not self.category:
            raise ConfigurationError(
                f"Phase '{self.phase.value}' does not belong to category '{self.category.value}'"
            )
        if not self.name:
            raise ConfigurationError("Dispatch path name must not be empty")

    @classmethod
    def for_phase(cls, name: str, phase: Phase) -> "DispatchPath":
        """Build a path whose category is derived from the phase."""
        return cls(phase.category, name, phase)

    @classmethod
    def parse(cls, text: str) -> "DispatchPath":
        """
        Parse the canonical ``category.name.phase`` form.

        :param text: The path string.
        :raises ConfigurationError: If the string is not a valid path.
        """
        parts = text.split(".")
        if len(parts) != 3:
            raise ConfigurationError(f"Invalid dispatch path '{text}': expected 'category.name.phase'")
        category, name, phase = parts
        try:
            return cls(Category(category), name, Phase(phase))
        except ValueError as e:
            raise ConfigurationError(f"Invalid dispatch path '{text}': {e}") from e

    @classmethod
    def coerce(cls, path: Union["DispatchPath", str]) -> "DispatchPath":
        if isinstance(path, DispatchPath):
            return path
        return cls.parse(path)

    @property
    def is_wildcard(self) -> bool:
        return self.name == WILDCARD

    def __str__(self) -> str:
        return f"{self.category.value}.{self.name}.{self.phase.value}"


@dataclass(frozen=True)
class TransitionCallbacks:
    """
    The four control operations of the machine owning a transition. One bundle
    is built per transition and shared by the transition and all of its events.
    """

    cancel: Callable[[], Any]
    pause: Callable[[], Any]
    resume: Callable[[], Any]
    complete: Callable[[], Any]


class TransitionEvent:
    """
    The value passed as first argument to every dispatched handler. Handlers can
    steer the transition through it instead of returning True/False.
    """

    def __init__(
        self,
        category: Category,
        callbacks: TransitionCallbacks,
        name: str,
        phase: Phase,
        from_state: str,
        to_state: str,
        target: Optional[Any] = None,
    ) -> None:
        """
        :param category: Whether the handler is keyed on an action or a state.
        :param callbacks: Control operations of the originating transition.
        :param name: Action name, state name or wildcard the handler was found under.
        :param phase: Lifecycle phase being dispatched.
        :param from_state: State the transition started from.
        :param to_state: State the transition is heading to.
        :param target: Execution target configured on the machine.
        """
        self._category = category
        self._callbacks = callbacks
        self._name = name
        self._phase = phase
        self._from_state = from_state
        self._to_state = to_state
        self._target = target

    @property
    def category(self) -> Category:
        return self._category

    @property
    def name(self) -> str:
        return self._name

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def from_state(self) -> str:
        return self._from_state

    @property
    def to_state(self) -> str:
        return self._to_state

    @property
    def target(self) -> Optional[Any]:
        return self._target

    @property
    def path(self) -> DispatchPath:
        """The dispatch path this event was created for."""
        return DispatchPath(self._category, self._name, self._phase)

    def cancel(self) -> Any:
        return self._callbacks.cancel()

    def pause(self) -> Any:
        return self._callbacks.pause()

    def resume(self) -> Any:
        return self._callbacks.resume()

    def complete(self) -> Any:
        return self._callbacks.complete()

    def __repr__(self) -> str:
        return f"TransitionEvent({self.path}, {self._from_state!r} -> {self._to_state!r})"
