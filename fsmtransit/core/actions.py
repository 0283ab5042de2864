# fsmtransit/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from fsmtransit.core.errors import ConfigurationError
from fsmtransit.core.events import WILDCARD

Resolver = Callable[..., str]
Destination = Union[str, Resolver]


class ActionTable:
    """
    Stores which states each action leads to, keyed by source state. A
    destination is either a state name or a resolver callable that picks the
    state when the action is performed.
    """

    def __init__(self) -> None:
        self._actions: Dict[str, Dict[str, Destination]] = {}
        self._states: List[str] = []

    @property
    def states(self) -> List[str]:
        """Known states in the order they were first seen."""
        return self._states

    def add_state(self, state: str) -> None:
        if not state or state == WILDCARD:
            raise ConfigurationError(f"Invalid state name {state!r}")
        if state not in self._states:
            self._states.append(state)

    def add(self, action: str, from_state: Union[str, Iterable[str]], to: Destination) -> None:
        """
        Add routes for an action.

        :param action: Action name.
        :param from_state: Source state, list of source states, or ``*`` for any.
        :param to: Destination state or resolver callable.
        :raises ConfigurationError: If a name is empty or the destination is invalid.
        """
        if not action or action == WILDCARD:
            raise ConfigurationError(f"Invalid action name {action!r}")
        sources = [from_state] if isinstance(from_state, str) else list(from_state)
        for source in sources:
            if source != WILDCARD:
                self.add_state(source)
        if not callable(to):
            self.add_state(to)
        routes = self._actions.setdefault(action, {})
        for source in sources:
            routes[source] = to

    def remove(self, action: str) -> None:
        self._actions.pop(action, None)

    def get(self, action: str) -> Optional[Dict[str, Destination]]:
        return self._actions.get(action)

    def resolve(self, action: str, from_state: str) -> Optional[Destination]:
        """
        Return the destination of ``action`` from ``from_state``, falling back to
        a wildcard source, or None if the action is not available.
        """
        routes = self._actions.get(action)
        if not routes:
            return None
        if from_state in routes:
            return routes[from_state]
        return routes.get(WILDCARD)

    def has_action(self, action: str) -> bool:
        return action in self._actions

    def can(self, action: str, from_state: str) -> bool:
        return self.resolve(action, from_state) is not None

    def get_states(self) -> List[str]:
        return list(self._states)

    def get_actions(self) -> List[str]:
        return list(self._actions)

    def get_actions_from(self, state: str) -> List[str]:
        return [action for action in self._actions if self.can(action, state)]

    def get_to_states(self, state: str) -> List[str]:
        """Literal destinations reachable from ``state`` in one action."""
        destinations: List[str] = []
        for action in self.get_actions_from(state):
            to = self.resolve(action, state)
            if isinstance(to, str) and to not in destinations:
                destinations.append(to)
        return destinations

    def has_state(self, state: Any) -> bool:
        return isinstance(state, str) and state in self._states

    def can_reach(self, from_state: str, to_state: Any) -> bool:
        """True if some action leads from ``from_state`` straight to ``to_state``."""
        return isinstance(to_state, str) and to_state in self.get_to_states(from_state)
