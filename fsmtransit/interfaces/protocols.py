# fsmtransit/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, List, Optional, Protocol, Union, runtime_checkable

from fsmtransit.core.events import DispatchPath


@runtime_checkable
class HandlerLookup(Protocol):
    """
    Read side of a handler registry, as used by the transition builder.
    """

    def lookup(self, path: Union[DispatchPath, str]) -> Optional[List[Callable[..., Any]]]:
        """Return handlers for a path in registration order, or None."""
        ...


@runtime_checkable
class TransitionOwner(Protocol):
    """
    The state machine a transition is built for.

    Attributes:
        state: Current state name.
        target: Execution target handed to every event.
        handlers: Registry the builder reads handlers from.

    Runtime Invariants:
    - ``state`` does not change while a transition is being built.
    - ``cancel``/``pause``/``resume``/``complete`` act on the transition the
      owner currently considers in flight.
    """

    state: str
    target: Any
    handlers: HandlerLookup

    def resolve(self, action: str, from_state: str) -> Any:
        """Return a state name, a resolver callable, or None if unavailable."""
        ...

    def can_reach(self, from_state: str, to_state: Any) -> bool:
        """
        Return True if an action-table entry leads from ``from_state`` to
        ``to_state``. Used to validate dynamically resolved destinations.
        """
        ...

    def cancel(self) -> Any:
        ...

    def pause(self) -> Any:
        ...

    def resume(self) -> Any:
        ...

    def complete(self) -> Any:
        ...
