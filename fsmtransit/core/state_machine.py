# fsmtransit/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from fsmtransit.core.actions import ActionTable, Destination
from fsmtransit.core.errors import ConfigurationError, TransitionError
from fsmtransit.core.handlers import HandlerRegistry
from fsmtransit.core.transitions import Transition, TransitionBuilder

logger = logging.getLogger(__name__)

SYSTEM_EVENTS = ("change", "pause", "resume", "cancel", "add", "remove")

ActionSpec = Tuple[str, Union[str, Iterable[str]], Destination]
Listener = Callable[["StateMachine"], Any]


class StateMachine:
    """
    A finite state machine driven by named actions. Performing an action builds
    a Transition whose lifecycle handlers may pause, resume or cancel it; the
    machine only moves to the destination state once the transition completes.

    Only one transition can be in flight at a time.
    """

    def __init__(
        self,
        initial: str,
        actions: Optional[Iterable[ActionSpec]] = None,
        target: Optional[Any] = None,
        order: Optional[Sequence[str]] = None,
        registry: Optional[HandlerRegistry] = None,
    ) -> None:
        """
        :param initial: The state in which this machine begins.
        :param actions: Optional ``(action, from, to)`` triples.
        :param target: Execution target exposed to handlers as ``event.target``.
        :param order: Optional ordering template for this machine's transitions.
        :param registry: Optional handler registry, shared or pre-populated.
        """
        self._actions = ActionTable()
        self._actions.add_state(initial)
        for action, from_state, to in actions or []:
            self._actions.add(action, from_state, to)

        self._state = initial
        self._target = target
        self._handlers = registry if registry is not None else HandlerRegistry()
        self._builder = TransitionBuilder(order)
        self._transition: Optional[Transition] = None
        self._listeners: Dict[str, List[Listener]] = {name: [] for name in SYSTEM_EVENTS}

    @property
    def state(self) -> str:
        """Get the current state."""
        return self._state

    @property
    def target(self) -> Optional[Any]:
        return self._target

    @property
    def transition(self) -> Optional[Transition]:
        """The transition currently in flight, if any."""
        return self._transition

    @property
    def actions(self) -> ActionTable:
        return self._actions

    @property
    def handlers(self) -> HandlerRegistry:
        return self._handlers

    @property
    def builder(self) -> TransitionBuilder:
        return self._builder

    # ------------------------------------------------------------------
    # Action table
    # ------------------------------------------------------------------

    def resolve(self, action: str, from_state: str) -> Optional[Destination]:
        return self._actions.resolve(action, from_state)

    def has_state(self, state: Any) -> bool:
        return self._actions.has_state(state)

    def can_reach(self, from_state: str, to_state: Any) -> bool:
        return self._actions.can_reach(from_state, to_state)

    def can(self, action: str) -> bool:
        """Return True if ``action`` is available from the current state."""
        return self._actions.can(action, self._state)

    def add(self, action: str, from_state: Union[str, Iterable[str]], to: Destination) -> "StateMachine":
        self._actions.add(action, from_state, to)
        self._emit("add")
        return self

    def remove(self, action: str) -> "StateMachine":
        self._actions.remove(action)
        self._emit("remove")
        return self

    # ------------------------------------------------------------------
    # Handlers and listeners
    # ------------------------------------------------------------------

    def on(self, name: str, handler: Callable[..., Any]) -> "StateMachine":
        """
        Register a transition handler (``name`` is a dispatch path such as
        ``state.idle.leave``) or a system event listener (``change``,
        ``pause``, ``resume``, ``cancel``, ``add``, ``remove``).

        :raises ConfigurationError: If ``name`` is neither.
        """
        if "." in name:
            self._handlers.add(name, handler)
        else:
            self._system_listeners(name).append(handler)
        return self

    def off(self, name: str, handler: Optional[Callable[..., Any]] = None) -> "StateMachine":
        if "." in name:
            self._handlers.remove(name, handler)
        else:
            listeners = self._system_listeners(name)
            listeners[:] = [] if handler is None else [h for h in listeners if h != handler]
        return self

    def _system_listeners(self, name: str) -> List[Listener]:
        try:
            return self._listeners[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown machine event '{name}'; expected one of {', '.join(SYSTEM_EVENTS)}"
            ) from None

    def _emit(self, name: str) -> None:
        for listener in list(self._listeners[name]):
            listener(self)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def do(self, action: str, *params: Any) -> bool:
        """
        Perform an action, dispatching its lifecycle handlers.

        :param action: Name of the action.
        :param params: Values passed to every handler after the event.
        :return: True if the machine reached the destination state, False if the
            transition was paused or cancelled.
        :raises TransitionError: If a transition is already in flight or the
            action is not available from the current state.
        :raises InvalidTargetState: If a dynamic resolver names a state that cannot
            be reached from the current state.
        """
        if self._transition is not None:
            raise TransitionError(
                f'Cannot perform "{action}": transition "{self._transition.action}" is still in progress'
            )
        if not self.can(action):
            raise TransitionError(f'Action "{action}" is not available from state "{self._state}"')

        transition = self._builder.build(self, action, params)
        logger.debug("Performing '%s' from '%s'", action, self._state)
        self._transition = transition
        transition.exec()
        return transition.completed

    def is_paused(self) -> bool:
        return self._transition is not None and self._transition.paused

    def has_transition(self) -> bool:
        return self._transition is not None

    def pause(self) -> None:
        if self._transition is None:
            return
        self._transition.pause()
        self._emit("pause")

    def resume(self) -> None:
        """
        Continue the current transition. The ``resume`` listeners run once the
        resumed handlers have been dispatched, so they observe the outcome.
        """
        if self._transition is None:
            return
        self._transition.resume()
        self._emit("resume")

    def cancel(self) -> None:
        """Abandon the current transition; the machine stays in its source state."""
        transition = self._transition
        if transition is None:
            return
        transition.clear()
        self._transition = None
        logger.debug("Transition '%s' cancelled, staying in '%s'", transition.action, self._state)
        self._emit("cancel")

    def complete(self) -> None:
        """Finish the current transition and move to its destination state."""
        transition = self._transition
        if transition is None:
            return
        transition.finish()
        self._transition = None
        self._state = transition.to_state
        logger.debug("State changed '%s' -> '%s'", transition.from_state, self._state)
        self._emit("change")

    def force(self, state: str) -> None:
        """
        Jump straight to ``state``, discarding any transition in flight without
        running its handlers.

        :raises ConfigurationError: If ``state`` is unknown.
        """
        if not self._actions.has_state(state):
            raise ConfigurationError(f"Unknown state '{state}'")
        if self._transition is not None:
            self._transition.clear()
            self._transition = None
        self._state = state
        logger.debug("State forced to '%s'", state)
        self._emit("change")
