# fsmtransit/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Any, Callable, Deque, Iterable, List, Optional, Sequence, Tuple

from fsmtransit.core.errors import InvalidTargetState, TransitionError
from fsmtransit.core.events import DispatchPath, TransitionCallbacks, TransitionEvent
from fsmtransit.core.order import DEFAULT_ORDER, OrderToken, parse_order

if TYPE_CHECKING:
    from fsmtransit.interfaces.protocols import TransitionOwner

logger = logging.getLogger(__name__)

BoundHandler = Callable[[], Any]
EventFactory = Callable[..., Any]


class Transition:
    """
    One in-flight change from ``from_state`` to ``to_state``. Owns the queue of
    bound handlers and drains it one handler at a time.

    A handler steers the transition through its return value:

    - ``False`` cancels it; no further handler runs.
    - ``True`` pauses it; the remaining handlers run after ``resume()``.
    - anything else lets it continue.

    When the queue runs dry the owner's ``complete`` callback is invoked. After
    cancel, complete or ``clear()`` the transition is settled and will never
    dispatch again.
    """

    def __init__(
        self,
        action: str,
        from_state: str,
        to_state: str,
        handlers: Iterable[BoundHandler],
        callbacks: TransitionCallbacks,
    ) -> None:
        """
        :param action: Name of the requested action.
        :param from_state: State at the moment the action was requested.
        :param to_state: Resolved destination state.
        :param handlers: Zero-argument thunks, in dispatch order.
        :param callbacks: Control operations of the owning machine.
        """
        self._action = action
        self._from_state = from_state
        self._to_state = to_state
        self._handlers: Deque[BoundHandler] = deque(handlers)
        self._callbacks = callbacks
        self._paused = False
        self._settled = False
        self._completed = False
        self._draining = False

    @property
    def action(self) -> str:
        return self._action

    @property
    def from_state(self) -> str:
        return self._from_state

    @property
    def to_state(self) -> str:
        return self._to_state

    @property
    def handlers(self) -> Deque[BoundHandler]:
        """Handlers still waiting to be dispatched."""
        return self._handlers

    @property
    def callbacks(self) -> TransitionCallbacks:
        return self._callbacks

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def settled(self) -> bool:
        """True once the transition has cancelled, completed or been cleared."""
        return self._settled

    @property
    def completed(self) -> bool:
        """True once the transition has reached its destination."""
        return self._completed

    def exec(self) -> "Transition":
        """
        Dispatch queued handlers until the queue is empty, a handler halts the
        transition, or the transition is paused from elsewhere.

        Calls made while a drain is already running on this transition (for
        example a handler resuming its own event) return immediately; the
        running drain picks up where it left off.

        :return: This transition.
        """
        if self._settled or self._draining:
            return self
        self._draining = True
        try:
            self._drain()
        finally:
            self._draining = False
        return self

    def _drain(self) -> None:
        while not self._paused:
            if not self._handlers:
                logger.debug("Transition '%s' completed: %s -> %s", self._action, self._from_state, self._to_state)
                self._settled = True
                self._completed = True
                self._callbacks.complete()
                return

            handler = self._handlers.popleft()
            result = handler()

            if self._settled:
                # The handler settled the transition through its event.
                return
            if result is False:
                logger.debug("Transition '%s' cancelled by handler", self._action)
                self._handlers.clear()
                self._settled = True
                self._callbacks.cancel()
                return
            if result is True:
                logger.debug("Transition '%s' paused with %d handlers pending", self._action, len(self._handlers))
                self._paused = True
                self._callbacks.pause()
                if self._paused or self._settled:
                    return
                # The pause callback resumed synchronously; keep draining here.

    def pause(self) -> "Transition":
        self._paused = True
        return self

    def resume(self) -> "Transition":
        self._paused = False
        return self.exec()

    def clear(self) -> None:
        """
        Discard the remaining handlers so that nothing fires if a reference to
        this transition outlives it.
        """
        self._paused = False
        self._handlers.clear()
        self._settled = True

    def finish(self) -> None:
        """
        Mark the transition as having reached its destination and discard any
        handlers that have not run yet.
        """
        self.clear()
        self._completed = True

    def __repr__(self) -> str:
        return (
            f"Transition({self._action!r}, {self._from_state!r} -> {self._to_state!r}, "
            f"pending={len(self._handlers)}, paused={self._paused})"
        )


class TransitionBuilder:
    """
    Turns an action request into a Transition, expanding the ordering template
    into a queue of bound handlers.
    """

    def __init__(
        self,
        order: Optional[Sequence[str]] = None,
        event_factory: EventFactory = TransitionEvent,
    ) -> None:
        """
        :param order: Ordering template; None or empty uses DEFAULT_ORDER.
        :param event_factory: Callable building the event passed to each handler.
        """
        self._event_factory = event_factory
        self._order: Tuple[str, ...] = DEFAULT_ORDER
        self._tokens: List[OrderToken] = parse_order(DEFAULT_ORDER)
        self.set_order(order)

    def set_order(self, order: Optional[Sequence[str]]) -> None:
        """
        Replace the ordering template. The tokens are copied, so later changes
        to the caller's sequence have no effect. Transitions that were already
        built keep their queue.

        :param order: Sequence of ``subject.verb`` tokens, or None/empty to
            restore the default.
        :raises ConfigurationError: If any token is malformed.
        """
        if not order:
            self._order = DEFAULT_ORDER
            self._tokens = parse_order(DEFAULT_ORDER)
            return
        order = tuple(order)
        self._tokens = parse_order(order)
        self._order = order

    def get_order(self) -> Tuple[str, ...]:
        """Return the current template as an immutable snapshot."""
        return self._order

    def build(self, machine: "TransitionOwner", action: str, params: Sequence[Any] = ()) -> Transition:
        """
        Build a transition for ``action`` from the machine's current state. No
        handler is invoked.

        :param machine: The owning state machine.
        :param action: Name of the requested action.
        :param params: Values forwarded to every handler after the event.
        :raises TransitionError: If the action is not available from the current state.
        :raises InvalidTargetState: If a dynamic resolver names a state that no
            action leads to from the current state.
        """
        params = tuple(params)
        from_state = machine.state
        to_state = machine.resolve(action, from_state)
        if to_state is None:
            raise TransitionError(f'Action "{action}" is not available from state "{from_state}"')

        if callable(to_state):
            resolved = to_state(*params)
            if not machine.can_reach(from_state, resolved):
                raise InvalidTargetState(from_state, resolved)
            to_state = resolved

        callbacks = TransitionCallbacks(
            cancel=machine.cancel,
            pause=machine.pause,
            resume=machine.resume,
            complete=machine.complete,
        )

        queue: List[BoundHandler] = []
        for token in self._tokens:
            path = token.resolve(action, from_state, to_state)
            handlers = machine.handlers.lookup(path)
            if not handlers:
                continue
            for handler in handlers:
                queue.append(self._bind(handler, path, callbacks, from_state, to_state, machine.target, params))

        logger.debug(
            "Built transition '%s': %s -> %s with %d handlers", action, from_state, to_state, len(queue)
        )
        return Transition(action, from_state, to_state, queue, callbacks)

    def _bind(
        self,
        handler: Callable[..., Any],
        path: DispatchPath,
        callbacks: TransitionCallbacks,
        from_state: str,
        to_state: str,
        target: Any,
        params: Sequence[Any],
    ) -> BoundHandler:
        event_factory = self._event_factory

        def dispatch() -> Any:
            event = event_factory(path.category, callbacks, path.name, path.phase, from_state, to_state, target)
            return handler(event, *params)

        return dispatch
