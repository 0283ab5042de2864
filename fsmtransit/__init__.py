"""fsmtransit: action-driven finite state machine with pausable transitions

Performing an action builds a Transition: an ordered queue of lifecycle handlers
(start, leave, enter, end) that runs one handler at a time. Any handler can
cancel the transition, pause it until something later resumes it, or let it
continue; the machine only changes state once the queue is exhausted.

Responsibilities:
    - Resolving actions against an action table, including dynamic targets
    - Expanding a configurable ordering template into a handler queue
    - Sequential dispatch with pause/resume/cancel/complete control flow

Logging:
    - Each module logs through ``logging.getLogger(__name__)`` at DEBUG level
    - No handlers are installed by the library
"""

from fsmtransit.core.actions import ActionTable
from fsmtransit.core.errors import ConfigurationError, FSMError, InvalidTargetState, TransitionError
from fsmtransit.core.events import Category, DispatchPath, Phase, TransitionCallbacks, TransitionEvent
from fsmtransit.core.handlers import HandlerRegistry
from fsmtransit.core.order import DEFAULT_ORDER
from fsmtransit.core.state_machine import StateMachine
from fsmtransit.core.transitions import Transition, TransitionBuilder

__version__ = "0.1.0"

__all__ = [
    "ActionTable",
    "Category",
    "ConfigurationError",
    "DEFAULT_ORDER",
    "DispatchPath",
    "FSMError",
    "HandlerRegistry",
    "InvalidTargetState",
    "Phase",
    "StateMachine",
    "Transition",
    "TransitionBuilder",
    "TransitionCallbacks",
    "TransitionError",
    "TransitionEvent",
]
