# fsmtransit/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class FSMError(Exception):
    """
    Base exception class for errors within the transition engine.
    """


class ConfigurationError(FSMError):
    """
    Raised when the machine, its ordering template or a dispatch path is
    configured with values the engine cannot interpret.
    """


class TransitionError(FSMError):
    """
    Raised when a requested action cannot be turned into a transition.
    """


class InvalidTargetState(TransitionError):
    """
    Raised while building a transition when a dynamic destination resolver names
    a state that cannot be reached from the current state.
    """

    def __init__(self, from_state: str, to_state: str) -> None:
        super().__init__(f'Cannot go to state "{to_state}" from current state "{from_state}"')
        self.from_state = from_state
        self.to_state = to_state
