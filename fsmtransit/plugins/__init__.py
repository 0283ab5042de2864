"""Optional helpers built on top of the state machine's public API."""

from fsmtransit.plugins.state_helper import StateHelper

__all__ = ["StateHelper"]
