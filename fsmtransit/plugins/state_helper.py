# fsmtransit/plugins/state_helper.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from fsmtransit.core.state_machine import StateMachine


def _to_hash(keys: Iterable[str]) -> Dict[str, bool]:
    return {key: True for key in keys}


class StateHelper:
    """
    Keeps a plain-data snapshot of a machine's status, suitable for binding to
    a view. The snapshot refreshes itself from the machine's system events.
    """

    def __init__(self, fsm: StateMachine) -> None:
        self.fsm = fsm
        self.data: Dict[str, Any] = {}
        (
            self.fsm.on("change", self.on_change)
            .on("pause", self.on_pause)
            .on("resume", self.on_pause)
            .on("cancel", self.on_pause)
            .on("add", self.on_modify)
            .on("remove", self.on_modify)
        )
        self.reset()
        self.update()

    def update(self) -> None:
        self.on_change()
        self.on_pause()
        self.on_modify()

    def reset(self) -> None:
        self.data = {
            "name": "",
            "index": -1,
            "paused": False,
            "is": {},
            "actions": {},
            "states": {},
            "all": {"states": [], "actions": []},
        }

    def on_pause(self, fsm: Optional[StateMachine] = None) -> None:
        self.data["paused"] = self.fsm.is_paused()

    def on_modify(self, fsm: Optional[StateMachine] = None) -> None:
        self.data["all"]["states"] = self.fsm.actions.get_states()
        self.data["all"]["actions"] = self.fsm.actions.get_actions()
        # Edits can change what is reachable from the current state.
        self._refresh_routes()

    def on_change(self, fsm: Optional[StateMachine] = None) -> None:
        state = self.fsm.state
        self.data["name"] = state
        self.data["index"] = self.fsm.actions.states.index(state) if state in self.fsm.actions.states else -1
        self.data["is"] = {state: True}
        self.data["paused"] = self.fsm.is_paused()
        self._refresh_routes()

    def _refresh_routes(self) -> None:
        state = self.fsm.state
        self.data["states"] = _to_hash(self.fsm.actions.get_to_states(state))
        self.data["actions"] = _to_hash(self.fsm.actions.get_actions_from(state))
