# tests/unit/plugins/test_state_helper.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from fsmtransit.plugins import StateHelper


def test_initial_snapshot(machine):
    helper = StateHelper(machine)
    assert helper.data["name"] == "idle"
    assert helper.data["index"] == machine.actions.states.index("idle")
    assert helper.data["is"] == {"idle": True}
    assert helper.data["paused"] is False
    assert helper.data["actions"] == {"start": True, "stop": True, "reset": True}
    assert helper.data["states"] == {"running": True, "stopped": True, "idle": True}
    assert helper.data["all"]["states"] == ["idle", "running", "stopped"]
    assert helper.data["all"]["actions"] == ["start", "stop", "reset"]


def test_snapshot_follows_state_changes(machine):
    helper = StateHelper(machine)
    machine.do("start")
    assert helper.data["name"] == "running"
    assert helper.data["is"] == {"running": True}
    assert helper.data["actions"] == {"stop": True, "reset": True}
    assert helper.data["states"] == {"stopped": True, "idle": True}


def test_snapshot_tracks_pause(machine):
    helper = StateHelper(machine)
    machine.on("action.*.start", lambda e: True)
    machine.do("start")
    assert helper.data["paused"] is True
    machine.resume()
    assert helper.data["paused"] is False
    assert helper.data["name"] == "running"


def test_snapshot_clears_pause_on_cancel(machine):
    helper = StateHelper(machine)
    machine.on("action.*.start", lambda e: True)
    machine.do("start")
    machine.cancel()
    assert helper.data["paused"] is False
    assert helper.data["name"] == "idle"


def test_snapshot_tracks_table_edits(machine):
    helper = StateHelper(machine)
    machine.add("fly", "idle", "airborne")
    assert "airborne" in helper.data["all"]["states"]
    assert helper.data["actions"]["fly"] is True
    assert helper.data["states"]["airborne"] is True
    machine.remove("fly")
    assert "fly" not in helper.data["all"]["actions"]
    assert "fly" not in helper.data["actions"]


def test_reset(machine):
    helper = StateHelper(machine)
    helper.reset()
    assert helper.data["name"] == ""
    assert helper.data["index"] == -1
    helper.update()
    assert helper.data["name"] == "idle"
