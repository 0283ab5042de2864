# tests/integration/test_properties.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fsmtransit.core.events import TransitionCallbacks
from fsmtransit.core.order import DEFAULT_ORDER, OrderToken
from fsmtransit.core.state_machine import StateMachine
from fsmtransit.core.transitions import Transition

TOKENS = [f"{subject}.{verb}" for subject in ("*", "action", "from", "to") for verb in ("start", "leave", "enter", "end")]


def callbacks() -> TransitionCallbacks:
    return TransitionCallbacks(cancel=MagicMock(), pause=MagicMock(), resume=MagicMock(), complete=MagicMock())


@pytest.mark.property
@given(st.lists(st.sampled_from(DEFAULT_ORDER), min_size=1, max_size=30))
def test_dispatch_follows_template_then_registration(registrations):
    fsm = StateMachine("a", actions=[("go", "a", "b")])
    fired = []
    for index, token in enumerate(registrations):
        path = str(OrderToken.parse(token).resolve("go", "a", "b"))
        fsm.on(path, lambda e, i=index: fired.append(i))

    fsm.do("go")

    expected = sorted(range(len(registrations)), key=lambda i: (DEFAULT_ORDER.index(registrations[i]), i))
    assert fired == expected
    assert fsm.state == "b"


@pytest.mark.property
@given(st.lists(st.sampled_from(TOKENS), max_size=12, unique=True))
def test_custom_templates_are_accepted(order):
    fsm = StateMachine("a", actions=[("go", "a", "b")], order=order)
    assert list(fsm.builder.get_order()) == (order or list(DEFAULT_ORDER))
    assert fsm.do("go") is True


@pytest.mark.property
@given(
    st.lists(st.sampled_from([None, True, False]), max_size=20),
)
def test_control_results(results):
    fired = []
    handlers = [(lambda i=i, r=r: fired.append(i) or r) for i, r in enumerate(results)]
    cb = callbacks()
    t = Transition("go", "a", "b", handlers, cb)

    # Resume through every pause until the transition settles.
    t.exec()
    while t.paused:
        t.resume()

    first_cancel = next((i for i, r in enumerate(results) if r is False), None)
    if first_cancel is None:
        assert fired == list(range(len(results)))
        cb.complete.assert_called_once_with()
        cb.cancel.assert_not_called()
    else:
        assert fired == list(range(first_cancel + 1))
        cb.cancel.assert_called_once_with()
        cb.complete.assert_not_called()
    stop = first_cancel if first_cancel is not None else len(results)
    assert cb.pause.call_count == sum(1 for r in results[:stop] if r is True)
