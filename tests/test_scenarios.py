"""End-to-end relay scenarios through a small call stack."""

from __future__ import annotations

from errchain import NOERROR, format_error, new_error, propagate, release_error
from errchain.accounting import NODE_BYTES, AllocationTracker


def func1_noerror():
    return NOERROR


def func2_noerror():
    err = propagate(func1_noerror())
    if err:
        return err
    return NOERROR


def func1():
    return new_error(0, "something bad happened")


def func2():
    err = propagate(func1())
    if err:
        return err
    return NOERROR


def func3():
    err = propagate(func2())
    if err:
        return err
    return NOERROR


def _call_line(func) -> int:
    return func.__code__.co_firstlineno + 1


def test_failure_is_relayed_through_every_frame(tracker: AllocationTracker) -> None:
    """Three frames yield the message once and three locations, outermost first."""
    err = func3()

    text = format_error(err)

    assert text == (
        "something bad happened;"
        f" at func3 (test_scenarios.py:{_call_line(func3)});"
        f" at func2 (test_scenarios.py:{_call_line(func2)});"
        f" at func1 (test_scenarios.py:{_call_line(func1)});"
    )
    release_error(err)
    assert tracker.in_use == 0


def test_allocation_sizes_follow_node_layout(tracker: AllocationTracker) -> None:
    """Root pays for node and message, wrappers for the node, format for its text."""
    err = func3()
    message_bytes = len("something bad happened") + 1
    assert tracker.in_use == 3 * NODE_BYTES + message_bytes

    text = format_error(err)
    assert tracker.in_use == 3 * NODE_BYTES + message_bytes + len(text) + 1
    assert tracker.peak == tracker.in_use

    release_error(err)
    assert tracker.in_use == 0
    assert tracker.allocations == tracker.frees == 4


def test_success_path_allocates_nothing(tracker: AllocationTracker) -> None:
    """An all-success call stack returns the sentinel and leaves the counter at zero."""
    err = func2_noerror()

    assert err is NOERROR
    assert tracker.allocated == 0
    release_error(err)
    assert tracker.in_use == 0
