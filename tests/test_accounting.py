"""Tests for the allocation tracker and the tracking() scope."""

from __future__ import annotations

import logging

import pytest

from errchain import format_error, new_error, release_error, wrap_error
from errchain.accounting import NODE_BYTES, AllocationTracker, current_tracker, text_bytes, tracking


def test_tracker_is_only_active_inside_the_block() -> None:
    assert current_tracker() is None
    with tracking() as tracker:
        assert current_tracker() is tracker
    assert current_tracker() is None


def test_nested_blocks_restore_the_outer_tracker() -> None:
    with tracking() as outer:
        with tracking() as inner:
            err = new_error(1, "inner")
        assert current_tracker() is outer
        release_error(err)

    assert inner.in_use == 0
    assert outer.allocations == 0


def test_existing_tracker_can_be_reused() -> None:
    tracker = AllocationTracker()
    with tracking(tracker) as active:
        assert active is tracker
        release_error(new_error(1, "boom"))

    assert tracker.allocations == 1
    assert tracker.in_use == 0


def test_mixed_operations_end_at_zero() -> None:
    """Any create/wrap/format/release sequence that releases everything leaks nothing."""
    with tracking() as tracker:
        chains = [new_error(code, "failure %d", code) for code in range(5)]
        chains = [wrap_error(wrap_error(err)) for err in chains]
        for err in chains[::2]:
            format_error(err)
            format_error(err)
        for err in chains:
            release_error(err)

    assert tracker.in_use == 0
    assert tracker.peak > 0


def test_text_bytes_counts_utf8_plus_terminator() -> None:
    assert text_bytes("") == 1
    assert text_bytes("abc") == 4
    assert text_bytes("é") == 3


def test_leak_is_logged_on_exit(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="errchain.accounting"):
        with tracking() as tracker:
            err = new_error(1, "leaked")

    assert tracker.in_use == NODE_BYTES + text_bytes("leaked")
    assert f"leaked {NODE_BYTES + text_bytes('leaked')} bytes" in caplog.text
    release_error(err)


def test_report_lists_totals() -> None:
    with tracking() as tracker:
        release_error(new_error(1, "boom"))

    report = tracker.report()
    assert "Allocation Summary" in report
    assert "in use: 0 bytes" in report
    assert f"peak: {NODE_BYTES + text_bytes('boom')} bytes" in report
