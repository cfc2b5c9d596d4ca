"""Tests for the Ok/Fail result carrier."""

from __future__ import annotations

from errchain import ErrorNode, NodeState, new_error
from errchain.accounting import AllocationTracker
from errchain.result import Fail, Ok, Result


def _parse_port(raw: str) -> Result[int]:
    if not raw.isdigit():
        return Fail(error=new_error(22, "not a port: %r", raw))
    return Ok(data=int(raw))


def _load_port(raw: str) -> Result[int]:
    result = _parse_port(raw)
    if not result.ok:
        return result.wrap()
    return result


def test_ok_carries_data() -> None:
    result = _load_port("8080")
    assert result.ok
    assert result.data == 8080


def test_fail_wrap_records_relaying_frame(tracker: AllocationTracker) -> None:
    """Relaying a Fail extends its chain with the caller's location."""
    result = _load_port("http")

    assert not result.ok
    assert result.code == 22
    assert isinstance(result.error, ErrorNode)
    assert result.error.location.routine == "_load_port"
    assert result.error.previous.location.routine == "_parse_port"
    assert str(result).startswith("not a port: 'http'; at _load_port (test_result.py:")

    result.release()
    assert tracker.in_use == 0


def test_wrap_moves_ownership_out_of_the_original_fail() -> None:
    original = _parse_port("x")
    relayed = original.wrap()

    assert original.error.state is NodeState.WRAPPED
    assert relayed.error.previous is original.error
    relayed.release()
