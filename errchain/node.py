# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.

"""Error chains: create at the failure site, wrap at every relay frame.

A function that can fail returns ``NOERROR`` or an ``ErrorNode``. The frame
that detects the failure calls ``new_error``; every enclosing frame that
cannot handle it returns ``wrap_error(err)`` (or ``propagate``), so the
final value lists each frame the failure passed through:

    something bad happened; at func3 (app.py:30); at func2 (app.py:25); at func1 (app.py:20);

Ownership moves on wrap and ends on release. Each node tracks its state so
that reuse after a move, double release or wrapping success fails loudly
with ``ChainOwnershipError``.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from errchain.accounting import NODE_BYTES, AllocationTracker, current_tracker, text_bytes
from errchain.location import Location, capture
from errchain.logger import get_logger

log = get_logger(__name__)

NOERROR = None


class ChainOwnershipError(RuntimeError):
    """An error chain was used in breach of the single-owner discipline."""


class NodeState(enum.Enum):
    LIVE = "live"
    WRAPPED = "wrapped"
    RELEASED = "released"


@dataclass(eq=False, slots=True)
class ErrorNode:
    """One link of an error chain.

    ``code`` and ``message`` are shared verbatim by every node of a chain;
    ``location`` is this node's own call site. Build nodes with
    ``new_error`` and ``wrap_error``, not directly.
    """

    code: int
    message: str
    location: Location
    previous: ErrorNode | None = field(default=None, repr=False)
    user_data: Any = None
    _formatted: str | None = field(default=None, init=False, repr=False)
    _state: NodeState = field(default=NodeState.LIVE, init=False, repr=False)
    _tracker: AllocationTracker | None = field(default=None, init=False, repr=False)
    _charged: int = field(default=0, init=False, repr=False)

    @property
    def state(self) -> NodeState:
        return self._state

    @property
    def is_root(self) -> bool:
        return self.previous is None

    @property
    def root(self) -> ErrorNode:
        node = self
        while node.previous is not None:
            node = node.previous
        return node

    def __str__(self) -> str:
        return format_error(self)


def _allocate(code: int, message: str, location: Location, previous: ErrorNode | None) -> ErrorNode:
    node = ErrorNode(code=code, message=message, location=location, previous=previous)
    # only the root pays for the message; wrappers share it
    node._charged = NODE_BYTES if previous is not None else NODE_BYTES + text_bytes(message)
    node._tracker = current_tracker()
    if node._tracker is not None:
        node._tracker.charge(node._charged)
    return node


def new_error(code: int, template: str, *args: Any, stacklevel: int = 1) -> ErrorNode:
    """Create a root node at the caller's location.

    ``template`` is rendered with ``%`` when ``args`` are given, as
    ``logging`` does: a single non-empty mapping argument feeds
    ``%(name)s`` placeholders. ``stacklevel=2`` attributes the node to the
    caller's caller, for helpers that build errors on behalf of someone else.
    """
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    message = template % args if args else template
    return _allocate(code, message, capture(stacklevel), None)


def wrap_error(node: ErrorNode | None, stacklevel: int = 1) -> ErrorNode:
    """Take ownership of ``node`` and return a wrapper at the caller's location.

    The wrapper inherits code and message unchanged; only the location is new.
    ``node`` belongs to the wrapper afterwards and must not be used directly.
    """
    if node is NOERROR:
        raise ChainOwnershipError("Cannot wrap the success sentinel")
    if node._state is not NodeState.LIVE:
        raise ChainOwnershipError(f"Cannot wrap a {node._state.value} error node")

    outer = _allocate(node.code, node.message, capture(stacklevel), node)
    node._state = NodeState.WRAPPED
    return outer


def propagate(err: ErrorNode | None, stacklevel: int = 1) -> ErrorNode | None:
    """Pass success through; wrap a failure at the caller's location."""
    if err is NOERROR:
        return NOERROR
    return wrap_error(err, stacklevel=stacklevel + 1)


def chain(node: ErrorNode | None) -> Iterator[ErrorNode]:
    """Yield the nodes of a chain, outermost first."""
    while node is not None:
        yield node
        node = node.previous


def format_error(node: ErrorNode | None) -> str | None:
    """Render the message followed by every location, outer to root.

    The text is cached on ``node`` itself; later calls return the same string.
    """
    if node is NOERROR:
        return None
    if node._state is not NodeState.LIVE:
        raise ChainOwnershipError(f"Cannot format a {node._state.value} error node")
    if node._formatted is not None:
        return node._formatted

    parts = [f"{node.message};"]
    parts.extend(f"at {n.location};" for n in chain(node))
    text = " ".join(parts)

    node._formatted = text
    if node._tracker is not None:
        node._tracker.charge(text_bytes(text))
    log.debug("Formatted error chain (%d chars)", len(text))
    return text


def release_error(node: ErrorNode | None) -> None:
    """Destroy ``node`` and every node it owns. No-op on ``NOERROR``."""
    if node is NOERROR:
        return
    if node._state is NodeState.WRAPPED:
        raise ChainOwnershipError("Cannot release a wrapped node; release the outermost node")
    if node._state is NodeState.RELEASED:
        raise ChainOwnershipError("Error chain already released")

    count = 0
    current: ErrorNode | None = node
    while current is not None:
        following = current.previous
        if current._tracker is not None:
            if current._formatted is not None:
                current._tracker.refund(text_bytes(current._formatted))
            current._tracker.refund(current._charged)
        current._charged = 0
        current._formatted = None
        current._tracker = None
        current.previous = None
        current._state = NodeState.RELEASED
        current = following
        count += 1

    log.debug("Released error chain of %d node(s)", count)
