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

"""Byte accounting for error chains, active only inside ``tracking()``.

Every node charges the tracker that was active when it was created and
refunds that same tracker when its chain is released, so a scenario that
releases everything it creates ends with ``in_use == 0``.

Sizes follow the C layout the chain was first written for:
  - node         NODE_BYTES (sizeof(error_t) on LP64)
  - root message UTF-8 length + 1
  - cached text  UTF-8 length + 1
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from errchain.logger import get_logger

log = get_logger(__name__)

NODE_BYTES = 72

_active: ContextVar[AllocationTracker | None] = ContextVar("errchain_tracker", default=None)


def text_bytes(text: str) -> int:
    """Size of a NUL-terminated UTF-8 copy of ``text``."""
    return len(text.encode("utf-8")) + 1


@dataclass
class AllocationTracker:
    """Running totals of bytes charged and refunded by error chains."""

    allocated: int = 0
    freed: int = 0
    allocations: int = 0
    frees: int = 0
    peak: int = 0

    @property
    def in_use(self) -> int:
        return self.allocated - self.freed

    def charge(self, nbytes: int) -> None:
        self.allocated += nbytes
        self.allocations += 1
        self.peak = max(self.peak, self.in_use)

    def refund(self, nbytes: int) -> None:
        self.freed += nbytes
        self.frees += 1

    def report(self) -> str:
        """Format a human-readable summary block."""
        lines: list[str] = ["", "Allocation Summary", "=" * 40]
        lines.append(f"allocated: {self.allocated} bytes in {self.allocations} allocations")
        lines.append(f"freed: {self.freed} bytes in {self.frees} frees")
        lines.append(f"peak: {self.peak} bytes")
        lines.append(f"in use: {self.in_use} bytes")
        lines.append("=" * 40)
        return "\n".join(lines)


def current_tracker() -> AllocationTracker | None:
    """The tracker new nodes will charge, or None outside ``tracking()``."""
    return _active.get()


@contextmanager
def tracking(tracker: AllocationTracker | None = None) -> Iterator[AllocationTracker]:
    """Count chain allocations made inside the block.

    Nested blocks install their own tracker; the outer one is restored on
    exit. A block that exits with bytes still in use logs a warning.
    """
    tracker = tracker if tracker is not None else AllocationTracker()
    token = _active.set(tracker)
    try:
        yield tracker
    finally:
        _active.reset(token)
        if tracker.in_use:
            log.warning("Error chains leaked %d bytes", tracker.in_use)
