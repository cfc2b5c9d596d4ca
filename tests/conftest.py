"""Shared fixtures for errchain tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from errchain.accounting import AllocationTracker, tracking
from errchain.location import set_source_style
from errchain.logger import set_level


@pytest.fixture(autouse=True)
def default_settings() -> Iterator[None]:
    """Restore the default location style and log level after each test."""
    yield
    set_source_style("basename")
    set_level("INFO")


@pytest.fixture
def tracker() -> Iterator[AllocationTracker]:
    """Return an allocation tracker active for the whole test."""
    with tracking() as active:
        yield active
