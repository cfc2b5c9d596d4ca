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

"""Result pattern for functions that return a value or an error chain.

Provides Ok[T] and Fail types as an alternative to raising exceptions.
Every function that can fail and also produces data returns
Result[T] = Ok[T] | Fail, where Fail carries an ErrorNode chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from errchain.node import ErrorNode, format_error, release_error, wrap_error

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying typed data."""

    data: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class Fail:
    """Failed result carrying the error chain that caused it."""

    error: ErrorNode
    ok: bool = field(default=False, init=False)

    @property
    def code(self) -> int:
        return self.error.code

    def wrap(self, stacklevel: int = 1) -> Fail:
        """Relay the failure one frame up, recording the caller's location."""
        return Fail(error=wrap_error(self.error, stacklevel=stacklevel + 1))

    def release(self) -> None:
        release_error(self.error)

    def __str__(self) -> str:
        return format_error(self.error)


Result = Ok[T] | Fail
