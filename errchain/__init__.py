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

"""errchain — error values that record every frame they pass through."""

from errchain.accounting import AllocationTracker, tracking
from errchain.location import Location
from errchain.node import (
    NOERROR,
    ChainOwnershipError,
    ErrorNode,
    NodeState,
    chain,
    format_error,
    new_error,
    propagate,
    release_error,
    wrap_error,
)
from errchain.result import Fail, Ok, Result

__all__ = [
    "NOERROR",
    "AllocationTracker",
    "ChainOwnershipError",
    "ErrorNode",
    "Fail",
    "Location",
    "NodeState",
    "Ok",
    "Result",
    "chain",
    "format_error",
    "new_error",
    "propagate",
    "release_error",
    "tracking",
    "wrap_error",
]
