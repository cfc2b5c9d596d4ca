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

"""Call-site capture for error nodes.

``capture(stacklevel)`` reads the frame of whoever called the public
operation, the same way ``logging`` resolves ``stacklevel``.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

SOURCE_STYLES = ("basename", "relative", "absolute")

_source_style = "basename"


@dataclass(frozen=True, slots=True)
class Location:
    """Source name, line and routine of one call site."""

    source: str
    line: int
    routine: str

    def __str__(self) -> str:
        return f"{self.routine} ({self.source}:{self.line})"


def set_source_style(style: str) -> None:
    """Choose how the file name is rendered for locations captured from now on."""
    global _source_style
    if style not in SOURCE_STYLES:
        raise ValueError(f"Unknown source style: {style!r} (expected one of {SOURCE_STYLES})")
    _source_style = style


def get_source_style() -> str:
    return _source_style


def _render_source(filename: str) -> str:
    if _source_style == "absolute":
        return os.path.abspath(filename)
    if _source_style == "relative":
        try:
            return os.path.relpath(filename)
        except ValueError:
            # different drive on Windows
            return filename
    return os.path.basename(filename)


def capture(stacklevel: int = 1) -> Location:
    """Location of the frame ``stacklevel`` levels above the caller.

    ``capture(1)`` called from ``new_error`` describes the line that called
    ``new_error``.
    """
    frame = sys._getframe(stacklevel + 1)
    code = frame.f_code
    return Location(
        source=_render_source(code.co_filename),
        line=frame.f_lineno,
        routine=code.co_name,
    )
