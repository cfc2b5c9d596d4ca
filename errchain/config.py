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

"""Loads errchain.yaml into typed dataclasses.

Pure loader plus ``apply_config``. Failures come back as Fail results
whose error chain starts here.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from errchain.location import SOURCE_STYLES, set_source_style
from errchain.logger import get_logger, set_level
from errchain.node import new_error
from errchain.result import Fail, Ok, Result

log = get_logger(__name__)


class ConfigCode(enum.IntEnum):
    NOT_FOUND = 1
    PARSE = 2
    STRUCTURE = 3
    INVALID = 4


# ── Sections ───────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class LocationConfig:
    source_style: str = "basename"


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str | int = "INFO"


# ── Top-level ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ErrchainConfig:
    location: LocationConfig = field(default_factory=LocationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    codes: dict[str, int] = field(default_factory=dict)

    def resolve_code(self, value: str) -> int | None:
        """Map a configured code name or a decimal string to a code."""
        if value in self.codes:
            return self.codes[value]
        try:
            return int(value)
        except ValueError:
            return None


# ── Loader ─────────────────────────────────────────────────────

def _build_codes(raw: dict[str, Any]) -> dict[str, int]:
    codes: dict[str, int] = {}
    for name, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"code '{name}' must be an integer, got {value!r}")
        codes[str(name)] = value
    return codes


def _valid_level(level: Any) -> bool:
    """Numeric levels pass as-is; names must be known to logging."""
    if isinstance(level, bool):
        return False
    if isinstance(level, int):
        return level >= 0
    return isinstance(level, str) and isinstance(logging.getLevelName(level.upper()), int)


def load_config(path: Path) -> Result[ErrchainConfig]:
    """Load errchain.yaml into ErrchainConfig. Missing sections take defaults."""
    if not path.exists():
        return Fail(error=new_error(ConfigCode.NOT_FOUND, "Config file not found: %s", path))

    try:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        return Fail(error=new_error(ConfigCode.PARSE, "YAML parse error in %s: %s", path, exc))

    try:
        config = ErrchainConfig(
            location=LocationConfig(**raw.get("location", {})),
            logging=LoggingConfig(**raw.get("logging", {})),
            codes=_build_codes(raw.get("codes", {})),
        )
    except (AttributeError, KeyError, TypeError) as exc:
        return Fail(error=new_error(ConfigCode.STRUCTURE, "Config structure error in %s: %s", path, exc))

    if config.location.source_style not in SOURCE_STYLES:
        return Fail(error=new_error(
            ConfigCode.INVALID,
            "Unknown location.source_style %r in %s",
            config.location.source_style,
            path,
        ))
    if not _valid_level(config.logging.level):
        return Fail(error=new_error(ConfigCode.INVALID, "Unknown logging.level %r in %s", config.logging.level, path))

    log.info("Loaded config: %s", path)
    return Ok(data=config)


def apply_config(config: ErrchainConfig) -> None:
    """Make ``config`` the active location style and package log level."""
    set_source_style(config.location.source_style)
    set_level(config.logging.level)
