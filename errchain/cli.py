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
"""
errchain-trace: build an error chain through a call stack and print it.

Fails at the bottom of a --depth deep call stack, relays the error up
through every frame, prints the formatted chain, releases it and reports
the allocation totals. With --success every frame succeeds instead.

Usage: errchain-trace --depth 3 --code generic --message "disk %s full" --arg /var
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from errchain.accounting import tracking
from errchain.config import ErrchainConfig, apply_config, load_config
from errchain.logger import get_logger
from errchain.node import NOERROR, ErrorNode, format_error, new_error, propagate, release_error

log = get_logger(__name__)


def _fail(code: int, message: str, args: list[str]) -> ErrorNode | None:
    return new_error(code, message, *args)


def _succeed() -> ErrorNode | None:
    return NOERROR


def _relay(err: ErrorNode | None) -> ErrorNode | None:
    err = propagate(err)
    if err:
        return err
    return NOERROR


def _run_stack(depth: int, code: int, message: str, args: list[str], succeed: bool) -> ErrorNode | None:
    """Fail (or succeed) in the innermost frame, then relay once per outer frame.

    Frames are unrolled into a loop so any depth fits in the interpreter stack.
    """
    err = _succeed() if succeed else _fail(code, message, args)
    for _ in range(depth - 1):
        err = _relay(err)
    return err


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="errchain-trace",
        description="Relay an error through a call stack and print its chain",
    )
    parser.add_argument("--config", type=Path, help="Path to errchain.yaml")
    parser.add_argument("--depth", type=int, default=3, help="Frames in the call stack (default: 3)")
    parser.add_argument("--code", default="0", help="Numeric code or a name from the config codes table")
    parser.add_argument("--message", default="something bad happened", help="%%-style message template")
    parser.add_argument("--arg", action="append", default=[], help="Template argument (repeatable)")
    parser.add_argument("--success", action="store_true", help="Run an all-success call stack")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    config = ErrchainConfig()
    if args.config is not None:
        cfg_result = load_config(args.config.resolve())
        if not cfg_result.ok:
            log.error(str(cfg_result))
            cfg_result.release()
            return 1
        config = cfg_result.data
    apply_config(config)

    code = config.resolve_code(args.code)
    if code is None:
        log.error("Unknown error code: %s", args.code)
        return 1
    if args.depth < 1:
        log.error("Depth must be at least 1, got %d", args.depth)
        return 1
    if args.arg:
        try:
            args.message % tuple(args.arg)
        except (TypeError, ValueError) as exc:
            log.error("Message template does not match arguments: %s", exc)
            return 1

    with tracking() as tracker:
        err = _run_stack(args.depth, code, args.message, args.arg, args.success)
        if err is NOERROR:
            log.info("Call stack of %d frame(s) succeeded", args.depth)
        else:
            print(format_error(err))
            log.info("Error code %d relayed through %d frame(s)", err.code, args.depth)
            release_error(err)

    log.info(tracker.report())
    return 0 if tracker.in_use == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
