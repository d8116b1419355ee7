#!/usr/bin/env python3
from __future__ import annotations

from ..ui import DEFAULT_CONTEXT, console, console_err


def _warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[warning]Warning:[/warning] {message}")


def _info(message: str) -> None:
    if DEFAULT_CONTEXT.quiet:
        return
    console.print(message)


def _debug(message: str, *, debug: bool) -> None:
    if not debug:
        return
    console_err.print(f"[muted]{message}[/muted]")
