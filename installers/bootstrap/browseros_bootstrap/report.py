"""User-facing report lines, kept apart from the log file."""

from __future__ import annotations

import sys


def info(msg: str = "") -> None:
    print(msg)


def success(msg: str) -> None:
    print(f"OK: {msg}")


def warning(msg: str) -> None:
    print(f"WARNING: {msg}", file=sys.stderr)


def error(msg: str) -> None:
    print(f"ERROR: {msg}", file=sys.stderr)
