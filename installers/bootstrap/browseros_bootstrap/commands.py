"""Blocking external command execution and PATH probing."""

from __future__ import annotations

import shlex
import subprocess
from typing import Protocol, Sequence

from browseros_core.logging_setup import get_logger


logger = get_logger().getChild("commands")


class Runner(Protocol):
    def call(self, argv: Sequence[str], quiet: bool = False) -> int:
        ...

    def exists(self, name: str) -> bool:
        ...


class CommandRunner:
    """Runs external tools with ``subprocess.call``.

    ``call`` raises ``OSError`` when the executable cannot be launched; callers
    decide whether that is fatal. ``exists`` never raises.
    """

    def __init__(self, os_name: str = "linux") -> None:
        self.locator = "where" if os_name == "windows" else "which"

    def call(self, argv: Sequence[str], quiet: bool = False) -> int:
        args = [str(a) for a in argv]
        logger.info("CMD %s", " ".join(shlex.quote(a) for a in args))
        if quiet:
            code = subprocess.call(args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        else:
            code = subprocess.call(args)
        if code != 0:
            logger.info("exit status %s from %s", code, args[0])
        return code

    def exists(self, name: str) -> bool:
        try:
            return self.call([self.locator, name], quiet=True) == 0
        except OSError:
            return False
