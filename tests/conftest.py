from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import Callable, Iterable, Mapping, Sequence, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "installers" / "bootstrap"))


Handler = Union[int, Callable[[list[str]], int]]


class FakeRunner:
    """Records argv lists instead of spawning processes.

    ``handlers`` maps an executable name to an exit code or a callable that
    receives the argv and returns one (and may raise ``OSError``).
    """

    def __init__(self, available: Iterable[str] = (), handlers: Mapping[str, Handler] | None = None) -> None:
        self.available = set(available)
        self.handlers = dict(handlers or {})
        self.calls: list[list[str]] = []
        self.probes: list[str] = []

    def call(self, argv: Sequence[str], quiet: bool = False) -> int:
        args = [str(a) for a in argv]
        self.calls.append(args)
        handler = self.handlers.get(args[0], 0)
        if callable(handler):
            return handler(args)
        return handler

    def exists(self, name: str) -> bool:
        self.probes.append(name)
        return name in self.available

    def commands(self, name: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    return FakeRunner


def write_output_file(flag: str) -> Callable[[list[str]], int]:
    """Fake fetch tool that creates the file named after ``flag``."""

    def _fetch(argv: list[str]) -> int:
        Path(argv[argv.index(flag) + 1]).write_bytes(b"payload")
        return 0

    return _fetch


@pytest.fixture
def fake_curl() -> Callable[[list[str]], int]:
    return write_output_file("-o")


def fake_hdiutil(with_bundle: bool = True, attach_code: int = 0) -> Callable[[list[str]], int]:
    """Fake ``hdiutil`` whose attach populates the mount point like a real DMG."""

    def _hdiutil(argv: list[str]) -> int:
        if argv[1] == "attach":
            if attach_code != 0:
                return attach_code
            mount = Path(argv[argv.index("-mountpoint") + 1])
            if with_bundle:
                macos = mount / "BrowserOS.app" / "Contents" / "MacOS"
                macos.mkdir(parents=True)
                (macos / "BrowserOS").write_bytes(b"binary")
        return 0

    return _hdiutil


@pytest.fixture
def make_hdiutil() -> Callable[..., Callable[[list[str]], int]]:
    return fake_hdiutil


def fake_cp(argv: list[str]) -> int:
    shutil.copytree(argv[2], argv[3])
    return 0


@pytest.fixture
def copy_tree() -> Callable[[list[str]], int]:
    return fake_cp
