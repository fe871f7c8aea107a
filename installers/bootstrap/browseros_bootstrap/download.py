"""Artifact download through whichever fetch tool the host provides."""

from __future__ import annotations

from pathlib import Path

from browseros_core.logging_setup import get_logger

from .commands import Runner
from .errors import DownloadCommandFailed, DownloadError, NoFetchToolAvailable
from .resolver import WINDOWS


logger = get_logger().getChild("download")

CURL_RETRIES = 3


def _ps_quote(value: str) -> str:
    """Single-quoted PowerShell literal; embedded quotes are doubled."""
    return "'" + value.replace("'", "''") + "'"


def fetch_command(url: str, dest: Path, runner: Runner, os_name: str) -> list[str]:
    """Build the argv for the preferred fetch tool on this host."""
    if os_name == WINDOWS:
        script = (
            "$ProgressPreference='SilentlyContinue'; "
            f"Invoke-WebRequest -Uri {_ps_quote(url)} -OutFile {_ps_quote(str(dest))}"
        )
        return ["powershell", "-NoProfile", "-NonInteractive", "-Command", script]

    if runner.exists("curl"):
        return ["curl", "-fL", "--retry", str(CURL_RETRIES), "-o", str(dest), url]
    if runner.exists("wget"):
        return ["wget", "-O", str(dest), url]
    raise NoFetchToolAvailable("Neither curl nor wget is available in PATH")


def download_file(url: str, dest: Path, runner: Runner, os_name: str) -> Path:
    argv = fetch_command(url, dest, runner, os_name)
    logger.info("downloading %s -> %s with %s", url, dest, argv[0])
    try:
        code = runner.call(argv)
    except OSError as exc:
        raise DownloadError(f"Failed to run {argv[0]}: {exc}") from exc

    if code != 0:
        raise DownloadCommandFailed(url, code)
    return dest
