"""Environment report for troubleshooting an install without running it."""

from __future__ import annotations

import platform
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import psutil

from browseros_core.config import InstallerSettings

from .commands import Runner
from .resolver import PlatformTarget, resolve_artifact


PROBED_TOOLS = (
    "curl",
    "wget",
    "powershell",
    "hdiutil",
    "cp",
    "chmod",
    "apt-get",
    "apt-cache",
    "dnf",
    "yum",
)


def _existing_parent(path: Path) -> Path:
    for candidate in (path, *path.parents):
        if candidate.exists():
            return candidate
    return Path(path.anchor or ".")


def _disk_free(path: Path) -> dict[str, Any]:
    probe = _existing_parent(path)
    try:
        du = psutil.disk_usage(str(probe))
    except OSError as exc:
        return {"path": str(probe), "error": str(exc)}
    return {"path": str(probe), "free_bytes": du.free, "total_bytes": du.total, "percent_used": du.percent}


def build_doctor_payload(settings: InstallerSettings, target: PlatformTarget, runner: Runner) -> dict[str, Any]:
    artifact = resolve_artifact(target, settings.version, settings.cdn_base)
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "target": asdict(target),
        "version": settings.version,
        "artifact": asdict(artifact) if artifact is not None else None,
        "install_home": str(settings.install_home),
        "tools": {name: runner.exists(name) for name in PROBED_TOOLS},
        "disk": _disk_free(settings.install_home),
    }
