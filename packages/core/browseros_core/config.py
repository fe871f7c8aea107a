"""Installer settings and install-root path helpers."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


BROWSEROS_VERSION = "0.39.0.3"
CDN_BASE = "http://cdn.browseros.com/releases"
EXECUTABLE_ENV_VAR = "AGENT_BROWSER_EXECUTABLE_PATH"
HOME_ENV_VAR = "BROWSEROS_INSTALL_HOME"
INSTALL_DIR_NAME = ".browseros"


def _default_home() -> Path:
    try:
        base = Path.home()
    except RuntimeError:
        base = Path(tempfile.gettempdir())
    return base / INSTALL_DIR_NAME


@dataclass(frozen=True)
class InstallerSettings:
    version: str = BROWSEROS_VERSION
    cdn_base: str = CDN_BASE
    install_home: Path = field(default_factory=_default_home)
    executable_env_var: str = EXECUTABLE_ENV_VAR

    @property
    def downloads_dir(self) -> Path:
        return self.install_home / "downloads"

    @property
    def mount_dir(self) -> Path:
        return self.install_home / "mount"

    @property
    def bin_dir(self) -> Path:
        return self.install_home / "bin"

    @property
    def log_dir(self) -> Path:
        return self.install_home / "logs"


def load_settings(environ: Mapping[str, str] | None = None) -> InstallerSettings:
    env = os.environ if environ is None else environ
    override = env.get(HOME_ENV_VAR, "").strip()
    if override:
        return InstallerSettings(install_home=Path(override).expanduser())
    return InstallerSettings()
