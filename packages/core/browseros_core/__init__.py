"""Core services shared by the BrowserOS installer: settings and logging."""

from .config import (
    BROWSEROS_VERSION,
    EXECUTABLE_ENV_VAR,
    InstallerSettings,
    load_settings,
)
from .logging_setup import configure_logging, get_logger

__all__ = [
    "BROWSEROS_VERSION",
    "EXECUTABLE_ENV_VAR",
    "InstallerSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
