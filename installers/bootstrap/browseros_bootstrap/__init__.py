"""BrowserOS bootstrap installer: resolve, download and unpack per platform."""

from .errors import InstallError
from .resolver import ArtifactDescriptor, PlatformTarget, resolve_artifact, resolve_target
from .service import BrowserOSInstaller, InstallResult, run_install

__all__ = [
    "ArtifactDescriptor",
    "BrowserOSInstaller",
    "InstallError",
    "InstallResult",
    "PlatformTarget",
    "resolve_artifact",
    "resolve_target",
    "run_install",
]
