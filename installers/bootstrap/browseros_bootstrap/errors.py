"""Failure types raised by the installer pipeline."""

from __future__ import annotations


class InstallError(RuntimeError):
    """Fatal installer failure; the message is shown to the user verbatim."""


class UnsupportedPlatform(InstallError):
    pass


class UnsupportedPackageManager(InstallError):
    pass


class DirectoryCreationFailure(InstallError):
    pass


class DownloadError(InstallError):
    pass


class NoFetchToolAvailable(DownloadError):
    pass


class DownloadCommandFailed(DownloadError):
    def __init__(self, url: str, returncode: int) -> None:
        super().__init__(f"Download failed for {url} (exit status: {returncode})")
        self.url = url
        self.returncode = returncode


class PlatformInstallError(InstallError):
    pass


class MountFailure(PlatformInstallError):
    pass


class BundleNotFound(PlatformInstallError):
    pass


class CopyFailure(PlatformInstallError):
    pass


class ExecutableNotFound(PlatformInstallError):
    pass


class PermissionChangeFailure(PlatformInstallError):
    pass
