"""Per-OS steps that turn a downloaded artifact into a runnable BrowserOS."""

from __future__ import annotations

import shutil
from pathlib import Path

from browseros_core.config import EXECUTABLE_ENV_VAR, InstallerSettings
from browseros_core.logging_setup import get_logger

from .commands import Runner
from .errors import (
    BundleNotFound,
    CopyFailure,
    DirectoryCreationFailure,
    ExecutableNotFound,
    MountFailure,
    PermissionChangeFailure,
)
from .resolver import LINUX, MACOS, WINDOWS


logger = get_logger().getChild("platforms")

APP_BUNDLE = "BrowserOS.app"
EXECUTABLE_NAME = "BrowserOS"
WINDOWS_DEFAULT_EXECUTABLE = r"C:\Program Files\BrowserOS\BrowserOS.exe"


def _ensure_dir(path: Path, what: str) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationFailure(f"Failed to create {what} {path}: {exc}") from exc


class PlatformInstaller:
    """Default variant: nothing to unpack, the user finishes by hand."""

    def install(self, artifact_path: Path, settings: InstallerSettings) -> Path | None:
        return None

    def manual_instructions(self) -> list[str]:
        return []


class ManualInstaller(PlatformInstaller):
    def __init__(self, instructions: list[str] | None = None) -> None:
        self._instructions = list(instructions or [])

    def manual_instructions(self) -> list[str]:
        return list(self._instructions)


class DiskImageInstaller(PlatformInstaller):
    """Mount the DMG at ``<home>/mount``, copy the app bundle out, detach."""

    def __init__(self, runner: Runner) -> None:
        self.runner = runner

    def _detach(self, mount_dir: Path, *flags: str) -> None:
        try:
            self.runner.call(["hdiutil", "detach", str(mount_dir), *flags])
        except OSError as exc:
            logger.warning("hdiutil detach failed for %s: %s", mount_dir, exc)

    def _discard_mount(self, mount_dir: Path, *flags: str) -> None:
        self._detach(mount_dir, *flags)
        shutil.rmtree(mount_dir, ignore_errors=True)

    def install(self, artifact_path: Path, settings: InstallerSettings) -> Path | None:
        mount_dir = settings.mount_dir
        app_target = settings.install_home / APP_BUNDLE

        _ensure_dir(settings.install_home, "BrowserOS directory")

        if mount_dir.exists():
            logger.info("removing stale mount point %s", mount_dir)
            self._discard_mount(mount_dir, "-force")
        _ensure_dir(mount_dir, "mount directory")

        attach = ["hdiutil", "attach", "-nobrowse", "-quiet", "-mountpoint", str(mount_dir), str(artifact_path)]
        try:
            attached = self.runner.call(attach) == 0
        except OSError as exc:
            shutil.rmtree(mount_dir, ignore_errors=True)
            raise MountFailure(f"Failed to mount BrowserOS DMG: {exc}") from exc
        if not attached:
            shutil.rmtree(mount_dir, ignore_errors=True)
            raise MountFailure("Failed to mount BrowserOS DMG")

        try:
            return self._copy_bundle(mount_dir, app_target)
        finally:
            self._discard_mount(mount_dir, "-quiet")

    def _copy_bundle(self, mount_dir: Path, app_target: Path) -> Path:
        app_in_dmg = mount_dir / APP_BUNDLE
        if not app_in_dmg.exists():
            raise BundleNotFound(f"{APP_BUNDLE} not found in mounted DMG: {mount_dir}")

        if app_target.exists():
            try:
                shutil.rmtree(app_target)
            except OSError as exc:
                raise CopyFailure(f"Failed to remove previous {APP_BUNDLE} at {app_target}: {exc}") from exc

        try:
            code = self.runner.call(["cp", "-R", str(app_in_dmg), str(app_target)])
        except OSError as exc:
            raise CopyFailure(f"Failed to copy {APP_BUNDLE}: {exc}") from exc
        if code != 0:
            raise CopyFailure(f"Failed to copy {APP_BUNDLE} from DMG")

        executable = app_target / "Contents" / "MacOS" / EXECUTABLE_NAME
        if not executable.exists():
            raise ExecutableNotFound(f"Installed BrowserOS executable not found: {executable}")
        return executable


class ExecutableInstaller(PlatformInstaller):
    """Place a self-contained executable (AppImage) at ``<home>/bin/BrowserOS``."""

    def __init__(self, runner: Runner) -> None:
        self.runner = runner

    def install(self, artifact_path: Path, settings: InstallerSettings) -> Path | None:
        bin_dir = settings.bin_dir
        _ensure_dir(bin_dir, "BrowserOS bin directory")

        executable = bin_dir / EXECUTABLE_NAME
        try:
            shutil.copyfile(artifact_path, executable)
        except OSError as exc:
            raise CopyFailure(f"Failed to install BrowserOS AppImage to {executable}: {exc}") from exc

        try:
            code = self.runner.call(["chmod", "+x", str(executable)])
        except OSError as exc:
            raise PermissionChangeFailure(f"Failed to run chmod +x on {executable}: {exc}") from exc
        if code != 0:
            raise PermissionChangeFailure(f"Failed to mark BrowserOS executable as runnable: {executable}")
        return executable


def select_installer(os_name: str, runner: Runner) -> PlatformInstaller:
    if os_name == MACOS:
        return DiskImageInstaller(runner)
    if os_name == LINUX:
        return ExecutableInstaller(runner)
    if os_name == WINDOWS:
        return ManualInstaller(
            [
                "Run the downloaded installer, then set:",
                f"  set {EXECUTABLE_ENV_VAR}={WINDOWS_DEFAULT_EXECUTABLE}",
            ]
        )
    return ManualInstaller()
