"""Installer orchestration shared by the CLI entry points."""

from __future__ import annotations

import platform
from dataclasses import dataclass
from pathlib import Path

from browseros_core.config import InstallerSettings, load_settings
from browseros_core.logging_setup import get_logger

from . import report
from .commands import CommandRunner, Runner
from .dependencies import install_dependencies, resolve_dependencies
from .download import download_file
from .errors import DirectoryCreationFailure, InstallError, UnsupportedPlatform
from .platforms import select_installer
from .resolver import LINUX, ArtifactDescriptor, PlatformTarget, resolve_artifact, resolve_target


logger = get_logger().getChild("service")

EXIT_OK = 0
EXIT_FAILURE = 1
WITH_DEPS_HINT = "browseros-installer install --with-deps"


@dataclass(frozen=True)
class InstallResult:
    target: PlatformTarget
    artifact: ArtifactDescriptor
    downloaded_path: Path
    executable_path: Path | None


def detect_target() -> PlatformTarget:
    return resolve_target(platform.system(), platform.machine())


class BrowserOSInstaller:
    def __init__(
        self,
        settings: InstallerSettings | None = None,
        runner: Runner | None = None,
        target: PlatformTarget | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.target = target or detect_target()
        self.runner = runner or CommandRunner(self.target.os_name)

    @property
    def is_linux(self) -> bool:
        return self.target.os_name == LINUX

    def install_system_dependencies(self) -> bool:
        report.info("Installing system dependencies...")
        profile = resolve_dependencies(self.runner)
        return install_dependencies(profile, self.runner)

    def resolve(self) -> ArtifactDescriptor:
        artifact = resolve_artifact(self.target, self.settings.version, self.settings.cdn_base)
        if artifact is None:
            raise UnsupportedPlatform(
                f"Unsupported platform for BrowserOS install: {self.target.os_name} / {self.target.arch}"
            )
        return artifact

    def prepare_downloads(self) -> Path:
        downloads = self.settings.downloads_dir
        try:
            downloads.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationFailure(f"Failed to create download directory {downloads}: {exc}") from exc
        return downloads

    def run(self, with_deps: bool = False) -> InstallResult:
        logger.info("install started target=%s/%s with_deps=%s", self.target.os_name, self.target.arch, with_deps)

        if self.is_linux:
            if with_deps:
                self.install_system_dependencies()
            else:
                report.warning("Linux detected. If browser fails to launch, run:")
                report.info(f"  {WITH_DEPS_HINT}")
                report.info()

        artifact = self.resolve()
        download_path = self.prepare_downloads() / artifact.file_name

        report.info(f"Installing: downloading BrowserOS {self.settings.version}...")
        download_file(artifact.url, download_path, self.runner, self.target.os_name)

        installer = select_installer(self.target.os_name, self.runner)
        executable = installer.install(download_path, self.settings)

        result = InstallResult(
            target=self.target,
            artifact=artifact,
            downloaded_path=download_path,
            executable_path=executable,
        )
        self._report(result, installer.manual_instructions(), with_deps)
        logger.info("install finished executable=%s", executable)
        return result

    def _report(self, result: InstallResult, instructions: list[str], with_deps: bool) -> None:
        report.success("BrowserOS package downloaded")
        report.info(f"  {result.downloaded_path}")

        if result.executable_path is not None:
            report.success("BrowserOS executable ready:")
            report.info(f"  {result.executable_path}")
            report.info()
            report.info("Set this in your shell:")
            report.info(f'  export {self.settings.executable_env_var}="{result.executable_path}"')
        elif instructions:
            report.info()
            for line in instructions:
                report.info(line)

        if self.is_linux and not with_deps:
            report.info()
            report.info("Note: If BrowserOS fails to start due to missing shared libraries, run:")
            report.info(f"  {WITH_DEPS_HINT}")


def run_install(
    with_deps: bool = False,
    settings: InstallerSettings | None = None,
    runner: Runner | None = None,
    target: PlatformTarget | None = None,
) -> int:
    """Run the whole install and map any fatal failure to an exit code."""
    installer = BrowserOSInstaller(settings=settings, runner=runner, target=target)
    try:
        installer.run(with_deps=with_deps)
    except InstallError as exc:
        logger.error("install failed: %s", exc, extra={"event": "install_failed"})
        report.error(str(exc))
        return EXIT_FAILURE
    return EXIT_OK
