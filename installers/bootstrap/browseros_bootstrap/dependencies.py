"""System shared-library dependencies for BrowserOS on Linux."""

from __future__ import annotations

from dataclasses import dataclass

from browseros_core.logging_setup import get_logger

from . import report
from .commands import Runner
from .errors import UnsupportedPackageManager


logger = get_logger().getChild("dependencies")

ALSA_LEGACY = "libasound2"
ALSA_T64 = "libasound2t64"

APT_PACKAGES = (
    "libxcb-shm0",
    "libx11-xcb1",
    "libx11-6",
    "libxcb1",
    "libxext6",
    "libxrandr2",
    "libxcomposite1",
    "libxcursor1",
    "libxdamage1",
    "libxfixes3",
    "libxi6",
    "libgtk-3-0",
    "libpangocairo-1.0-0",
    "libpango-1.0-0",
    "libatk1.0-0",
    "libcairo-gobject2",
    "libcairo2",
    "libgdk-pixbuf-2.0-0",
    "libxrender1",
    ALSA_LEGACY,
    "libfreetype6",
    "libfontconfig1",
    "libdbus-1-3",
    "libnss3",
    "libnspr4",
    "libatk-bridge2.0-0",
    "libdrm2",
    "libxkbcommon0",
    "libatspi2.0-0",
    "libcups2",
    "libxshmfence1",
    "libgbm1",
)

YUM_PACKAGES = (
    "nss",
    "nspr",
    "atk",
    "at-spi2-atk",
    "cups-libs",
    "libdrm",
    "libXcomposite",
    "libXdamage",
    "libXrandr",
    "mesa-libgbm",
    "pango",
    "alsa-lib",
    "libxkbcommon",
)

DNF_PACKAGES = YUM_PACKAGES + (
    "libxcb",
    "libX11-xcb",
    "libX11",
    "libXext",
    "libXcursor",
    "libXfixes",
    "libXi",
    "gtk3",
    "cairo-gobject",
)

# Probed in this order; the first manager found wins.
MANAGER_CANDIDATES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("apt-get", APT_PACKAGES),
    ("dnf", DNF_PACKAGES),
    ("yum", YUM_PACKAGES),
)


@dataclass(frozen=True)
class PackageManagerProfile:
    name: str
    packages: tuple[str, ...]

    @property
    def install_command(self) -> str:
        pkgs = " ".join(self.packages)
        if self.name == "apt-get":
            return f"sudo apt-get update && sudo apt-get install -y {pkgs}"
        return f"sudo {self.name} install -y {pkgs}"


def apt_package_exists(package: str, runner: Runner) -> bool:
    try:
        return runner.call(["apt-cache", "show", package], quiet=True) == 0
    except OSError:
        return False


def _apt_packages(runner: Runner) -> tuple[str, ...]:
    # Ubuntu 24.04+ renamed the ALSA runtime for the 64-bit time_t transition.
    if not apt_package_exists(ALSA_T64, runner):
        return APT_PACKAGES
    return tuple(ALSA_T64 if p == ALSA_LEGACY else p for p in APT_PACKAGES)


def resolve_dependencies(runner: Runner) -> PackageManagerProfile:
    for name, packages in MANAGER_CANDIDATES:
        if not runner.exists(name):
            continue
        if name == "apt-get":
            packages = _apt_packages(runner)
        logger.info("selected package manager %s (%d packages)", name, len(packages))
        return PackageManagerProfile(name=name, packages=packages)

    raise UnsupportedPackageManager("No supported package manager found (apt-get, dnf, or yum)")


def install_dependencies(profile: PackageManagerProfile, runner: Runner) -> bool:
    """Run the install command once; failures only produce a warning."""
    cmd = profile.install_command
    report.info(f"Running: {cmd}")
    try:
        code = runner.call(["sh", "-c", cmd])
    except OSError as exc:
        logger.warning("dependency install could not start: %s", exc)
        report.warning(f"Could not run install command: {exc}")
        return False

    if code != 0:
        logger.warning("dependency install exited with %s", code)
        report.warning("Failed to install some dependencies. You may need to run manually with sudo.")
        return False

    report.success("System dependencies installed")
    return True
