"""Host platform detection and BrowserOS artifact resolution."""

from __future__ import annotations

from dataclasses import dataclass

from browseros_core.config import BROWSEROS_VERSION, CDN_BASE


MACOS = "macos"
WINDOWS = "windows"
LINUX = "linux"


@dataclass(frozen=True)
class PlatformTarget:
    os_name: str
    arch: str


@dataclass(frozen=True)
class ArtifactDescriptor:
    url: str
    file_name: str


def _normalize_os(system: str) -> str:
    s = system.lower()
    if s.startswith("win"):
        return WINDOWS
    if s.startswith("darwin") or s.startswith("mac"):
        return MACOS
    if s.startswith("linux"):
        return LINUX
    return s


def _normalize_arch(machine: str) -> str:
    m = machine.lower()
    if m in ("x86_64", "amd64"):
        return "x64"
    if m in ("aarch64", "arm64"):
        return "arm64"
    return m


def resolve_target(system: str, machine: str) -> PlatformTarget:
    return PlatformTarget(os_name=_normalize_os(system), arch=_normalize_arch(machine))


def _artifact(cdn_base: str, version: str, folder: str, suffix: str) -> ArtifactDescriptor:
    file_name = f"BrowserOS_v{version}_{suffix}"
    return ArtifactDescriptor(url=f"{cdn_base}/{version}/{folder}/{file_name}", file_name=file_name)


def resolve_artifact(
    target: PlatformTarget,
    version: str = BROWSEROS_VERSION,
    cdn_base: str = CDN_BASE,
) -> ArtifactDescriptor | None:
    """Pick the download for ``target``, or ``None`` when the OS is not served.

    macOS never comes back empty: unknown architectures get the universal image.
    """
    if target.os_name == MACOS:
        if target.arch in ("arm64", "x64"):
            return _artifact(cdn_base, version, "macos", f"{target.arch}.dmg")
        return _artifact(cdn_base, version, "macos", "universal.dmg")
    if target.os_name == WINDOWS:
        return _artifact(cdn_base, version, "win", "x64_installer.exe")
    if target.os_name == LINUX:
        return _artifact(cdn_base, version, "linux", "x64.AppImage")
    return None
