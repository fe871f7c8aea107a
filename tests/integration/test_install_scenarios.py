"""End-to-end installer runs against fake external tools."""

from __future__ import annotations

import pytest

from browseros_bootstrap.resolver import PlatformTarget
from browseros_bootstrap.service import BrowserOSInstaller, run_install
from browseros_core.config import InstallerSettings


@pytest.fixture
def settings(tmp_path) -> InstallerSettings:
    return InstallerSettings(install_home=tmp_path / ".browseros")


def test_macos_arm64_full_install(settings, make_runner, make_hdiutil, copy_tree, fake_curl, capsys) -> None:
    runner = make_runner(
        available={"curl"},
        handlers={"curl": fake_curl, "hdiutil": make_hdiutil(), "cp": copy_tree},
    )
    installer = BrowserOSInstaller(settings=settings, runner=runner, target=PlatformTarget("macos", "arm64"))

    result = installer.run()

    assert result.artifact.file_name == "BrowserOS_v0.39.0.3_arm64.dmg"
    assert result.downloaded_path == settings.install_home / "downloads" / "BrowserOS_v0.39.0.3_arm64.dmg"
    assert result.executable_path == settings.install_home / "BrowserOS.app" / "Contents" / "MacOS" / "BrowserOS"
    assert not settings.mount_dir.exists()

    out = capsys.readouterr().out
    assert f'export AGENT_BROWSER_EXECUTABLE_PATH="{result.executable_path}"' in out
    assert "--with-deps" not in out


def test_macos_unmodeled_arch_uses_universal_image(settings, make_runner, make_hdiutil, copy_tree, fake_curl) -> None:
    runner = make_runner(
        available={"curl"},
        handlers={"curl": fake_curl, "hdiutil": make_hdiutil(), "cp": copy_tree},
    )
    result = BrowserOSInstaller(settings=settings, runner=runner, target=PlatformTarget("macos", "riscv64")).run()
    assert result.artifact.file_name == "BrowserOS_v0.39.0.3_universal.dmg"


def test_unsupported_os_exits_before_download(settings, make_runner, capsys) -> None:
    runner = make_runner(available={"curl", "wget"})
    code = run_install(settings=settings, runner=runner, target=PlatformTarget("freebsd", "x64"))

    assert code != 0
    err = capsys.readouterr().err
    assert err.startswith("ERROR:")
    assert "freebsd / x64" in err
    assert not settings.downloads_dir.exists()
    assert runner.calls == []
    assert "curl" not in runner.probes and "wget" not in runner.probes


def test_with_deps_and_no_package_manager_aborts_early(settings, make_runner, capsys) -> None:
    runner = make_runner(available={"curl"})
    code = run_install(with_deps=True, settings=settings, runner=runner, target=PlatformTarget("linux", "x64"))

    assert code == 1
    assert "No supported package manager found" in capsys.readouterr().err
    assert not settings.downloads_dir.exists()
    assert runner.commands("curl") == []


def test_with_deps_install_failure_only_warns(settings, make_runner, fake_curl, capsys) -> None:
    runner = make_runner(
        available={"apt-get", "curl"},
        handlers={"apt-cache": 100, "sh": 100, "curl": fake_curl, "chmod": 0},
    )
    code = run_install(with_deps=True, settings=settings, runner=runner, target=PlatformTarget("linux", "x64"))

    captured = capsys.readouterr()
    assert code == 0
    assert "WARNING: Failed to install some dependencies" in captured.err
    assert "ERROR" not in captured.err
    sh_call = runner.commands("sh")[0]
    assert sh_call[2].startswith("sudo apt-get update && sudo apt-get install -y ")
    assert " libasound2 " in sh_call[2]
    assert (settings.bin_dir / "BrowserOS").exists()
    # The reminder is only for runs without --with-deps.
    assert "Note:" not in captured.out


def test_linux_without_deps_prints_hints(settings, make_runner, fake_curl, capsys) -> None:
    runner = make_runner(available={"curl", "apt-get"}, handlers={"curl": fake_curl})
    result = BrowserOSInstaller(settings=settings, runner=runner, target=PlatformTarget("linux", "x64")).run()

    captured = capsys.readouterr()
    assert result.executable_path == settings.bin_dir / "BrowserOS"
    assert "Linux detected" in captured.err
    assert "Note: If BrowserOS fails to start" in captured.out
    assert captured.out.rstrip().endswith("browseros-installer install --with-deps")
    assert runner.commands("sh") == []
    assert runner.probes == ["curl"]


def test_windows_downloads_and_prints_manual_steps(settings, make_runner, capsys) -> None:
    runner = make_runner(handlers={"powershell": 0})
    result = BrowserOSInstaller(settings=settings, runner=runner, target=PlatformTarget("windows", "x64")).run()

    out = capsys.readouterr().out
    assert result.executable_path is None
    assert result.artifact.file_name == "BrowserOS_v0.39.0.3_x64_installer.exe"
    assert "Run the downloaded installer" in out
    assert r"set AGENT_BROWSER_EXECUTABLE_PATH=C:\Program Files\BrowserOS\BrowserOS.exe" in out


def test_download_failure_is_fatal_and_verbatim(settings, make_runner, capsys) -> None:
    runner = make_runner(available={"curl"}, handlers={"curl": 6})
    code = run_install(settings=settings, runner=runner, target=PlatformTarget("macos", "x64"))

    err = capsys.readouterr().err
    assert code == 1
    assert "ERROR: Download failed for http://cdn.browseros.com/releases/0.39.0.3/macos/BrowserOS_v0.39.0.3_x64.dmg (exit status: 6)" in err
    assert runner.commands("hdiutil") == []


def test_platform_install_failure_is_fatal(settings, make_runner, make_hdiutil, fake_curl, capsys) -> None:
    runner = make_runner(available={"curl"}, handlers={"curl": fake_curl, "hdiutil": make_hdiutil(attach_code=1)})
    code = run_install(settings=settings, runner=runner, target=PlatformTarget("macos", "arm64"))

    assert code == 1
    assert "ERROR: Failed to mount BrowserOS DMG" in capsys.readouterr().err
    assert not settings.mount_dir.exists()


def test_download_dir_creation_failure(tmp_path, make_runner, capsys) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file", encoding="utf-8")
    settings = InstallerSettings(install_home=blocker)
    runner = make_runner(available={"curl"})

    code = run_install(settings=settings, runner=runner, target=PlatformTarget("linux", "x64"))

    assert code == 1
    assert "Failed to create download directory" in capsys.readouterr().err
    assert runner.commands("curl") == []


def test_repeated_runs_overwrite_previous_install(settings, make_runner, make_hdiutil, copy_tree, fake_curl) -> None:
    target = PlatformTarget("macos", "arm64")
    for _ in range(2):
        runner = make_runner(
            available={"curl"},
            handlers={"curl": fake_curl, "hdiutil": make_hdiutil(), "cp": copy_tree},
        )
        result = BrowserOSInstaller(settings=settings, runner=runner, target=target).run()
        assert result.executable_path.exists()
