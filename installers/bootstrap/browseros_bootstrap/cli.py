"""CLI for downloading and installing BrowserOS."""

from __future__ import annotations

import argparse
import json

from browseros_core.config import load_settings
from browseros_core.logging_setup import configure_logging

from . import report
from .commands import CommandRunner
from .diagnostics import build_doctor_payload
from .service import EXIT_FAILURE, detect_target, run_install


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="browseros-installer", description="BrowserOS installer")
    parser.add_argument("--verbose", action="store_true", help="Also echo log records to the console")
    sub = parser.add_subparsers(dest="command")

    install = sub.add_parser("install", help="Download and install BrowserOS")
    install.add_argument(
        "--with-deps",
        action="store_true",
        help="Install system shared-library dependencies (Linux only)",
    )

    sub.add_parser("doctor", help="Print platform, tool and disk diagnostics as JSON")
    return parser


def cmd_install(args: argparse.Namespace) -> int:
    settings = load_settings()
    try:
        configure_logging(settings.log_dir, console=args.verbose)
    except OSError as exc:
        report.error(f"Failed to create log directory {settings.log_dir}: {exc}")
        return EXIT_FAILURE
    return run_install(with_deps=bool(getattr(args, "with_deps", False)), settings=settings)


def cmd_doctor(_args: argparse.Namespace) -> int:
    settings = load_settings()
    target = detect_target()
    payload = build_doctor_payload(settings, target, CommandRunner(target.os_name))
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "doctor":
        return cmd_doctor(args)
    return cmd_install(args)


if __name__ == "__main__":
    raise SystemExit(main())
