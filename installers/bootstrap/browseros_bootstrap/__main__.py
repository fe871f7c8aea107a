from __future__ import annotations

from .cli import main as _cli_main


def main(argv: list[str] | None = None) -> int:
    return int(_cli_main(argv))


if __name__ == "__main__":
    raise SystemExit(main())
