"""Command-line entry point: test the device at "IP" or "IP:PORT"."""

from __future__ import annotations

import argparse
import sys

from .execute import run_test

_HELP_TEXT = "도움말 출력"


def _print_usage() -> None:
    print("사용법: test <IP 또는 IP:PORT>")
    print("예시: test 192.168.0.1:5000")
    print("\n옵션:")
    sys.stderr.write(
        f"  -?\t{_HELP_TEXT}\n"
        f"  -h\t{_HELP_TEXT}\n"
        f"  -help\n    \t{_HELP_TEXT}\n"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="test", add_help=False)
    parser.add_argument("-help", "--help", dest="help_long", action="store_true")
    parser.add_argument("-h", dest="help_short", action="store_true")
    parser.add_argument("-?", dest="help_question", action="store_true")
    parser.add_argument("targets", nargs="*")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the device test; return 0 on success or help, 1 on failure."""
    args = _build_parser().parse_args(argv)

    if args.help_long or args.help_short or args.help_question:
        _print_usage()
        return 0

    if not args.targets:
        print("오류: IP 또는 IP:PORT가 필요합니다.")
        _print_usage()
        return 1

    try:
        run_test(args.targets[0])
    except Exception as exc:
        print(f"테스트 실패: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())