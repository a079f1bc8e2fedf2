from __future__ import annotations

import sys

from .cli.analyze_csv import main as analyze_main

USAGE = "usage: python -m underflow_analysis [analyze] [--csv PATH] [--metric COL] [--no-plots]"


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in {"analyze", "analysis"}:
        args = args[1:]
    elif args and not args[0].startswith("-"):
        print(USAGE)
        return 2
    return analyze_main(args)


if __name__ == "__main__":
    raise SystemExit(main())
