from __future__ import annotations

import argparse

from fsmerger.cli._args import add_standard_flags
from fsmerger.cli._output import OutputFormatter
from fsmerger.cli._utils import build_merger

SUMMARY = "Print the absolute path a relative path resolves to"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    parser.add_argument("path", help="Path relative to the overlay")


def main(args: argparse.Namespace) -> int:
    resolved = build_merger(args).resolve(args.path)
    OutputFormatter(json_mode=args.json).success(
        {"path": args.path, "resolved": str(resolved)},
        str(resolved),
    )
    return 0
