from __future__ import annotations

import argparse

from fsmerger.cli._args import add_standard_flags
from fsmerger.cli._output import OutputFormatter
from fsmerger.cli._utils import build_merger

SUMMARY = "List a directory merged across every root"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    parser.add_argument("dir", nargs="?", default="", help="Directory relative to the overlay (default: the roots)")
    parser.add_argument("--sort", action="store_true", help="Sort names (listing order is otherwise root order)")


def main(args: argparse.Namespace) -> int:
    names = build_merger(args).fs.read_dir(args.dir)
    if args.sort:
        names = sorted(names)
    OutputFormatter(json_mode=args.json).success({"dir": args.dir, "names": names}, "\n".join(names))
    return 0
