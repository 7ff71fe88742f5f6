from __future__ import annotations

import argparse
import sys

from fsmerger.cli._args import add_overlay_flags
from fsmerger.cli._utils import build_merger

SUMMARY = "Write a file of the overlay to stdout"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_overlay_flags(parser)
    parser.add_argument("path", help="File path relative to the overlay")


def main(args: argparse.Namespace) -> int:
    data = build_merger(args).fs.read_file(args.path)
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()
    return 0
