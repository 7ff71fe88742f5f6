from __future__ import annotations

import argparse

from fsmerger.cli._args import add_standard_flags
from fsmerger.cli._output import OutputFormatter
from fsmerger.cli._utils import build_merger

SUMMARY = "Show where a path lives and the prefix of its root"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    parser.add_argument("path", help="Path relative to the overlay")
    parser.add_argument(
        "--base-path",
        help="Root to use directly when it is one of the overlay roots (no existence probing)",
    )


def main(args: argparse.Namespace) -> int:
    meta = build_merger(args).fs.read_file_meta(args.path, base_path=args.base_path)
    lines = [f"path: {meta.path}"]
    if meta.prefix:
        lines.append(f"prefix: {meta.prefix}")
    OutputFormatter(json_mode=args.json).success(
        {
            "path": str(meta.path),
            "prefix": meta.prefix,
            "has_destination_mapper": meta.destination_mapper is not None,
        },
        "\n".join(lines),
    )
    return 0
