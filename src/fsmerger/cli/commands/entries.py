from __future__ import annotations

import argparse

from fsmerger.cli._args import add_standard_flags
from fsmerger.cli._output import OutputFormatter
from fsmerger.cli._utils import build_merger
from fsmerger.core.host import WalkOptions

SUMMARY = "List every entry of the merged tree"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    parser.add_argument("dir", nargs="?", default="", help="Directory relative to the overlay (default: the roots)")
    parser.add_argument("--glob", dest="globs", action="append", default=[], help="Only include matching paths")
    parser.add_argument("--ignore", action="append", default=[], help="Skip matching paths and their subtrees")
    parser.add_argument("--files-only", action="store_true", help="Omit directory entries")


def main(args: argparse.Namespace) -> int:
    merger = build_merger(args)
    defaults = merger.config.walk_options()
    options = WalkOptions(
        globs=tuple(args.globs),
        ignore=defaults.ignore + tuple(args.ignore),
        directories=defaults.directories and not args.files_only,
        follow_symlinks=defaults.follow_symlinks,
    )
    entries = merger.fs.entries(args.dir, options)

    payload = {
        "dir": args.dir,
        "entries": [
            {
                "path": e.relative_path,
                "type": "directory" if e.is_directory else "file",
                "size": e.size,
                "origin_root": e.origin_root,
                "source": str(e.full_path),
            }
            for e in entries
        ],
    }
    text = "\n".join(
        f"{e.origin_root}\t{'d' if e.is_directory else 'f'}\t{e.relative_path}" for e in entries
    )
    OutputFormatter(json_mode=args.json).success(payload, text)
    return 0
