"""
Auto-discovery CLI dispatcher for fsmerger.

Scans ``fsmerger/cli/commands`` and registers every module as a subcommand.
Adding a new command = adding a .py file exposing SUMMARY, register_args and main.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from fsmerger.core.exceptions import FSMergerError
from fsmerger.core.utils.stdlib_logging import configure_logging

from ._output import OutputFormatter

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Discover commands under cli/commands.

    Returns:
        Dict mapping command name to its module, summary, register_args and main.
    """
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        module = importlib.import_module(f"fsmerger.cli.commands.{cmd_name}")
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="fsmerger",
        description="Read-only overlay views over ordered directory roots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override logging.level from configuration (logs go to stderr or logging.file)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )
    for cmd_name, cmd_info in discover_commands().items():
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(primary_name, aliases=aliases, help=cmd_info["summary"])
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])
    return parser


def _get_version() -> str:
    from fsmerger import __version__

    return __version__


def _configure_logging(args: argparse.Namespace) -> None:
    from fsmerger.core.config import OverlayConfig

    cfg = OverlayConfig(config_path=getattr(args, "config", None))
    configure_logging(level=args.log_level or cfg.log_level, log_path=cfg.log_file)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the fsmerger CLI.

    Returns:
        Exit code (0 success, 1 overlay/I-O failure, 2 usage error)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "_func", None):
        parser.print_help()
        return 0

    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))
    try:
        _configure_logging(args)
        logger.debug("Running command %s", args.command)
        return int(args._func(args) or 0)
    except (FSMergerError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        formatter.error(exc)
        return 1


__all__ = ["build_parser", "discover_commands", "main"]
