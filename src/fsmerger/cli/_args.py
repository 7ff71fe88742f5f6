"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_overlay_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags that describe the overlay's roots and configuration."""
    parser.add_argument(
        "--root",
        dest="roots",
        action="append",
        default=[],
        metavar="PATH[=PREFIX]",
        help="Overlay root, lowest priority first (repeatable). '=PREFIX' remaps its entries under PREFIX.",
    )
    parser.add_argument(
        "--manifest",
        type=str,
        help="YAML overlay manifest declaring the roots (combined with --root, manifest roots first)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Extra YAML config file layered over the user config",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags shared by every overlay command."""
    add_overlay_flags(parser)
    add_json_flag(parser)


__all__ = ["add_json_flag", "add_overlay_flags", "add_standard_flags"]
