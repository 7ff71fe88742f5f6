"""Shared helpers for CLI commands."""
from __future__ import annotations

import argparse
from typing import Any, List

from fsmerger.core.config import OverlayConfig, load_manifest
from fsmerger.core.exceptions import InvalidArgumentError
from fsmerger.core.overlay import FSMerger
from fsmerger.core.roots import ExplicitDescriptor


def parse_root_arg(raw: str) -> Any:
    """Parse ``PATH`` or ``PATH=PREFIX`` into a root input."""
    path, sep, prefix = raw.partition("=")
    if not path:
        raise InvalidArgumentError(f"Invalid --root value: {raw!r}", context={"root": raw})
    if sep:
        return ExplicitDescriptor(root=path, prefix=prefix or None)
    return path


def build_merger(args: argparse.Namespace) -> FSMerger:
    """Build the overlay view described by ``--manifest``/``--root``/``--config``."""
    roots: List[Any] = []
    if getattr(args, "manifest", None):
        roots.extend(load_manifest(args.manifest))
    roots.extend(parse_root_arg(raw) for raw in getattr(args, "roots", None) or [])
    if not roots:
        raise InvalidArgumentError("No overlay roots given; use --root or --manifest")
    config = OverlayConfig(config_path=getattr(args, "config", None))
    return FSMerger(roots, config=config)


__all__ = ["build_merger", "parse_root_arg"]
