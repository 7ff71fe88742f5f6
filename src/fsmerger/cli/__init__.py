"""
fsmerger CLI package.

Commands are auto-discovered from ``fsmerger/cli/commands/*.py``; each module
exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""
from ._args import add_json_flag, add_overlay_flags, add_standard_flags
from ._output import OutputFormatter
from ._utils import build_merger, parse_root_arg

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_overlay_flags",
    "add_standard_flags",
    "build_merger",
    "parse_root_arg",
]
