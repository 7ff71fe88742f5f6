"""Process-wide stdlib logging setup for the fsmerger CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, once, by the application entry point.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_FSMERGER_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install one handler on the ``fsmerger`` logger.

    Logs go to ``log_path`` when given, else to stderr (stdout stays clean for
    command output). Idempotent per-process for the same target; switching
    targets replaces the previously installed handler.
    """
    global _FSMERGER_HANDLER, _CONFIGURED_TARGET

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    logger = logging.getLogger("fsmerger")
    logger.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _FSMERGER_HANDLER is not None:
        _FSMERGER_HANDLER.setLevel(_level_from_name(level))
        return

    if _FSMERGER_HANDLER is not None:
        logger.removeHandler(_FSMERGER_HANDLER)
        _FSMERGER_HANDLER.close()
        _FSMERGER_HANDLER = None

    if log_path:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _FSMERGER_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _FSMERGER_HANDLER, _CONFIGURED_TARGET
    if _FSMERGER_HANDLER is not None:
        logging.getLogger("fsmerger").removeHandler(_FSMERGER_HANDLER)
        _FSMERGER_HANDLER.close()
    _FSMERGER_HANDLER = None
    _CONFIGURED_TARGET = None


__all__ = ["LOG_FORMAT", "configure_logging", "reset_logging_for_tests"]
