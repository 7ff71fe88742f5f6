from __future__ import annotations

import logging
from pathlib import Path

from fsmerger.core.utils.stdlib_logging import configure_logging


def _handlers():
    return list(logging.getLogger("fsmerger").handlers)


def test_configure_is_idempotent_for_same_target() -> None:
    configure_logging(level="INFO")
    configure_logging(level="DEBUG")
    handlers = _handlers()
    assert len(handlers) == 1
    assert logging.getLogger("fsmerger").level == logging.DEBUG
    assert handlers[0].level == logging.DEBUG


def test_switching_to_file_replaces_handler(tmp_path: Path) -> None:
    configure_logging(level="INFO")
    log_path = tmp_path / "logs" / "fsmerger.log"
    configure_logging(level="INFO", log_path=log_path)

    handlers = _handlers()
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.FileHandler)

    logging.getLogger("fsmerger.core.overlay").info("resolved something")
    handlers[0].flush()
    assert "resolved something" in log_path.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_warning() -> None:
    configure_logging(level="chatty")
    assert logging.getLogger("fsmerger").level == logging.WARNING
