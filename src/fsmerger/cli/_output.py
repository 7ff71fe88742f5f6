"""Unified CLI output formatting utilities (JSON and text modes)."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from fsmerger.core.exceptions import FSMergerError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str) -> None:
        """Print ``data`` as JSON in JSON mode, otherwise ``message``."""
        if self.json_mode:
            print(json.dumps(data, indent=self.indent, default=str))
        else:
            print(message)

    def error(self, error: BaseException, message: Optional[str] = None) -> None:
        """Report ``error`` on stderr."""
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, FSMergerError):
                payload = error.to_json_error()
            else:
                payload = {"message": msg, "code": type(error).__name__, "context": {}}
            print(json.dumps(payload, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)


__all__ = ["OutputFormatter"]
