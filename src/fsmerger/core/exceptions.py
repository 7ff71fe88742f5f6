from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Tuple


class FSMergerError(Exception):
    """Base exception for fsmerger."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidArgumentError(FSMergerError, ValueError):
    """Raised for absolute paths where a relative one is required, or unresolvable roots."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FSMergerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class PermissionDeniedError(FSMergerError, PermissionError):
    """Raised when an operation outside the allow-list is requested."""

    allowed_operations: Tuple[str, ...]

    def __init__(self, operation: str, allowed_operations: Iterable[str]) -> None:
        allowed = tuple(sorted(allowed_operations))
        message = (
            f"Operation {operation} is not allowed with FSMerger.fs. "
            f"Allowed operations are {', '.join(allowed)}"
        )
        FSMergerError.__init__(
            self,
            message,
            context={"operation": operation, "allowed_operations": list(allowed)},
        )
        PermissionError.__init__(self, message)
        self.allowed_operations = allowed


class NotFoundError(FSMergerError, FileNotFoundError):
    """Raised when no root of the overlay contains the requested path."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FSMergerError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class ConfigError(FSMergerError, ValueError):
    """Raised when a config file or overlay manifest is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FSMergerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "FSMergerError",
    "InvalidArgumentError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConfigError",
]
