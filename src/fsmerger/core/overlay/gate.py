"""The read-only operation boundary of an overlay view.

Callers reach the overlay through a fixed dispatch table of named
operations. Anything else is refused with :class:`PermissionDeniedError`;
absolute paths are refused with :class:`InvalidArgumentError` before any
filesystem access. The raw host filesystem stays available for callers that
really need to bypass the overlay.
"""
from __future__ import annotations

import os
from concurrent.futures import Future
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, List, Optional, Union

from fsmerger.core.exceptions import NotFoundError, PermissionDeniedError
from fsmerger.core.host import HostFilesystem, PathArg, WalkOptions

from .entries import Entry
from .listing import ListingCallback
from .paths import FileMeta, ensure_relative

if TYPE_CHECKING:
    from .merger import FSMerger


ALLOWED_OPERATIONS: FrozenSet[str] = frozenset(
    {
        "exists",
        "lstat",
        "stat",
        "read_file",
        "read_dir",
        "read_dir_async",
        "read_file_meta",
        "entries",
    }
)


class OperationGate:
    """Allow-listed, relative-path-only access to one overlay view."""

    def __init__(self, merger: "FSMerger", host: HostFilesystem) -> None:
        self._merger = merger
        self._host = host
        self._dispatch: Dict[str, Callable[..., Any]] = {
            "exists": self._exists,
            "lstat": self._resolved(host.lstat),
            "stat": self._resolved(host.stat),
            "read_file": self._resolved(host.read_file),
            "read_dir": merger.list_directory,
            "read_dir_async": merger.list_directory_async,
            "read_file_meta": merger.read_file_meta,
            "entries": merger.collect_entries,
        }

    @property
    def allowed_operations(self) -> FrozenSet[str]:
        return ALLOWED_OPERATIONS

    def invoke(self, operation: str, path: PathArg, *args: Any, **kwargs: Any) -> Any:
        """Run ``operation`` on the relative ``path``.

        Raises:
            PermissionDeniedError: ``operation`` is not allow-listed.
            InvalidArgumentError: ``path`` is absolute.
        """
        handler = self._dispatch.get(operation)
        if handler is None:
            raise PermissionDeniedError(operation, ALLOWED_OPERATIONS)
        rel = ensure_relative(path)
        return handler(rel, *args, **kwargs)

    def _resolved(self, func: Callable[..., Any]) -> Callable[..., Any]:
        def _call(rel: str, *args: Any, **kwargs: Any) -> Any:
            return func(self._merger.resolve(rel), *args, **kwargs)

        return _call

    def _exists(self, rel: str) -> bool:
        try:
            self._merger.resolve(rel)
        except NotFoundError:
            return False
        return True

    # Named wrappers over invoke().

    def exists(self, path: PathArg) -> bool:
        return self.invoke("exists", path)

    def stat(self, path: PathArg) -> os.stat_result:
        return self.invoke("stat", path)

    def lstat(self, path: PathArg) -> os.stat_result:
        return self.invoke("lstat", path)

    def read_file(self, path: PathArg, encoding: Optional[str] = None) -> Union[bytes, str]:
        return self.invoke("read_file", path, encoding=encoding)

    def read_dir(self, path: PathArg) -> List[str]:
        return self.invoke("read_dir", path)

    def read_dir_async(self, path: PathArg, callback: Optional[ListingCallback] = None) -> "Future[List[str]]":
        return self.invoke("read_dir_async", path, callback)

    def read_file_meta(self, path: PathArg, base_path: Optional[Union[str, Path]] = None) -> FileMeta:
        return self.invoke("read_file_meta", path, base_path=base_path)

    def entries(self, path: PathArg = "", options: Optional[WalkOptions] = None) -> List[Entry]:
        return self.invoke("entries", path, options)


__all__ = ["ALLOWED_OPERATIONS", "OperationGate"]
