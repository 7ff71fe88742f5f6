"""Merge one directory's listing across every root of an overlay.

Listing scans roots in ascending priority (lowest first), the opposite of
:class:`~fsmerger.core.overlay.paths.PathResolver`. Names are de-duplicated
in first-seen order and are not sorted.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from fsmerger.core.exceptions import NotFoundError
from fsmerger.core.host import HostFilesystem, PathArg

from .index import OverlayIndex
from .paths import ensure_relative, join_root

logger = logging.getLogger(__name__)

ListingCallback = Callable[[Optional[BaseException], Optional[List[str]]], None]


def _dedupe(names: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(names))


class DirectoryAggregator:
    def __init__(self, index: OverlayIndex, host: HostFilesystem) -> None:
        self._index = index
        self._host = host

    def _candidates(self, dir_path: PathArg) -> Tuple[List[Path], Optional[Path]]:
        """Return (existing directories in ascending priority, last candidate probed)."""
        rel = ensure_relative(dir_path)
        existing: List[Path] = []
        last: Optional[Path] = None
        for _, descriptor in self._index.iter_ascending():
            last = join_root(descriptor.root, rel)
            if self._host.exists(last):
                existing.append(last)
        return existing, last

    def list_directory(self, dir_path: PathArg) -> List[str]:
        """Union of ``dir_path``'s names across all roots.

        Raises:
            FileNotFoundError: ``dir_path`` exists in no root (raised by the host).
        """
        existing, last = self._candidates(dir_path)
        if not existing:
            if last is None:
                raise NotFoundError(f"Overlay has no roots to list {dir_path}", context={"path": str(dir_path)})
            # Let the host raise its own not-found error for the last candidate.
            self._host.list_dir(last)
            return []

        names: List[str] = []
        for directory in existing:
            names.extend(self._host.list_dir(directory))
        merged = _dedupe(names)
        logger.debug("Listed %s across %d roots: %d names", dir_path, len(existing), len(merged))
        return merged

    def list_directory_async(
        self,
        dir_path: PathArg,
        callback: Optional[ListingCallback] = None,
    ) -> "Future[List[str]]":
        """Read ``dir_path`` in every root concurrently.

        ``callback(error, names)`` runs exactly once: with the merged names once
        every read succeeded, or with the first error. Reads still in flight
        after an error are abandoned, not cancelled. The returned future
        carries the same outcome.
        """
        existing, last = self._candidates(dir_path)
        outcome: "Future[List[str]]" = Future()
        outcome.set_running_or_notify_cancel()

        def _finish(error: Optional[BaseException], names: Optional[List[str]]) -> None:
            # The future resolves only after the callback returned.
            try:
                if callback is not None:
                    callback(error, names)
            finally:
                if error is not None:
                    outcome.set_exception(error)
                else:
                    outcome.set_result(names or [])

        if last is None:
            _finish(NotFoundError(f"Overlay has no roots to list {dir_path}", context={"path": str(dir_path)}), None)
            return outcome

        # Nothing to merge: a single read of the last candidate delivers the host's error.
        targets = existing or [last]
        results: List[Optional[List[str]]] = [None] * len(targets)
        state = {"completed": 0, "done": False}
        lock = threading.Lock()

        def _on_read(position: int, future: "Future[List[str]]") -> None:
            error = future.exception()
            with lock:
                if state["done"]:
                    return
                state["completed"] += 1
                if error is None:
                    results[position] = future.result()
                    if state["completed"] < len(targets):
                        return
                state["done"] = True
            if error is not None:
                logger.debug("Async listing of %s failed: %s", dir_path, error)
                _finish(error, None)
                return
            merged = _dedupe(name for chunk in results for name in (chunk or []))
            _finish(None, merged)

        executor = ThreadPoolExecutor(max_workers=len(targets), thread_name_prefix="fsmerger-readdir")
        try:
            for position, directory in enumerate(targets):
                future = executor.submit(self._host.list_dir, directory)
                future.add_done_callback(lambda f, p=position: _on_read(p, f))
        finally:
            executor.shutdown(wait=False)
        return outcome


__all__ = ["DirectoryAggregator", "ListingCallback"]
