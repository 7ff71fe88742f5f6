"""Resolve relative paths to the highest-priority root that contains them."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from fsmerger.core.exceptions import InvalidArgumentError, NotFoundError
from fsmerger.core.host import HostFilesystem, PathArg
from fsmerger.core.roots import DestinationMapper

from .index import OverlayIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileMeta:
    """Where a relative path lives and how its root remaps published paths."""

    path: Path
    prefix: Optional[str] = None
    destination_mapper: Optional[DestinationMapper] = None


def ensure_relative(path: PathArg) -> str:
    """Return ``path`` as a string, rejecting absolute paths."""
    raw = os.fspath(path)
    if os.path.isabs(raw):
        raise InvalidArgumentError(
            f"Relative path is expected, path {raw} is an absolute path; "
            "paths are resolved against the roots of the overlay.",
            context={"path": raw},
        )
    return raw


def join_root(root: Path, relative_path: str) -> Path:
    """Compose ``root`` and ``relative_path``; an empty path is the root itself."""
    return root / relative_path if relative_path else root


class PathResolver:
    """Scans roots from highest to lowest priority."""

    def __init__(self, index: OverlayIndex, host: HostFilesystem) -> None:
        self._index = index
        self._host = host

    def resolve(self, relative_path: PathArg) -> Path:
        """Return the absolute path of ``relative_path`` in the winning root.

        Raises:
            InvalidArgumentError: ``relative_path`` is absolute.
            NotFoundError: no root contains ``relative_path``.
        """
        rel = ensure_relative(relative_path)
        for idx, descriptor in self._index.iter_descending():
            candidate = join_root(descriptor.root, rel)
            if self._host.exists(candidate):
                logger.debug("Resolved %s -> %s (root %d)", rel, candidate, idx)
                return candidate
        logger.debug("Resolved %s -> not found in %d roots", rel, len(self._index))
        raise NotFoundError(
            f"No root of the overlay contains {rel}",
            context={"path": rel, "roots": [str(d.root) for d in self._index.descriptors]},
        )

    def read_file_meta(
        self,
        relative_path: PathArg,
        base_path: Optional[PathArg] = None,
    ) -> FileMeta:
        """Locate ``relative_path`` and report its root's ``prefix``/``destination_mapper``.

        When ``base_path`` is exactly one of the roots, that root is used
        without probing the filesystem.
        """
        rel = ensure_relative(relative_path)
        if base_path:
            known = self._index.lookup(base_path)
            if known is not None:
                return FileMeta(
                    path=join_root(known.root, rel),
                    prefix=known.prefix,
                    destination_mapper=known.destination_mapper,
                )

        for _, descriptor in self._index.iter_descending():
            candidate = join_root(descriptor.root, rel)
            if self._host.exists(candidate):
                return FileMeta(
                    path=candidate,
                    prefix=descriptor.prefix,
                    destination_mapper=descriptor.destination_mapper,
                )
        raise NotFoundError(
            f"No root of the overlay contains {rel}",
            context={"path": rel},
        )

    def read_file(self, relative_path: PathArg, encoding: Optional[str] = None) -> Union[bytes, str]:
        """Read ``relative_path`` from the winning root."""
        return self._host.read_file(self.resolve(relative_path), encoding=encoding)


__all__ = ["FileMeta", "PathResolver", "ensure_relative", "join_root"]
