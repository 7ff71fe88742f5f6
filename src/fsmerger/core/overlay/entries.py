"""Recursive, merged enumeration of every root of an overlay.

Each root's entries are remapped into the merged namespace:

    final = prefix / destination_mapper(relative_path)

and inserted into one map keyed by the final path. Roots are visited in
ascending priority, so a later root's entry fully replaces an earlier one
under the same key, whatever their types. The result is sorted by final path.
"""
from __future__ import annotations

import logging
import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from fsmerger.core.host import HostFilesystem, PathArg, WalkOptions
from fsmerger.core.roots import RootDescriptor

from .index import OverlayIndex
from .paths import ensure_relative, join_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One item of the merged namespace."""

    relative_path: str
    is_directory: bool
    metadata: os.stat_result = field(compare=False, repr=False)
    origin_root: int
    base_path: Path
    source_relative_path: str

    @property
    def full_path(self) -> Path:
        """Absolute path of the item on the host filesystem."""
        return self.base_path / self.source_relative_path

    @property
    def size(self) -> int:
        return self.metadata.st_size

    @property
    def mtime(self) -> float:
        return self.metadata.st_mtime


def final_path(descriptor: RootDescriptor, relative_path: str) -> str:
    """Map a root-relative path into the merged namespace."""
    rel = relative_path
    if descriptor.destination_mapper is not None:
        rel = descriptor.destination_mapper(rel)
    # A mapped path is always relative to the prefix.
    rel = rel.lstrip("/")
    if descriptor.prefix:
        rel = posixpath.join(descriptor.prefix, rel)
    return posixpath.normpath(rel)


class EntryWalker:
    def __init__(
        self,
        index: OverlayIndex,
        host: HostFilesystem,
        default_options: Optional[WalkOptions] = None,
    ) -> None:
        self._index = index
        self._host = host
        self._default_options = default_options or WalkOptions()

    def collect_entries(self, dir_path: PathArg = "", options: Optional[WalkOptions] = None) -> List[Entry]:
        """Merged entries under ``dir_path``, sorted by final relative path.

        A directory missing from every root yields an empty list.
        """
        rel_dir = ensure_relative(dir_path)
        opts = options or self._default_options
        merged: Dict[str, Entry] = {}
        walked_roots = 0

        for idx, descriptor in self._index.iter_ascending():
            base = join_root(descriptor.root, rel_dir)
            if not self._host.exists(base):
                continue
            walked_roots += 1
            for walked in self._host.walk_entries(base, opts):
                key = final_path(descriptor, walked.relative_path)
                merged[key] = Entry(
                    relative_path=key,
                    is_directory=walked.is_directory,
                    metadata=walked.metadata,
                    origin_root=idx,
                    base_path=base,
                    source_relative_path=walked.relative_path,
                )

        entries = sorted(merged.values(), key=lambda entry: entry.relative_path)
        logger.debug(
            "Collected %d entries under %r from %d/%d roots",
            len(entries),
            rel_dir,
            walked_roots,
            len(self._index),
        )
        return entries


__all__ = ["Entry", "EntryWalker", "final_path"]
