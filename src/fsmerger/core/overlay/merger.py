"""The overlay view: an ordered list of roots seen as one read-only tree."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from fsmerger.core.config import OverlayConfig, load_manifest
from fsmerger.core.exceptions import InvalidArgumentError
from fsmerger.core.host import HostFilesystem, LocalFilesystem, PathArg, WalkOptions
from fsmerger.core.roots import NodeInfo, RootDescriptor

from .entries import Entry, EntryWalker
from .gate import OperationGate
from .index import OverlayIndex
from .listing import DirectoryAggregator, ListingCallback
from .paths import FileMeta, PathResolver

logger = logging.getLogger(__name__)


class FSMerger:
    """Read-only overlay over ``trees`` (lowest priority first).

    ``trees`` is one root input or a sequence of them. Each input is a path,
    a descriptor (``{"root", "prefix", "destination_mapper"}`` mapping,
    :class:`~fsmerger.core.roots.ExplicitDescriptor` or
    :class:`~fsmerger.core.roots.RootDescriptor`), an external build node, or
    a nested sequence reachable through :meth:`at`.

    Without ``config`` only the bundled defaults apply; user config files and
    ``FSMERGER_*`` variables are read only when an :class:`OverlayConfig` that
    loads them is passed in.

    Usage:
        merger = FSMerger(["base", {"root": "vendor", "prefix": "vendor"}, "local"])
        merger.fs.read_file("README.md")
        [e.relative_path for e in merger.collect_entries()]
    """

    def __init__(
        self,
        trees: Union[Any, Sequence[Any]],
        *,
        host: Optional[HostFilesystem] = None,
        introspector: Optional[Callable[[Any], NodeInfo]] = None,
        config: Optional[OverlayConfig] = None,
    ) -> None:
        self._dir_list: List[Any] = list(trees) if isinstance(trees, (list, tuple)) else [trees]
        self._host: HostFilesystem = host or LocalFilesystem()
        self._introspector = introspector
        self._config = config or OverlayConfig.defaults()
        self._index = OverlayIndex(self._dir_list, introspector)
        self._resolver = PathResolver(self._index, self._host)
        self._aggregator = DirectoryAggregator(self._index, self._host)
        self._walker = EntryWalker(self._index, self._host, self._config.walk_options())
        self._at_list: Dict[int, FSMerger] = {}
        self._at_lock = threading.Lock()
        self.fs = OperationGate(self, self._host)

    @classmethod
    def from_manifest(cls, manifest_path: Union[str, Path], **kwargs: Any) -> "FSMerger":
        """Build a view from a YAML overlay manifest."""
        return cls(load_manifest(manifest_path), **kwargs)

    @property
    def host(self) -> HostFilesystem:
        """The raw host filesystem, bypassing the overlay."""
        return self._host

    @property
    def config(self) -> OverlayConfig:
        return self._config

    @property
    def roots(self) -> tuple[RootDescriptor, ...]:
        """Resolved root descriptors, lowest priority first."""
        return self._index.descriptors

    def __len__(self) -> int:
        return len(self._dir_list)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._dir_list!r})"

    def at(self, index: int) -> "FSMerger":
        """Nested view over the root input at priority ``index`` (memoized)."""
        if not -len(self._dir_list) <= index < len(self._dir_list):
            raise InvalidArgumentError(
                f"No root at index {index}; overlay has {len(self._dir_list)} roots",
                context={"index": index},
            )
        index %= len(self._dir_list)
        with self._at_lock:
            nested = self._at_list.get(index)
            if nested is None:
                nested = FSMerger(
                    self._dir_list[index],
                    host=self._host,
                    introspector=self._introspector,
                    config=self._config,
                )
                self._at_list[index] = nested
        return nested

    def resolve(self, relative_path: PathArg) -> Path:
        return self._resolver.resolve(relative_path)

    def read_file_meta(self, relative_path: PathArg, base_path: Optional[PathArg] = None) -> FileMeta:
        return self._resolver.read_file_meta(relative_path, base_path=base_path)

    def read_file(self, relative_path: PathArg, encoding: Optional[str] = None) -> Union[bytes, str]:
        return self._resolver.read_file(relative_path, encoding=encoding)

    def list_directory(self, dir_path: PathArg) -> List[str]:
        return self._aggregator.list_directory(dir_path)

    def list_directory_async(
        self,
        dir_path: PathArg,
        callback: Optional[ListingCallback] = None,
    ) -> "Future[List[str]]":
        return self._aggregator.list_directory_async(dir_path, callback)

    def collect_entries(self, dir_path: PathArg = "", options: Optional[WalkOptions] = None) -> List[Entry]:
        return self._walker.collect_entries(dir_path, options)

    entries = collect_entries


__all__ = ["FSMerger"]
