"""Lazily built, ordered index of the roots of one overlay view.

Order is priority: index 0 is the lowest precedence, the last index wins.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Tuple, Union

from fsmerger.core.roots import NodeInfo, RootDescriptor, normalize_root, resolve_root

logger = logging.getLogger(__name__)


class OverlayIndex:
    """Ordered root descriptors plus an exact root-path lookup.

    Built once on first access and cached for the lifetime of the owning view.
    Filesystem changes never invalidate it.
    """

    def __init__(
        self,
        specs: Sequence[Any],
        introspector: Optional[Callable[[Any], NodeInfo]] = None,
    ) -> None:
        self._specs = tuple(specs)
        self._introspector = introspector
        self._descriptors: Optional[Tuple[RootDescriptor, ...]] = None
        self._by_root: Dict[Path, RootDescriptor] = {}
        self._lock = threading.Lock()

    @property
    def is_built(self) -> bool:
        return self._descriptors is not None

    def build(self) -> None:
        """Resolve every root spec in input order. A second call is a no-op."""
        if self._descriptors is not None:
            return
        with self._lock:
            if self._descriptors is not None:
                return
            descriptors = []
            by_root: Dict[Path, RootDescriptor] = {}
            for spec in self._specs:
                descriptor = resolve_root(spec, self._introspector)
                by_root[descriptor.root] = descriptor
                descriptors.append(descriptor)
            self._by_root = by_root
            self._descriptors = tuple(descriptors)
            logger.debug(
                "Built overlay index: %s",
                ", ".join(str(d.root) for d in self._descriptors) or "<empty>",
            )

    @property
    def descriptors(self) -> Tuple[RootDescriptor, ...]:
        self.build()
        assert self._descriptors is not None
        return self._descriptors

    def __len__(self) -> int:
        return len(self.descriptors)

    def __getitem__(self, index: int) -> RootDescriptor:
        return self.descriptors[index]

    def lookup(self, root: Union[str, Path]) -> Optional[RootDescriptor]:
        """Exact-match lookup of a root, after normalization."""
        self.build()
        return self._by_root.get(normalize_root(root))

    def iter_ascending(self) -> Iterator[Tuple[int, RootDescriptor]]:
        """Yield ``(index, descriptor)`` from lowest to highest priority."""
        return iter(list(enumerate(self.descriptors)))

    def iter_descending(self) -> Iterator[Tuple[int, RootDescriptor]]:
        """Yield ``(index, descriptor)`` from highest to lowest priority."""
        return reversed(list(enumerate(self.descriptors)))


__all__ = ["OverlayIndex"]
