"""Normalize one root specification into a :class:`RootDescriptor`.

Accepted inputs are converted to one of the tagged variants first
(:func:`to_root_spec`), then resolved (:func:`resolve_root`):

- ``str`` / ``os.PathLike``         -> :class:`PlainPath`
- mapping with ``root`` key,
  :class:`ExplicitDescriptor` or
  :class:`RootDescriptor`          -> :class:`ExplicitDescriptor`
- anything else                    -> :class:`ExternalNode`
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Optional, Protocol, Union

from fsmerger.core.exceptions import InvalidArgumentError

from .model import (
    ExplicitDescriptor,
    ExternalNode,
    NodeInfo,
    PlainPath,
    RootDescriptor,
    RootSpec,
)

logger = logging.getLogger(__name__)


class NodeIntrospector(Protocol):
    """Reports whether an external node is a source node or an output node."""

    def __call__(self, node: Any) -> NodeInfo: ...


def normalize_root(path: Union[str, "os.PathLike[str]"]) -> Path:
    """Return ``path`` as an absolute path with separators and ``..`` folded."""
    return Path(os.path.normpath(os.path.abspath(os.fspath(path))))


def default_introspector(node: Any) -> NodeInfo:
    """Introspect a node exposing ``get_node_info()`` or ``node_type`` attributes."""
    getter = getattr(node, "get_node_info", None)
    if callable(getter):
        info = getter()
        if isinstance(info, NodeInfo):
            return info
        if isinstance(info, Mapping):
            return NodeInfo(
                node_type=str(info.get("node_type") or ""),
                source_directory=info.get("source_directory"),
            )
    node_type = getattr(node, "node_type", None)
    if node_type is not None:
        return NodeInfo(node_type=str(node_type), source_directory=getattr(node, "source_directory", None))
    raise InvalidArgumentError(
        f"Cannot introspect root node {node!r}: expected get_node_info() or a node_type attribute",
        context={"node": repr(node)},
    )


def to_root_spec(raw: Any) -> RootSpec:
    """Convert one duck-typed root input into its tagged variant."""
    if isinstance(raw, (PlainPath, ExplicitDescriptor, ExternalNode)):
        return raw
    if isinstance(raw, RootDescriptor):
        return ExplicitDescriptor(
            root=raw.root,
            prefix=raw.prefix,
            destination_mapper=raw.destination_mapper,
        )
    if isinstance(raw, (str, os.PathLike)):
        return PlainPath(raw)
    if isinstance(raw, Mapping) and "root" in raw:
        return ExplicitDescriptor(
            root=raw.get("root"),
            prefix=raw.get("prefix"),
            destination_mapper=raw.get("destination_mapper"),
        )
    if isinstance(raw, (list, tuple)):
        raise InvalidArgumentError(
            "A nested list of roots is a sub-overlay; access it with FSMerger.at(index)",
            context={"spec": repr(raw)},
        )
    return ExternalNode(raw)


def _require_root(raw: Any, spec: RootSpec) -> Path:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise InvalidArgumentError(
            "FSMerger must be instantiated with a path, a build node or a descriptor with a root",
            context={"spec": repr(spec)},
        )
    return normalize_root(raw)


def _optional_prefix(prefix: Optional[str]) -> Optional[str]:
    return prefix or None


def resolve_root(
    raw: Any,
    introspector: Optional[Callable[[Any], NodeInfo]] = None,
) -> RootDescriptor:
    """Resolve one root input to a :class:`RootDescriptor`.

    Raises:
        InvalidArgumentError: If no root path can be determined.
    """
    spec = to_root_spec(raw)

    if isinstance(spec, PlainPath):
        return RootDescriptor(root=_require_root(spec.path, spec))

    if isinstance(spec, ExplicitDescriptor):
        return RootDescriptor(
            root=_require_root(spec.root, spec),
            prefix=_optional_prefix(spec.prefix),
            destination_mapper=spec.destination_mapper,
        )

    node = spec.node
    info = (introspector or default_introspector)(node)
    if info.node_type == "source":
        root = info.source_directory
    else:
        root = getattr(node, "output_path", None)
    logger.debug("Introspected %s node %r -> %s", info.node_type, node, root)
    return RootDescriptor(
        root=_require_root(root, spec),
        prefix=_optional_prefix(getattr(node, "prefix", None)),
        destination_mapper=getattr(node, "destination_mapper", None),
    )


__all__ = [
    "NodeIntrospector",
    "default_introspector",
    "normalize_root",
    "resolve_root",
    "to_root_spec",
]
