"""Root descriptors and the tagged root specification variants."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

DestinationMapper = Callable[[str], str]


@dataclass(frozen=True)
class RootDescriptor:
    """A single contributing directory of an overlay.

    ``root`` is always a normalized absolute path. ``prefix`` and
    ``destination_mapper`` remap entry paths into the merged namespace.
    """

    root: Path
    prefix: Optional[str] = None
    destination_mapper: Optional[DestinationMapper] = None


@dataclass(frozen=True)
class PlainPath:
    """A bare filesystem path."""

    path: Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class ExplicitDescriptor:
    """A root given with its remapping options spelled out."""

    root: Union[str, "os.PathLike[str]", None]
    prefix: Optional[str] = None
    destination_mapper: Optional[DestinationMapper] = None


@dataclass(frozen=True)
class ExternalNode:
    """An opaque build node whose root is discovered through introspection."""

    node: Any


RootSpec = Union[PlainPath, ExplicitDescriptor, ExternalNode]

# Anything accepted by FSMerger for one priority slot. A nested sequence is a
# sub-overlay, only reachable through ``FSMerger.at``.
RootInput = Union[RootSpec, RootDescriptor, str, "os.PathLike[str]", Sequence[Any], Any]


@dataclass(frozen=True)
class NodeInfo:
    """What the introspection capability reports about an external node."""

    node_type: str
    source_directory: Optional[str] = None


__all__ = [
    "DestinationMapper",
    "RootDescriptor",
    "PlainPath",
    "ExplicitDescriptor",
    "ExternalNode",
    "RootSpec",
    "RootInput",
    "NodeInfo",
]
