"""Root specifications for overlay views.

Each priority slot of an overlay is described by one root input, normalized
to a :class:`RootDescriptor` ``(root, prefix, destination_mapper)``.
"""

from .model import (
    DestinationMapper,
    ExplicitDescriptor,
    ExternalNode,
    NodeInfo,
    PlainPath,
    RootDescriptor,
    RootInput,
    RootSpec,
)
from .resolver import (
    NodeIntrospector,
    default_introspector,
    normalize_root,
    resolve_root,
    to_root_spec,
)

__all__ = [
    "DestinationMapper",
    "ExplicitDescriptor",
    "ExternalNode",
    "NodeInfo",
    "NodeIntrospector",
    "PlainPath",
    "RootDescriptor",
    "RootInput",
    "RootSpec",
    "default_introspector",
    "normalize_root",
    "resolve_root",
    "to_root_spec",
]
