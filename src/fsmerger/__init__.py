"""
fsmerger - read-only overlay views over ordered directory roots

Resolves a relative path to the highest-priority root that contains it,
merges directory listings across roots, and enumerates the merged tree with
later roots shadowing earlier ones.
"""

__version__ = "1.0.0"

from fsmerger.core.exceptions import (
    ConfigError,
    FSMergerError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
)
from fsmerger.core.host import HostFilesystem, LocalFilesystem, WalkOptions
from fsmerger.core.overlay import ALLOWED_OPERATIONS, Entry, FileMeta, FSMerger
from fsmerger.core.roots import (
    ExplicitDescriptor,
    ExternalNode,
    NodeInfo,
    PlainPath,
    RootDescriptor,
)

__all__ = [
    "__version__",
    "ALLOWED_OPERATIONS",
    "ConfigError",
    "Entry",
    "ExplicitDescriptor",
    "ExternalNode",
    "FSMerger",
    "FSMergerError",
    "FileMeta",
    "HostFilesystem",
    "InvalidArgumentError",
    "LocalFilesystem",
    "NodeInfo",
    "NotFoundError",
    "PermissionDeniedError",
    "PlainPath",
    "RootDescriptor",
    "WalkOptions",
]
