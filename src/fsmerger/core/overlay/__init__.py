"""Overlay views over ordered directory roots.

Precedence is input order (low → high): lookups scan from the last root
down, listings and entry walks scan from the first root up and let later
roots win.
"""

from .entries import Entry, EntryWalker, final_path
from .gate import ALLOWED_OPERATIONS, OperationGate
from .index import OverlayIndex
from .listing import DirectoryAggregator, ListingCallback
from .merger import FSMerger
from .paths import FileMeta, PathResolver

__all__ = [
    "ALLOWED_OPERATIONS",
    "DirectoryAggregator",
    "Entry",
    "EntryWalker",
    "FSMerger",
    "FileMeta",
    "ListingCallback",
    "OperationGate",
    "OverlayIndex",
    "PathResolver",
    "final_path",
]
