"""Shared helpers for fsmerger: YAML loading and deep merging."""
from __future__ import annotations

from .io import iter_yaml_files, merge_yaml_directory, read_yaml
from .merge import deep_merge, merge_arrays

__all__ = [
    "deep_merge",
    "iter_yaml_files",
    "merge_arrays",
    "merge_yaml_directory",
    "read_yaml",
]
