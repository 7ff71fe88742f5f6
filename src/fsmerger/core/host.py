"""Host filesystem capability consumed by overlay views.

The overlay never touches ``os`` directly; every existence check, stat, read
and recursive walk goes through a :class:`HostFilesystem`. Failures raised by
the host propagate verbatim to overlay callers.
"""
from __future__ import annotations

import os
import stat as stat_module
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Protocol, Tuple, Union

PathArg = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class WalkOptions:
    """Filters applied while walking one root recursively.

    Patterns are matched with :func:`fnmatch.fnmatch` against the POSIX path
    relative to the walked directory. Unlike shell globstar matching, ``*``
    also matches ``/``: ``*.md`` matches ``docs/api.md``, while ``**/*.md``
    needs at least one directory and so skips a top-level ``a.md``.
    """

    globs: Tuple[str, ...] = ()
    ignore: Tuple[str, ...] = ()
    directories: bool = True
    follow_symlinks: bool = True


@dataclass(frozen=True)
class WalkedEntry:
    """One item found under a walked directory."""

    relative_path: str
    is_directory: bool
    metadata: os.stat_result = field(compare=False)


class HostFilesystem(Protocol):
    def exists(self, path: PathArg) -> bool: ...

    def stat(self, path: PathArg) -> os.stat_result: ...

    def lstat(self, path: PathArg) -> os.stat_result: ...

    def read_file(self, path: PathArg, encoding: Optional[str] = None) -> Union[bytes, str]: ...

    def list_dir(self, path: PathArg) -> List[str]: ...

    def walk_entries(self, path: PathArg, options: WalkOptions) -> Iterable[WalkedEntry]: ...


def _matches_any(rel: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch(rel, pat) for pat in patterns)


class LocalFilesystem:
    """:class:`HostFilesystem` backed by the local disk."""

    def exists(self, path: PathArg) -> bool:
        return os.path.exists(path)

    def stat(self, path: PathArg) -> os.stat_result:
        return os.stat(path)

    def lstat(self, path: PathArg) -> os.stat_result:
        return os.lstat(path)

    def read_file(self, path: PathArg, encoding: Optional[str] = None) -> Union[bytes, str]:
        p = Path(path)
        if encoding is None:
            return p.read_bytes()
        return p.read_text(encoding=encoding)

    def list_dir(self, path: PathArg) -> List[str]:
        return os.listdir(path)

    def walk_entries(self, path: PathArg, options: WalkOptions) -> List[WalkedEntry]:
        return list(self._walk(Path(path), "", options))

    def _walk(self, directory: Path, rel_dir: str, options: WalkOptions) -> Iterator[WalkedEntry]:
        # Sorted so every walk of an unchanged tree yields the same sequence.
        for name in sorted(os.listdir(directory)):
            rel = f"{rel_dir}/{name}" if rel_dir else name
            if options.ignore and _matches_any(rel, options.ignore):
                continue

            full = directory / name
            if options.follow_symlinks:
                try:
                    st = os.stat(full)
                except FileNotFoundError:
                    # Dangling symlink: report the link itself.
                    st = os.lstat(full)
            else:
                st = os.lstat(full)
            is_dir = stat_module.S_ISDIR(st.st_mode)

            if not is_dir or options.directories:
                if not options.globs or _matches_any(rel, options.globs):
                    yield WalkedEntry(relative_path=rel, is_directory=is_dir, metadata=st)

            if is_dir:
                yield from self._walk(full, rel, options)


__all__ = ["HostFilesystem", "LocalFilesystem", "PathArg", "WalkOptions", "WalkedEntry"]
