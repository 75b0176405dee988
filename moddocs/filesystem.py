"""Filesystem inspection port used by the item enumerators.

The enumerators never touch :mod:`os` directly; they ask a
:class:`FileSystem` whether a path exists, what a directory contains, and
whether an entry is a directory. :class:`LocalFileSystem` answers from disk,
while tests substitute an in-memory tree.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path


class FileSystem(typ.Protocol):
    """Read-only directory inspection required by the enumerators."""

    def exists(self, path: Path) -> bool:
        """Return ``True`` when ``path`` names an existing file or directory."""
        ...

    def list_entries(self, path: Path) -> list[str]:
        """Return the entry names contained in the directory ``path``."""
        ...

    def is_directory(self, path: Path) -> bool:
        """Return ``True`` when ``path`` is a directory."""
        ...


class LocalFileSystem:
    """Inspect the real filesystem.

    Directory listings are sorted by name so a walk over the same tree always
    yields items in the same order. Errors raised by the operating system
    (permissions, vanished directories) propagate unchanged.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def list_entries(self, path: Path) -> list[str]:
        return sorted(child.name for child in path.iterdir())

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()


__all__ = ["FileSystem", "LocalFileSystem"]
