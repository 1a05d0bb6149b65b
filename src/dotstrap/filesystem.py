"""Filesystem abstraction for testability.

This module provides a filesystem abstraction that enables testing
without real I/O operations. The RealFileSystem implementation
wraps standard library operations.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path, os and shutil operations.
    Satisfies the FileSystem protocol structurally.
    """

    def read_text(self, path: Path) -> str:
        """Read text content from a file."""
        return path.read_text()

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to a file."""
        path.write_text(content)

    def exists(self, path: Path) -> bool:
        """Check if a path exists, counting dangling symlinks as present."""
        return path.exists() or path.is_symlink()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        """Check if a path is a regular file."""
        return path.is_file()

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link."""
        return path.is_symlink()

    def readlink(self, path: Path) -> Path:
        """Return the raw target of a symbolic link."""
        return Path(os.readlink(path))

    def symlink(self, target: Path, link: Path) -> None:
        """Create ``link`` pointing at ``target``."""
        link.symlink_to(target)

    def rename(self, src: Path, dst: Path) -> None:
        """Rename a path."""
        src.rename(dst)

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def unlink(self, path: Path) -> None:
        """Remove a file or symlink."""
        path.unlink()

    def remove(self, path: Path) -> bool:
        """Remove a file, symlink or directory tree if present.

        Returns:
            True if something was removed, False if the path did not exist.
        """
        if path.is_symlink() or path.is_file():
            path.unlink()
            return True
        if path.is_dir():
            shutil.rmtree(path)
            return True
        return False

    def copy(self, src: Path, dst: Path) -> None:
        """Copy a single file."""
        shutil.copy2(src, dst)

    def listdir(self, path: Path) -> list[Path]:
        """List directory entries in sorted order."""
        return sorted(path.iterdir())
