"""Protocol definitions for core abstractions.

Units, the linker and the orchestrator depend on these interfaces rather
than on concrete classes, so tests can substitute doubles without
touching the real machine.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations."""

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def is_symlink(self, path: Path) -> bool: ...

    def readlink(self, path: Path) -> Path: ...

    def symlink(self, target: Path, link: Path) -> None: ...

    def rename(self, src: Path, dst: Path) -> None: ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None: ...

    def unlink(self, path: Path) -> None: ...

    def remove(self, path: Path) -> bool: ...

    def copy(self, src: Path, dst: Path) -> None: ...

    def listdir(self, path: Path) -> list[Path]: ...


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for running external commands."""

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        sudo: bool = False,
        check: bool = True,
    ) -> int:
        """Run a command.

        Args:
            args: Command and arguments.
            cwd: Working directory.
            sudo: Run through sudo.
            check: Raise CommandError on non-zero exit.

        Returns:
            Exit status.
        """
        ...

    def which(self, name: str) -> str | None: ...

    def has_command(self, name: str) -> bool: ...

    def version_line(self, name: str) -> str | None: ...


@runtime_checkable
class SourceRepository(Protocol):
    """Protocol for git repository operations."""

    def clone(
        self,
        url: str,
        dest: Path,
        depth: int | None = None,
        recursive: bool = False,
    ) -> Path:
        """Clone ``url`` into ``dest``."""
        ...

    def clone_with_fallback(self, url: str, dest: Path) -> Path:
        """Clone over SSH, falling back to HTTPS."""
        ...

    def pull(self, path: Path) -> Path:
        """Pull updates into an existing clone."""
        ...
