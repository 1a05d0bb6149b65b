"""Stow-style symlink farm for dotfiles packages.

Each package is a directory in the dotfiles repository whose contents
mirror the layout under $HOME. Linking leaves every target in one of two
states: a symlink to its source, or the user's original preserved under a
timestamped backup name next to the new symlink.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from dotstrap.filesystem import RealFileSystem
from dotstrap.protocols import FileSystem

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP = "%Y%m%d%H%M%S"

# Never linked, matching stow's default ignore list
IGNORE_PATTERNS = [".git", ".gitignore", ".stow-local-ignore", "README*", "LICENSE*", "COPYING"]


class LinkStatus(str, Enum):
    """Per-target result of a link or unlink pass."""

    LINKED = "linked"
    ALREADY_LINKED = "already_linked"
    BACKED_UP = "backed_up"
    REPLACED = "replaced"
    UNLINKED = "unlinked"
    FAILED = "failed"


def _ignored(name: str) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in IGNORE_PATTERNS)


def _link_target(fs: FileSystem, path: Path) -> Path:
    """Absolute, resolved destination of a symlink."""
    link = fs.readlink(path)
    if not link.is_absolute():
        link = path.parent / link
    return link.resolve()


@dataclass(frozen=True)
class LinkSpec:
    """Which repository subtree maps to which paths under the target root.

    Attributes:
        package_name: Package directory name, e.g. "bash".
        source_dir: The package directory inside the dotfiles repository.
        target_root: Directory the package mirrors, normally $HOME.
        target_paths: Paths that become symlinks.
    """

    package_name: str
    source_dir: Path
    target_root: Path
    target_paths: frozenset[Path]

    def source_for(self, target: Path) -> Path:
        """Source path a target should point at."""
        return self.source_dir / target.relative_to(self.target_root)

    @classmethod
    def from_package(
        cls,
        dotfiles_dir: Path,
        package: str,
        target_root: Path,
        fs: FileSystem | None = None,
    ) -> LinkSpec:
        """Compute link targets for a package.

        A source directory is folded into a single symlink unless the
        matching target already exists as a real directory, in which case
        its children are linked individually. A target that is another
        package's folded link into the same repository is descended into
        as well; the Linker splits it up before linking.

        Args:
            dotfiles_dir: Root of the dotfiles repository.
            package: Package directory name.
            target_root: Directory to link into.
            fs: Filesystem abstraction.

        Returns:
            LinkSpec for the package.

        Raises:
            FileNotFoundError: If the package directory does not exist.
        """
        fs = fs or RealFileSystem()
        source_dir = dotfiles_dir / package
        if not fs.is_dir(source_dir):
            raise FileNotFoundError(f"Package not found: {source_dir}")

        repo = dotfiles_dir.resolve()
        targets: set[Path] = set()

        def can_descend(child: Path, target: Path) -> bool:
            if not fs.is_dir(target):
                return False
            if not fs.is_symlink(target):
                return True
            resolved = _link_target(fs, target)
            return resolved != child.resolve() and resolved.is_relative_to(repo)

        def walk(src: Path, dst: Path) -> None:
            for child in fs.listdir(src):
                if _ignored(child.name):
                    continue
                target = dst / child.name
                if fs.is_dir(child) and can_descend(child, target):
                    walk(child, target)
                else:
                    targets.add(target)

        walk(source_dir, target_root)
        return cls(
            package_name=package,
            source_dir=source_dir,
            target_root=target_root,
            target_paths=frozenset(targets),
        )


@dataclass(frozen=True)
class LinkResult:
    """Outcome for one target path."""

    target: Path
    source: Path
    status: LinkStatus
    backup: Path | None = None
    error: str | None = None


@dataclass
class LinkReport:
    """All per-target results for one package."""

    package_name: str
    results: list[LinkResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def conflicts(self) -> list[LinkResult]:
        """Targets that held something else and were backed up."""
        return [r for r in self.results if r.status is LinkStatus.BACKED_UP]

    @property
    def failures(self) -> list[LinkResult]:
        return [r for r in self.results if r.status is LinkStatus.FAILED]


class Linker:
    """Owns the backup-then-symlink sequence for every target path."""

    def __init__(
        self,
        fs: FileSystem,
        managed_paths: Iterable[Path] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the linker.

        Args:
            fs: Filesystem abstraction.
            managed_paths: Paths this tool owns; only these may be deleted
                outright under force.
            clock: Timestamp source for backup names.
        """
        self.fs = fs
        self._managed = {Path(p) for p in managed_paths}
        self._clock = clock

    def register_managed(self, path: Path) -> None:
        """Mark a path as owned by this tool."""
        self._managed.add(path)

    def is_managed(self, path: Path) -> bool:
        return path in self._managed

    def backup_path(self, path: Path) -> Path:
        """Free backup name for a path: ``<name>.bak.<timestamp>[.<n>]``."""
        stamp = self._clock().strftime(BACKUP_TIMESTAMP)
        candidate = path.with_name(f"{path.name}.bak.{stamp}")
        counter = 1
        while self.fs.exists(candidate):
            candidate = path.with_name(f"{path.name}.bak.{stamp}.{counter}")
            counter += 1
        return candidate

    def back_up(self, path: Path) -> Path:
        """Move a path aside under a timestamped backup name.

        Returns:
            The backup path.
        """
        backup = self.backup_path(path)
        self.fs.rename(path, backup)
        logger.info("Backed up %s to %s", path, backup)
        return backup

    def prepare_destination(self, path: Path, force: bool) -> Path | None:
        """Clear a fixed destination before something is created there.

        Under force a managed path is deleted; anything else that exists is
        backed up.

        Args:
            path: Destination path.
            force: Whether force mode is active.

        Returns:
            Backup path if one was made, otherwise None.
        """
        if not self.fs.exists(path):
            return None
        if force and self.is_managed(path):
            logger.info("Removing existing %s", path)
            self.fs.remove(path)
            return None
        return self.back_up(path)

    def points_to(self, target: Path, source: Path) -> bool:
        """Check whether target is a symlink resolving to source."""
        if not self.fs.is_symlink(target):
            return False
        return _link_target(self.fs, target) == source.resolve()

    def unfold(self, path: Path) -> None:
        """Replace a folded directory link with a real directory.

        Each entry of the folded source gets its own link inside the new
        directory, so the owning package stays linked.

        Args:
            path: Symlink to a directory inside the dotfiles repository.
        """
        source = _link_target(self.fs, path)
        self.fs.unlink(path)
        self.fs.mkdir(path)
        for entry in self.fs.listdir(source):
            if not _ignored(entry.name):
                self.fs.symlink(entry, path / entry.name)
        logger.info("Unfolded %s into per-entry links to %s", path, source)

    def _unfold_parents(self, spec: LinkSpec, target: Path) -> None:
        repo = spec.source_dir.parent.resolve()
        current = spec.target_root
        for part in target.relative_to(spec.target_root).parts[:-1]:
            current = current / part
            if not self.fs.is_symlink(current):
                continue
            if _link_target(self.fs, current).is_relative_to(repo):
                self.unfold(current)

    def is_linked(self, spec: LinkSpec) -> bool:
        """True when every target is already the expected symlink."""
        return all(self.points_to(t, spec.source_for(t)) for t in spec.target_paths)

    def link(self, spec: LinkSpec, force: bool = False) -> LinkReport:
        """Link every target of a package.

        A failure on one target is recorded and the remaining targets are
        still processed.

        Args:
            spec: Package to link.
            force: Delete managed paths instead of backing them up.

        Returns:
            Per-target report.
        """
        report = LinkReport(spec.package_name)
        for target in sorted(spec.target_paths):
            report.results.append(self._link_one(spec, target, force))
        return report

    def _link_one(self, spec: LinkSpec, target: Path, force: bool) -> LinkResult:
        source = spec.source_for(target)
        if self.points_to(target, source):
            return LinkResult(target, source, LinkStatus.ALREADY_LINKED)

        status = LinkStatus.LINKED
        backup = None
        try:
            self._unfold_parents(spec, target)
            if self.fs.exists(target):
                if force and self.is_managed(target):
                    self.fs.remove(target)
                    status = LinkStatus.REPLACED
                else:
                    backup = self.back_up(target)
                    status = LinkStatus.BACKED_UP
            self.fs.mkdir(target.parent, parents=True, exist_ok=True)
            self.fs.symlink(source, target)
        except OSError as e:
            logger.debug("Linking %s failed: %s", target, e)
            return LinkResult(target, source, LinkStatus.FAILED, backup=backup, error=str(e))

        logger.debug("Linked %s -> %s", target, source)
        return LinkResult(target, source, status, backup=backup)

    def unlink(self, spec: LinkSpec) -> LinkReport:
        """Remove the package's symlinks, leaving any other file alone.

        Args:
            spec: Package to unlink.

        Returns:
            Report with one UNLINKED or FAILED entry per removed link.
        """
        report = LinkReport(spec.package_name)
        for target in sorted(spec.target_paths):
            source = spec.source_for(target)
            if not self.points_to(target, source):
                continue
            try:
                self.fs.unlink(target)
            except OSError as e:
                report.results.append(LinkResult(target, source, LinkStatus.FAILED, error=str(e)))
                continue
            report.results.append(LinkResult(target, source, LinkStatus.UNLINKED))
        return report
