"""Base class for installable units.

A unit is one named component of the environment: system packages, an
editor, a shell enhancer, the dotfiles link step. The orchestrator only
sees this interface, so every unit gets the same skip, presence, force and
dry-run handling.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotstrap.config import RunConfig
    from dotstrap.context import AppContext

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Run modes a unit takes part in."""

    INSTALL = "install"
    UNINSTALL = "uninstall"


BOTH_PHASES = frozenset({Phase.INSTALL, Phase.UNINSTALL})
INSTALL_ONLY = frozenset({Phase.INSTALL})
UNINSTALL_ONLY = frozenset({Phase.UNINSTALL})


class InstallUnit(ABC):
    """One named installable component.

    Subclasses set ``name`` and ``description`` and implement
    ``presence_check`` and ``install``. The default ``uninstall`` removes
    ``removal_paths()``; "nothing to remove" counts as success.
    """

    name: str
    description: str
    skippable: bool = True
    phases: frozenset[Phase] = BOTH_PHASES
    # Other --skip names that also exclude this unit from an uninstall run
    uninstall_skipped_by: frozenset[str] = frozenset()

    def __init__(self, ctx: AppContext) -> None:
        """Initialize unit.

        Args:
            ctx: Application context.
        """
        self.ctx = ctx

    @property
    def home(self) -> Path:
        return self.ctx.home

    @property
    def managed_paths(self) -> list[Path]:
        """Paths this unit creates and may delete outright under force."""
        return []

    def removal_paths(self) -> list[Path]:
        """Paths deleted by the default uninstall."""
        return []

    @abstractmethod
    def presence_check(self) -> bool:
        """Check whether the unit is already installed.

        Raises:
            PresenceCheckError: If the check itself cannot run.
        """
        ...

    @abstractmethod
    def install(self, config: RunConfig) -> None:
        """Install the unit.

        Raises:
            InstallError: If an external action fails.
            InstallNotApplicable: If the platform has no install action.
        """
        ...

    def uninstall(self, config: RunConfig) -> None:
        """Remove the unit. Idempotent."""
        self.remove_paths(self.removal_paths())

    def describe_install(self) -> str:
        """One-line preview of what install would do."""
        return f"install {self.description}"

    def describe_uninstall(self) -> str:
        """One-line preview of what uninstall would do."""
        paths = self.removal_paths()
        if not paths:
            return f"remove {self.description}"
        return "remove " + ", ".join(self._display(p) for p in paths)

    def remove_paths(self, paths: list[Path]) -> None:
        for path in paths:
            if self.ctx.fs.remove(path):
                logger.info("Removed %s", path)
                self.ctx.tui.show_remove(self._display(path))

    def _display(self, path: Path) -> str:
        """Path with $HOME shortened to ~."""
        try:
            return f"~/{path.relative_to(self.home)}"
        except ValueError:
            return str(path)
