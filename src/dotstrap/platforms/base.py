"""Base platform implementation with shared behavior.

A platform bundles every action that differs between operating systems:
installing system packages, installing Neovim, and the default shell
files restored on uninstall. Units resolve their platform once and call
through it instead of branching on the OS themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from dotstrap.platforms.detect import PlatformTag

if TYPE_CHECKING:
    from dotstrap.config import Settings
    from dotstrap.protocols import CommandRunner, FileSystem


class BasePlatform(ABC):
    """Base class for platform strategies."""

    tag: PlatformTag
    package_manager: str | None = None
    base_packages: list[str] = []
    # Commands whose presence means the base packages are installed
    package_commands: list[str] = []

    def __init__(self, runner: CommandRunner, fs: FileSystem, settings: Settings) -> None:
        """Initialize platform strategy.

        Args:
            runner: Command runner for package managers.
            fs: Filesystem abstraction.
            settings: Loaded settings.
        """
        self.runner = runner
        self.fs = fs
        self.settings = settings

    @property
    def required_commands(self) -> list[str]:
        """Commands that must exist before any unit runs."""
        commands = ["git", "curl"]
        if self.package_manager:
            commands.append(self.package_manager)
        return commands

    def packages_present(self) -> bool:
        """Check whether the base package set looks installed."""
        return all(self.runner.has_command(cmd) for cmd in self.package_commands)

    @abstractmethod
    def install_packages(self) -> None:
        """Install the base package set."""
        ...

    @abstractmethod
    def install_package(self, name: str) -> None:
        """Install a single system package."""
        ...

    @abstractmethod
    def nvim_present(self) -> bool:
        """Check whether Neovim is installed the way this platform installs it."""
        ...

    @abstractmethod
    def nvim_location(self) -> Path:
        """Where this platform puts Neovim."""
        ...

    @abstractmethod
    def install_nvim(self, force: bool) -> None:
        """Install Neovim."""
        ...

    @abstractmethod
    def uninstall_nvim(self) -> None:
        """Remove the platform's Neovim installation."""
        ...

    @abstractmethod
    def default_shell_files(self) -> dict[str, str]:
        """Default shell configuration, keyed by file name under $HOME."""
        ...

    def describe_packages(self) -> str:
        return f"{self.package_manager} install {' '.join(self.base_packages)}"

    def describe_nvim(self) -> str:
        return f"install Neovim to {self.nvim_location()}"

    def removal_hint(self) -> str:
        """How to remove system packages, which uninstall leaves alone."""
        return ""
