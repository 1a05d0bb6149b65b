"""Units installed through the platform package manager."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from dotstrap.units.base import INSTALL_ONLY, InstallUnit

if TYPE_CHECKING:
    from dotstrap.config import RunConfig


class PackagesUnit(InstallUnit):
    """Base developer toolchain (git, stow, ripgrep, fzf, ...)."""

    name = "packages"
    description = "system packages"
    phases = INSTALL_ONLY

    def presence_check(self) -> bool:
        return self.ctx.platform.packages_present()

    def install(self, config: RunConfig) -> None:
        self.ctx.platform.install_packages()

    def describe_install(self) -> str:
        return self.ctx.platform.describe_packages()


class SystemPackageUnit(InstallUnit):
    """A single tool provided by a system package of the same name."""

    phases = INSTALL_ONLY
    package: str
    command: str

    def presence_check(self) -> bool:
        return self.ctx.runner.has_command(self.command)

    def install(self, config: RunConfig) -> None:
        self.ctx.platform.install_package(self.package)

    def describe_install(self) -> str:
        manager = self.ctx.platform.package_manager or "package manager"
        return f"{manager} install {self.package}"


class EmacsUnit(SystemPackageUnit):
    name = "emacs"
    description = "Emacs"
    package = "emacs"
    command = "emacs"


class TmuxUnit(SystemPackageUnit):
    name = "tmux"
    description = "tmux"
    package = "tmux"
    command = "tmux"


class NvimUnit(InstallUnit):
    """Neovim, installed the platform's way."""

    name = "nvim"
    description = "Neovim"

    def presence_check(self) -> bool:
        return self.ctx.platform.nvim_present()

    def install(self, config: RunConfig) -> None:
        self.ctx.platform.install_nvim(config.force)

    def removal_paths(self) -> list[Path]:
        return [
            self.home / ".local" / "share" / "nvim",
            self.home / ".cache" / "nvim",
        ]

    def uninstall(self, config: RunConfig) -> None:
        self.ctx.tui.show_remove("Neovim")
        self.ctx.platform.uninstall_nvim()
        super().uninstall(config)

    def describe_install(self) -> str:
        return self.ctx.platform.describe_nvim()

    def describe_uninstall(self) -> str:
        return f"remove Neovim ({self.ctx.platform.nvim_location()}) and its data"
