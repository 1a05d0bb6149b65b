"""Fallback for platforms without a package-manager strategy."""

from __future__ import annotations

from pathlib import Path

from dotstrap.errors import InstallNotApplicable
from dotstrap.platforms.base import BasePlatform
from dotstrap.platforms.detect import PlatformTag


class GenericPlatform(BasePlatform):
    """Unknown host.

    Platform-specific actions raise InstallNotApplicable so the
    orchestrator can skip them; cross-platform units (git clones,
    linking) still run.
    """

    tag = PlatformTag.UNKNOWN

    def packages_present(self) -> bool:
        return False

    def install_packages(self) -> None:
        raise InstallNotApplicable("packages", self.tag.value)

    def install_package(self, name: str) -> None:
        raise InstallNotApplicable(name, self.tag.value)

    def nvim_present(self) -> bool:
        return self.runner.has_command("nvim")

    def nvim_location(self) -> Path:
        found = self.runner.which("nvim")
        return Path(found) if found else Path("nvim")

    def install_nvim(self, force: bool) -> None:
        raise InstallNotApplicable("nvim", self.tag.value)

    def uninstall_nvim(self) -> None:
        raise InstallNotApplicable("nvim", self.tag.value)

    def describe_packages(self) -> str:
        return "no package manager known for this platform"

    def describe_nvim(self) -> str:
        return "no Neovim install method known for this platform"

    def default_shell_files(self) -> dict[str, str]:
        raise InstallNotApplicable("bashrc", self.tag.value)

    def removal_hint(self) -> str:
        return "Remove system packages with your platform's package manager."
