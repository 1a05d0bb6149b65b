"""Dotfiles repository, package linking and shell config restore."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from dotstrap.errors import InstallError
from dotstrap.linker import LinkSpec, LinkStatus
from dotstrap.units.base import UNINSTALL_ONLY, InstallUnit

if TYPE_CHECKING:
    from dotstrap.config import RunConfig

logger = logging.getLogger(__name__)


class DotfilesUnit(InstallUnit):
    """The dotfiles repository clone."""

    name = "dotfiles"
    description = "dotfiles repository"

    @property
    def repo_dir(self) -> Path:
        return self.ctx.settings.dotfiles_dir

    @property
    def managed_paths(self) -> list[Path]:
        return [self.repo_dir]

    def presence_check(self) -> bool:
        return self.ctx.fs.is_dir(self.repo_dir)

    def install(self, config: RunConfig) -> None:
        if self.ctx.fs.exists(self.repo_dir):
            if not config.force:
                self.ctx.tui.show_warning("Dotfiles exist, pulling latest")
                self.ctx.gitops.pull(self.repo_dir)
                return
            self.ctx.linker.prepare_destination(self.repo_dir, config.force)

        self.ctx.gitops.clone_with_fallback(self.ctx.settings.dotfiles_repo, self.repo_dir)

    def uninstall(self, config: RunConfig) -> None:
        if not self.ctx.fs.exists(self.repo_dir):
            return
        if self.ctx.tui.confirm(f"Remove dotfiles repo ({self.repo_dir})?", default=False):
            self.remove_paths([self.repo_dir])
        else:
            self.ctx.tui.show_info("Keeping dotfiles repo")

    def describe_install(self) -> str:
        return f"git clone {self.ctx.settings.dotfiles_repo} {self.repo_dir}"

    def describe_uninstall(self) -> str:
        return f"remove {self.repo_dir} after confirmation"


class StowUnit(InstallUnit):
    """Links each configured dotfiles package into $HOME."""

    name = "stow"
    description = "dotfiles symlinks"
    uninstall_skipped_by = frozenset({"dotfiles"})

    @property
    def packages(self) -> list[str]:
        return self.ctx.settings.stow_packages

    def _specs(self) -> list[LinkSpec]:
        """Specs for packages present in the repository."""
        dotfiles_dir = self.ctx.settings.dotfiles_dir
        specs = []
        for package in self.packages:
            if not self.ctx.fs.is_dir(dotfiles_dir / package):
                continue
            specs.append(LinkSpec.from_package(dotfiles_dir, package, self.home, self.ctx.fs))
        return specs

    def presence_check(self) -> bool:
        if not self.ctx.fs.is_dir(self.ctx.settings.dotfiles_dir):
            return False
        specs = self._specs()
        return bool(specs) and all(self.ctx.linker.is_linked(spec) for spec in specs)

    def install(self, config: RunConfig) -> None:
        dotfiles_dir = self.ctx.settings.dotfiles_dir
        if not self.ctx.fs.is_dir(dotfiles_dir):
            raise InstallError(f"Dotfiles directory not found: {dotfiles_dir}")

        available = [p.name for p in self.ctx.fs.listdir(dotfiles_dir) if self.ctx.fs.is_dir(p)]
        logger.info("Available packages: %s", " ".join(available))

        failed: list[str] = []
        for package in self.packages:
            if not self.ctx.fs.is_dir(dotfiles_dir / package):
                self.ctx.tui.show_warning(f"Package not found: {package}")
                continue

            spec = LinkSpec.from_package(dotfiles_dir, package, self.home, self.ctx.fs)
            report = self.ctx.linker.link(spec, force=config.force)
            for result in report.conflicts:
                self.ctx.tui.show_warning(
                    f"{self._display(result.target)} existed, backed up to "
                    f"{self._display(result.backup)}"
                )
            for result in report.failures:
                failed.append(f"{self._display(result.target)} ({result.error})")
            linked = sum(1 for r in report.results if r.status is not LinkStatus.FAILED)
            self.ctx.tui.show_info(f"Stowed {package}: {linked}/{len(report.results)} links")

        if failed:
            raise InstallError(f"Could not link {', '.join(failed)}")

    def uninstall(self, config: RunConfig) -> None:
        if not self.ctx.fs.is_dir(self.ctx.settings.dotfiles_dir):
            return
        failed: list[str] = []
        for spec in self._specs():
            report = self.ctx.linker.unlink(spec)
            for result in report.results:
                if result.status is LinkStatus.UNLINKED:
                    self.ctx.tui.show_remove(self._display(result.target))
                else:
                    failed.append(f"{self._display(result.target)} ({result.error})")
        if failed:
            raise InstallError(f"Could not unlink {', '.join(failed)}")

    def describe_install(self) -> str:
        return f"link dotfiles packages: {' '.join(self.packages)}"

    def describe_uninstall(self) -> str:
        return f"unlink dotfiles packages: {' '.join(self.packages)}"


class ShellConfigUnit(InstallUnit):
    """Restores a stock shell configuration after the dotfiles are gone."""

    name = "bashrc"
    description = "custom shell config"
    phases = UNINSTALL_ONLY

    SHELL_FILES = [".bashrc", ".bash_profile", ".inputrc"]

    def presence_check(self) -> bool:
        return any(self.ctx.fs.is_symlink(self.home / name) for name in self.SHELL_FILES)

    def install(self, config: RunConfig) -> None:
        # Provided by the stowed bash package
        return None

    def uninstall(self, config: RunConfig) -> None:
        defaults = self.ctx.platform.default_shell_files()
        self.remove_paths([self.home / name for name in self.SHELL_FILES])
        for name, content in defaults.items():
            self.ctx.fs.write_text(self.home / name, content)
        self.ctx.tui.show_success(f"Restored default {', '.join(defaults)}")

    def describe_uninstall(self) -> str:
        return "restore default shell config (~/.bashrc, ~/.bash_profile, ~/.inputrc)"
