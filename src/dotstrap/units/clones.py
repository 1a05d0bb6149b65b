"""Units installed by cloning a git repository into a fixed directory."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from dotstrap.units.base import InstallUnit

if TYPE_CHECKING:
    from dotstrap.config import RunConfig


class OhMyTmuxUnit(InstallUnit):
    """gpakosz/.tmux configuration framework."""

    name = "oh-my-tmux"
    description = "oh-my-tmux"

    @property
    def tmux_dir(self) -> Path:
        return self.home / ".tmux"

    @property
    def conf(self) -> Path:
        return self.home / ".tmux.conf"

    @property
    def local_conf(self) -> Path:
        return self.home / ".tmux.conf.local"

    @property
    def managed_paths(self) -> list[Path]:
        return [self.tmux_dir]

    def presence_check(self) -> bool:
        return self.ctx.fs.is_dir(self.tmux_dir)

    def install(self, config: RunConfig) -> None:
        fs, linker = self.ctx.fs, self.ctx.linker
        linker.prepare_destination(self.tmux_dir, config.force)

        base_conf = self.tmux_dir / ".tmux.conf"
        if fs.exists(self.conf) and not linker.points_to(self.conf, base_conf):
            linker.back_up(self.conf)

        self.ctx.gitops.clone(self.ctx.settings.oh_my_tmux_repo, self.tmux_dir)
        if not linker.points_to(self.conf, base_conf):
            fs.symlink(base_conf, self.conf)

        # The local file may already come from the stowed tmux package
        if not fs.exists(self.local_conf):
            fs.copy(self.tmux_dir / ".tmux.conf.local", self.local_conf)

    def removal_paths(self) -> list[Path]:
        return [self.tmux_dir, self.conf, self.local_conf]

    def describe_install(self) -> str:
        return f"git clone {self.ctx.settings.oh_my_tmux_repo} ~/.tmux and link ~/.tmux.conf"


class BashItUnit(InstallUnit):
    """Bash-it framework."""

    name = "bash-it"
    description = "bash-it"

    @property
    def target(self) -> Path:
        return self.home / ".bash_it"

    @property
    def managed_paths(self) -> list[Path]:
        return [self.target]

    def presence_check(self) -> bool:
        return self.ctx.fs.is_dir(self.target)

    def install(self, config: RunConfig) -> None:
        self.ctx.linker.prepare_destination(self.target, config.force)
        self.ctx.gitops.clone(self.ctx.settings.bash_it_repo, self.target, depth=1)
        self.ctx.runner.run([str(self.target / "install.sh"), "--silent", "--no-modify-config"])

    def removal_paths(self) -> list[Path]:
        return [self.target]

    def describe_install(self) -> str:
        return (
            f"git clone --depth=1 {self.ctx.settings.bash_it_repo} ~/.bash_it"
            " and run install.sh --silent --no-modify-config"
        )


class BleshUnit(InstallUnit):
    """ble.sh line editor, built from source."""

    name = "blesh"
    description = "ble.sh"

    @property
    def prefix(self) -> Path:
        return self.home / ".local"

    @property
    def install_dir(self) -> Path:
        return self.prefix / "share" / "blesh"

    @property
    def src_dir(self) -> Path:
        return self.prefix / "share" / "blesh-src"

    @property
    def managed_paths(self) -> list[Path]:
        return [self.install_dir, self.src_dir]

    def presence_check(self) -> bool:
        return self.ctx.fs.is_dir(self.install_dir)

    def install(self, config: RunConfig) -> None:
        self.ctx.linker.prepare_destination(self.install_dir, config.force)
        self.ctx.linker.prepare_destination(self.src_dir, config.force)
        self.ctx.gitops.clone(self.ctx.settings.blesh_repo, self.src_dir, depth=1, recursive=True)
        self.ctx.runner.run(["make", "install", f"PREFIX={self.prefix}"], cwd=self.src_dir)

    def removal_paths(self) -> list[Path]:
        return [self.install_dir, self.src_dir, self.home / ".blerc"]

    def describe_install(self) -> str:
        return (
            f"git clone --recursive {self.ctx.settings.blesh_repo} ~/.local/share/blesh-src"
            " and make install PREFIX=~/.local"
        )


class DoomUnit(InstallUnit):
    """Doom Emacs framework (private config comes from the dotfiles)."""

    name = "doom"
    description = "Doom Emacs"

    @property
    def emacs_dir(self) -> Path:
        return self.home / ".config" / "emacs"

    @property
    def doom_bin(self) -> Path:
        return self.emacs_dir / "bin" / "doom"

    @property
    def managed_paths(self) -> list[Path]:
        return [self.emacs_dir]

    def presence_check(self) -> bool:
        return self.ctx.fs.is_file(self.doom_bin)

    def install(self, config: RunConfig) -> None:
        # A legacy ~/.emacs.d shadows ~/.config/emacs; it is never ours to delete
        self.ctx.linker.prepare_destination(self.home / ".emacs.d", config.force)
        self.ctx.linker.prepare_destination(self.emacs_dir, config.force)
        self.ctx.gitops.clone(self.ctx.settings.doom_repo, self.emacs_dir, depth=1)
        self.ctx.runner.run([str(self.doom_bin), "install", "--no-config", "--no-env"])

    def removal_paths(self) -> list[Path]:
        return [
            self.emacs_dir,
            self.home / ".doom.d",
            self.home / ".emacs.d",
            self.home / ".local" / "share" / "doom",
            self.home / ".cache" / "doom",
        ]

    def describe_install(self) -> str:
        return (
            f"git clone --depth 1 {self.ctx.settings.doom_repo} ~/.config/emacs"
            " and run doom install --no-config --no-env"
        )
