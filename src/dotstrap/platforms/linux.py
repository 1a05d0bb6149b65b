"""Linux and WSL platform implementation (apt)."""

from __future__ import annotations

import logging
import re
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from dotstrap.download import download, latest_release_tag
from dotstrap.platforms.base import BasePlatform
from dotstrap.platforms.detect import PlatformTag

if TYPE_CHECKING:
    from dotstrap.config import Settings
    from dotstrap.protocols import CommandRunner, FileSystem

logger = logging.getLogger(__name__)

OPT_DIR = Path("/opt")
NVIM_OPT_DIRS = [OPT_DIR / "nvim", OPT_DIR / "nvim-linux64", OPT_DIR / "nvim-linux-x86_64"]
NVIM_BIN_LINK = Path("/usr/local/bin/nvim")
NVIM_RELEASE_URL = "https://github.com/neovim/neovim/releases/download/{version}/{asset}.tar.gz"

SKEL_BASHRC = Path("/etc/skel/.bashrc")

MINIMAL_BASHRC = """\
# ~/.bashrc for Linux

case $- in
    *i*) ;;
      *) return;;
esac

HISTCONTROL=ignoreboth
HISTSIZE=1000
HISTFILESIZE=2000
shopt -s histappend
shopt -s checkwinsize

PS1='${debian_chroot:+($debian_chroot)}\\u@\\h:\\w\\$ '

if [ -x /usr/bin/dircolors ]; then
    test -r ~/.dircolors && eval "$(dircolors -b ~/.dircolors)" || eval "$(dircolors -b)"
    alias ls='ls --color=auto'
    alias grep='grep --color=auto'
fi

alias ll='ls -alF'
alias la='ls -A'
alias l='ls -CF'

if ! shopt -oq posix; then
  if [ -f /usr/share/bash-completion/bash_completion ]; then
    . /usr/share/bash-completion/bash_completion
  elif [ -f /etc/bash_completion ]; then
    . /etc/bash_completion
  fi
fi
"""


def nvim_asset_name(version: str) -> str:
    """Release asset name for a Neovim version.

    Releases from v0.11 on ship ``nvim-linux-x86_64``; older ones ship
    ``nvim-linux64``. Unparseable versions get the current naming.

    Args:
        version: Release tag such as "v0.11.5".

    Returns:
        Asset base name without extension.
    """
    match = re.match(r"v?(\d+)\.(\d+)", version)
    if match and (int(match.group(1)), int(match.group(2))) < (0, 11):
        return "nvim-linux64"
    return "nvim-linux-x86_64"


class LinuxPlatform(BasePlatform):
    """apt-based strategy, shared by bare Linux and WSL."""

    package_manager = "apt"
    base_packages = [
        "git",
        "gh",
        "stow",
        "curl",
        "wget",
        "build-essential",
        "cmake",
        "pkg-config",
        "libssl-dev",
        "ripgrep",
        "fd-find",
        "fzf",
        "unzip",
        "fontconfig",
        "xclip",
        "python3",
        "python3-pip",
        "python3-venv",
        "nodejs",
        "npm",
    ]
    package_commands = [
        "git",
        "gh",
        "stow",
        "curl",
        "wget",
        "cmake",
        "rg",
        "fdfind",
        "fzf",
        "unzip",
        "python3",
        "node",
        "npm",
    ]

    def __init__(
        self,
        runner: CommandRunner,
        fs: FileSystem,
        settings: Settings,
        wsl: bool = False,
    ) -> None:
        """Initialize Linux platform.

        Args:
            runner: Command runner.
            fs: Filesystem abstraction.
            settings: Loaded settings.
            wsl: Running under Windows Subsystem for Linux.
        """
        super().__init__(runner, fs, settings)
        self.wsl = wsl
        self.tag = PlatformTag.WSL if wsl else PlatformTag.LINUX

    def install_packages(self) -> None:
        self.runner.run(["apt", "update"], sudo=True)
        self.runner.run(["apt", "install", "-y", *self.base_packages], sudo=True)

    def install_package(self, name: str) -> None:
        self.runner.run(["apt", "install", "-y", name], sudo=True)

    def nvim_present(self) -> bool:
        if not self.runner.has_command("nvim"):
            return False
        return any(self.fs.is_dir(path) for path in NVIM_OPT_DIRS[1:])

    def nvim_location(self) -> Path:
        return OPT_DIR / "nvim-linux-x86_64"

    def resolve_nvim_version(self) -> str:
        """Latest Neovim release, or the configured fallback when offline."""
        version = latest_release_tag("neovim", "neovim")
        if version:
            logger.info("Found latest Neovim version: %s", version)
            return version
        fallback = self.settings.nvim_fallback_version
        logger.warning("Latest Neovim release unavailable, using fallback %s", fallback)
        return fallback

    def install_nvim(self, force: bool) -> None:
        version = self.resolve_nvim_version()
        asset = nvim_asset_name(version)
        url = NVIM_RELEASE_URL.format(version=version, asset=asset)

        with tempfile.TemporaryDirectory(prefix="dotstrap-") as tmp:
            # Raises before anything under /opt is touched
            archive = download(url, Path(tmp) / f"{asset}.tar.gz", self.settings.min_artifact_bytes)
            self.runner.run(["rm", "-rf", *map(str, NVIM_OPT_DIRS)], sudo=True)
            self.runner.run(["tar", "-C", str(OPT_DIR), "-xzf", str(archive)], sudo=True)
        self.runner.run(
            ["ln", "-sf", str(OPT_DIR / asset / "bin" / "nvim"), str(NVIM_BIN_LINK)],
            sudo=True,
        )

    def uninstall_nvim(self) -> None:
        self.runner.run(["rm", "-rf", *map(str, NVIM_OPT_DIRS)], sudo=True)
        self.runner.run(["rm", "-f", str(NVIM_BIN_LINK)], sudo=True)

    def describe_nvim(self) -> str:
        return f"download Neovim release into {OPT_DIR} and link {NVIM_BIN_LINK}"

    def default_shell_files(self) -> dict[str, str]:
        if self.fs.is_file(SKEL_BASHRC):
            return {".bashrc": self.fs.read_text(SKEL_BASHRC)}
        return {".bashrc": MINIMAL_BASHRC}

    def removal_hint(self) -> str:
        return "sudo apt remove emacs tmux stow ripgrep fd-find fzf"
