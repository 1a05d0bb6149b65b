"""macOS platform implementation (Homebrew)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from dotstrap.platforms.base import BasePlatform
from dotstrap.platforms.detect import PlatformTag

if TYPE_CHECKING:
    from dotstrap.config import Settings
    from dotstrap.protocols import CommandRunner, FileSystem

BASH_PROFILE = """\
# ~/.bash_profile for macOS

# Load .bashrc if it exists
[[ -f ~/.bashrc ]] && source ~/.bashrc

# Homebrew
if [[ -f /opt/homebrew/bin/brew ]]; then
    eval "$(/opt/homebrew/bin/brew shellenv)"
elif [[ -f /usr/local/bin/brew ]]; then
    eval "$(/usr/local/bin/brew shellenv)"
fi
"""

BASHRC = """\
# ~/.bashrc for macOS

# If not running interactively, don't do anything
case $- in
    *i*) ;;
      *) return;;
esac

# History
HISTCONTROL=ignoreboth
HISTSIZE=1000
HISTFILESIZE=2000

# Prompt
PS1='\\u@\\h:\\w\\$ '

# Aliases
alias ls='ls -G'
alias ll='ls -alF'
alias la='ls -A'
"""


class MacOSPlatform(BasePlatform):
    """Homebrew-based strategy for Apple Silicon and Intel Macs."""

    package_manager = "brew"
    base_packages = [
        "git",
        "gh",
        "stow",
        "curl",
        "wget",
        "cmake",
        "ripgrep",
        "fd",
        "fzf",
        "node",
        "python@3",
    ]
    package_commands = ["git", "gh", "stow", "curl", "wget", "cmake", "rg", "fd", "fzf", "node"]

    def __init__(
        self,
        runner: CommandRunner,
        fs: FileSystem,
        settings: Settings,
        arm64: bool = True,
    ) -> None:
        """Initialize macOS platform.

        Args:
            runner: Command runner.
            fs: Filesystem abstraction.
            settings: Loaded settings.
            arm64: Apple Silicon (Homebrew under /opt/homebrew) or Intel.
        """
        super().__init__(runner, fs, settings)
        self.arm64 = arm64
        self.tag = PlatformTag.MACOS_ARM64 if arm64 else PlatformTag.MACOS_X86_64

    @property
    def brew_prefix(self) -> Path:
        return Path("/opt/homebrew") if self.arm64 else Path("/usr/local")

    def install_packages(self) -> None:
        self.runner.run(["brew", "update"])
        self.runner.run(["brew", "install", *self.base_packages])
        # GNU versions of core tools
        self.runner.run(["brew", "install", "coreutils"])

    def install_package(self, name: str) -> None:
        self.runner.run(["brew", "install", name])

    def nvim_present(self) -> bool:
        return self.runner.has_command("nvim")

    def nvim_location(self) -> Path:
        return self.brew_prefix / "bin" / "nvim"

    def install_nvim(self, force: bool) -> None:
        if force:
            self.runner.run(["brew", "uninstall", "neovim"], check=False)
        self.runner.run(["brew", "install", "neovim"])

    def uninstall_nvim(self) -> None:
        self.runner.run(["brew", "uninstall", "neovim"], check=False)

    def describe_nvim(self) -> str:
        return "brew install neovim"

    def default_shell_files(self) -> dict[str, str]:
        return {".bash_profile": BASH_PROFILE, ".bashrc": BASHRC}

    def removal_hint(self) -> str:
        return "brew uninstall emacs tmux stow ripgrep fd fzf"
