"""Read-only installation status report (``--status``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from dotstrap.platforms import describe

if TYPE_CHECKING:
    from dotstrap.context import AppContext

STATUS_COMMANDS = ["nvim", "emacs", "tmux", "stow", "git", "gh", "brew"]
STATUS_LINKS = [".bashrc", ".bash_profile", ".blerc", ".inputrc", ".doom.d", ".tmux.conf.local"]


@dataclass
class CommandStatus:
    """A command and the first line of its ``--version`` output."""

    name: str
    installed: bool
    version: str | None = None
    not_applicable: bool = False


@dataclass
class PathStatus:
    """A component directory and whether it exists."""

    name: str
    path: Path
    exists: bool


@dataclass
class LinkState:
    """A dotfile in $HOME.

    Attributes:
        path: Location of the dotfile.
        exists: Whether anything exists there (a dangling link counts).
        target: Link target when the path is a symlink, else None.
    """

    path: Path
    exists: bool
    target: Path | None = None

    @property
    def is_symlink(self) -> bool:
        return self.target is not None


@dataclass
class StatusReport:
    platform: str
    commands: list[CommandStatus] = field(default_factory=list)
    directories: list[PathStatus] = field(default_factory=list)
    links: list[LinkState] = field(default_factory=list)


def collect_status(ctx: AppContext) -> StatusReport:
    """Inspect the host without changing anything.

    Args:
        ctx: Application context.

    Returns:
        Collected status report.
    """
    report = StatusReport(platform=describe(ctx.platform_tag))

    for name in STATUS_COMMANDS:
        if name == "brew" and ctx.platform_tag.is_linux:
            report.commands.append(CommandStatus(name, installed=False, not_applicable=True))
            continue
        version = ctx.runner.version_line(name)
        installed = version is not None or ctx.runner.has_command(name)
        report.commands.append(CommandStatus(name, installed=installed, version=version))

    home = ctx.home
    directories = [
        ("dotfiles", ctx.settings.dotfiles_dir),
        ("bash-it", home / ".bash_it"),
        ("ble.sh", home / ".local" / "share" / "blesh"),
        ("doom", home / ".config" / "emacs"),
        ("oh-my-tmux", home / ".tmux"),
        ("nvim", ctx.platform.nvim_location()),
    ]
    for name, path in directories:
        report.directories.append(PathStatus(name, path, ctx.fs.exists(path)))

    for name in STATUS_LINKS:
        path = home / name
        target = ctx.fs.readlink(path) if ctx.fs.is_symlink(path) else None
        report.links.append(LinkState(path, ctx.fs.exists(path), target))

    return report
