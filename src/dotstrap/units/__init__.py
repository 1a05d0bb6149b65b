"""Installable units."""

from __future__ import annotations

from .base import InstallUnit, Phase
from .clones import BashItUnit, BleshUnit, DoomUnit, OhMyTmuxUnit
from .dotfiles import DotfilesUnit, ShellConfigUnit, StowUnit
from .system import EmacsUnit, NvimUnit, PackagesUnit, TmuxUnit

__all__ = [
    "BashItUnit",
    "BleshUnit",
    "DoomUnit",
    "DotfilesUnit",
    "EmacsUnit",
    "InstallUnit",
    "NvimUnit",
    "OhMyTmuxUnit",
    "PackagesUnit",
    "Phase",
    "ShellConfigUnit",
    "StowUnit",
    "TmuxUnit",
]
