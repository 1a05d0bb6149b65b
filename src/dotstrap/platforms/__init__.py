"""Platform-specific implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BasePlatform
from .detect import PlatformTag, describe, detect
from .generic import GenericPlatform
from .linux import LinuxPlatform
from .macos import MacOSPlatform

if TYPE_CHECKING:
    from dotstrap.config import Settings
    from dotstrap.protocols import CommandRunner, FileSystem

__all__ = [
    "BasePlatform",
    "GenericPlatform",
    "LinuxPlatform",
    "MacOSPlatform",
    "PlatformTag",
    "describe",
    "detect",
    "get_platform",
]


def get_platform(
    tag: PlatformTag,
    runner: CommandRunner,
    fs: FileSystem,
    settings: Settings,
) -> BasePlatform:
    """Resolve the strategy for a detected platform.

    Args:
        tag: Detected platform.
        runner: Command runner.
        fs: Filesystem abstraction.
        settings: Loaded settings.

    Returns:
        Platform instance. ``UNKNOWN`` maps to GenericPlatform.
    """
    if tag is PlatformTag.MACOS_ARM64:
        return MacOSPlatform(runner, fs, settings, arm64=True)
    if tag is PlatformTag.MACOS_X86_64:
        return MacOSPlatform(runner, fs, settings, arm64=False)
    if tag is PlatformTag.LINUX:
        return LinuxPlatform(runner, fs, settings)
    if tag is PlatformTag.WSL:
        return LinuxPlatform(runner, fs, settings, wsl=True)
    return GenericPlatform(runner, fs, settings)
