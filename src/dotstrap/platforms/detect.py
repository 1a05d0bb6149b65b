"""Host platform detection."""

from __future__ import annotations

import logging
import platform as _platform
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

PROC_VERSION = Path("/proc/version")


class PlatformTag(str, Enum):
    """Platform classes that select a package-manager strategy."""

    MACOS_ARM64 = "macos-arm64"
    MACOS_X86_64 = "macos-x86_64"
    LINUX = "linux"
    WSL = "wsl"
    UNKNOWN = "unknown"

    @property
    def is_macos(self) -> bool:
        return self in (PlatformTag.MACOS_ARM64, PlatformTag.MACOS_X86_64)

    @property
    def is_linux(self) -> bool:
        """True for bare Linux and WSL."""
        return self in (PlatformTag.LINUX, PlatformTag.WSL)


_LABELS = {
    PlatformTag.MACOS_ARM64: "macOS (Apple Silicon)",
    PlatformTag.MACOS_X86_64: "macOS (Intel)",
    PlatformTag.LINUX: "Linux",
    PlatformTag.WSL: "WSL",
    PlatformTag.UNKNOWN: "unknown platform",
}


def describe(tag: PlatformTag) -> str:
    """Human-readable label for a platform tag."""
    return _LABELS[tag]


def _read_proc_version() -> str:
    try:
        return PROC_VERSION.read_text(errors="ignore")
    except OSError:
        return ""


def detect(
    system: str | None = None,
    machine: str | None = None,
    proc_version: str | None = None,
) -> PlatformTag:
    """Classify the host.

    Arguments default to the live values of ``uname -s``, ``uname -m`` and
    the kernel version marker, so the function is pure when they are given.

    Args:
        system: Kernel name, e.g. "Darwin" or "Linux".
        machine: Hardware name, e.g. "arm64" or "x86_64".
        proc_version: Contents of /proc/version (Linux only).

    Returns:
        The platform tag. ``UNKNOWN`` is a normal result, not an error.
    """
    uname = None
    if system is None or machine is None:
        uname = _platform.uname()
    system = system if system is not None else uname.system
    machine = machine if machine is not None else uname.machine

    if system.startswith("Darwin"):
        if machine == "arm64":
            return PlatformTag.MACOS_ARM64
        return PlatformTag.MACOS_X86_64

    if system.startswith("Linux"):
        if proc_version is None:
            proc_version = _read_proc_version()
        if "microsoft" in proc_version.lower():
            return PlatformTag.WSL
        return PlatformTag.LINUX

    logger.debug("Unrecognised platform: system=%r machine=%r", system, machine)
    return PlatformTag.UNKNOWN
