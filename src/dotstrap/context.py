"""Application context for dependency injection.

This module separates object creation from object use. Units, the
orchestrator and the status report receive an AppContext; tests build one
directly with doubles instead of patching module-level imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dotstrap.config import Settings
from dotstrap.linker import Linker
from dotstrap.platforms import BasePlatform, PlatformTag, detect, get_platform
from dotstrap.protocols import CommandRunner, FileSystem, SourceRepository
from dotstrap.tui import TUI


@dataclass
class AppContext:
    """Container for application dependencies.

    All services are typed using Protocol interfaces, not concrete classes,
    so test doubles can be injected without inheritance.
    """

    settings: Settings
    platform: BasePlatform
    fs: FileSystem
    runner: CommandRunner
    gitops: SourceRepository
    linker: Linker
    tui: TUI = field(default_factory=TUI)
    home: Path = field(default_factory=Path.home)

    @property
    def platform_tag(self) -> PlatformTag:
        return self.platform.tag


def create_context(settings: Settings, tag: PlatformTag | None = None) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        settings: Loaded settings.
        tag: Override platform detection.

    Returns:
        Configured AppContext with all dependencies.
    """
    from dotstrap.filesystem import RealFileSystem
    from dotstrap.gitops import GitOps
    from dotstrap.shell import ShellRunner

    fs = RealFileSystem()
    runner = ShellRunner()
    platform = get_platform(tag or detect(), runner, fs, settings)

    return AppContext(
        settings=settings,
        platform=platform,
        fs=fs,
        runner=runner,
        gitops=GitOps(),
        linker=Linker(fs),
    )
