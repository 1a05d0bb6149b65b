"""Hard requirements checked before any unit runs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dotstrap.errors import PreflightError
from dotstrap.platforms import PlatformTag

if TYPE_CHECKING:
    from dotstrap.platforms import BasePlatform
    from dotstrap.protocols import CommandRunner
    from dotstrap.tui import TUI

logger = logging.getLogger(__name__)


def missing_commands(platform: BasePlatform, runner: CommandRunner) -> list[str]:
    """Required commands that are not on PATH."""
    return [cmd for cmd in platform.required_commands if not runner.has_command(cmd)]


def run_preflight(platform: BasePlatform, runner: CommandRunner, tui: TUI) -> None:
    """Verify required external commands exist.

    An unknown platform only produces a warning; units without a generic
    fallback will be skipped later.

    Args:
        platform: Resolved platform.
        runner: Command runner used for PATH lookups.
        tui: Output target for the unknown-platform warning.

    Raises:
        PreflightError: If any required command is missing.
    """
    if platform.tag is PlatformTag.UNKNOWN:
        tui.show_warning("Unknown platform, platform-specific steps will be skipped")

    missing = missing_commands(platform, runner)
    if missing:
        raise PreflightError(f"Missing required commands: {', '.join(missing)}")
    logger.debug("Preflight passed: %s", ", ".join(platform.required_commands))
