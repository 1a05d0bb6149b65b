"""Exception hierarchy for dotstrap.

Two tiers matter to callers: preflight failures abort the whole run, while
everything raised from a unit's install/uninstall action is caught by the
orchestrator and recorded against that unit only.
"""

from __future__ import annotations


class DotstrapError(Exception):
    """Base class for all dotstrap errors."""

    pass


class ConfigError(DotstrapError):
    """Configuration file could not be loaded or validated."""

    pass


class PreflightError(DotstrapError):
    """A hard requirement is missing; nothing may run."""

    pass


class PresenceCheckError(DotstrapError):
    """A unit's presence check could not be evaluated."""

    pass


class InstallError(DotstrapError):
    """An install or uninstall action failed."""

    pass


class InstallNotApplicable(DotstrapError):
    """The unit has no action defined for the detected platform."""

    def __init__(self, unit: str, platform: str) -> None:
        """Initialize with the unit and platform names.

        Args:
            unit: Name of the unit or action.
            platform: Detected platform tag.
        """
        super().__init__(f"{unit} is not available on platform '{platform}'")
        self.unit = unit
        self.platform = platform


class CommandError(InstallError):
    """An external command returned a non-zero exit status."""

    def __init__(self, args: list[str], returncode: int, output: str = "") -> None:
        """Initialize command error.

        Args:
            args: Command line that failed.
            returncode: Exit status of the command.
            output: Captured stderr/stdout, if any.
        """
        message = f"Command failed ({returncode}): {' '.join(args)}"
        if output:
            message = f"{message}: {output.strip()}"
        super().__init__(message)
        self.args_list = args
        self.returncode = returncode


class GitOpsError(InstallError):
    """Error during git operations."""

    pass
