"""External command execution."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from dotstrap.errors import CommandError

logger = logging.getLogger(__name__)


class ShellRunner:
    """Runs external commands such as package managers and build scripts.

    Satisfies the CommandRunner protocol structurally.
    """

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        sudo: bool = False,
        check: bool = True,
    ) -> int:
        """Run a command, streaming its output to the terminal.

        Args:
            args: Command and arguments.
            cwd: Working directory for the command.
            sudo: Prefix the command with ``sudo``.
            check: Raise on non-zero exit status.

        Returns:
            Exit status of the command.

        Raises:
            CommandError: If ``check`` is set and the command fails or
                cannot be started.
        """
        command = ["sudo", *args] if sudo else list(args)
        logger.debug("Running %s (cwd=%s)", " ".join(command), cwd)
        try:
            completed = subprocess.run(command, cwd=cwd, check=False)
        except OSError as e:
            if check:
                raise CommandError(command, 127, str(e)) from e
            logger.debug("Could not start %s: %s", command[0], e)
            return 127

        if check and completed.returncode != 0:
            raise CommandError(command, completed.returncode)
        return completed.returncode

    def which(self, name: str) -> str | None:
        """Return the full path of a command on PATH, or None."""
        return shutil.which(name)

    def has_command(self, name: str) -> bool:
        """Check whether a command is available on PATH."""
        return self.which(name) is not None

    def version_line(self, name: str) -> str | None:
        """Return the first line of ``<name> --version``.

        Returns:
            First non-empty output line, or None when the command is missing
            or prints nothing.
        """
        if not self.has_command(name):
            return None
        try:
            completed = subprocess.run(
                [name, "--version"],
                capture_output=True,
                text=True,
                timeout=10,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Version query for %s failed: %s", name, e)
            return None
        for line in (completed.stdout or completed.stderr).splitlines():
            if line.strip():
                return line.strip()
        return None
