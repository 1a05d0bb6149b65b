"""Tests for types module."""

from __future__ import annotations

import pytest

from dotstrap.errors import CommandError, InstallError, InstallNotApplicable
from dotstrap.types import OutcomeKind, UnitOutcome


class TestUnitOutcome:
    """Tests for UnitOutcome invariants."""

    def test_constructors(self) -> None:
        """Test each factory sets its kind."""
        assert UnitOutcome.installed("a").kind is OutcomeKind.INSTALLED
        assert UnitOutcome.removed("a").kind is OutcomeKind.REMOVED
        assert UnitOutcome.would_run("a", "clone").detail == "clone"
        assert UnitOutcome.failed("a", "boom").is_failure

    def test_empty_name_rejected(self) -> None:
        """Test an outcome must name its unit."""
        with pytest.raises(ValueError, match="unit_name"):
            UnitOutcome.installed("")

    @pytest.mark.parametrize("kind", [OutcomeKind.FAILED, OutcomeKind.SKIPPED])
    def test_detail_required(self, kind: OutcomeKind) -> None:
        """Test failures carry an error and skips carry a reason."""
        with pytest.raises(ValueError, match="requires a detail"):
            UnitOutcome("a", kind)

    def test_frozen(self) -> None:
        """Test outcomes are immutable."""
        outcome = UnitOutcome.installed("a")
        with pytest.raises(AttributeError):
            outcome.kind = OutcomeKind.FAILED  # type: ignore[misc]


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_command_error_message(self) -> None:
        """Test the failing command line is part of the message."""
        error = CommandError(["apt", "install", "-y", "tmux"], 100, "E: Unable to lock\n")

        assert isinstance(error, InstallError)
        assert error.returncode == 100
        assert str(error) == "Command failed (100): apt install -y tmux: E: Unable to lock"

    def test_not_applicable(self) -> None:
        """Test the unit and platform are kept."""
        error = InstallNotApplicable("nvim", "unknown")
        assert error.unit == "nvim"
        assert error.platform == "unknown"
        assert not isinstance(error, InstallError)
