"""Shared data types for dotstrap."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["OutcomeKind", "UnitOutcome"]


class OutcomeKind(str, Enum):
    """What happened to a unit during a run."""

    INSTALLED = "installed"
    REMOVED = "removed"
    SKIPPED = "skipped"
    FAILED = "failed"
    WOULD_RUN = "would_run"


@dataclass(frozen=True)
class UnitOutcome:
    """Result of driving one unit through a run.

    Attributes:
        unit_name: Name of the unit.
        kind: Outcome kind.
        detail: Skip reason, error message or dry-run preview.
    """

    unit_name: str
    kind: OutcomeKind
    detail: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.unit_name:
            raise ValueError("unit_name cannot be empty")
        if self.kind in (OutcomeKind.FAILED, OutcomeKind.SKIPPED) and not self.detail:
            raise ValueError(f"{self.kind.value} outcome requires a detail message")

    @classmethod
    def installed(cls, unit_name: str) -> UnitOutcome:
        return cls(unit_name, OutcomeKind.INSTALLED)

    @classmethod
    def removed(cls, unit_name: str) -> UnitOutcome:
        return cls(unit_name, OutcomeKind.REMOVED)

    @classmethod
    def skipped(cls, unit_name: str, reason: str) -> UnitOutcome:
        return cls(unit_name, OutcomeKind.SKIPPED, reason)

    @classmethod
    def failed(cls, unit_name: str, error: str) -> UnitOutcome:
        return cls(unit_name, OutcomeKind.FAILED, error)

    @classmethod
    def would_run(cls, unit_name: str, preview: str) -> UnitOutcome:
        return cls(unit_name, OutcomeKind.WOULD_RUN, preview)

    @property
    def is_failure(self) -> bool:
        """True if this outcome counts against the exit code."""
        return self.kind is OutcomeKind.FAILED
