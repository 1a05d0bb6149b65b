"""Final run summary and exit code."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from dotstrap.types import OutcomeKind, UnitOutcome

if TYPE_CHECKING:
    from dotstrap.tui import TUI

EXIT_OK = 0
EXIT_FAILURE = 1


def count_by_kind(outcomes: Sequence[UnitOutcome]) -> dict[OutcomeKind, int]:
    """Count outcomes per kind, in enum order."""
    counts = {kind: 0 for kind in OutcomeKind}
    for outcome in outcomes:
        counts[outcome.kind] += 1
    return counts


def exit_code(outcomes: Sequence[UnitOutcome]) -> int:
    """0 unless some unit failed. Skips are not failures."""
    return EXIT_FAILURE if any(o.is_failure for o in outcomes) else EXIT_OK


def summarize(
    outcomes: Sequence[UnitOutcome],
    tui: TUI,
    dry_run: bool = False,
    uninstall: bool = False,
) -> int:
    """Print the run summary.

    Args:
        outcomes: One outcome per unit, in run order.
        tui: Output target.
        dry_run: Whether the run made no changes.
        uninstall: Whether this was an uninstall run.

    Returns:
        Process exit code.
    """
    title = "Uninstall Summary" if uninstall else "Install Summary"
    tui.show_outcomes(list(outcomes), title)
    tui.show_counts(count_by_kind(outcomes))

    failures = [o for o in outcomes if o.is_failure]
    if failures:
        tui.show_failures(failures)
    elif dry_run:
        tui.show_info("Dry run complete. No changes were made.")
    elif uninstall:
        tui.show_success("Uninstall complete")
    else:
        tui.show_success("Installation complete")
        tui.show_next_steps()

    return exit_code(outcomes)
