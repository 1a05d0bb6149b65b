"""Drives every unit through an install or uninstall run."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dotstrap.errors import DotstrapError, InstallNotApplicable
from dotstrap.types import UnitOutcome

if TYPE_CHECKING:
    from dotstrap.config import RunConfig
    from dotstrap.context import AppContext
    from dotstrap.registry import UnitRegistry
    from dotstrap.units import InstallUnit

logger = logging.getLogger(__name__)


class Orchestrator:
    """Runs the registry in order with best-effort failure handling.

    One unit failing never stops the units after it. Every unit gets
    exactly one outcome per run; failures are also collected in
    ``failures`` for the final digest.
    """

    def __init__(self, registry: UnitRegistry, config: RunConfig, ctx: AppContext) -> None:
        """Initialize orchestrator.

        Args:
            registry: Units to run.
            config: Flags for this run.
            ctx: Application context (UI and platform).
        """
        self.registry = registry
        self.config = config
        self.ctx = ctx
        self.failures: list[UnitOutcome] = []

    @classmethod
    def create(cls, ctx: AppContext, config: RunConfig) -> Orchestrator:
        """Factory with the default unit table."""
        from dotstrap.registry import build_registry

        return cls(build_registry(ctx), config, ctx)

    def run(self) -> list[UnitOutcome]:
        """Run the mode selected by the config.

        Returns:
            Outcomes in run order.
        """
        if self.config.uninstall_mode:
            return self.uninstall_all()
        return self.install_all()

    def install_all(self) -> list[UnitOutcome]:
        return [self.install_unit(unit) for unit in self.registry.for_install()]

    def install_unit(self, unit: InstallUnit) -> UnitOutcome:
        """Drive one unit through the install decision sequence.

        Args:
            unit: Unit to install.

        Returns:
            The unit's outcome.
        """
        tui = self.ctx.tui

        if unit.skippable and self.config.skips(unit.name):
            tui.show_skip(f"Skipping {unit.description}")
            return UnitOutcome.skipped(unit.name, "explicit skip")

        if self._is_present(unit):
            if not self.config.force:
                tui.show_success(f"{unit.description} already installed")
                return UnitOutcome.skipped(unit.name, "already installed")
            tui.show_warning(f"Force reinstalling {unit.description}")
            logger.info("Overwriting existing installation of %s", unit.name)

        if self.config.dry_run:
            preview = unit.describe_install()
            tui.show_dry_run(preview)
            return UnitOutcome.would_run(unit.name, preview)

        tui.show_info(f"Installing {unit.description}...")
        try:
            unit.install(self.config)
        except InstallNotApplicable:
            tag = self.ctx.platform_tag.value
            tui.show_warning(f"{unit.description} is not supported on {tag}, skipping")
            return UnitOutcome.skipped(unit.name, f"not applicable on {tag}")
        except DotstrapError as e:
            return self._record_failure(unit, str(e))
        except Exception as e:
            logger.exception("Unexpected error installing %s", unit.name)
            return self._record_failure(unit, f"{type(e).__name__}: {e}")

        tui.show_success(f"{unit.description} installed")
        return UnitOutcome.installed(unit.name)

    def uninstall_all(self) -> list[UnitOutcome]:
        """Confirm once, then remove units in uninstall order.

        Returns:
            Outcomes in removal order. If the user declines, every unit is
            skipped as cancelled, except units excluded with --skip.
        """
        units = self.registry.for_uninstall()
        selected = [u for u in units if not self._skipped_for_uninstall(u)]
        removal_hint = self.ctx.platform.removal_hint()

        self.ctx.tui.show_uninstall_plan([u.describe_uninstall() for u in selected], removal_hint)

        if not self.config.dry_run and not self.ctx.tui.confirm("Continue?", default=False):
            self.ctx.tui.show_info("Uninstall cancelled")
            return [
                UnitOutcome.skipped(
                    u.name,
                    "explicit skip" if self._skipped_for_uninstall(u) else "uninstall cancelled",
                )
                for u in units
            ]

        outcomes = [self.uninstall_unit(unit) for unit in units]

        if removal_hint and not self.config.dry_run:
            self.ctx.tui.show_info(f"System packages were kept. To remove them: {removal_hint}")
        return outcomes

    def uninstall_unit(self, unit: InstallUnit) -> UnitOutcome:
        """Remove one unit.

        Args:
            unit: Unit to remove.

        Returns:
            The unit's outcome.
        """
        if self._skipped_for_uninstall(unit):
            self.ctx.tui.show_skip(f"Skipping {unit.description}")
            return UnitOutcome.skipped(unit.name, "explicit skip")

        if self.config.dry_run:
            preview = unit.describe_uninstall()
            self.ctx.tui.show_dry_run(preview)
            return UnitOutcome.would_run(unit.name, preview)

        try:
            unit.uninstall(self.config)
        except InstallNotApplicable:
            tag = self.ctx.platform_tag.value
            self.ctx.tui.show_warning(f"{unit.description} is not supported on {tag}, skipping")
            return UnitOutcome.skipped(unit.name, f"not applicable on {tag}")
        except DotstrapError as e:
            return self._record_failure(unit, str(e))
        except Exception as e:
            logger.exception("Unexpected error removing %s", unit.name)
            return self._record_failure(unit, f"{type(e).__name__}: {e}")

        return UnitOutcome.removed(unit.name)

    def _skipped_for_uninstall(self, unit: InstallUnit) -> bool:
        """Whether --skip names the unit, or a unit it depends on, for removal."""
        if not unit.skippable:
            return False
        return any(self.config.skips(name) for name in {unit.name, *unit.uninstall_skipped_by})

    def _is_present(self, unit: InstallUnit) -> bool:
        """Presence check where an error counts as not present."""
        try:
            return unit.presence_check()
        except Exception as e:
            logger.warning("Presence check for %s failed, assuming absent: %s", unit.name, e)
            return False

    def _record_failure(self, unit: InstallUnit, error: str) -> UnitOutcome:
        self.ctx.tui.show_error(f"{unit.description} failed: {error}")
        outcome = UnitOutcome.failed(unit.name, error)
        self.failures.append(outcome)
        return outcome
