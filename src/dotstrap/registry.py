"""Ordered table of installable units.

Order is significant: later units may rely on earlier ones having run
(``stow`` needs the ``packages`` unit to have provided stow and the
``dotfiles`` unit to have cloned the repository).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from dotstrap.units import (
    BashItUnit,
    BleshUnit,
    DoomUnit,
    DotfilesUnit,
    EmacsUnit,
    InstallUnit,
    NvimUnit,
    OhMyTmuxUnit,
    PackagesUnit,
    Phase,
    ShellConfigUnit,
    StowUnit,
    TmuxUnit,
)

if TYPE_CHECKING:
    from dotstrap.context import AppContext

INSTALL_ORDER: list[type[InstallUnit]] = [
    PackagesUnit,
    NvimUnit,
    EmacsUnit,
    TmuxUnit,
    OhMyTmuxUnit,
    BashItUnit,
    BleshUnit,
    DoomUnit,
    DotfilesUnit,
    StowUnit,
]

# Removal order is chosen for safety, not as the reverse of INSTALL_ORDER:
# links come down before the repository they point into, and the default
# shell config is restored last.
UNINSTALL_ORDER: list[str] = [
    "nvim",
    "doom",
    "oh-my-tmux",
    "bash-it",
    "blesh",
    "stow",
    "dotfiles",
    "bashrc",
]


def known_unit_names() -> list[str]:
    """Names of every default unit, valid for ``--skip``."""
    return [unit_class.name for unit_class in INSTALL_ORDER] + [ShellConfigUnit.name]


class UnitRegistry:
    """Immutable, ordered collection of units with unique names."""

    def __init__(self, units: list[InstallUnit], uninstall_order: list[str] | None = None) -> None:
        """Initialize registry.

        Args:
            units: Units in install (declaration) order.
            uninstall_order: Names in removal order. Defaults to the reverse
                of declaration order, restricted to uninstallable units.

        Raises:
            ValueError: If names are duplicated or the uninstall order
                names an unknown unit.
        """
        names = [unit.name for unit in units]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate unit names: {sorted(duplicates)}")

        self._units = tuple(units)
        self._by_name = {unit.name: unit for unit in units}

        if uninstall_order is None:
            uninstall_order = [u.name for u in reversed(units) if Phase.UNINSTALL in u.phases]
        unknown = [n for n in uninstall_order if n not in self._by_name]
        if unknown:
            raise ValueError(f"Unknown units in uninstall order: {unknown}")
        self._uninstall_order = tuple(uninstall_order)

    def __iter__(self) -> Iterator[InstallUnit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> list[str]:
        return [unit.name for unit in self._units]

    def get(self, name: str) -> InstallUnit:
        """Get a unit by name.

        Raises:
            KeyError: If no unit has that name.
        """
        if name not in self._by_name:
            raise KeyError(f"No unit named '{name}'")
        return self._by_name[name]

    def for_install(self) -> list[InstallUnit]:
        """Units taking part in an install run, in declaration order."""
        return [u for u in self._units if Phase.INSTALL in u.phases]

    def for_uninstall(self) -> list[InstallUnit]:
        """Units taking part in an uninstall run, in removal order."""
        return [self._by_name[name] for name in self._uninstall_order]


def build_registry(ctx: AppContext) -> UnitRegistry:
    """Create the default unit table.

    Every unit's managed paths are registered with the linker so force
    mode may delete them outright.

    Args:
        ctx: Application context.

    Returns:
        Registry of the default units.
    """
    units: list[InstallUnit] = [unit_class(ctx) for unit_class in INSTALL_ORDER]
    units.append(ShellConfigUnit(ctx))

    for unit in units:
        for path in unit.managed_paths:
            ctx.linker.register_managed(path)

    return UnitRegistry(units, UNINSTALL_ORDER)
