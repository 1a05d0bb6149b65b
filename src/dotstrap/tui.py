"""Rich console output for dotstrap runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from dotstrap.types import OutcomeKind

if TYPE_CHECKING:
    from dotstrap.config import RunConfig
    from dotstrap.status import StatusReport
    from dotstrap.types import UnitOutcome


_OUTCOME_STYLES = {
    OutcomeKind.INSTALLED: ("green", "✓ installed"),
    OutcomeKind.REMOVED: ("green", "✓ removed"),
    OutcomeKind.SKIPPED: ("dim", "○ skipped"),
    OutcomeKind.FAILED: ("red", "✗ failed"),
    OutcomeKind.WOULD_RUN: ("cyan", "→ would run"),
}


class TUI:
    """Text User Interface for dotstrap (non-interactive apart from confirm)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize TUI.

        Args:
            console: Console to print to. A new one is created if omitted.
        """
        self.console = console or Console()

    def show_banner(self, version: str, platform_label: str, config: RunConfig) -> None:
        """Display the run banner with active modes.

        Args:
            version: dotstrap version.
            platform_label: Human-readable detected platform.
            config: Flags for this run.
        """
        lines = [f"[bold]dotstrap[/bold] v{version}", f"OS: [cyan]{platform_label}[/cyan]"]
        if config.dry_run:
            lines.append("[cyan]DRY RUN MODE - No changes will be made[/cyan]")
        if config.force:
            lines.append("[yellow]FORCE MODE - Will reinstall existing components[/yellow]")
        if config.uninstall_mode:
            lines.append("[red]UNINSTALL MODE - Will remove components[/red]")
        self.console.print(Panel("\n".join(lines), border_style="blue"))

    def show_success(self, message: str) -> None:
        """Show success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message."""
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message."""
        self.console.print(f"[blue]i[/blue] {message}")

    def show_skip(self, message: str) -> None:
        self.console.print(f"[dim]○ {message}[/dim]")

    def show_dry_run(self, message: str) -> None:
        self.console.print(f"[cyan]→[/cyan] [cyan]would[/cyan] {message}")

    def show_remove(self, message: str) -> None:
        self.console.print(f"[red]-[/red] {message}")

    def confirm(self, message: str, default: bool = False) -> bool:
        """Show a blocking yes/no prompt.

        Args:
            message: Question to ask.
            default: Answer used when the user just presses enter.

        Returns:
            User's response.
        """
        return Confirm.ask(message, default=default, console=self.console)

    def show_uninstall_plan(self, descriptions: list[str], removal_hint: str) -> None:
        """List what an uninstall run will remove.

        Args:
            descriptions: One line per unit to be removed.
            removal_hint: How to remove system packages, which are kept.
        """
        self.console.print("\nThis will remove the following components:\n")
        for line in descriptions:
            self.console.print(f"  • {line}")
        self.console.print(
            "\n[yellow]Note: System packages (brew/apt) will NOT be removed.[/yellow]"
        )
        if removal_hint:
            self.console.print(f"[dim]To remove them yourself: {removal_hint}[/dim]")
        self.console.print()

    def show_outcomes(self, outcomes: list[UnitOutcome], title: str) -> None:
        """Display a table with one row per unit.

        Args:
            outcomes: Outcomes in run order.
            title: Table title.
        """
        table = Table(title=title)
        table.add_column("Component", style="cyan")
        table.add_column("Outcome")
        table.add_column("Detail")

        for outcome in outcomes:
            style, label = _OUTCOME_STYLES[outcome.kind]
            table.add_row(outcome.unit_name, f"[{style}]{label}[/{style}]", outcome.detail or "")

        self.console.print(table)

    def show_counts(self, counts: dict[OutcomeKind, int]) -> None:
        parts = [f"{kind.value.replace('_', ' ')}: {n}" for kind, n in counts.items() if n]
        self.console.print(", ".join(parts) if parts else "Nothing to do")

    def show_failures(self, failures: list[UnitOutcome]) -> None:
        """List failed units with their errors."""
        self.console.print("[yellow]Completed with errors:[/yellow]")
        for outcome in failures:
            self.console.print(f"  [red]•[/red] {outcome.unit_name}: {outcome.detail}")

    def show_next_steps(self) -> None:
        self.console.print(
            "\nNext steps:\n\n"
            "1. Sync Doom Emacs with your config:\n"
            "   ~/.config/emacs/bin/doom sync\n\n"
            "2. Reload your shell:\n"
            "   source ~/.bashrc\n\n"
            "3. Verify tmux:\n"
            "   tmux\n"
        )

    def show_status(self, report: StatusReport) -> None:
        """Display installation status tables.

        Args:
            report: Collected status.
        """
        self.console.print(f"\n[bold]Installation Status ({report.platform})[/bold]")
        commands = Table(title="Commands")
        commands.add_column("Command", style="cyan")
        commands.add_column("Status")
        for cmd in report.commands:
            if cmd.not_applicable:
                commands.add_row(cmd.name, "[dim]○ n/a[/dim]")
            elif cmd.installed:
                commands.add_row(cmd.name, f"[green]✓[/green] {cmd.version or 'installed'}")
            else:
                commands.add_row(cmd.name, "[red]✗ not found[/red]")
        self.console.print(commands)

        directories = Table(title="Directories")
        directories.add_column("Component", style="cyan")
        directories.add_column("Path")
        for entry in report.directories:
            if entry.exists:
                directories.add_row(entry.name, f"[green]✓[/green] {entry.path}")
            else:
                directories.add_row(entry.name, "[dim]○ not installed[/dim]")
        self.console.print(directories)

        links = Table(title="Symlinks")
        links.add_column("Path", style="cyan")
        links.add_column("State")
        for link in report.links:
            if link.target is not None:
                links.add_row(str(link.path), f"[green]✓[/green] -> {link.target}")
            elif link.exists:
                links.add_row(str(link.path), "[yellow]○ exists, not symlink[/yellow]")
            else:
                links.add_row(str(link.path), "[dim]○ missing[/dim]")
        self.console.print(links)
