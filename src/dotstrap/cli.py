"""CLI entry point using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from dotstrap import __version__
from dotstrap.config import RunConfig, Settings
from dotstrap.context import create_context
from dotstrap.errors import ConfigError, PreflightError
from dotstrap.orchestrator import Orchestrator
from dotstrap.platforms import describe
from dotstrap.preflight import run_preflight
from dotstrap.registry import known_unit_names
from dotstrap.reporter import summarize
from dotstrap.status import collect_status

app = typer.Typer(
    name="dotstrap",
    help="Bootstrap a development environment from a dotfiles repository",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

console = Console()

EXIT_USAGE = 2


def setup_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"dotstrap v{__version__}")
        raise typer.Exit()


def _validate_skips(skip: list[str]) -> frozenset[str]:
    """Reject component names that do not exist.

    Raises:
        typer.BadParameter: If any name is unknown.
    """
    valid = known_unit_names()
    unknown = sorted(set(skip) - set(valid))
    if unknown:
        raise typer.BadParameter(
            f"Unknown component(s): {', '.join(unknown)}. Valid: {', '.join(valid)}",
            param_hint="'--skip'",
        )
    return frozenset(skip)


@app.command()
def main(
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Show what would be done without doing it")
    ] = False,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Reinstall components even if present")
    ] = False,
    uninstall: Annotated[
        bool, typer.Option("--uninstall", "-u", help="Remove installed components")
    ] = False,
    skip: Annotated[
        list[str] | None,
        typer.Option(
            "--skip",
            "-s",
            help=(
                "Skip a component (repeatable). "
                "On uninstall, skipping dotfiles also keeps its links"
            ),
        ),
    ] = None,
    status: Annotated[bool, typer.Option("--status", help="Show installation status")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    config: Annotated[
        Path | None, typer.Option("--config", help="Path to a YAML configuration file")
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Install editors, shell tooling and dotfiles symlinks."""
    setup_logging(verbose)
    skip_set = _validate_skips(skip or [])

    try:
        settings = Settings.load(config)
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(EXIT_USAGE) from e

    run_config = RunConfig(
        dry_run=dry_run,
        force=force,
        uninstall_mode=uninstall,
        skip_set=skip_set,
        verbose=verbose,
    )
    ctx = create_context(settings)

    if status:
        ctx.tui.show_status(collect_status(ctx))
        return

    ctx.tui.show_banner(__version__, describe(ctx.platform_tag), run_config)

    if not uninstall:
        try:
            run_preflight(ctx.platform, ctx.runner, ctx.tui)
        except PreflightError as e:
            ctx.tui.show_error(str(e))
            raise typer.Exit(1) from e

    outcomes = Orchestrator.create(ctx, run_config).run()
    code = summarize(outcomes, ctx.tui, dry_run=dry_run, uninstall=uninstall)

    if not dry_run and not uninstall:
        ctx.tui.show_status(collect_status(ctx))

    if code:
        raise typer.Exit(code)


if __name__ == "__main__":
    app()
