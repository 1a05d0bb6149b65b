"""Shared test fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from dotstrap.config import RunConfig, Settings
from dotstrap.context import AppContext
from dotstrap.filesystem import RealFileSystem
from dotstrap.linker import Linker
from dotstrap.platforms import BasePlatform, PlatformTag, get_platform
from dotstrap.tui import TUI

# Backup names in tests end in .bak.20240501123045
FIXED_NOW = datetime(2024, 5, 1, 12, 30, 45)


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def settings(temp_home: Path) -> Settings:
    """Default settings pointing at the temporary home."""
    return Settings(dotfiles_dir=temp_home / "dotfiles")


@pytest.fixture
def run_config() -> RunConfig:
    """Plain install run."""
    return RunConfig()


# ============================================================================
# Service Doubles
# ============================================================================


@pytest.fixture
def mock_runner() -> MagicMock:
    """Command runner where every command exists and succeeds."""
    runner = MagicMock()
    runner.run.return_value = 0
    runner.has_command.return_value = True
    runner.which.side_effect = lambda name: f"/usr/bin/{name}"
    runner.version_line.side_effect = lambda name: f"{name} 1.0"
    return runner


@pytest.fixture
def mock_gitops() -> MagicMock:
    """Repository double whose clones create the destination directory."""

    def fake_clone(url: str, dest: Path, depth: int | None = None, recursive: bool = False) -> Path:
        dest.mkdir(parents=True, exist_ok=True)
        return dest

    gitops = MagicMock()
    gitops.clone.side_effect = fake_clone
    gitops.clone_with_fallback.side_effect = lambda url, dest: fake_clone(url, dest)
    gitops.pull.side_effect = lambda path: path
    return gitops


@pytest.fixture
def console_output() -> io.StringIO:
    """Buffer capturing everything the TUI prints."""
    return io.StringIO()


@pytest.fixture
def tui(console_output: io.StringIO) -> TUI:
    """TUI printing into a buffer instead of the terminal."""
    return TUI(console=Console(file=console_output, width=200, color_system=None))


@pytest.fixture
def fs() -> RealFileSystem:
    return RealFileSystem()


# ============================================================================
# App Context Fixtures
# ============================================================================


@pytest.fixture
def make_context(
    temp_home: Path,
    settings: Settings,
    mock_runner: MagicMock,
    mock_gitops: MagicMock,
    tui: TUI,
    fs: RealFileSystem,
) -> Callable[..., AppContext]:
    """Factory for an AppContext on the real temp filesystem with doubles.

    Keyword arguments override the platform tag or any service.
    """

    def factory(tag: PlatformTag = PlatformTag.LINUX, **overrides: object) -> AppContext:
        runner = overrides.pop("runner", mock_runner)
        platform: BasePlatform = overrides.pop(
            "platform", get_platform(tag, runner, fs, settings)
        )
        values: dict[str, object] = {
            "settings": settings,
            "platform": platform,
            "fs": fs,
            "runner": runner,
            "gitops": mock_gitops,
            "linker": Linker(fs, clock=lambda: FIXED_NOW),
            "tui": tui,
            "home": temp_home,
        }
        values.update(overrides)
        return AppContext(**values)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def app_context(make_context: Callable[..., AppContext]) -> AppContext:
    """Linux context with all doubles."""
    return make_context()


# ============================================================================
# Sample Content Fixtures
# ============================================================================


@pytest.fixture
def dotfiles_repo(settings: Settings) -> Path:
    """Dotfiles repository with bash, doom and tmux packages."""
    repo = settings.dotfiles_dir
    (repo / ".git").mkdir(parents=True)
    (repo / "README.md").write_text("# dotfiles\n")

    bash = repo / "bash"
    bash.mkdir()
    (bash / ".bashrc").write_text("# bashrc\n")
    (bash / ".bash_profile").write_text("# bash_profile\n")
    (bash / ".inputrc").write_text("set editing-mode vi\n")

    doom = repo / "doom" / ".doom.d"
    doom.mkdir(parents=True)
    (doom / "init.el").write_text(";; init\n")

    tmux = repo / "tmux"
    tmux.mkdir()
    (tmux / ".tmux.conf.local").write_text("# local\n")
    return repo

