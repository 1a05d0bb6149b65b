"""Tests for config module."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dotstrap import config as config_module
from dotstrap.config import RunConfig, Settings
from dotstrap.errors import ConfigError


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, temp_home: Path) -> None:
        """Test defaults without any file."""
        settings = Settings()
        assert settings.dotfiles_dir == temp_home / "dotfiles"
        assert settings.stow_packages == ["bash", "doom", "tmux"]
        assert settings.dotfiles_repo.startswith("git@github.com:")
        assert settings.min_artifact_bytes == 1_000_000

    def test_missing_default_file(self, temp_home: Path) -> None:
        """Test a missing default config file yields defaults."""
        assert Settings.load() == Settings()

    def test_default_file_follows_home(self, temp_home: Path) -> None:
        """Test the default file is looked up under the current home."""
        path = temp_home / ".config" / "dotstrap" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("stowPackages: [bash]\n")

        assert config_module.default_config_file() == path
        assert Settings.load().stow_packages == ["bash"]

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """Test a missing explicit config file is an error."""
        with pytest.raises(ConfigError, match="not found"):
            Settings.load(tmp_path / "missing.yaml")

    def test_load_aliases_and_expands_home(self, temp_home: Path, tmp_path: Path) -> None:
        """Test camelCase keys, tilde expansion and package splitting."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "dotfilesRepo: https://github.com/me/dots.git\n"
            "dotfilesDir: ~/src/dots\n"
            "stowPackages: bash tmux\n"
        )

        settings = Settings.load(path)

        assert settings.dotfiles_repo == "https://github.com/me/dots.git"
        assert settings.dotfiles_dir == temp_home / "src" / "dots"
        assert settings.stow_packages == ["bash", "tmux"]

    def test_snake_case_keys(self, tmp_path: Path) -> None:
        """Test field names are accepted as well as aliases."""
        path = tmp_path / "config.yaml"
        path.write_text("nvim_fallback_version: v0.10.4\n")
        assert Settings.load(path).nvim_fallback_version == "v0.10.4"

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file yields defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Settings.load(path) == Settings()

    @pytest.mark.parametrize(
        "content",
        [
            "dotfilesRepo: [unclosed\n",
            "- just\n- a list\n",
            "unknownKey: 1\n",
            "minArtifactBytes: 0\n",
        ],
    )
    def test_invalid_files(self, tmp_path: Path, content: str) -> None:
        """Test malformed or invalid configuration raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError):
            Settings.load(path)


class TestRunConfig:
    """Tests for RunConfig."""

    def test_defaults(self) -> None:
        """Test a plain install run."""
        config = RunConfig()
        assert not config.dry_run
        assert not config.force
        assert not config.uninstall_mode
        assert config.skip_set == frozenset()

    def test_skips(self) -> None:
        """Test skip membership."""
        config = RunConfig(skip_set=frozenset({"nvim"}))
        assert config.skips("nvim")
        assert not config.skips("doom")

    def test_frozen(self) -> None:
        """Test run flags cannot change after construction."""
        config = RunConfig()
        with pytest.raises(ValidationError):
            config.force = True  # type: ignore[misc]
