"""Settings and per-run configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dotstrap.download import MIN_ARTIFACT_BYTES
from dotstrap.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(".config") / "dotstrap" / "config.yaml"


def default_config_file() -> Path:
    """Config file location under the current home directory."""
    return Path.home() / CONFIG_PATH


class Settings(BaseModel):
    """Where things come from and where they go.

    Every field has a default, so an absent config file is valid.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    dotfiles_repo: str = Field(
        default="git@github.com:cybergoatpsyops/dotfiles-ng.git", alias="dotfilesRepo"
    )
    dotfiles_dir: Path = Field(default_factory=lambda: Path.home() / "dotfiles", alias="dotfilesDir")
    stow_packages: list[str] = Field(
        default_factory=lambda: ["bash", "doom", "tmux"], alias="stowPackages"
    )
    nvim_fallback_version: str = Field(default="v0.11.5", alias="nvimFallbackVersion")
    min_artifact_bytes: int = Field(default=MIN_ARTIFACT_BYTES, ge=1, alias="minArtifactBytes")
    doom_repo: str = Field(default="https://github.com/doomemacs/doomemacs", alias="doomRepo")
    oh_my_tmux_repo: str = Field(
        default="https://github.com/gpakosz/.tmux.git", alias="ohMyTmuxRepo"
    )
    bash_it_repo: str = Field(default="https://github.com/Bash-it/bash-it.git", alias="bashItRepo")
    blesh_repo: str = Field(
        default="https://github.com/akinomyoga/ble.sh.git", alias="bleshRepo"
    )

    @field_validator("dotfiles_dir", mode="before")
    @classmethod
    def _expand_home(cls, value: object) -> object:
        if isinstance(value, str):
            return Path(value).expanduser()
        if isinstance(value, Path):
            return value.expanduser()
        return value

    @field_validator("stow_packages", mode="before")
    @classmethod
    def _split_packages(cls, value: object) -> object:
        if isinstance(value, str):
            return value.split()
        return value

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Load settings from a YAML file.

        Args:
            path: Config file. Defaults to ~/.config/dotstrap/config.yaml.
                A missing default file yields default settings; a missing
                explicit file is an error.

        Returns:
            Parsed Settings.

        Raises:
            ConfigError: If the file is unreadable, not valid YAML, or
                contains invalid values.
        """
        config_path = path or default_config_file()
        if not config_path.exists():
            if path is not None:
                raise ConfigError(f"Configuration file not found: {config_path}")
            logger.debug("No configuration file at %s, using defaults", config_path)
            return cls()

        try:
            data = yaml.safe_load(config_path.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Invalid configuration file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {config_path} must contain a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


class RunConfig(BaseModel):
    """Flags for a single invocation. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    dry_run: bool = False
    force: bool = False
    uninstall_mode: bool = False
    skip_set: frozenset[str] = Field(default_factory=frozenset)
    verbose: bool = False

    def skips(self, name: str) -> bool:
        """Check whether a unit was excluded with --skip."""
        return name in self.skip_set
