"""
Defines the Pydantic models and loading functions for the dam.toml config.

This module is responsible for:
1. Defining the structure of a world's settings (database, storage,
   Creative Commons behaviour, script thread pool).
2. Finding and loading the TOML file.
3. Supporting environment variable overrides for every world setting.
"""

import logging
import os
from pathlib import Path
from typing import Any, cast

import tomli
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "dam.toml"
CONFIG_FILE_ENV_VAR = "DAM_CONFIG_FILE"

# --- Settings Models ---


class CreativeCommonsSettings(BaseModel):
    """Settings for the Creative Commons license service."""

    enabled: bool = True
    submit_set_name: bool = Field(
        default=True, description="Also remove the license name field when a license is removed."
    )
    submit_add_bitstream: bool = Field(
        default=True, description="Also remove the CC-LICENSE bundle when license metadata is removed."
    )
    fields: dict[str, str] = Field(
        default_factory=lambda: {"uri": "dc.rights.uri", "name": "dc.rights"},
        description="Maps a license field id to the metadata field holding it.",
    )


class ScriptSettings(BaseModel):
    """Settings for the thread pool that runs administrative scripts."""

    core_pool_size: int = Field(default=5, ge=1)


class WorldSettings(BaseModel):
    """The complete configuration for a single repository world."""

    database_url: str
    asset_storage_path: Path
    creative_commons: CreativeCommonsSettings = Field(default_factory=CreativeCommonsSettings)
    scripts: ScriptSettings = Field(default_factory=ScriptSettings)


class TOMLConfig(BaseModel):
    """Root model for the application's configuration file (`dam.toml`)."""

    worlds: dict[str, dict[str, Any]]

    @field_validator("worlds", mode="before")
    @classmethod
    def ensure_worlds_are_present(cls, value: Any) -> dict[str, Any]:
        """Ensure the configuration contains at least one world definition."""
        if not isinstance(value, dict) or not value:
            raise ValueError("Configuration must contain at least one `[worlds.<name>]` table.")
        return cast(dict[str, Any], value)


# --- Loading Functions ---


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Find the configuration file.

    The `DAM_CONFIG_FILE` environment variable wins; otherwise the directory tree is
    searched upwards from `start_dir` (default: the working directory).

    Returns:
        The path to the found configuration file, or None if not found.

    """
    env_path = os.environ.get(CONFIG_FILE_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    search_dir = (start_dir or Path.cwd()).resolve()
    while True:
        for fname in [CONFIG_FILE_NAME, f".{CONFIG_FILE_NAME}"]:
            p = search_dir / fname
            if p.is_file():
                return p
        if search_dir == search_dir.parent:
            return None
        search_dir = search_dir.parent


def load_toml_config(config_path: Path | None = None) -> TOMLConfig:
    """
    Load and validate the raw TOML configuration.

    Raises:
        FileNotFoundError: If no configuration file can be found.

    """
    path_to_load = config_path or find_config_file()
    if not path_to_load or not path_to_load.is_file():
        raise FileNotFoundError(f"Configuration file '{CONFIG_FILE_NAME}' not found.")

    with path_to_load.open("rb") as f:
        data = tomli.load(f)

    logger.debug("Loaded configuration from %s", path_to_load)
    return TOMLConfig.model_validate(data)


def _env_over_file_sources(
    cls: type[BaseSettings],
    settings_cls: type[BaseSettings],
    init_settings: PydanticBaseSettingsSource,
    env_settings: PydanticBaseSettingsSource,
    dotenv_settings: PydanticBaseSettingsSource,
    file_secret_settings: PydanticBaseSettingsSource,
) -> tuple[PydanticBaseSettingsSource, ...]:
    return env_settings, init_settings


def build_world_settings(world_name: str, data: dict[str, Any]) -> WorldSettings:
    """
    Validate one world's settings, applying environment variable overrides.

    Overrides use the prefix ``DAM_WORLDS_<WORLD>_`` and ``__`` for nesting, e.g.
    ``DAM_WORLDS_DEFAULT_SCRIPTS__CORE_POOL_SIZE=2``.
    """
    env_prefix = f"DAM_WORLDS_{world_name.upper()}_"
    runtime_settings = type(
        f"{world_name}RuntimeSettings",
        (WorldSettings, BaseSettings),
        {
            "model_config": SettingsConfigDict(env_prefix=env_prefix, env_nested_delimiter="__", extra="ignore"),
            "settings_customise_sources": classmethod(_env_over_file_sources),
        },
    )
    validated = runtime_settings(**data)
    return WorldSettings.model_validate(validated.model_dump())


def load_world_settings(world_name: str, config_path: Path | None = None) -> WorldSettings:
    """Load the settings of one world from the configuration file."""
    toml_config = load_toml_config(config_path)
    world_data = toml_config.worlds.get(world_name)
    if world_data is None:
        raise ValueError(f"World '{world_name}' not found in configuration.")
    return build_world_settings(world_name, world_data)


def list_world_names(config_path: Path | None = None) -> list[str]:
    """List the worlds defined in the configuration file, or an empty list without one."""
    try:
        toml_config = load_toml_config(config_path)
    except FileNotFoundError:
        return []
    return list(toml_config.worlds.keys())
