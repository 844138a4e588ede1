from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from bindery.constants import (
    DEFAULT_MAX_DEPTH,
    ENV_PREFIX,
    MAX_DEPTH_CEILING,
    PROJECT_CONFIG_FILENAME,
)
from bindery.exceptions import ConfigError
from bindery.logging import get_logger

__all__ = [
    "BinderyConfig",
    "EngineSettings",
    "load_config",
    "get_user_config_path",
    "read_config_file",
]

logger = get_logger(__name__)


class EngineSettings(BaseModel):
    """Settings for the resolution engine.

    Attributes:
        max_depth: Maximum nesting of function calls, expressions and templates
            within one resolution before RecursionLimitExceeded is raised.
        strict_templates: Raise TemplateSyntaxError for unbalanced ``${``
            placeholders instead of treating the rest of the template as the
            expression body.
    """

    model_config = {"frozen": True}

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_CEILING)
    strict_templates: bool = False


def read_config_file(path: Path) -> dict[str, Any]:
    """Read one YAML config file into a mapping.

    An empty file yields an empty mapping.

    Raises:
        ConfigError: If the file is not valid YAML or its top level is not
            a mapping.
    """
    try:
        loaded = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(
            message=f"Invalid YAML in {path}: {e}",
            value=str(path),
        ) from e

    if loaded is None:
        logger.warning("config_file_empty", path=str(path))
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(
            message=f"Config file {path} must contain a mapping",
            value=loaded,
        )
    return loaded


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source backed by an optional YAML file.

    A path that does not exist contributes nothing.
    """

    def __init__(self, settings_cls: type[BaseSettings], yaml_file: Path) -> None:
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._data = read_config_file(yaml_file) if yaml_file.is_file() else {}

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._data


class BinderyConfig(BaseSettings):
    """Root configuration object containing all Bindery settings.

    Attributes:
        engine: Limits applied to every resolution made from this config.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init arguments (explicit keyword arguments)
        2. Environment variables (BINDERY_*)
        3. Project YAML config (./bindery.yaml)
        4. User YAML config (~/.config/bindery/config.yaml)

        pydantic-settings processes sources from left to right; the first
        source to provide a value for a field wins.
        """
        user_config_path = get_user_config_path()
        project_config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, user_config_path),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/bindery/config.yaml
    """
    return Path.home() / ".config" / "bindery" / "config.yaml"


def load_config(config_path: Path | None = None) -> BinderyConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to a config file. When given, its values
            take precedence over every other source.

    Returns:
        BinderyConfig instance with merged configuration.

    Raises:
        ConfigError: If configuration is invalid.
    """
    try:
        if config_path is None:
            if not (Path.cwd() / PROJECT_CONFIG_FILENAME).exists():
                logger.info("No project configuration found, using defaults.")
            return BinderyConfig()

        if not config_path.is_file():
            raise ConfigError(
                message=f"Config file not found: {config_path}",
                field=None,
                value=str(config_path),
            )
        # Explicit file data arrives as init settings and so outranks the
        # environment and both discovered YAML layers.
        data = read_config_file(config_path)
        return BinderyConfig(**data)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
