"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (SDT__SECTION__KEY)
3. Project config (.sdt.yaml in the project root)
4. Global config (~/.config/sdt/config.yaml)
5. Built-in defaults (lowest priority)

The CI environment variable (CI=true) forces the dumbterm render style, since
CI logs rarely render ANSI escapes.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from sdt.config.models import (
    CommandConfig,
    CorrelationConfig,
    DiffConfig,
    LoggingConfig,
    RenderConfig,
    SdtConfig,
    ToolsConfig,
    default_commands,
    merge_default_commands,
)
from sdt.core.errors import ConfigError
from sdt.core.logging import get_logger

log = get_logger(__name__)

GLOBAL_CONFIG_PATH = Path("~/.config/sdt/config.yaml").expanduser()
PROJECT_CONFIG_NAME = ".sdt.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source."""

    class SdtSettings(BaseSettings):
        """Root config. Env vars: SDT__RENDER__STYLE, SDT__TOOLS__TIMEOUT_SEC, etc."""

        model_config = SettingsConfigDict(
            env_prefix="SDT__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        description: str = "Built-in semantic diff defaults"
        glob: str = "*"
        commands: dict[str, CommandConfig] = Field(default_factory=default_commands)
        render: RenderConfig = RenderConfig()
        tools: ToolsConfig = ToolsConfig()
        diff: DiffConfig = DiffConfig()
        correlation: CorrelationConfig = CorrelationConfig()
        logging: LoggingConfig = LoggingConfig()

        @field_validator("commands", mode="before")
        @classmethod
        def validate_commands(cls, v: Any) -> Any:
            return merge_default_commands(v)

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return SdtSettings


def _ci_enabled() -> bool:
    return os.environ.get("CI", "").strip().lower() == "true"


def load_config(project_root: Path | None = None, **kwargs: Any) -> SdtConfig:
    """Load config: defaults < global yaml < project yaml < env vars < kwargs.

    Args:
        project_root: Directory holding .sdt.yaml.
                      Defaults to current working directory.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    project_root = project_root or Path.cwd()
    project_path = project_root / PROJECT_CONFIG_NAME

    global_config = _load_yaml(GLOBAL_CONFIG_PATH)
    project_config = _load_yaml(project_path)
    yaml_config = _deep_merge(global_config, project_config)

    if project_config:
        source = str(project_path)
    elif global_config:
        source = str(GLOBAL_CONFIG_PATH)
    else:
        source = "built-in defaults"

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    config = SdtConfig.model_validate(settings.model_dump())
    if _ci_enabled() and "render" not in kwargs:
        config = config.model_copy(
            update={"render": config.render.model_copy(update={"style": "dumbterm"})}
        )

    log.debug("config_loaded", source=source, description=config.description)
    return config
