"""Configuration settings and loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from case_combinator.errors import ConfigLoadError, ConfigValidationError, ErrorContext

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("table", "markdown", "json")


class CombinatorConfig(BaseSettings):
    """Settings for rendering combinators from the command line."""

    model_config = SettingsConfigDict(
        env_prefix="CASE_COMBINATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    output_format: str = "table"
    color: bool = True
    verbose: bool = False
    max_rows: int | None = None
    warn_threshold: int = 10_000
    show_summary: bool = True

    @field_validator("output_format", mode="before")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        if v not in OUTPUT_FORMATS:
            raise ConfigValidationError(
                message=f"Invalid output format: {v!r}. Valid: {list(OUTPUT_FORMATS)}",
                field="output_format",
                value=v,
            )
        return v

    @field_validator("max_rows", "warn_threshold")
    @classmethod
    def validate_positive(cls, v: int | None, info: ValidationInfo) -> int | None:
        if v is not None and v < 1:
            raise ConfigValidationError(
                message=f"{info.field_name} must be at least 1, got {v}",
                field=info.field_name,
                value=v,
            )
        return v


def load_config(config_path: str | Path | None = None) -> CombinatorConfig:
    """Load configuration from a YAML file and the environment.

    Priority: env vars (including .env) > config file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_data = _load_from_file(Path(config_path))

    # Init kwargs outrank env vars in pydantic-settings, so only pass the
    # file values that the environment does not override.
    overridden = CombinatorConfig.model_fields.keys() & _env_overrides()
    for name in overridden:
        config_data.pop(name, None)

    config = CombinatorConfig(**config_data)
    logger.debug(f"Loaded configuration: {config.model_dump()}")
    return config


def _load_from_file(path: Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    if not path.exists():
        raise ConfigLoadError(
            f"Configuration file not found: {path}",
            context=ErrorContext(target=str(path)),
        )

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(
            f"Failed to parse YAML configuration: {e}",
            context=ErrorContext(target=str(path)),
            cause=e,
        ) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigLoadError(
            f"Configuration must be a YAML mapping, got {type(config).__name__}",
            context=ErrorContext(target=str(path)),
        )
    return config


def _env_overrides() -> set[str]:
    """Names of config fields set through CASE_COMBINATOR_* variables.

    Both the process environment and the ``.env`` file count.
    """
    prefix = CombinatorConfig.model_config["env_prefix"]
    env_file = CombinatorConfig.model_config["env_file"]
    keys = set(os.environ)
    if env_file and Path(env_file).is_file():
        keys |= set(dotenv_values(env_file))
    return {
        key[len(prefix):].lower()
        for key in keys
        if key.upper().startswith(prefix)
    }
