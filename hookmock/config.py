"""Configuration models and loading for hookmock."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hookmock.errors import ConfigurationError

CONFIG_FILENAME = ".hookmock.yaml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class HooksConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default_priority: int = 10
    default_accepted_args: int = 1
    raise_on_over_call: bool = True


class LifecycleConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    verify_on_teardown: bool = True


class HookMockConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    hooks: HooksConfig = Field(default_factory=HooksConfig)
    lifecycle: LifecycleConfig = Field(default_factory=LifecycleConfig)
    log_level: LogLevel = "WARNING"
    constants: dict[str, Any] = Field(default_factory=dict)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"YAML at {path} must decode to a mapping")
    return data


def load_effective_config(
    project_path: str | Path = ".",
    system_defaults: dict[str, Any] | None = None,
    runtime_override: dict[str, Any] | None = None,
) -> HookMockConfig:
    """Load config with precedence runtime > project .hookmock.yaml > system."""
    project_config = _load_yaml(Path(project_path) / CONFIG_FILENAME)

    merged: dict[str, Any] = {}
    if system_defaults:
        merged = _deep_merge(merged, system_defaults)
    if project_config:
        merged = _deep_merge(merged, project_config)
    if runtime_override:
        merged = _deep_merge(merged, runtime_override)

    try:
        return HookMockConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid hookmock configuration: {exc}") from exc
