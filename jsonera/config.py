"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from jsonera.models.config import DiffConfig, JsonEraConfig, LogConfig, OutputConfig
from jsonera.observability.logging import LOG_FORMATS


class ConfigError(ValueError):
    """Raised when a JSONERA_* environment variable holds an invalid value."""


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"JSONERA_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    raw = _env(key, str(default))
    try:
        val = int(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for JSONERA_{key}: {raw!r}") from exc
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_log_format(value: str) -> str:
    if value.lower() not in LOG_FORMATS:
        raise ConfigError(f"Invalid log format: {value}. Must be one of {list(LOG_FORMATS)}")
    return value.lower()


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ConfigError(f"Invalid log level: {value}. Must be one of {sorted(valid)}")
    return value.lower()


def load_config() -> JsonEraConfig:
    """Load configuration from JSONERA_* environment variables."""
    return JsonEraConfig(
        diff=DiffConfig(
            max_depth=_env_int("MAX_DEPTH", 128, min_val=1, max_val=250),
            strict_era=_env_bool("STRICT_ERA", False),
        ),
        output=OutputConfig(
            pretty=_env_bool("PRETTY", False),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
