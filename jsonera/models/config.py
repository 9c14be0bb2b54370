"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DiffConfig:
    """Era diff engine configuration."""

    max_depth: int = 128
    strict_era: bool = False


@dataclass
class OutputConfig:
    """Persistence and output configuration."""

    pretty: bool = False


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"
    format: str = "json"


@dataclass
class JsonEraConfig:
    """Top-level jsonera configuration."""

    diff: DiffConfig = field(default_factory=DiffConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log: LogConfig = field(default_factory=LogConfig)
