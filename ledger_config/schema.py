"""
Application configuration schema.

YAML documents are parsed into these frozen types by the loader.  The
reporting section is kept as a plain mapping: ``ReportingConfig.from_dict``
in ``ledger_reporting.config`` owns its validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DatabaseConfig:
    """Where the ledger snapshot is read from."""

    url: str = "sqlite:///ledger.db"
    echo: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    """Structured logging settings."""

    level: str = "INFO"

    def __post_init__(self):
        normalized = self.level.upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {self.level!r}")
        object.__setattr__(self, "level", normalized)

    @property
    def level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.level]


@dataclass(frozen=True)
class AppConfig:
    """Complete, parsed application configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    reporting: dict[str, Any] = field(default_factory=dict)
    checksum: str = ""
    source_path: str | None = None
