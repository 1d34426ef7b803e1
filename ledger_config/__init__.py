"""
ledger_config -- single public entrypoint for application configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  YAML loading is internal to this package.

Architecture position:
    Configuration.  Sits beside ``ledger_kernel`` and below
    ``ledger_reporting``.  The kernel MUST NEVER import from
    ``ledger_config``.

Failure modes:
    - ``FileNotFoundError`` -- the given configuration file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ValueError`` -- unknown sections/keys or invalid values.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ledger_config.loader import load_yaml_file, parse_app_config
from ledger_config.schema import AppConfig, DatabaseConfig, LoggingConfig

_logger = logging.getLogger("ledger_kernel.config")


def get_active_config(path: Path | str | None = None) -> AppConfig:
    """The ONLY public configuration entrypoint.

    With no ``path`` the built-in defaults are returned.  Every successful
    load emits a ``ledger_config_loaded`` log record carrying the checksum
    of the parsed document.
    """
    if path is None:
        config = parse_app_config({})
    else:
        path = Path(path)
        config = parse_app_config(load_yaml_file(path), source_path=str(path))

    _logger.info(
        "ledger_config_loaded",
        extra={
            "source_path": config.source_path,
            "checksum": config.checksum,
            "database_dialect": config.database.url.split(":", 1)[0],
            "log_level": config.logging.level,
        },
    )
    return config


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "get_active_config",
]
