"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the typed
``ledger_config.schema`` dataclasses.  The single public entry point for
runtime config is ``ledger_config.get_active_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Section of the wrong shape or unknown key  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import AppConfig, DatabaseConfig, LoggingConfig

_SECTIONS = ("database", "logging", "reporting")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping: {path}")
    return data


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Configuration section {name!r} must be a mapping")
    return dict(value)


def _build(cls: type, name: str, values: dict[str, Any]):
    try:
        return cls(**values)
    except TypeError as e:
        raise ValueError(f"Invalid keys in section {name!r}: {sorted(values)}") from e


def parse_app_config(
    data: dict[str, Any],
    source_path: str | None = None,
) -> AppConfig:
    """Parse a loaded YAML document into an ``AppConfig``."""
    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")

    return AppConfig(
        database=_build(DatabaseConfig, "database", _section(data, "database")),
        logging=_build(LoggingConfig, "logging", _section(data, "logging")),
        reporting=_section(data, "reporting"),
        checksum=compute_checksum(data),
        source_path=source_path,
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
