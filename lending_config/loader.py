"""
Configuration Loader (``lending_config.loader``).

Responsibility
--------------
Loads YAML configuration files and parses them into the frozen
``lending_config.schema`` dataclasses. The public runtime entry point is
``lending_config.get_active_config()``; this module is its tooling.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Wrong value types or ranges  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from lending_config.schema import LendingConfig, SeedItem

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def _require_int(value: Any, field_name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{field_name} must be >= {minimum}, got {value}")
    return value


def _require_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string, got {value!r}")
    return value


def parse_seed_item(data: dict[str, Any]) -> SeedItem:
    """Parse a SeedItem from a dict."""
    return SeedItem(
        category=_require_str(data["category"], "seed_items.category"),
        name=_require_str(data["name"], "seed_items.name"),
        stock=_require_int(data["stock"], "seed_items.stock", 0),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of the parsed configuration."""
    canonical = json.dumps(data, sort_keys=True, ensure_ascii=False, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_config(data: dict[str, Any]) -> LendingConfig:
    """
    Parse a ``LendingConfig`` from a dict.

    ``name`` is required; every other key falls back to the schema default.
    """
    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {log_level!r}")

    return LendingConfig(
        name=_require_str(data["name"], "name"),
        first_equipment_id=_require_int(
            data.get("first_equipment_id", 1001), "first_equipment_id", 1
        ),
        default_actor=_require_str(data.get("default_actor", "user"), "default_actor"),
        seed_actor=_require_str(data.get("seed_actor", "seed"), "seed_actor"),
        log_level=log_level,
        seed_items=tuple(parse_seed_item(item) for item in data.get("seed_items") or ()),
        checksum=compute_checksum(data),
    )


def load_config_file(path: Path) -> LendingConfig:
    """Load and parse one configuration file."""
    return parse_config(load_yaml_file(path))
