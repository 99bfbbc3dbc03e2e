"""
lending_config -- single public entrypoint for lending desk configuration.

Responsibility:
    ``get_active_config()`` is the only way to obtain configuration at
    runtime. It reads a named YAML set from ``lending_config/sets/`` (or a
    caller-supplied directory) and returns a frozen ``LendingConfig``.

Architecture position:
    Configuration -- sits beside ``lending_kernel`` and below
    ``lending_services``. The kernel MUST NEVER import from
    ``lending_config``; ``lending_services`` translates configuration into
    kernel constructor arguments.

Failure modes:
    - ``FileNotFoundError`` -- no configuration set with the requested name.
    - ``KeyError`` / ``ValueError`` -- structural validation failures.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lending_config.loader import load_config_file
from lending_config.schema import LendingConfig, SeedItem

_logger = logging.getLogger("lending_kernel.config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"


def get_active_config(
    name: str = "default",
    config_dir: Path | None = None,
) -> LendingConfig:
    """
    Load the configuration set ``<config_dir>/<name>.yaml``.

    Emits a ``lending_config_loaded`` log entry carrying the set name,
    checksum and seed item count.
    """
    directory = config_dir or _DEFAULT_CONFIG_DIR
    path = directory / f"{name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"No lending configuration set {name!r} in {directory}")

    config = load_config_file(path)
    _logger.info(
        "lending_config_loaded",
        extra={
            "config_name": config.name,
            "checksum": config.checksum,
            "seed_item_count": len(config.seed_items),
        },
    )
    return config


__all__ = ["LendingConfig", "SeedItem", "get_active_config"]
