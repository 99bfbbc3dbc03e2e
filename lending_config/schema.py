"""
LendingConfig schema.

Frozen dataclasses that YAML configuration files are parsed into by
``lending_config.loader``. Values here are data only; the kernel never sees
this module, it receives plain arguments built from it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SeedItem:
    """One catalog entry created at start-up."""

    category: str
    name: str
    stock: int


@dataclass(frozen=True)
class LendingConfig:
    """A complete lending desk configuration set."""

    name: str
    first_equipment_id: int = 1001
    default_actor: str = "user"
    seed_actor: str = "seed"
    log_level: str = "INFO"
    seed_items: tuple[SeedItem, ...] = ()
    checksum: str = ""
