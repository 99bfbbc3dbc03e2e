"""
EquipmentCatalog -- identity-indexed store of Equipment entries.

Responsibility:
    Owns every ``Equipment`` instance, allocates equipment ids and answers
    lookups and name searches.

Architecture position:
    Kernel > Services -- in-memory repository. Mutated only by
    ``AdminService``; read by ``BorrowService`` and directly by callers.

Invariants enforced:
    ID_MONOTONICITY -- ``next_id`` is strictly increasing from the
        configured start and never hands out an id twice, even after the
        item holding it has been deleted.
    - ``find_all`` and ``search_by_name`` preserve insertion order.
"""

from __future__ import annotations

import threading

from lending_kernel.domain.equipment import Equipment
from lending_kernel.logging_config import get_logger

logger = get_logger("services.catalog")

DEFAULT_FIRST_ID = 1001


class EquipmentCatalog:
    """
    Repository of catalog entries keyed by id.

    Contract:
        Entries are stored by reference; callers that receive an
        ``Equipment`` from ``find_by_id`` mutate the stored instance.
    """

    def __init__(
        self,
        first_id: int = DEFAULT_FIRST_ID,
        lock: threading.RLock | None = None,
    ):
        self._store: dict[int, Equipment] = {}
        self._next_id = first_id
        self._lock = lock or threading.RLock()

    def next_id(self) -> int:
        """Allocate the next equipment id."""
        with self._lock:
            value = self._next_id
            self._next_id += 1
        logger.debug("equipment_id_allocated", extra={"equipment_id": value})
        return value

    def save_new(self, entry: Equipment) -> Equipment:
        with self._lock:
            if entry.id in self._store:
                raise ValueError(f"Equipment id {entry.id} is already stored")
            self._store[entry.id] = entry
        return entry

    def find_by_id(self, equipment_id: int) -> Equipment | None:
        with self._lock:
            return self._store.get(equipment_id)

    def find_all(self) -> list[Equipment]:
        with self._lock:
            return list(self._store.values())

    def search_by_name(self, keyword: str | None) -> list[Equipment]:
        """Case-insensitive substring match on name; blank keyword returns all."""
        kw = (keyword or "").strip().casefold()
        with self._lock:
            if not kw:
                return list(self._store.values())
            return [e for e in self._store.values() if kw in e.name.casefold()]

    def delete(self, equipment_id: int) -> bool:
        with self._lock:
            return self._store.pop(equipment_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, equipment_id: object) -> bool:
        with self._lock:
            return equipment_id in self._store
