"""
LendingState / BaseService -- the shared state boundary for coordinators.

Responsibility:
    Bundles the catalog, audit log and transaction ledger with the clock and
    the single lock that serializes every operation on them. Each
    coordinator receives one ``LendingState`` at construction; there are no
    process-wide singletons.

Architecture position:
    Kernel > Services -- imperative shell infrastructure. Every coordinator
    in ``lending_kernel/services/`` extends ``BaseService``.

Invariants enforced:
    - One ``threading.RLock`` guards all three stores. Coordinators run
      check-then-mutate-then-audit inside ``with state.lock:`` so no other
      operation can interleave between validation and mutation.
    - Reads take the same lock and return snapshots or tuples.
"""

from __future__ import annotations

import threading
from abc import ABC
from dataclasses import dataclass, field

from lending_kernel.domain.clock import Clock, SystemClock
from lending_kernel.services.auditor_service import AuditLog
from lending_kernel.services.catalog import DEFAULT_FIRST_ID, EquipmentCatalog
from lending_kernel.services.ledger_service import TransactionLedger


@dataclass
class LendingState:
    """The catalog, audit log and ledger behind one serializing lock."""

    catalog: EquipmentCatalog
    audit: AuditLog
    ledger: TransactionLedger
    clock: Clock
    lock: threading.RLock = field(repr=False)

    @classmethod
    def create(
        cls,
        clock: Clock | None = None,
        first_id: int = DEFAULT_FIRST_ID,
    ) -> LendingState:
        clock = clock or SystemClock()
        lock = threading.RLock()
        return cls(
            catalog=EquipmentCatalog(first_id=first_id, lock=lock),
            audit=AuditLog(clock=clock, lock=lock),
            ledger=TransactionLedger(clock=clock, lock=lock),
            clock=clock,
            lock=lock,
        )


class BaseService(ABC):
    """
    Abstract base class for the coordinators.

    Contract:
        Holds the shared ``LendingState``. Subclasses wrap each public
        operation in ``with self._state.lock:``.
    """

    def __init__(self, state: LendingState):
        self._state = state

    @property
    def state(self) -> LendingState:
        return self._state
