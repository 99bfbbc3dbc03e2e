"""
AuditLog -- append-only trail of every mutating action.

Responsibility:
    Records one immutable ``AuditEntry`` per successful borrow, return,
    stock adjustment, item creation and item deletion, and serves ordered
    read-only views of the trail.

Architecture position:
    Kernel > Services -- in-memory store, written by ``BorrowService`` and
    ``AdminService``; read by callers.

Invariants enforced:
    AUDIT_APPEND_ONLY -- entries are frozen dataclasses; the log exposes no
        update, delete or reorder operation, and every read returns a tuple.
    - ``seq`` is 1-based and strictly increasing; order of the log is the
      causal order of the recorded actions.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from lending_kernel.domain.clock import Clock, SystemClock
from lending_kernel.logging_config import get_logger

logger = get_logger("services.auditor")


class AuditAction(str, Enum):
    """Types of auditable actions."""

    BORROW = "BORROW"
    RETURN = "RETURN"
    ADJUST_ADD = "ADJUST_ADD"
    ADJUST_REMOVE = "ADJUST_REMOVE"
    CREATE_ITEM = "CREATE_ITEM"
    DELETE_ITEM = "DELETE_ITEM"


@dataclass(frozen=True)
class AuditEntry:
    """A single audit record."""

    seq: int
    occurred_at: datetime
    actor: str
    action: AuditAction
    equipment_id: int
    qty: int
    note: str

    def time_text(self) -> str:
        return self.occurred_at.strftime("%Y-%m-%d %H:%M:%S")


class AuditLog:
    """
    Append-only audit trail.

    Contract:
        ``record`` is the only writer. Timestamps come from the injected
        clock at the moment of recording.
    """

    def __init__(self, clock: Clock | None = None, lock: threading.RLock | None = None):
        self._clock = clock or SystemClock()
        self._lock = lock or threading.RLock()
        self._entries: list[AuditEntry] = []

    def record(
        self,
        actor: str,
        action: AuditAction,
        equipment_id: int,
        qty: int,
        note: str = "",
    ) -> AuditEntry:
        with self._lock:
            entry = AuditEntry(
                seq=len(self._entries) + 1,
                occurred_at=self._clock.now(),
                actor=actor,
                action=action,
                equipment_id=equipment_id,
                qty=qty,
                note=note,
            )
            self._entries.append(entry)

        logger.info(
            "audit_recorded",
            extra={
                "seq": entry.seq,
                "action": entry.action.value,
                "audit_actor": actor,
                "equipment_id": equipment_id,
                "qty": qty,
            },
        )
        return entry

    def all(self) -> tuple[AuditEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def for_equipment(self, equipment_id: int) -> tuple[AuditEntry, ...]:
        with self._lock:
            return tuple(e for e in self._entries if e.equipment_id == equipment_id)

    def for_actor(self, actor: str) -> tuple[AuditEntry, ...]:
        with self._lock:
            return tuple(e for e in self._entries if e.actor == actor)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
