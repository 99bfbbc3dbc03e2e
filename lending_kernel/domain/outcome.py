"""
Outcome -- explicit result values returned by the coordinators.

Responsibility:
    Carries the user-facing result of a borrow, return or stock adjustment.
    Failures carry an ``ErrorKind`` and the machine-readable code of the
    typed error that caused them, so callers branch on ``kind`` instead of
    catching exceptions or parsing messages.

Architecture position:
    Kernel > Domain -- pure value objects. ZERO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from lending_kernel.domain.equipment import EquipmentSnapshot
from lending_kernel.exceptions import ErrorKind, LendingKernelError


@dataclass(frozen=True)
class Outcome:
    """
    Result of a coordinator operation.

    Contract:
        ``kind is None`` if and only if the operation succeeded. A
        successful borrow carries ``deposit_total``; every other outcome
        leaves it None. ``equipment`` is the item's state after the call
        when the item exists.
    """

    message: str
    kind: ErrorKind | None = None
    code: str | None = None
    equipment_id: int | None = None
    deposit_total: int | None = None
    equipment: EquipmentSnapshot | None = None

    @property
    def is_success(self) -> bool:
        return self.kind is None

    @classmethod
    def succeeded(
        cls,
        message: str,
        *,
        equipment: EquipmentSnapshot | None = None,
        deposit_total: int | None = None,
    ) -> Outcome:
        return cls(
            message=message,
            equipment_id=equipment.id if equipment is not None else None,
            deposit_total=deposit_total,
            equipment=equipment,
        )

    @classmethod
    def failed(
        cls,
        error: LendingKernelError,
        *,
        equipment: EquipmentSnapshot | None = None,
    ) -> Outcome:
        return cls(
            message=str(error),
            kind=error.kind,
            code=error.code,
            equipment_id=getattr(error, "equipment_id", None)
            if equipment is None else equipment.id,
            equipment=equipment,
        )
