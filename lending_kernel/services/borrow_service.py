"""
BorrowService -- single borrow or return against one catalog entry.

Responsibility:
    Looks up the entry, lets the entry decide whether the stock operation is
    allowed, applies it, records the audit entry and returns an ``Outcome``.

Architecture position:
    Kernel > Services -- coordinator over ``LendingState``. Does not touch
    the transaction ledger; that is the caller's second step.

Invariants enforced:
    - A refused borrow or return changes no stock and writes no audit entry.
    - A successful borrow reports ``deposit_total = deposit_per_item * qty``.

Failure modes (returned, never raised):
    - NOT_FOUND          -- unknown equipment id.
    - VALIDATION         -- non-positive quantity.
    - CAPABILITY_DENIED  -- category rule or availability refuses the borrow.
    - STATE_INVARIANT    -- return exceeds what is on loan.
"""

from __future__ import annotations

from lending_kernel.domain.equipment import EquipmentSnapshot
from lending_kernel.domain.outcome import Outcome
from lending_kernel.exceptions import EquipmentNotFoundError, LendingKernelError
from lending_kernel.logging_config import LogContext, get_logger
from lending_kernel.services.auditor_service import AuditAction
from lending_kernel.services.base import BaseService

logger = get_logger("services.borrow")


class BorrowService(BaseService):
    """Borrow/return coordinator."""

    def borrow(self, actor: str, equipment_id: int, qty: int) -> Outcome:
        with LogContext.bind(
            operation="borrow", actor=actor, equipment_id=equipment_id,
        ), self._state.lock:
            entry = self._state.catalog.find_by_id(equipment_id)
            if entry is None:
                return self._rejected("borrow", EquipmentNotFoundError(equipment_id))

            denial = entry.borrow_denial(qty)
            if denial is not None:
                return self._rejected("borrow", denial, entry.snapshot())

            entry.borrow(actor, qty)
            deposit_total = entry.deposit_per_item() * qty
            self._state.audit.record(
                actor, AuditAction.BORROW, equipment_id, qty,
                f"borrow '{entry.describe()}'",
            )
            logger.info(
                "borrow_succeeded",
                extra={"qty": qty, "deposit_total": deposit_total},
            )
            return Outcome.succeeded(
                f"Borrowed {qty} x {entry.name} | total deposit {deposit_total}",
                equipment=entry.snapshot(),
                deposit_total=deposit_total,
            )

    def give_back(self, actor: str, equipment_id: int, qty: int) -> Outcome:
        with LogContext.bind(
            operation="return", actor=actor, equipment_id=equipment_id,
        ), self._state.lock:
            entry = self._state.catalog.find_by_id(equipment_id)
            if entry is None:
                return self._rejected("return", EquipmentNotFoundError(equipment_id))

            try:
                entry.give_back(qty)
            except LendingKernelError as exc:
                return self._rejected("return", exc, entry.snapshot())

            self._state.audit.record(
                actor, AuditAction.RETURN, equipment_id, qty,
                f"return '{entry.describe()}'",
            )
            logger.info("return_succeeded", extra={"qty": qty})
            return Outcome.succeeded(
                f"Returned {qty} x {entry.name}",
                equipment=entry.snapshot(),
            )

    def find_item_name(self, equipment_id: int) -> str | None:
        entry = self._state.catalog.find_by_id(equipment_id)
        return entry.name if entry is not None else None

    def _rejected(
        self,
        operation: str,
        error: LendingKernelError,
        snapshot: EquipmentSnapshot | None = None,
    ) -> Outcome:
        logger.info(
            f"{operation}_rejected",
            extra={"error_code": error.code, "error_kind": error.kind.value},
        )
        return Outcome.failed(error, equipment=snapshot)
