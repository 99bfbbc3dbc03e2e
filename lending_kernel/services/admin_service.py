"""
AdminService -- catalog mutation: create/delete items, add/remove stock.

Responsibility:
    Creates catalog entries with catalog-issued ids, deletes them, adjusts
    their stock, and records an audit entry for every change that actually
    happened.

Architecture position:
    Kernel > Services -- coordinator over ``LendingState``.

Invariants enforced:
    - ``add_item`` validates name, stock and category before allocating an
      id, so a rejected creation consumes no id.
    - Audit entries are written only after a successful mutation.

Failure modes:
    - ``add_item`` raises ``ValidationError`` subclasses (it returns the new
      entry, so failure is an exception).
    - ``add_stock`` / ``remove_stock`` return failed ``Outcome`` values
      (NOT_FOUND, VALIDATION, STATE_INVARIANT).
"""

from __future__ import annotations

from lending_kernel.domain.category import Category
from lending_kernel.domain.equipment import Equipment, EquipmentSnapshot
from lending_kernel.domain.outcome import Outcome
from lending_kernel.exceptions import (
    EquipmentNotFoundError,
    InvalidNameError,
    LendingKernelError,
    NegativeStockError,
)
from lending_kernel.logging_config import LogContext, get_logger
from lending_kernel.services.auditor_service import AuditAction, AuditEntry
from lending_kernel.services.base import BaseService

logger = get_logger("services.admin")


class AdminService(BaseService):
    """Catalog administration coordinator."""

    def add_item(
        self,
        actor: str,
        category: Category | str,
        name: str,
        stock: int,
    ) -> EquipmentSnapshot:
        """
        Create a catalog entry and record CREATE_ITEM.

        Raises:
            NegativeStockError: stock < 0.
            UnknownCategoryError: category not recognised.
            InvalidNameError: blank name.
        """
        if stock < 0:
            raise NegativeStockError(stock)
        resolved = Category.parse(category)
        if not isinstance(name, str) or not name.strip():
            raise InvalidNameError(name)

        with LogContext.bind(operation="create_item", actor=actor), self._state.lock:
            entry = Equipment(self._state.catalog.next_id(), name, resolved, stock)
            self._state.catalog.save_new(entry)
            self._state.audit.record(
                actor, AuditAction.CREATE_ITEM, entry.id, stock, f"create '{name}'",
            )
            logger.info(
                "item_created",
                extra={
                    "equipment_id": entry.id,
                    "category": resolved.value,
                    "item_name": name,
                    "stock": stock,
                },
            )
            return entry.snapshot()

    def delete_item(self, actor: str, equipment_id: int) -> bool:
        with LogContext.bind(
            operation="delete_item", actor=actor, equipment_id=equipment_id,
        ), self._state.lock:
            removed = self._state.catalog.delete(equipment_id)
            if removed:
                self._state.audit.record(
                    actor, AuditAction.DELETE_ITEM, equipment_id, 0, "delete",
                )
                logger.info("item_deleted")
            return removed

    def add_stock(self, actor: str, equipment_id: int, qty: int) -> Outcome:
        with LogContext.bind(
            operation="add_stock", actor=actor, equipment_id=equipment_id,
        ), self._state.lock:
            entry = self._state.catalog.find_by_id(equipment_id)
            if entry is None:
                return Outcome.failed(EquipmentNotFoundError(equipment_id))
            try:
                entry.add_stock(qty)
            except LendingKernelError as exc:
                logger.info("add_stock_rejected", extra={"error_code": exc.code})
                return Outcome.failed(exc, equipment=entry.snapshot())

            self._state.audit.record(
                actor, AuditAction.ADJUST_ADD, equipment_id, qty, "add stock",
            )
            return Outcome.succeeded(
                f"Added {qty} to {entry.name}", equipment=entry.snapshot(),
            )

    def remove_stock(self, actor: str, equipment_id: int, qty: int) -> Outcome:
        with LogContext.bind(
            operation="remove_stock", actor=actor, equipment_id=equipment_id,
        ), self._state.lock:
            entry = self._state.catalog.find_by_id(equipment_id)
            if entry is None:
                return Outcome.failed(EquipmentNotFoundError(equipment_id))
            try:
                entry.remove_stock(qty)
            except LendingKernelError as exc:
                logger.info("remove_stock_rejected", extra={"error_code": exc.code})
                return Outcome.failed(exc, equipment=entry.snapshot())

            self._state.audit.record(
                actor, AuditAction.ADJUST_REMOVE, equipment_id, qty, "remove stock",
            )
            return Outcome.succeeded(
                f"Removed {qty} from {entry.name}", equipment=entry.snapshot(),
            )

    def list(self, keyword: str | None = None) -> list[EquipmentSnapshot]:
        with self._state.lock:
            return [e.snapshot() for e in self._state.catalog.search_by_name(keyword)]

    def logs(self) -> tuple[AuditEntry, ...]:
        return self._state.audit.all()
