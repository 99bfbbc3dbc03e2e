"""
lending_services.lending_desk -- the lending desk: one entry point for callers.

Responsibility:
    Wires the kernel coordinators over one ``LendingState`` and exposes the
    operations a front end needs: create/delete equipment, adjust stock,
    borrow, return, and the read views (equipment list, audit log, ledger).
    After a successful borrow or return it drives the transaction ledger
    with the resolved item name and the current time.

Architecture position:
    Services -- orchestration over the kernel. The kernel's
    ``BorrowService`` and ``TransactionLedger`` do not know about each
    other; this module is where the two steps are composed.

Invariants enforced:
    - The stock operation and the matching ledger update run inside one
      hold of the state lock, so no other caller observes stock and ledger
      out of step.
    - The ledger is only touched when the stock operation succeeded.

Usage:
    desk = build_lending_desk()
    outcome = desk.borrow("S1", 1001, 2)
    if outcome.is_success:
        print(outcome.deposit_total)
    desk.ledger_by_actor("S1")
"""

from __future__ import annotations

from lending_config import LendingConfig, get_active_config
from lending_kernel.domain.category import Category
from lending_kernel.domain.clock import Clock
from lending_kernel.domain.equipment import EquipmentSnapshot
from lending_kernel.domain.outcome import Outcome
from lending_kernel.domain.transaction import TransactionRecord
from lending_kernel.logging_config import configure_logging, get_logger
from lending_kernel.services.admin_service import AdminService
from lending_kernel.services.auditor_service import AuditEntry
from lending_kernel.services.base import LendingState
from lending_kernel.services.borrow_service import BorrowService

logger = get_logger("services.lending_desk")

DEFAULT_ACTOR = "user"


class LendingDesk:
    """
    Front-end facing composition of the lending kernel.

    Contract:
        Every method is safe to call from several threads. Blank actors
        are replaced by ``default_actor``.
    """

    def __init__(self, state: LendingState, default_actor: str = DEFAULT_ACTOR):
        self._state = state
        self._default_actor = default_actor
        self._borrow_service = BorrowService(state)
        self._admin_service = AdminService(state)

    @classmethod
    def from_config(cls, config: LendingConfig, clock: Clock | None = None) -> LendingDesk:
        """Build a desk and seed its catalog from ``config``."""
        state = LendingState.create(clock=clock, first_id=config.first_equipment_id)
        desk = cls(state, default_actor=config.default_actor)
        for item in config.seed_items:
            desk.create_equipment(config.seed_actor, item.category, item.name, item.stock)
        logger.info(
            "lending_desk_ready",
            extra={"config_name": config.name, "seeded": len(config.seed_items)},
        )
        return desk

    @property
    def state(self) -> LendingState:
        return self._state

    @property
    def borrow_service(self) -> BorrowService:
        return self._borrow_service

    @property
    def admin_service(self) -> AdminService:
        return self._admin_service

    # -- catalog administration ----------------------------------------------

    def create_equipment(
        self,
        actor: str,
        category: Category | str,
        name: str,
        stock: int,
    ) -> EquipmentSnapshot:
        return self._admin_service.add_item(self._actor(actor), category, name, stock)

    def delete_equipment(self, actor: str, equipment_id: int) -> bool:
        return self._admin_service.delete_item(self._actor(actor), equipment_id)

    def add_stock(self, actor: str, equipment_id: int, qty: int) -> Outcome:
        return self._admin_service.add_stock(self._actor(actor), equipment_id, qty)

    def remove_stock(self, actor: str, equipment_id: int, qty: int) -> Outcome:
        return self._admin_service.remove_stock(self._actor(actor), equipment_id, qty)

    # -- lending -------------------------------------------------------------

    def borrow(self, actor: str, equipment_id: int, qty: int) -> Outcome:
        actor = self._actor(actor)
        with self._state.lock:
            outcome = self._borrow_service.borrow(actor, equipment_id, qty)
            if outcome.is_success:
                self._state.ledger.record_borrow(
                    actor, self._item_name(equipment_id), qty, self._state.clock.now(),
                )
        return outcome

    def give_back(self, actor: str, equipment_id: int, qty: int) -> Outcome:
        actor = self._actor(actor)
        with self._state.lock:
            outcome = self._borrow_service.give_back(actor, equipment_id, qty)
            if outcome.is_success:
                self._state.ledger.close_returns(
                    actor, self._item_name(equipment_id), qty, self._state.clock.now(),
                )
        return outcome

    # -- reads ---------------------------------------------------------------

    def list_equipment(self, keyword: str | None = None) -> list[EquipmentSnapshot]:
        return self._admin_service.list(keyword)

    def audit_log(self) -> tuple[AuditEntry, ...]:
        return self._state.audit.all()

    def ledger_by_actor(self, substring: str | None = None) -> list[TransactionRecord]:
        return self._state.ledger.by_actor(substring)

    def find_item_name(self, equipment_id: int) -> str | None:
        return self._borrow_service.find_item_name(equipment_id)

    # -- helpers -------------------------------------------------------------

    def _actor(self, actor: str | None) -> str:
        if actor is None or not actor.strip():
            return self._default_actor
        return actor.strip()

    def _item_name(self, equipment_id: int) -> str:
        return self._borrow_service.find_item_name(equipment_id) or f"#{equipment_id}"


def build_lending_desk(
    config: LendingConfig | None = None,
    clock: Clock | None = None,
) -> LendingDesk:
    """
    Build a seeded desk from ``config`` (the active default set when None).

    Also configures structured logging at the configured level; that call is
    idempotent, so an application that configured logging first keeps its
    own settings.
    """
    config = config or get_active_config()
    configure_logging(level=config.log_level)
    return LendingDesk.from_config(config, clock=clock)


__all__ = ["DEFAULT_ACTOR", "LendingDesk", "build_lending_desk"]
