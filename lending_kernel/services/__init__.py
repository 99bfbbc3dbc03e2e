"""
Lending kernel services -- the stateful shell around the pure domain.

Coordinators (``BorrowService``, ``AdminService``) share one
``LendingState`` and serialize on its lock.
"""

from lending_kernel.services.admin_service import AdminService
from lending_kernel.services.auditor_service import AuditAction, AuditEntry, AuditLog
from lending_kernel.services.base import BaseService, LendingState
from lending_kernel.services.borrow_service import BorrowService
from lending_kernel.services.catalog import DEFAULT_FIRST_ID, EquipmentCatalog
from lending_kernel.services.ledger_service import TransactionLedger

__all__ = [
    "AdminService",
    "AuditAction",
    "AuditEntry",
    "AuditLog",
    "BaseService",
    "BorrowService",
    "DEFAULT_FIRST_ID",
    "EquipmentCatalog",
    "LendingState",
    "TransactionLedger",
]
