"""
Kernel Invariants Contract.

These invariants are structural law. They are hardcoded in the equipment
entity, the catalog, the audit log and the ledger matching algorithm. No
configuration value may override them.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across Equipment, EquipmentCatalog, AuditLog and
match_return.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel.

    Configuration may influence *what* is seeded into the catalog, but never
    *whether* these rules apply.
    """

    STOCK_BOUNDS = "stock_bounds"
    """0 <= available <= total_stock for every item, before and after every
    operation. Enforced by Equipment.borrow / give_back."""

    CAPACITY_FLOOR = "capacity_floor"
    """total_stock never drops below the borrowed count. Enforced by
    Equipment.remove_stock."""

    ID_MONOTONICITY = "id_monotonicity"
    """Equipment ids are strictly increasing and never reused. Enforced by
    EquipmentCatalog.next_id."""

    AUDIT_APPEND_ONLY = "audit_append_only"
    """Audit entries are frozen and only ever appended. Enforced by
    AuditLog."""

    LEDGER_QUANTITY_CONSERVATION = "ledger_quantity_conservation"
    """Splitting a transaction record on partial return produces two records
    whose quantities sum to the original. Enforced by match_return."""

    LIFO_MATCHING = "lifo_matching"
    """A return closes the most recently borrowed open records first.
    Enforced by match_return."""


# All invariants as a frozenset for programmatic checks.
ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "lending_services",
    "lending_config",
)
