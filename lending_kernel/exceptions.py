"""
Typed Exception Hierarchy for the Lending Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the lending kernel (the lending desk, a UI, tests) need to react to
*kinds* of failure: re-prompt on a bad quantity, show "not found", explain a
category rule. Parsing message strings for that is fragile, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable)
  3. Every exception has a KIND attribute (one of four ErrorKind values)
  4. Exceptions carry structured DATA (equipment_id, qty, available, ...)

Coordinators never let these escape from stock operations: they convert them
into ``Outcome`` values (see ``lending_kernel.domain.outcome``) so that the
caller branches on ``outcome.kind``.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LendingKernelError (base)
    |
    +-- ValidationError                 kind = VALIDATION
    |   +-- InvalidQuantityError
    |   +-- NegativeStockError
    |   +-- UnknownCategoryError
    |   +-- InvalidNameError
    |   +-- RemovalExceedsStockError
    |
    +-- NotFoundError                   kind = NOT_FOUND
    |   +-- EquipmentNotFoundError
    |
    +-- CapabilityDeniedError           kind = CAPABILITY_DENIED
    |   +-- BorrowRuleViolationError
    |   +-- InsufficientAvailabilityError
    |
    +-- StateInvariantError             kind = STATE_INVARIANT
        +-- ReturnExceedsBorrowedError
        +-- StockBelowBorrowedError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Kind              | Code                        | When Raised
------------------|-----------------------------|-------------------------------------
Validation        | INVALID_QUANTITY            | qty <= 0
                  | NEGATIVE_STOCK              | initial stock < 0
                  | UNKNOWN_CATEGORY            | category name not recognised
                  | INVALID_NAME                | blank equipment name
                  | REMOVAL_EXCEEDS_STOCK       | remove qty > total stock
------------------|-----------------------------|-------------------------------------
Not found         | EQUIPMENT_NOT_FOUND         | id not in the catalog
------------------|-----------------------------|-------------------------------------
Capability denied | BORROW_RULE_VIOLATION       | category rule rejects qty
                  | INSUFFICIENT_AVAILABILITY   | qty > available
------------------|-----------------------------|-------------------------------------
State invariant   | RETURN_EXCEEDS_BORROWED     | return more than is out on loan
                  | STOCK_BELOW_BORROWED        | capacity would drop below borrowed

===============================================================================
"""

from enum import Enum

from lending_kernel.invariants import KernelInvariant


class ErrorKind(str, Enum):
    """
    Coarse failure classification shared by exceptions and outcomes.

    Contract:
        Exactly four kinds. Callers branch on these, never on messages.
    """

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CAPABILITY_DENIED = "capability_denied"
    STATE_INVARIANT = "state_invariant"


class LendingKernelError(Exception):
    """
    Base exception for all lending kernel errors.

    All subclasses must have ``code`` and ``kind`` class attributes.
    """

    code: str = "LENDING_KERNEL_ERROR"
    kind: ErrorKind = ErrorKind.VALIDATION


# Validation


class ValidationError(LendingKernelError):
    """Input rejected before any state was consulted or changed."""

    code: str = "VALIDATION_ERROR"
    kind: ErrorKind = ErrorKind.VALIDATION


class InvalidQuantityError(ValidationError):
    """Quantity must be a positive integer."""

    code: str = "INVALID_QUANTITY"

    def __init__(self, qty: int, operation: str):
        self.qty = qty
        self.operation = operation
        super().__init__(f"Quantity for {operation} must be > 0, got {qty}")


class NegativeStockError(ValidationError):
    """Initial stock of a new item cannot be negative."""

    code: str = "NEGATIVE_STOCK"

    def __init__(self, stock: int):
        self.stock = stock
        super().__init__(f"Stock must be >= 0, got {stock}")


class UnknownCategoryError(ValidationError):
    """Category name does not match any known category."""

    code: str = "UNKNOWN_CATEGORY"

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown equipment category: {category!r}")


class InvalidNameError(ValidationError):
    """Equipment name must be a non-blank string."""

    code: str = "INVALID_NAME"

    def __init__(self, name: object):
        self.name = name
        super().__init__(f"Equipment name must be non-empty, got {name!r}")


class RemovalExceedsStockError(ValidationError):
    """Cannot remove more units than the item owns."""

    code: str = "REMOVAL_EXCEEDS_STOCK"

    def __init__(self, equipment_id: int, qty: int, total_stock: int):
        self.equipment_id = equipment_id
        self.qty = qty
        self.total_stock = total_stock
        super().__init__(
            f"Cannot remove {qty} from equipment {equipment_id}: "
            f"total stock is {total_stock}"
        )


# Not found


class NotFoundError(LendingKernelError):
    """Referenced entity does not exist."""

    code: str = "NOT_FOUND"
    kind: ErrorKind = ErrorKind.NOT_FOUND


class EquipmentNotFoundError(NotFoundError):
    """Equipment with given id is not in the catalog."""

    code: str = "EQUIPMENT_NOT_FOUND"

    def __init__(self, equipment_id: int):
        self.equipment_id = equipment_id
        super().__init__(f"Equipment not found: {equipment_id}")


# Capability denied


class CapabilityDeniedError(LendingKernelError):
    """The request is well-formed but the item cannot grant it."""

    code: str = "CAPABILITY_DENIED"
    kind: ErrorKind = ErrorKind.CAPABILITY_DENIED


class BorrowRuleViolationError(CapabilityDeniedError):
    """The category eligibility rule rejects the requested quantity."""

    code: str = "BORROW_RULE_VIOLATION"

    def __init__(self, equipment_id: int, category: str, qty: int, rule: str):
        self.equipment_id = equipment_id
        self.category = category
        self.qty = qty
        self.rule = rule
        super().__init__(
            f"Cannot borrow {qty} of equipment {equipment_id}: "
            f"{category} rule requires {rule}"
        )


class InsufficientAvailabilityError(CapabilityDeniedError):
    """Requested quantity exceeds what is on the shelf."""

    code: str = "INSUFFICIENT_AVAILABILITY"

    def __init__(self, equipment_id: int, qty: int, available: int):
        self.equipment_id = equipment_id
        self.qty = qty
        self.available = available
        super().__init__(
            f"Cannot borrow {qty} of equipment {equipment_id}: "
            f"only {available} available"
        )


# State invariants


class StateInvariantError(LendingKernelError):
    """The operation would break a stock invariant."""

    code: str = "STATE_INVARIANT_VIOLATION"
    kind: ErrorKind = ErrorKind.STATE_INVARIANT
    invariant: KernelInvariant = KernelInvariant.STOCK_BOUNDS


class ReturnExceedsBorrowedError(StateInvariantError):
    """Returning more units than are currently out on loan."""

    code: str = "RETURN_EXCEEDS_BORROWED"
    invariant: KernelInvariant = KernelInvariant.STOCK_BOUNDS

    def __init__(self, equipment_id: int, qty: int, borrowed: int):
        self.equipment_id = equipment_id
        self.qty = qty
        self.borrowed = borrowed
        super().__init__(
            f"Cannot return {qty} of equipment {equipment_id}: "
            f"only {borrowed} on loan"
        )


class StockBelowBorrowedError(StateInvariantError):
    """Reducing stock would shrink capacity below what is on loan."""

    code: str = "STOCK_BELOW_BORROWED"
    invariant: KernelInvariant = KernelInvariant.CAPACITY_FLOOR

    def __init__(self, equipment_id: int, qty: int, total_stock: int, borrowed: int):
        self.equipment_id = equipment_id
        self.qty = qty
        self.total_stock = total_stock
        self.borrowed = borrowed
        super().__init__(
            f"Cannot remove {qty} from equipment {equipment_id}: "
            f"total would drop to {total_stock - qty}, below {borrowed} on loan"
        )
