"""
Equipment -- one stock-tracked catalog item.

Responsibility:
    Holds the stock counters of a single item and is the only place those
    counters change. Every mutator validates first and mutates second, so a
    rejected call leaves the item untouched.

Architecture position:
    Kernel > Domain -- mutable entity, zero I/O. Owned exclusively by
    ``EquipmentCatalog``; services reach it by id and mutate it in place.

Invariants enforced:
    STOCK_BOUNDS   -- 0 <= available <= total_stock after every call.
    CAPACITY_FLOOR -- remove_stock never shrinks total_stock below borrowed.

Failure modes:
    - borrow() returns False (see ``borrow_denial`` for the reason).
    - give_back / add_stock / remove_stock raise typed
      ``LendingKernelError`` subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass

from lending_kernel.domain.category import Category, CategoryRule, rule_for
from lending_kernel.exceptions import (
    BorrowRuleViolationError,
    InsufficientAvailabilityError,
    InvalidNameError,
    InvalidQuantityError,
    LendingKernelError,
    NegativeStockError,
    RemovalExceedsStockError,
    ReturnExceedsBorrowedError,
    StockBelowBorrowedError,
)


@dataclass(frozen=True)
class EquipmentSnapshot:
    """Read-only copy of an item's state at one instant."""

    id: int
    name: str
    category: Category
    total_stock: int
    available: int

    @property
    def borrowed(self) -> int:
        return self.total_stock - self.available

    @property
    def deposit_per_item(self) -> int:
        return rule_for(self.category).deposit_per_item


class Equipment:
    """
    A catalog entry with category-driven borrowing rules.

    Contract:
        ``id``, ``name`` and ``category`` are fixed at construction.
        ``total_stock`` and ``available`` change only through the four
        mutators below.
    """

    def __init__(self, equipment_id: int, name: str, category: Category, stock: int):
        if stock < 0:
            raise NegativeStockError(stock)
        if not isinstance(name, str) or not name.strip():
            raise InvalidNameError(name)
        self._id = equipment_id
        self._name = name
        self._category = category
        self._rule: CategoryRule = rule_for(category)
        self._total_stock = stock
        self._available = stock

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> Category:
        return self._category

    @property
    def total_stock(self) -> int:
        return self._total_stock

    @property
    def available(self) -> int:
        return self._available

    @property
    def borrowed(self) -> int:
        return self._total_stock - self._available

    def deposit_per_item(self) -> int:
        return self._rule.deposit_per_item

    # -- borrowing -----------------------------------------------------------

    def borrow_denial(self, qty: int) -> LendingKernelError | None:
        """
        Return the reason a borrow of ``qty`` would be refused, or None.

        Checks run in order: positive quantity, category rule, availability.
        The error is returned, not raised.
        """
        if qty <= 0:
            return InvalidQuantityError(qty, "borrow")
        if not self._rule.is_eligible(qty):
            return BorrowRuleViolationError(
                self._id, self._category.value, qty, self._rule.description
            )
        if qty > self._available:
            return InsufficientAvailabilityError(self._id, qty, self._available)
        return None

    def borrow(self, actor: str, qty: int) -> bool:
        """Take ``qty`` units off the shelf. Returns False without mutating on refusal."""
        if self.borrow_denial(qty) is not None:
            return False
        self._available -= qty
        return True

    def give_back(self, qty: int) -> None:
        """Put ``qty`` units back on the shelf."""
        if qty <= 0:
            raise InvalidQuantityError(qty, "return")
        if self._available + qty > self._total_stock:
            raise ReturnExceedsBorrowedError(self._id, qty, self.borrowed)
        self._available += qty

    # -- stock adjustment ----------------------------------------------------

    def add_stock(self, qty: int) -> None:
        if qty <= 0:
            raise InvalidQuantityError(qty, "add stock")
        self._total_stock += qty
        self._available += qty

    def remove_stock(self, qty: int) -> None:
        """Retire ``qty`` units; units on loan are never retired."""
        if qty <= 0:
            raise InvalidQuantityError(qty, "remove stock")
        if qty > self._total_stock:
            raise RemovalExceedsStockError(self._id, qty, self._total_stock)
        borrowed = self.borrowed
        if self._total_stock - qty < borrowed:
            raise StockBelowBorrowedError(self._id, qty, self._total_stock, borrowed)
        self._total_stock -= qty
        self._available = self._total_stock - borrowed

    # -- views ---------------------------------------------------------------

    def snapshot(self) -> EquipmentSnapshot:
        return EquipmentSnapshot(
            id=self._id,
            name=self._name,
            category=self._category,
            total_stock=self._total_stock,
            available=self._available,
        )

    def describe(self) -> str:
        return (
            f"#{self._id} [{self._category.value}] {self._name} "
            f"| total={self._total_stock} available={self._available}"
        )

    def __repr__(self) -> str:
        return f"Equipment({self.describe()})"
