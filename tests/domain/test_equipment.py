"""
Tests for the Equipment entity: stock counters and their invariants.

Covers:
- borrow eligibility, availability and the returned denial reason
- give_back bounds
- add_stock / remove_stock including the capacity floor
- snapshots and display text
"""

import pytest

from lending_kernel.domain.category import Category
from lending_kernel.domain.equipment import Equipment
from lending_kernel.exceptions import (
    BorrowRuleViolationError,
    ErrorKind,
    InsufficientAvailabilityError,
    InvalidNameError,
    InvalidQuantityError,
    NegativeStockError,
    RemovalExceedsStockError,
    ReturnExceedsBorrowedError,
    StockBelowBorrowedError,
)
from lending_kernel.invariants import KernelInvariant


def _item(category=Category.BALL, stock=10) -> Equipment:
    return Equipment(1001, "Item", category, stock)


class TestConstruction:

    def test_new_item_is_fully_available(self):
        item = _item(stock=7)
        assert (item.total_stock, item.available, item.borrowed) == (7, 7, 0)

    def test_zero_stock_allowed(self):
        assert _item(stock=0).total_stock == 0

    def test_negative_stock_rejected(self):
        with pytest.raises(NegativeStockError):
            _item(stock=-1)

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, name):
        with pytest.raises(InvalidNameError):
            Equipment(1001, name, Category.BALL, 1)


class TestBorrow:

    def test_borrow_decrements_available(self):
        item = _item()
        assert item.borrow("S1", 3) is True
        assert item.available == 7
        assert item.borrowed == 3
        assert item.total_stock == 10

    @pytest.mark.parametrize(
        "category, ok_qty, bad_qty",
        [
            (Category.BALL, 3, 4),
            (Category.RACKET, 2, 3),
            (Category.PROTECTIVE, 4, 3),
        ],
    )
    def test_category_rules(self, category, ok_qty, bad_qty):
        item = _item(category)
        assert item.borrow("S1", bad_qty) is False
        assert item.available == 10
        assert item.borrow("S1", ok_qty) is True
        assert item.available == 10 - ok_qty

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_refused(self, qty):
        item = _item()
        assert item.borrow("S1", qty) is False
        assert isinstance(item.borrow_denial(qty), InvalidQuantityError)
        assert item.available == 10

    def test_cannot_borrow_more_than_available(self):
        item = _item(stock=2)
        assert item.borrow("S1", 3) is False
        denial = item.borrow_denial(3)
        assert isinstance(denial, InsufficientAvailabilityError)
        assert denial.available == 2
        assert denial.kind is ErrorKind.CAPABILITY_DENIED

    def test_rule_checked_before_availability(self):
        denial = _item(stock=1).borrow_denial(4)
        assert isinstance(denial, BorrowRuleViolationError)
        assert denial.category == "Ball"

    def test_denial_is_none_when_allowed(self):
        assert _item().borrow_denial(1) is None


class TestGiveBack:

    def test_round_trip_restores_available(self):
        item = _item()
        item.borrow("S1", 3)
        item.give_back(3)
        assert item.available == 10

    def test_cannot_return_more_than_borrowed(self):
        item = _item()
        item.borrow("S1", 2)
        with pytest.raises(ReturnExceedsBorrowedError) as exc_info:
            item.give_back(3)
        assert exc_info.value.borrowed == 2
        assert exc_info.value.kind is ErrorKind.STATE_INVARIANT
        assert item.available == 8

    def test_return_with_nothing_out(self):
        with pytest.raises(ReturnExceedsBorrowedError):
            _item().give_back(1)

    @pytest.mark.parametrize("qty", [0, -2])
    def test_non_positive_quantity(self, qty):
        item = _item()
        item.borrow("S1", 1)
        with pytest.raises(InvalidQuantityError):
            item.give_back(qty)
        assert item.available == 9


class TestStockAdjustment:

    def test_add_stock_raises_total_and_available(self):
        item = _item()
        item.borrow("S1", 2)
        item.add_stock(5)
        assert (item.total_stock, item.available, item.borrowed) == (15, 13, 2)

    def test_add_stock_non_positive(self):
        with pytest.raises(InvalidQuantityError):
            _item().add_stock(0)

    def test_capacity_floor(self):
        """total=10 with 4 out: removing 7 would leave 3 < 4, removing 6 is fine."""
        item = _item(Category.RACKET)
        for _ in range(2):
            assert item.borrow("S1", 2)
        assert item.available == 6

        with pytest.raises(StockBelowBorrowedError) as exc_info:
            item.remove_stock(7)
        assert exc_info.value.invariant is KernelInvariant.CAPACITY_FLOOR
        assert (item.total_stock, item.available) == (10, 6)

        item.remove_stock(6)
        assert (item.total_stock, item.available, item.borrowed) == (4, 0, 4)

    def test_remove_more_than_total(self):
        item = _item(stock=3)
        with pytest.raises(RemovalExceedsStockError):
            item.remove_stock(4)
        assert item.total_stock == 3

    def test_remove_stock_non_positive(self):
        with pytest.raises(InvalidQuantityError):
            _item().remove_stock(-1)


class TestViews:

    def test_snapshot_is_detached(self):
        item = _item()
        snap = item.snapshot()
        item.borrow("S1", 2)
        assert snap.available == 10
        assert item.snapshot().available == 8
        assert item.snapshot().borrowed == 2

    def test_snapshot_deposit(self):
        assert _item(Category.RACKET).snapshot().deposit_per_item == 100

    def test_describe(self):
        item = _item()
        item.borrow("S1", 1)
        assert item.describe() == "#1001 [Ball] Item | total=10 available=9"
