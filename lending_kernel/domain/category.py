"""
Equipment categories and their borrowing rules.

Responsibility:
    Declares the closed set of equipment categories and, for each one, a
    pure rule: which borrow quantities are eligible and what deposit each
    unit carries.

Architecture position:
    Kernel > Domain -- pure value objects. ZERO I/O.

Invariants enforced:
    - ``CATEGORY_RULES`` has exactly one rule per ``Category`` member
      (checked at import time).

Rules:
    Ball        qty <= 3        deposit 50 per item
    Racket      qty <= 2        deposit 100 per item
    Protective  qty is even     deposit 30 per item
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping

from lending_kernel.exceptions import UnknownCategoryError


class Category(str, Enum):
    """Equipment category. The value is the display name."""

    BALL = "Ball"
    RACKET = "Racket"
    PROTECTIVE = "Protective"

    @classmethod
    def parse(cls, value: Category | str) -> Category:
        """
        Resolve a category from a member or a name.

        Accepts the display value or the member name, case-insensitively;
        "ProtectiveGear" is accepted as an alias of Protective.

        Raises:
            UnknownCategoryError: if nothing matches.
        """
        if isinstance(value, Category):
            return value
        if not isinstance(value, str):
            raise UnknownCategoryError(repr(value))
        key = value.strip().lower().replace("_", "")
        for member in cls:
            if key in (member.value.lower(), member.name.lower().replace("_", "")):
                return member
        if key == "protectivegear":
            return cls.PROTECTIVE
        raise UnknownCategoryError(value)


@dataclass(frozen=True)
class CategoryRule:
    """
    Borrowing rule for one category.

    Contract: frozen. ``is_eligible`` is a pure predicate on the requested
    quantity; ``description`` is the human-readable form used in error messages.
    """

    category: Category
    deposit_per_item: int
    eligibility: Callable[[int], bool]
    description: str

    def is_eligible(self, qty: int) -> bool:
        return self.eligibility(qty)


def _at_most(limit: int) -> Callable[[int], bool]:
    return lambda qty: qty <= limit


def _even(qty: int) -> bool:
    return qty % 2 == 0


CATEGORY_RULES: Mapping[Category, CategoryRule] = MappingProxyType({
    Category.BALL: CategoryRule(
        category=Category.BALL,
        deposit_per_item=50,
        eligibility=_at_most(3),
        description="at most 3 per borrow",
    ),
    Category.RACKET: CategoryRule(
        category=Category.RACKET,
        deposit_per_item=100,
        eligibility=_at_most(2),
        description="at most 2 per borrow",
    ),
    Category.PROTECTIVE: CategoryRule(
        category=Category.PROTECTIVE,
        deposit_per_item=30,
        eligibility=_even,
        description="an even quantity",
    ),
})

if set(CATEGORY_RULES) != set(Category):
    raise RuntimeError("CATEGORY_RULES must cover every Category")


def rule_for(category: Category) -> CategoryRule:
    """Return the borrowing rule for a category."""
    return CATEGORY_RULES[category]
