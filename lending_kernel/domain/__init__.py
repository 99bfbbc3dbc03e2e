"""
Lending kernel domain layer -- pure value objects and entities, zero I/O.

Nothing in this package touches locks, logging handlers or configuration;
services in ``lending_kernel.services`` own all of that.
"""

from lending_kernel.domain.category import CATEGORY_RULES, Category, CategoryRule, rule_for
from lending_kernel.domain.clock import Clock, DeterministicClock, SequentialClock, SystemClock
from lending_kernel.domain.equipment import Equipment, EquipmentSnapshot
from lending_kernel.domain.outcome import Outcome
from lending_kernel.domain.transaction import ReturnMatch, TransactionRecord, match_return

__all__ = [
    "CATEGORY_RULES",
    "Category",
    "CategoryRule",
    "Clock",
    "DeterministicClock",
    "Equipment",
    "EquipmentSnapshot",
    "Outcome",
    "ReturnMatch",
    "SequentialClock",
    "SystemClock",
    "TransactionRecord",
    "match_return",
    "rule_for",
]
