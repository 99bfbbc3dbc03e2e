"""
Transaction records and the return-matching algorithm.

Responsibility:
    Defines ``TransactionRecord`` (one borrow, open or closed) and
    ``match_return``, the pure function that reconciles a return event with
    the open records of the same actor and item.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O. ``TransactionLedger``
    holds the record sequence and swaps in the sequence this module returns.

Invariants enforced:
    LIFO_MATCHING -- candidates are scanned from the newest record to the
        oldest.
    LEDGER_QUANTITY_CONSERVATION -- a partially returned record is replaced
        by an open remainder followed by a closed fragment; their quantities
        sum to the original and both keep the original ``borrow_at``.
    - A closed record never has ``return_at`` earlier than ``borrow_at``;
      a return time before the borrow is clamped to ``borrow_at``.

Matching rules:
    For each open record with matching ``(actor, item_name)``, newest first:

        can_close = min(remaining, record.qty)
        closed_at = max(when, record.borrow_at)
        can_close == record.qty  ->  close the record in place
        otherwise                ->  [open(qty - can_close), closed(can_close)]
        remaining -= can_close

    Scanning stops when nothing remains or candidates run out. Quantity left
    over at that point is dropped; it is reported in ``ReturnMatch.unmatched``
    but produces no record and no error.

    Matching is by display name, not equipment id: two items sharing a name
    share their open records.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Sequence

from lending_kernel.exceptions import InvalidQuantityError


@dataclass(frozen=True)
class TransactionRecord:
    """
    One borrow of ``qty`` units of ``item_name`` by ``actor``.

    Contract:
        frozen; ``qty > 0``; open while ``return_at is None``.
    """

    actor: str
    item_name: str
    qty: int
    borrow_at: datetime
    return_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.qty <= 0:
            raise InvalidQuantityError(self.qty, "transaction record")
        if self.return_at is not None and self.return_at < self.borrow_at:
            raise ValueError(
                f"return_at {self.return_at.isoformat()} precedes "
                f"borrow_at {self.borrow_at.isoformat()}"
            )

    @property
    def is_open(self) -> bool:
        return self.return_at is None

    def matches(self, actor: str, item_name: str) -> bool:
        return self.actor == actor and self.item_name == item_name

    def close(self, when: datetime) -> TransactionRecord:
        return replace(self, return_at=when)


@dataclass(frozen=True)
class ReturnMatch:
    """Summary of one ``match_return`` call."""

    actor: str
    item_name: str
    requested: int
    matched: int
    closed: tuple[TransactionRecord, ...] = ()
    splits: int = 0

    @property
    def unmatched(self) -> int:
        return self.requested - self.matched

    @property
    def fully_matched(self) -> bool:
        return self.matched == self.requested


def match_return(
    records: Sequence[TransactionRecord],
    actor: str,
    item_name: str,
    qty_to_return: int,
    when: datetime,
) -> tuple[tuple[TransactionRecord, ...], ReturnMatch]:
    """
    Close open records of ``(actor, item_name)`` for a return of ``qty_to_return``.

    Preconditions:
        - ``qty_to_return > 0``.

    Postconditions:
        - The input sequence is not modified.
        - Records that do not match are returned unchanged and in place.
        - Sum of quantities over all returned records equals the input sum.
        - A record closed here gets ``return_at = max(when, record.borrow_at)``,
          so a clock that stepped back between borrow and return still
          yields a valid closed record.

    Returns:
        The new record sequence and a ``ReturnMatch`` summary.

    Raises:
        InvalidQuantityError: if ``qty_to_return <= 0``.
    """
    if qty_to_return <= 0:
        raise InvalidQuantityError(qty_to_return, "return")

    result = list(records)
    remaining = qty_to_return
    closed: list[TransactionRecord] = []
    splits = 0

    for i in range(len(result) - 1, -1, -1):
        if remaining == 0:
            break
        record = result[i]
        if not record.is_open or not record.matches(actor, item_name):
            continue

        can_close = min(remaining, record.qty)
        closed_at = max(when, record.borrow_at)
        if can_close == record.qty:
            fragment = record.close(closed_at)
            result[i] = fragment
        else:
            still_open = replace(record, qty=record.qty - can_close)
            fragment = replace(record, qty=can_close, return_at=closed_at)
            result[i:i + 1] = [still_open, fragment]
            splits += 1
        closed.append(fragment)
        remaining -= can_close

    return tuple(result), ReturnMatch(
        actor=actor,
        item_name=item_name,
        requested=qty_to_return,
        matched=qty_to_return - remaining,
        closed=tuple(closed),
        splits=splits,
    )
