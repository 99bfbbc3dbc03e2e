"""
TransactionLedger -- borrow/return history with LIFO return matching.

Responsibility:
    Keeps the ordered sequence of ``TransactionRecord`` values. A successful
    borrow appends an open record; a return closes (and where needed splits)
    open records through ``match_return``.

Architecture position:
    Kernel > Services -- in-memory store. It is deliberately not called by
    ``BorrowService``: the caller drives ``record_borrow`` /
    ``close_returns`` after a successful stock operation (see
    ``lending_services.lending_desk``).

Invariants enforced:
    LIFO_MATCHING, LEDGER_QUANTITY_CONSERVATION -- delegated to
        ``match_return``; the ledger swaps in its result atomically under
        the state lock, so a failed match leaves the sequence untouched.
    - Records are never removed; insertion order is kept, with a split
      pair occupying the position of the record it replaced.

Failure modes:
    - InvalidQuantityError on non-positive quantities.
    - A return that finds too few open units is not an error; the
      shortfall is logged as ``return_partially_unmatched``.
"""

from __future__ import annotations

import threading
from datetime import datetime

from lending_kernel.domain.clock import Clock, SystemClock
from lending_kernel.domain.transaction import ReturnMatch, TransactionRecord, match_return
from lending_kernel.logging_config import get_logger

logger = get_logger("services.ledger")


class TransactionLedger:
    """Ordered borrow transactions, open and closed."""

    def __init__(self, clock: Clock | None = None, lock: threading.RLock | None = None):
        self._clock = clock or SystemClock()
        self._lock = lock or threading.RLock()
        self._records: list[TransactionRecord] = []

    def record_borrow(
        self,
        actor: str,
        item_name: str,
        qty: int,
        when: datetime | None = None,
    ) -> TransactionRecord:
        """Append a new open record."""
        record = TransactionRecord(
            actor=actor,
            item_name=item_name,
            qty=qty,
            borrow_at=when or self._clock.now(),
        )
        with self._lock:
            self._records.append(record)
        logger.info(
            "ledger_borrow_recorded",
            extra={"ledger_actor": actor, "item_name": item_name, "qty": qty},
        )
        return record

    def close_returns(
        self,
        actor: str,
        item_name: str,
        qty_to_return: int,
        when: datetime | None = None,
    ) -> ReturnMatch:
        """Match a return of ``qty_to_return`` against open records, newest first."""
        with self._lock:
            records, match = match_return(
                self._records,
                actor,
                item_name,
                qty_to_return,
                when or self._clock.now(),
            )
            self._records = list(records)

        if match.splits:
            logger.info(
                "ledger_record_split",
                extra={"ledger_actor": actor, "item_name": item_name, "splits": match.splits},
            )
        if not match.fully_matched:
            logger.warning(
                "return_partially_unmatched",
                extra={
                    "ledger_actor": actor,
                    "item_name": item_name,
                    "requested": match.requested,
                    "matched": match.matched,
                    "unmatched": match.unmatched,
                },
            )
        return match

    # -- reads ---------------------------------------------------------------

    def all(self) -> tuple[TransactionRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def by_actor(self, substring: str | None) -> list[TransactionRecord]:
        """Case-insensitive substring filter on actor; blank returns all."""
        kw = (substring or "").strip().casefold()
        with self._lock:
            records = tuple(self._records)
        if not kw:
            return list(records)
        return [r for r in records if kw in r.actor.casefold()]

    def open_records(
        self,
        actor: str | None = None,
        item_name: str | None = None,
    ) -> list[TransactionRecord]:
        with self._lock:
            records = tuple(self._records)
        return [
            r for r in records
            if r.is_open
            and (actor is None or r.actor == actor)
            and (item_name is None or r.item_name == item_name)
        ]

    def outstanding_qty(self, actor: str, item_name: str) -> int:
        return sum(r.qty for r in self.open_records(actor, item_name))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
