"""
Tests for match_return: LIFO matching of returns against open borrows.

Pure layer. Timestamps are fixed datetimes so every record is comparable.
"""

from datetime import datetime, timedelta, timezone

import pytest

from lending_kernel.domain.transaction import TransactionRecord, match_return
from lending_kernel.exceptions import InvalidQuantityError

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
T1 = T0 + timedelta(hours=1)
T2 = T0 + timedelta(hours=2)
T3 = T0 + timedelta(hours=3)


def _open(qty, at=T0, actor="S1", item="Ball-A") -> TransactionRecord:
    return TransactionRecord(actor=actor, item_name=item, qty=qty, borrow_at=at)


class TestTransactionRecord:

    def test_open_and_close(self):
        record = _open(2)
        assert record.is_open
        closed = record.close(T1)
        assert not closed.is_open
        assert closed.return_at == T1
        assert record.is_open

    def test_quantity_must_be_positive(self):
        with pytest.raises(InvalidQuantityError):
            _open(0)

    def test_return_cannot_precede_borrow(self):
        with pytest.raises(ValueError):
            TransactionRecord("S1", "Ball-A", 1, borrow_at=T1, return_at=T0)


class TestFullClose:

    def test_exact_quantity_closes_in_place(self):
        records, match = match_return([_open(3)], "S1", "Ball-A", 3, T1)

        assert records == (TransactionRecord("S1", "Ball-A", 3, T0, T1),)
        assert match.matched == 3
        assert match.unmatched == 0
        assert match.splits == 0


class TestPartialReturnSplit:

    def test_split_scenario(self):
        """Borrow 5, return 2: open remainder of 3 followed by closed 2."""
        records, match = match_return([_open(5)], "S1", "Ball-A", 2, T1)

        assert records == (
            TransactionRecord("S1", "Ball-A", 3, T0, None),
            TransactionRecord("S1", "Ball-A", 2, T0, T1),
        )
        assert match.splits == 1
        assert match.closed == (TransactionRecord("S1", "Ball-A", 2, T0, T1),)

    def test_split_keeps_position_among_other_records(self):
        other_before = _open(1, actor="S2")
        other_after = _open(1, actor="S3")
        records, _ = match_return(
            [other_before, _open(4), other_after], "S1", "Ball-A", 1, T1,
        )

        assert records[0] == other_before
        assert records[1] == TransactionRecord("S1", "Ball-A", 3, T0, None)
        assert records[2] == TransactionRecord("S1", "Ball-A", 1, T0, T1)
        assert records[3] == other_after

    def test_quantity_is_conserved(self):
        original = [_open(5), _open(2, at=T1), _open(7, actor="S2")]
        records, _ = match_return(original, "S1", "Ball-A", 4, T2)
        assert sum(r.qty for r in records) == sum(r.qty for r in original)


class TestLifoMatching:

    def test_lifo_scenario(self):
        """Borrow 2 (R1) then 3 (R2); return 4 closes R2 and splits R1 into 1+1."""
        r1 = _open(2, at=T0)
        r2 = _open(3, at=T1)
        records, match = match_return([r1, r2], "S1", "Ball-A", 4, T2)

        assert records == (
            TransactionRecord("S1", "Ball-A", 1, T0, None),
            TransactionRecord("S1", "Ball-A", 1, T0, T2),
            TransactionRecord("S1", "Ball-A", 3, T1, T2),
        )
        assert match.matched == 4
        assert [r.qty for r in match.closed] == [3, 1]

    def test_newest_record_closed_first(self):
        r1 = _open(2, at=T0)
        r2 = _open(2, at=T1)
        records, _ = match_return([r1, r2], "S1", "Ball-A", 2, T2)

        assert records[0].is_open and records[0].borrow_at == T0
        assert not records[1].is_open and records[1].borrow_at == T1

    def test_closed_records_are_skipped(self):
        closed = TransactionRecord("S1", "Ball-A", 2, T0, T1)
        older_open = _open(2, at=T0)
        records, match = match_return([older_open, closed], "S1", "Ball-A", 2, T2)

        assert records[1] == closed
        assert records[0].return_at == T2
        assert match.matched == 2

    def test_other_actor_and_item_untouched(self):
        foreign = [_open(3, actor="S2"), _open(3, item="Racket-A")]
        records, match = match_return(foreign, "S1", "Ball-A", 1, T1)

        assert records == tuple(foreign)
        assert match.matched == 0

    def test_actor_match_is_exact(self):
        records, match = match_return([_open(1, actor="s1")], "S1", "Ball-A", 1, T1)
        assert records[0].is_open
        assert match.matched == 0


class TestUnsatisfiedReturn:

    def test_excess_is_silently_dropped(self):
        """Return 5 against 2 open: both close, 3 are dropped, nothing else is created."""
        original = [_open(1, at=T0), _open(1, at=T1)]
        records, match = match_return(original, "S1", "Ball-A", 5, T2)

        assert len(records) == 2
        assert all(not r.is_open for r in records)
        assert match.matched == 2
        assert match.unmatched == 3
        assert not match.fully_matched

    def test_nothing_open(self):
        records, match = match_return([], "S1", "Ball-A", 2, T1)
        assert records == ()
        assert match.unmatched == 2


class TestInputHandling:

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_return(self, qty):
        with pytest.raises(InvalidQuantityError):
            match_return([_open(1)], "S1", "Ball-A", qty, T1)

    def test_input_sequence_not_modified(self):
        original = [_open(5)]
        match_return(original, "S1", "Ball-A", 2, T1)
        assert original == [_open(5)]

    def test_return_before_borrow_is_clamped_to_borrow_time(self):
        original = (_open(2, at=T3),)
        records, match = match_return(original, "S1", "Ball-A", 2, T1)

        assert original[0].is_open
        assert records[0].return_at == T3
        assert match.fully_matched

    def test_clamped_split_keeps_both_fragments_valid(self):
        records, match = match_return([_open(5, at=T3)], "S1", "Ball-A", 2, T1)

        assert match.splits == 1
        assert [(r.qty, r.return_at) for r in records] == [(3, None), (2, T3)]
        assert all(r.borrow_at == T3 for r in records)


class TestNameBasedMatching:

    def test_items_sharing_a_display_name_share_open_records(self):
        """Two catalog entries named alike are indistinguishable to the ledger."""
        from_item_1001 = _open(2, at=T0, item="Ball")
        from_item_1002 = _open(2, at=T1, item="Ball")
        records, _ = match_return(
            [from_item_1001, from_item_1002], "S1", "Ball", 2, T2,
        )
        # The return of item 1001 closes the newer borrow, which came from 1002.
        assert records[0].is_open
        assert records[1].return_at == T2
