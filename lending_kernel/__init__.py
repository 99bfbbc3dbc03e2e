"""
Lending Kernel - sports equipment stock and loan tracking

An in-memory, append-only lending system with:
- Category-specific borrowing rules and deposits
- Stock invariants enforced on every mutation
- Append-only audit trail
- Borrow/return ledger with LIFO matching and partial-return splitting
"""

__version__ = "0.1.0"
