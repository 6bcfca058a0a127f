"""Domain models and the FIFO store.

This package holds the in-memory (Pydantic) transaction models, the lot
inventory with its FIFO matcher, the pending queue and the summary
calculator. Nothing here knows about HTTP, files or settings.
"""

__all__ = [
    "inventory",
    "ledger",
    "pending",
    "store",
    "summary",
    "transactions",
]
