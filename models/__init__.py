"""
Domain types: transaction definitions, day buckets and result rows.
"""

from .transaction import (
    Explicit,
    Frequency,
    Recurrence,
    Simple,
    TransactionDefinition,
    new_transaction,
    toggle_weekday,
)
from .ledger import DayBucket, ResultRow

__all__ = [
    "Explicit",
    "Frequency",
    "Recurrence",
    "Simple",
    "TransactionDefinition",
    "new_transaction",
    "toggle_weekday",
    "DayBucket",
    "ResultRow",
]
