"""
Data preparation: loading transaction definitions and validating them.
"""

from .loader import (
    TransactionRecord,
    canonicalize_columns,
    load_transactions_csv,
    transactions_from_records,
)
from .validators import ValidationResult, validate_transactions

__all__ = [
    "TransactionRecord",
    "canonicalize_columns",
    "load_transactions_csv",
    "transactions_from_records",
    "ValidationResult",
    "validate_transactions",
]
