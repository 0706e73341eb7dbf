from __future__ import annotations

from typing import Tuple

# Result columns in their fixed export order (CSV and DataFrame).
RESULT_COLUMNS: Tuple[str, ...] = (
    "date",
    "balance",
    "cumulative_income",
    "cumulative_expenses",
    "day_expenses",
    "day_income",
    "day_net",
    "diff_from_start",
    "day_transaction_names",
)

# Money-valued result columns, formatted as currency on export.
CURRENCY_COLUMNS: Tuple[str, ...] = RESULT_COLUMNS[1:8]

# Persisted transaction field names accepted by data_prep.loader.
TRANSACTION_FIELDS: Tuple[str, ...] = (
    "id",
    "amount",
    "active",
    "name",
    "note",
    "rrule",
    "frequency",
    "interval",
    "weekdays",
    "startsYear",
    "startsMonth",
    "startsDay",
    "endsYear",
    "endsMonth",
    "endsDay",
)
