"""
Tabular and CSV renditions of a projection.

CSV rows follow the fixed column order of ``core.schema.RESULT_COLUMNS``:
display date, then balance, cumulative income, cumulative expenses, day
expenses, day income, day net and diff-from-start as currency strings, then
the joined transaction names. No header; ``\\n`` line endings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from core.schema import CURRENCY_COLUMNS, RESULT_COLUMNS
from core.utils import format_as_currency, format_as_date
from models.ledger import ResultRow


def results_to_frame(rows: Sequence[ResultRow]) -> pd.DataFrame:
    """One row per projected day; money columns stay integer cents."""
    return pd.DataFrame(
        [
            {
                "date": r.date,
                "balance": r.balance,
                "cumulative_income": r.cumulative_income,
                "cumulative_expenses": r.cumulative_expenses,
                "day_expenses": r.day_expenses,
                "day_income": r.day_income,
                "day_net": r.day_net,
                "diff_from_start": r.diff_from_start,
                "day_transaction_names": r.day_transaction_names,
            }
            for r in rows
        ],
        columns=list(RESULT_COLUMNS),
    )


def _formatted_frame(rows: Sequence[ResultRow]) -> pd.DataFrame:
    df = results_to_frame(rows)
    df["date"] = df["date"].map(format_as_date)
    for col in CURRENCY_COLUMNS:
        df[col] = df[col].map(format_as_currency)
    return df


def results_to_csv(rows: Sequence[ResultRow]) -> str:
    return _formatted_frame(rows).to_csv(index=False, header=False, lineterminator="\n")


def write_results_csv(rows: Sequence[ResultRow], path: Union[str, Path]) -> None:
    _formatted_frame(rows).to_csv(path, index=False, header=False, lineterminator="\n", encoding="utf-8")
