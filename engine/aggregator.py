"""
Turns filled day buckets into chronologically ordered result rows with
running balance, cumulative income/expenses and diff-from-start.

Zero amounts count as income.
"""

from __future__ import annotations

from typing import Iterable, List

from core.config import ProjectionConfig
from core.errors import InternalConsistencyError
from models.ledger import DayBucket, ResultRow

from .progress import ProgressSink


def aggregate(
    buckets: Iterable[DayBucket],
    starting_balance: int,
    *,
    sink: ProgressSink,
    config: ProjectionConfig,
) -> List[ResultRow]:
    ordered = sorted(buckets, key=lambda b: b.date)
    total = len(ordered)

    balance = int(starting_balance)
    cumulative_income = 0
    cumulative_expenses = 0
    diff = 0
    rows: List[ResultRow] = []

    sink(f"calculating... [0/{total}]")

    for i, bucket in enumerate(ordered):
        if i % config.progress_every == 0:
            sink(f"calculating... [{i + 1}/{total}]")

        if len(bucket.amounts) != len(bucket.names):
            raise InternalConsistencyError(
                bucket.date, len(bucket.amounts), len(bucket.names), partial=rows
            )

        day_income = 0
        day_expenses = 0
        for amount in bucket.amounts:
            if amount >= 0:
                day_income += amount
                cumulative_income += amount
            else:
                day_expenses += amount
                cumulative_expenses += amount
            diff += amount
            balance += amount

        rows.append(
            ResultRow(
                index=bucket.position,
                date=bucket.date,
                balance=balance,
                cumulative_income=cumulative_income,
                cumulative_expenses=cumulative_expenses,
                day_income=day_income,
                day_expenses=day_expenses,
                day_net=day_income + day_expenses,
                diff_from_start=diff,
                day_transaction_names=config.names_delimiter.join(bucket.names),
                names=tuple(bucket.names),
            )
        )

    sink(f"done [{total}/{total}]")
    return rows
