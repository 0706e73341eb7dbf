"""
Per-day containers used while building a projection, and the rows it yields.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class DayBucket:
    """Contributions landing on one calendar date, in resolution order."""
    position: int
    date: datetime.date
    amounts: List[int] = field(default_factory=list)
    names: List[str] = field(default_factory=list)

    def add(self, amount: int, name: str) -> None:
        self.amounts.append(amount)
        self.names.append(name)


@dataclass(frozen=True)
class ResultRow:
    """One projected day. All money values are integer cents."""
    index: int
    date: datetime.date
    balance: int
    cumulative_income: int
    cumulative_expenses: int
    day_income: int
    day_expenses: int
    day_net: int
    diff_from_start: int
    day_transaction_names: str
    names: Tuple[str, ...] = ()
