"""
Coarse daily / monthly / yearly rates read off a completed projection.

The row one year after the window start supplies cumulative income and
expenses; daily = cumulative / 365, monthly = cumulative / 12 (not calendar
aware), yearly = cumulative. Divisions truncate toward zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd

from core.config import ProjectionConfig
from core.errors import InsufficientHistoryError
from core.utils import div_trunc, format_as_currency
from models.ledger import ResultRow


@dataclass(frozen=True)
class StatsSummary:
    """All values in cents; spending is negative."""
    daily_spending: int
    daily_income: int
    monthly_spending: int
    monthly_income: int
    yearly_spending: int
    yearly_income: int

    @property
    def daily_net(self) -> int:
        return self.daily_spending + self.daily_income

    @property
    def monthly_net(self) -> int:
        return self.monthly_spending + self.monthly_income

    @property
    def yearly_net(self) -> int:
        return self.yearly_spending + self.yearly_income

    def to_text(self) -> str:
        lines = ["Here are some statistics about your finances.", ""]
        for label, spending, income, net in self._periods():
            lines.append(f"{label} spending: {format_as_currency(spending)}")
            lines.append(f"{label} income: {format_as_currency(income)}")
            lines.append(f"{label} net: {format_as_currency(net)}")
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table of currency strings."""
        return pd.DataFrame([
            {
                "Period": label,
                "Spending": format_as_currency(spending),
                "Income": format_as_currency(income),
                "Net": format_as_currency(net),
            }
            for label, spending, income, net in self._periods()
        ])

    def _periods(self):
        return (
            ("Daily", self.daily_spending, self.daily_income, self.daily_net),
            ("Monthly", self.monthly_spending, self.monthly_income, self.monthly_net),
            ("Yearly", self.yearly_spending, self.yearly_income, self.yearly_net),
        )


def summarize_stats(
    rows: Sequence[ResultRow],
    *,
    config: Optional[ProjectionConfig] = None,
) -> StatsSummary:
    """Summarize a projection; needs the row at index 365 to exist."""
    horizon = (config or ProjectionConfig()).stats_horizon_days
    if len(rows) <= horizon:
        raise InsufficientHistoryError(len(rows), horizon + 1)

    row = rows[horizon]
    expenses = row.cumulative_expenses
    income = row.cumulative_income

    return StatsSummary(
        daily_spending=div_trunc(expenses, horizon),
        daily_income=div_trunc(income, horizon),
        monthly_spending=div_trunc(expenses, 12),
        monthly_income=div_trunc(income, 12),
        yearly_spending=expenses,
        yearly_income=income,
    )
