"""
Recurring transaction definitions.

A transaction recurs either through an explicit rule expression (``Explicit``)
or through simplified frequency/interval/weekday parameters (``Simple``).
The two modes are separate types; the resolver dispatches on the type.
"""

from __future__ import annotations

import datetime
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Union

from dateutil.relativedelta import relativedelta

DEFAULT_TRANSACTION_AMOUNT = -500
DEFAULT_TRANSACTION_NAME = "New"


class Frequency(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Frequency"]:
        """Return the matching member, or ``None`` (daily cadence) when unrecognised."""
        if value is None:
            return None
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class Explicit:
    """Recurrence given as an iCalendar-style rule expression."""
    expression: str


@dataclass(frozen=True)
class Simple:
    """
    Recurrence given as simplified parameters.

    ``frequency=None`` means a daily cadence. ``weekdays`` uses Monday=0 ..
    Sunday=6; empty means no weekday filter. ``start``/``end`` of ``None``
    mean unset and are clamped to the projection window.
    """
    frequency: Optional[Frequency] = Frequency.MONTHLY
    interval: int = 1
    weekdays: FrozenSet[int] = frozenset()
    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None


Recurrence = Union[Explicit, Simple]


@dataclass(frozen=True)
class TransactionDefinition:
    amount: int  # cents; -500 = -$5.00
    name: str = ""
    recurrence: Recurrence = field(default_factory=Simple)
    active: bool = True
    note: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


def new_transaction(today: Optional[datetime.date] = None) -> TransactionDefinition:
    """An active monthly expense starting today and ending one month later."""
    today = today or datetime.date.today()
    return TransactionDefinition(
        amount=DEFAULT_TRANSACTION_AMOUNT,
        name=DEFAULT_TRANSACTION_NAME,
        recurrence=Simple(
            frequency=Frequency.MONTHLY,
            interval=1,
            start=today,
            end=today + relativedelta(months=1),
        ),
    )


def toggle_weekday(weekdays: Iterable[int], weekday: int) -> List[int]:
    """Add ``weekday`` if absent, remove it if present; values outside 0-6 are ignored."""
    days = set(weekdays)
    if not 0 <= weekday <= 6:
        return sorted(days)
    days ^= {weekday}
    return sorted(days)
