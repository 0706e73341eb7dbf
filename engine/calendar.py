"""
Day index for a projection window: one empty bucket per calendar date.
"""

from __future__ import annotations

import datetime
from typing import Dict

from core.errors import InvalidRange
from models.ledger import DayBucket

_ONE_DAY = datetime.timedelta(days=1)


def index_dates(start: datetime.date, end: datetime.date) -> Dict[datetime.date, DayBucket]:
    """
    Build one ``DayBucket`` per date from ``start`` to ``end`` inclusive, keyed
    by date in ascending order, each carrying its sequential position.
    """
    if start > end:
        raise InvalidRange(start, end)

    buckets: Dict[datetime.date, DayBucket] = {}
    day = start
    position = 0
    while day <= end:
        buckets[day] = DayBucket(position=position, date=day)
        position += 1
        day += _ONE_DAY
    return buckets
