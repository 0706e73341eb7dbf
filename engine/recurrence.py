"""
Recurrence resolution: which window dates each transaction lands on.

Explicit rule expressions are evaluated by dateutil's RFC 5545 parser.
Simplified definitions are turned into a dateutil ``rrule``:
  - unset start/end are clamped to the window, as is an end past the window
  - no frequency means a daily cadence
  - interval < 1 is treated as 1
  - weekdays expand within each candidate week for WEEKLY (and daily);
    MONTHLY/YEARLY occurrences are kept only when they land on a listed weekday
"""

from __future__ import annotations

import datetime
from typing import Dict, List, Sequence

from dateutil import rrule

from core.config import ProjectionConfig
from core.errors import RuleParseError
from core.logging_setup import get_logger
from models.ledger import DayBucket
from models.transaction import Explicit, Frequency, Simple, TransactionDefinition

from .progress import ProgressSink

logger = get_logger("finplan.engine.recurrence")

_RRULE_FREQ = {
    Frequency.WEEKLY: rrule.WEEKLY,
    Frequency.MONTHLY: rrule.MONTHLY,
    Frequency.YEARLY: rrule.YEARLY,
}
_EXPANDS_WEEKDAYS = (rrule.DAILY, rrule.WEEKLY)


def _midnight(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.min)


def _end_of_day(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time.max)


def _explicit_occurrences(
    tx: TransactionDefinition,
    recurrence: Explicit,
    start: datetime.date,
    end: datetime.date,
) -> List[datetime.date]:
    try:
        rule_set = rrule.rrulestr(
            recurrence.expression,
            dtstart=_midnight(start),
            forceset=True,
            ignoretz=True,
        )
        hits = rule_set.between(_midnight(start), _end_of_day(end), inc=True)
    except (ValueError, TypeError) as exc:
        raise RuleParseError(tx.id, tx.name, str(exc)) from exc
    return [dt.date() for dt in hits]


def _simple_occurrences(
    tx: TransactionDefinition,
    recurrence: Simple,
    start: datetime.date,
    end: datetime.date,
) -> List[datetime.date]:
    first = recurrence.start if recurrence.start is not None else start
    last = end if recurrence.end is None or recurrence.end > end else recurrence.end

    freq = _RRULE_FREQ.get(recurrence.frequency, rrule.DAILY)
    if recurrence.frequency is None:
        logger.debug("tx %s (%s) has no frequency; using a daily cadence", tx.name, tx.id)

    weekdays = sorted(d for d in recurrence.weekdays if 0 <= d <= 6)
    kwargs = {
        "dtstart": _midnight(first),
        "until": _midnight(last),
        "interval": max(int(recurrence.interval), 1),
    }
    if weekdays and freq in _EXPANDS_WEEKDAYS:
        kwargs["byweekday"] = weekdays

    hits = [dt.date() for dt in rrule.rrule(freq, **kwargs).between(_midnight(start), _midnight(end), inc=True)]
    # monthly/yearly keep only dates already on a listed weekday; they never add dates
    if weekdays and freq not in _EXPANDS_WEEKDAYS:
        hits = [d for d in hits if d.weekday() in weekdays]
    return hits


def occurrences(
    tx: TransactionDefinition,
    start: datetime.date,
    end: datetime.date,
) -> List[datetime.date]:
    """All dates in ``[start, end]`` on which ``tx`` recurs, ascending."""
    recurrence = tx.recurrence
    if isinstance(recurrence, Explicit):
        return _explicit_occurrences(tx, recurrence, start, end)
    if isinstance(recurrence, Simple):
        return _simple_occurrences(tx, recurrence, start, end)
    raise TypeError(f"unsupported recurrence for tx {tx.id}: {type(recurrence).__name__}")


def resolve_recurrences(
    transactions: Sequence[TransactionDefinition],
    buckets: Dict[datetime.date, DayBucket],
    start: datetime.date,
    end: datetime.date,
    *,
    sink: ProgressSink,
    config: ProjectionConfig,
) -> None:
    """
    Append ``(amount, name)`` of every active transaction to the bucket of each
    date it recurs on. Inactive transactions are skipped. The first failure
    aborts resolution; the error's ``partial`` holds the buckets filled so far.
    """
    total = len(transactions)
    sink(f"recurrences... [0/{total}]")

    for i, tx in enumerate(transactions):
        if i % config.progress_every == 0:
            sink(f"recurrences... [{i + 1}/{total}]")

        if not tx.active:
            continue

        try:
            days = occurrences(tx, start, end)
        except RuleParseError as exc:
            exc.partial = buckets
            raise

        for day in days:
            buckets[day].add(tx.amount, tx.name)
