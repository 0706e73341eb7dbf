"""
Projection configuration and the date window a projection covers.
"""

from __future__ import annotations

import datetime
import os
from dataclasses import dataclass
from typing import Optional

from dateutil.relativedelta import relativedelta

from .errors import InvalidRange
from .utils import normalized_date, parse_date_string

_UNSET_DATE_STRINGS = frozenset({"", "0-0-0", "--"})


@dataclass(frozen=True)
class ProjectionConfig:
    # status callbacks fire once per this many transactions / rows
    progress_every: int = 1000
    names_delimiter: str = "; "

    # skip status messages entirely; faster for very large windows
    disable_status_messages: bool = False

    # row index read by the stats summary (one year after the window start)
    stats_horizon_days: int = 365

    @classmethod
    def from_env(cls) -> "ProjectionConfig":
        """Build a config, honouring ``FINPLAN_PROGRESS_EVERY`` and ``FINPLAN_DISABLE_STATUS_MESSAGES``."""
        kwargs = {}
        every = os.getenv("FINPLAN_PROGRESS_EVERY")
        if every and every.strip().isdigit() and int(every) > 0:
            kwargs["progress_every"] = int(every)
        disable = os.getenv("FINPLAN_DISABLE_STATUS_MESSAGES")
        if disable:
            kwargs["disable_status_messages"] = disable.strip().lower() in {"1", "true", "yes", "on"}
        return cls(**kwargs)


@dataclass(frozen=True)
class ProjectionWindow:
    """Inclusive calendar-date range; raises ``InvalidRange`` when start > end."""

    start: datetime.date
    end: datetime.date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidRange(self.start, self.end)

    @property
    def day_count(self) -> int:
        return (self.end - self.start).days + 1


def _date_or_default(text: str, default: datetime.date) -> datetime.date:
    if (text or "").strip() in _UNSET_DATE_STRINGS:
        return default
    year, month, day = parse_date_string(text)
    if year <= 0:
        return default
    return normalized_date(year, month, day)


def window_from_strings(
    start: str,
    end: str,
    *,
    today: Optional[datetime.date] = None,
) -> ProjectionWindow:
    """
    Build a window from ``YYYY-MM-DD`` strings.

    Unset or unparseable values default to today (start) and one year from
    today (end).
    """
    today = today or datetime.date.today()
    return ProjectionWindow(
        start=_date_or_default(start, today),
        end=_date_or_default(end, today + relativedelta(years=1)),
    )


def preset_window(years: int, *, today: Optional[datetime.date] = None) -> ProjectionWindow:
    """Window starting today and ending ``365 * years`` days later."""
    today = today or datetime.date.today()
    return ProjectionWindow(start=today, end=today + datetime.timedelta(days=365 * years))
