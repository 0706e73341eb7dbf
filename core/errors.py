"""
Error taxonomy for the projection engine.

Every error subclasses ``ProjectionError`` (itself a ``ValueError``) so callers
can catch the whole family at once. ``partial`` holds whatever intermediate
data existed when the run aborted; it is diagnostic only and never a result.
"""

from __future__ import annotations

import datetime
from typing import Any, Optional


class ProjectionError(ValueError):
    """Base class for failures raised while computing a projection."""

    def __init__(self, message: str, *, partial: Any = None):
        super().__init__(message)
        self.partial = partial


class InvalidRange(ProjectionError):
    """The projection window starts after it ends."""

    def __init__(self, start: datetime.date, end: datetime.date):
        super().__init__(f"start date is after end date: {start} vs {end}", partial=[])
        self.start = start
        self.end = end


class RuleParseError(ProjectionError):
    """An explicit recurrence rule could not be evaluated."""

    def __init__(
        self,
        transaction_id: str,
        transaction_name: str,
        reason: str,
        *,
        partial: Any = None,
    ):
        super().__init__(
            f"failed to process rrule for tx {transaction_name!r} ({transaction_id}): {reason}",
            partial=partial,
        )
        self.transaction_id = transaction_id
        self.transaction_name = transaction_name


class InternalConsistencyError(ProjectionError):
    """A day bucket holds a different number of amounts and names."""

    def __init__(self, day: datetime.date, n_amounts: int, n_names: int, *, partial: Any = None):
        super().__init__(
            f"different number of transaction amounts ({n_amounts}) versus "
            f"transaction names ({n_names}) for date {day}",
            partial=partial,
        )
        self.day = day


class InsufficientHistoryError(ProjectionError):
    """Statistics need at least one full year of projected rows."""

    def __init__(self, n_rows: int, required: int, detail: Optional[str] = None):
        super().__init__(
            detail
            or (
                "You need at least one year between your start date and end date "
                f"to get statistics about your finances (have {n_rows} rows, need {required})."
            )
        )
        self.n_rows = n_rows
        self.required = required
