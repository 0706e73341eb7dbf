"""
Projection runner. Orchestrates the pipeline for one run:

  index_dates -> resolve_recurrences -> aggregate

Inputs are treated as a read-only snapshot; nothing is cached between runs.
"""

from __future__ import annotations

import datetime
import time
from typing import Iterable, List, Optional

from core.config import ProjectionConfig, ProjectionWindow, window_from_strings
from core.logging_setup import get_logger
from models.ledger import ResultRow
from models.transaction import TransactionDefinition

from .aggregator import aggregate
from .calendar import index_dates
from .progress import NullSink, ProgressSink
from .recurrence import resolve_recurrences

logger = get_logger("finplan.engine.runner")


def run_projection(
    transactions: Iterable[TransactionDefinition],
    window: ProjectionWindow,
    starting_balance: int,
    *,
    sink: Optional[ProgressSink] = None,
    config: Optional[ProjectionConfig] = None,
) -> List[ResultRow]:
    """
    Project a day-by-day ledger over ``window``.

    Parameters
    ----------
    transactions : iterable of TransactionDefinition
        Recurring definitions; inactive ones are ignored.
    window : ProjectionWindow
        Inclusive date range.
    starting_balance : int
        Balance in cents before the first day.
    sink : ProgressSink, optional
        Receives coarse status strings ("recurrences... [i/n]" etc).
    config : ProjectionConfig, optional

    Returns
    -------
    One ResultRow per date in the window, ascending. Raises a
    ``ProjectionError`` subclass on the first failure.
    """
    cfg = config or ProjectionConfig()
    if sink is None or cfg.disable_status_messages:
        sink = NullSink()

    snapshot = tuple(transactions)
    t0 = time.perf_counter()
    logger.info(
        "projection started: %d transactions, %s..%s (%d days)",
        len(snapshot),
        window.start,
        window.end,
        window.day_count,
    )

    sink("preparing dates...")
    buckets = index_dates(window.start, window.end)

    resolve_recurrences(snapshot, buckets, window.start, window.end, sink=sink, config=cfg)

    sink(f"sorting dates... [{len(buckets)}]")
    rows = aggregate(buckets.values(), starting_balance, sink=sink, config=cfg)

    logger.info("projection finished: %d rows in %.3fs", len(rows), time.perf_counter() - t0)
    return rows


def run_projection_from_strings(
    transactions: Iterable[TransactionDefinition],
    starting_balance: int,
    start: str,
    end: str,
    *,
    sink: Optional[ProgressSink] = None,
    config: Optional[ProjectionConfig] = None,
    today: Optional[datetime.date] = None,
) -> List[ResultRow]:
    """``run_projection`` for ``YYYY-MM-DD`` window strings; unset dates default to today / today + 1 year."""
    window = window_from_strings(start, end, today=today)
    return run_projection(transactions, window, starting_balance, sink=sink, config=config)
