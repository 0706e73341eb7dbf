"""
Progress sinks: where the engine sends its coarse status strings.

The engine only ever calls ``sink(status)``. Thread or task affinity is the
caller's business and lives in adapters such as ``QueueSink`` (the owner polls
and drains) or ``ThreadSafeSink`` (statuses are posted to the owner's loop).
"""

from __future__ import annotations

import functools
import logging
import queue
from typing import Callable, Optional, Protocol

from core.logging_setup import get_logger


class ProgressSink(Protocol):
    def __call__(self, status: str) -> None: ...


class NullSink:
    """Discards every status."""

    def __call__(self, status: str) -> None:
        return None


class LoggingSink:
    """Writes every status to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or get_logger("finplan.engine.progress")
        self._level = level

    def __call__(self, status: str) -> None:
        self._logger.log(self._level, "%s", status)


class QueueSink:
    """
    Buffers statuses from the worker; the owning thread calls ``drain`` to
    hand them to its own handler.
    """

    def __init__(self) -> None:
        self._queue: "queue.SimpleQueue[str]" = queue.SimpleQueue()

    def __call__(self, status: str) -> None:
        self._queue.put(status)

    def drain(self, handler: Callable[[str], None]) -> int:
        """Deliver every pending status to ``handler``; returns how many were delivered."""
        delivered = 0
        while True:
            try:
                status = self._queue.get_nowait()
            except queue.Empty:
                return delivered
            handler(status)
            delivered += 1


class ThreadSafeSink:
    """
    Marshals each status onto the owner's execution context.

    ``post`` schedules a zero-argument callable on that context, e.g.
    ``loop.call_soon_threadsafe``.
    """

    def __init__(self, post: Callable[[Callable[[], None]], object], handler: Callable[[str], None]):
        self._post = post
        self._handler = handler

    def __call__(self, status: str) -> None:
        self._post(functools.partial(self._handler, status))
