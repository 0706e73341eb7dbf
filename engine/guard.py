"""
Single-flight execution of projections on a background worker.

``ExecutionContext`` is created and owned by the caller. It holds the
in-progress flag, a completion signal and the latest retained result set.
A request that arrives while a run is in flight is dropped: not queued,
not an error. Runs cannot be cancelled once started.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, List, Optional

from core.config import ProjectionConfig, ProjectionWindow
from core.errors import ProjectionError
from core.logging_setup import get_logger
from models.ledger import ResultRow
from models.transaction import TransactionDefinition

from .progress import ProgressSink
from .runner import run_projection

logger = get_logger("finplan.engine.guard")


class ExecutionContext:
    """
    Usage:
        with ExecutionContext() as ctx:
            future = ctx.submit(transactions, window, 100_000, sink=QueueSink())
            if future is not None:
                rows = future.result()
    """

    def __init__(
        self,
        *,
        config: Optional[ProjectionConfig] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.config = config or ProjectionConfig()
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="projection")
        self._owns_executor = executor is None
        self._lock = threading.Lock()
        self._in_progress = False
        self._done = threading.Event()
        self._done.set()
        self.latest: Optional[List[ResultRow]] = None
        self.last_error: Optional[ProjectionError] = None

    @property
    def in_progress(self) -> bool:
        with self._lock:
            return self._in_progress

    def submit(
        self,
        transactions: Iterable[TransactionDefinition],
        window: ProjectionWindow,
        starting_balance: int,
        *,
        sink: Optional[ProgressSink] = None,
    ) -> Optional["Future[List[ResultRow]]"]:
        """Start a run in the background, or return ``None`` if one is already running."""
        with self._lock:
            if self._in_progress:
                logger.info("projection already in progress; request dropped")
                return None
            self._in_progress = True
            self._done.clear()

        try:
            snapshot = tuple(transactions)
            return self._executor.submit(self._run, snapshot, window, starting_balance, sink)
        except BaseException:
            self._finish()
            raise

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until no run is in flight; False on timeout."""
        return self._done.wait(timeout)

    def release(self) -> None:
        """Clear and drop the retained result set. Call from the owning thread."""
        if self.latest is not None:
            self.latest.clear()
        self.latest = None

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ExecutionContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown(wait=True)

    def _run(
        self,
        transactions,
        window: ProjectionWindow,
        starting_balance: int,
        sink: Optional[ProgressSink],
    ) -> List[ResultRow]:
        try:
            rows = run_projection(
                transactions, window, starting_balance, sink=sink, config=self.config
            )
        except ProjectionError as exc:
            logger.warning("projection failed: %s", exc)
            self.last_error = exc
            raise
        else:
            self.latest = rows
            self.last_error = None
            return rows
        finally:
            self._finish()

    def _finish(self) -> None:
        with self._lock:
            self._in_progress = False
        self._done.set()
