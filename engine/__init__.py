"""
Projection engine: day index, recurrence resolution, aggregation and the
single-flight execution context.
"""

from .runner import run_projection, run_projection_from_strings
from .guard import ExecutionContext
from .progress import LoggingSink, NullSink, ProgressSink, QueueSink, ThreadSafeSink

__all__ = [
    "run_projection",
    "run_projection_from_strings",
    "ExecutionContext",
    "ProgressSink",
    "NullSink",
    "LoggingSink",
    "QueueSink",
    "ThreadSafeSink",
]
