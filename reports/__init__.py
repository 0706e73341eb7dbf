"""
Reports: statistics and exports derived from a completed projection.
"""

from .stats import StatsSummary, summarize_stats
from .export import results_to_csv, results_to_frame, write_results_csv

__all__ = [
    "StatsSummary",
    "summarize_stats",
    "results_to_csv",
    "results_to_frame",
    "write_results_csv",
]
