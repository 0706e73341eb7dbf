"""
Core package: configuration, column schema, error taxonomy and shared helpers.
No business logic lives here.
"""

from .schema import RESULT_COLUMNS, TRANSACTION_FIELDS
from .config import ProjectionConfig, ProjectionWindow, preset_window, window_from_strings
from .errors import (
    InsufficientHistoryError,
    InternalConsistencyError,
    InvalidRange,
    ProjectionError,
    RuleParseError,
)
from .utils import (
    format_as_currency,
    format_as_date,
    parse_date_string,
    parse_dollar_amount,
)

__all__ = [
    "RESULT_COLUMNS",
    "TRANSACTION_FIELDS",
    "ProjectionConfig",
    "ProjectionWindow",
    "preset_window",
    "window_from_strings",
    "ProjectionError",
    "InvalidRange",
    "RuleParseError",
    "InternalConsistencyError",
    "InsufficientHistoryError",
    "format_as_currency",
    "format_as_date",
    "parse_date_string",
    "parse_dollar_amount",
]
