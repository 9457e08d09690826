"""
Row normalization: column-count enforcement and timestamp conversion.

Usage:
    from kix_log_converter.normalization import normalize_timestamp, project_row

    normalize_timestamp("05-03-2024 13:45:00")  # "2024-03-05T13:45:00Z"
    project_row(["a", "b", "c"], keep=2)        # ["a", "b"]
"""

from .projection import (
    ColumnSpec,
    default_header_names,
    project_row,
    resolve_column_count,
    resolve_header_names,
)
from .timestamps import (
    TIMESTAMP_PATTERNS,
    TimestampFormat,
    TimestampPattern,
    TimezoneRule,
    apply_timezone_policy,
    collapse_separators,
    match_timestamp,
    normalize_timestamp,
    normalize_timestamp_column,
    parse_day_first,
    parse_month_name,
)

__all__ = [
    # Projection
    "ColumnSpec",
    "default_header_names",
    "project_row",
    "resolve_column_count",
    "resolve_header_names",
    # Timestamps
    "TIMESTAMP_PATTERNS",
    "TimestampFormat",
    "TimestampPattern",
    "TimezoneRule",
    "apply_timezone_policy",
    "collapse_separators",
    "match_timestamp",
    "normalize_timestamp",
    "normalize_timestamp_column",
    "parse_day_first",
    "parse_month_name",
]
