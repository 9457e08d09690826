"""
Row projection: fixed column count plus timestamp normalization.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..config.constants import (
    DEFAULT_COLUMN_COUNT,
    DEFAULT_TIMEZONE_OFFSET,
    KIX_BRACKET_COLUMN_COUNT,
    KIX_BRACKET_COLUMNS,
    LOG_FORMAT_KIX_BRACKET,
    TIMEZONE_POLICY_DEFAULT,
)
from .timestamps import normalize_timestamp_column


@dataclass
class ColumnSpec:
    """Resolved column count and header names for one conversion."""

    column_count: int
    header_names: list[str] = field(default_factory=list)

    @classmethod
    def resolve(
        cls,
        log_format: str,
        column_count: int = 0,
        header_names: Optional[Sequence[str]] = None,
        observed_max: int = 0,
    ) -> "ColumnSpec":
        """Resolve both the column count and the header names."""
        count = resolve_column_count(
            log_format, column_count, header_names, observed_max
        )
        return cls(
            column_count=count,
            header_names=resolve_header_names(count, header_names, log_format),
        )


def resolve_column_count(
    log_format: str,
    column_count: int = 0,
    header_names: Optional[Sequence[str]] = None,
    observed_max: int = 0,
) -> int:
    """
    Decide how many columns every projected row gets.

    Bracket logs always have four columns. Otherwise the first positive
    value wins: explicit count, header count, widest observed row (previews
    only), then the default of 12.
    """
    if log_format == LOG_FORMAT_KIX_BRACKET:
        return KIX_BRACKET_COLUMN_COUNT
    if column_count and column_count > 0:
        return column_count
    if header_names:
        return len(header_names)
    if observed_max > 0:
        return observed_max
    return DEFAULT_COLUMN_COUNT


def default_header_names(column_count: int, log_format: str) -> list[str]:
    """Header names used when the caller supplies none."""
    if log_format == LOG_FORMAT_KIX_BRACKET:
        return list(KIX_BRACKET_COLUMNS[:column_count])
    return [f"col{i + 1}" for i in range(column_count)]


def resolve_header_names(
    column_count: int,
    header_names: Optional[Sequence[str]] = None,
    log_format: str = "",
) -> list[str]:
    """
    Fit caller header names to the column count.

    Extra names are dropped; missing ones are filled with the defaults for
    their position.
    """
    defaults = default_header_names(column_count, log_format)
    if not header_names:
        return defaults
    names = [str(name) for name in header_names[:column_count]]
    return names + defaults[len(names):]


def project_row(
    raw: Sequence[str],
    keep: int,
    timestamp_column_index: int = -1,
    timezone_policy: str = TIMEZONE_POLICY_DEFAULT,
    timezone_offset: str = DEFAULT_TIMEZONE_OFFSET,
) -> list[str]:
    """
    Truncate or pad a raw row to ``keep`` fields and normalize its timestamp.

    Projection happens first, so the timestamp index refers to the projected
    row.
    """
    row = list(raw[:keep])
    if len(row) < keep:
        row.extend([""] * (keep - len(row)))
    normalize_timestamp_column(
        row, timestamp_column_index, timezone_policy, timezone_offset
    )
    return row
