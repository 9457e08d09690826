"""
Timestamp normalization into ISO-8601 with a timezone suffix.

Two fixed grammars are tried in order, first match wins:

1. DAY_FIRST           05-03-2024 13:45:00       -> 2024-03-05T13:45:00
2. BRACKET_MONTH_NAME  Tue Mar 5 13:45:00 2024   -> 2024-03-05T13:45:00

Each grammar carries its own timezone rule. Day-first timestamps follow the
caller's policy ("default" -> Z, "offset" -> caller offset, "none" -> no
suffix). Month-name timestamps from bracket logs are always UTC and get "Z"
whatever the caller selected.

Values matching neither grammar are returned unchanged; nothing here raises.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..config.constants import (
    DEFAULT_TIMEZONE_OFFSET,
    MONTH_ABBREVIATIONS,
    TIMEZONE_POLICY_DEFAULT,
    TIMEZONE_POLICY_OFFSET,
)

logger = logging.getLogger(__name__)

_SPACED_DASH_RE = re.compile(r"\s*-\s*")
_SPACED_COLON_RE = re.compile(r"\s*:\s*")

_DAY_FIRST_RE = re.compile(
    r"^(\d{2})-(\d{2})-(\d{4})\s+(\d{2}):(\d{2}):(\d{2})$",
    re.ASCII,
)

_MONTH_NAMES = "|".join(MONTH_ABBREVIATIONS)
_MONTH_NAME_RE = re.compile(
    r"^(?:[A-Za-z]{3}\s+)?"
    rf"({_MONTH_NAMES})\s+(\d{{1,2}})\s+"
    r"(\d{2}):(\d{2}):(\d{2})\s+(\d{4})$",
    re.ASCII,
)


class TimestampFormat(str, Enum):
    """Timestamp grammars recognized by the normalizer."""

    DAY_FIRST = "day_first"
    BRACKET_MONTH_NAME = "bracket_month_name"


class TimezoneRule(str, Enum):
    """How a matched grammar picks its timezone suffix."""

    CALLER_POLICY = "caller_policy"
    FORCE_UTC = "force_utc"


@dataclass(frozen=True)
class TimestampPattern:
    """A grammar, its parser, and its timezone rule."""

    format: TimestampFormat
    parse: Callable[[str], Optional[str]]
    timezone_rule: TimezoneRule


def collapse_separators(value: str) -> str:
    """Remove whitespace around ``-`` and ``:`` and trim the value."""
    value = _SPACED_DASH_RE.sub("-", value)
    value = _SPACED_COLON_RE.sub(":", value)
    return value.strip()


def parse_day_first(value: str) -> Optional[str]:
    """Parse ``DD-MM-YYYY HH:MM:SS`` into ISO-8601 without a zone."""
    match = _DAY_FIRST_RE.match(value)
    if not match:
        return None
    day, month, year, hour, minute, second = match.groups()
    return f"{year}-{month}-{day}T{hour}:{minute}:{second}"


def parse_month_name(value: str) -> Optional[str]:
    """Parse ``[Www] Mon D HH:MM:SS YYYY`` into ISO-8601 without a zone."""
    match = _MONTH_NAME_RE.match(value)
    if not match:
        return None
    month_name, day, hour, minute, second, year = match.groups()
    month = MONTH_ABBREVIATIONS[month_name]
    return f"{year}-{month:02d}-{int(day):02d}T{hour}:{minute}:{second}"


# Tried in this order
TIMESTAMP_PATTERNS = (
    TimestampPattern(
        TimestampFormat.DAY_FIRST,
        parse_day_first,
        TimezoneRule.CALLER_POLICY,
    ),
    TimestampPattern(
        TimestampFormat.BRACKET_MONTH_NAME,
        parse_month_name,
        TimezoneRule.FORCE_UTC,
    ),
)


def apply_timezone_policy(
    iso_without_zone: str,
    policy: str = TIMEZONE_POLICY_DEFAULT,
    offset: str = DEFAULT_TIMEZONE_OFFSET,
) -> str:
    """Append the suffix selected by ``policy``; unknown policies add none."""
    if policy == TIMEZONE_POLICY_DEFAULT:
        return f"{iso_without_zone}Z"
    if policy == TIMEZONE_POLICY_OFFSET:
        return f"{iso_without_zone}{offset}"
    return iso_without_zone


def match_timestamp(value: str) -> Optional[tuple[TimestampPattern, str]]:
    """Return the first matching pattern and its zone-less ISO value."""
    collapsed = collapse_separators(value)
    for pattern in TIMESTAMP_PATTERNS:
        iso = pattern.parse(collapsed)
        if iso is not None:
            return pattern, iso
    return None


def normalize_timestamp(
    value: str,
    policy: str = TIMEZONE_POLICY_DEFAULT,
    offset: str = DEFAULT_TIMEZONE_OFFSET,
) -> str:
    """
    Normalize a timestamp string into ISO-8601 with a timezone suffix.

    Args:
        value: Raw field value
        policy: "default", "offset" or "none"; ignored for month-name stamps
        offset: Suffix used with the "offset" policy, e.g. "+02:00"

    Returns:
        Normalized timestamp, or ``value`` unchanged if no grammar matches
    """
    matched = match_timestamp(value)
    if matched is None:
        return value

    pattern, iso = matched
    if pattern.timezone_rule is TimezoneRule.FORCE_UTC:
        return f"{iso}Z"
    return apply_timezone_policy(iso, policy, offset)


def normalize_timestamp_column(
    row: list[str],
    index: int,
    policy: str = TIMEZONE_POLICY_DEFAULT,
    offset: str = DEFAULT_TIMEZONE_OFFSET,
) -> None:
    """
    Normalize ``row[index]`` in place.

    No-op for a negative or out-of-range index or an empty field.
    """
    if index < 0 or index >= len(row):
        return
    value = row[index]
    if not value or not value.strip():
        return
    row[index] = normalize_timestamp(value, policy, offset)
