"""
Unit tests for timestamp normalization.
"""

import pytest

from kix_log_converter.normalization import (
    TIMESTAMP_PATTERNS,
    TimestampFormat,
    TimezoneRule,
    apply_timezone_policy,
    collapse_separators,
    match_timestamp,
    normalize_timestamp,
    normalize_timestamp_column,
    parse_day_first,
    parse_month_name,
)


class TestCollapseSeparators:
    """Tests for collapse_separators."""

    def test_spaces_around_separators(self):
        """Whitespace around - and : is removed."""
        assert collapse_separators(" 05 - 03 - 2024 13 : 45 : 00 ") == (
            "05-03-2024 13:45:00"
        )

    def test_other_spaces_kept(self):
        """Whitespace between date and time is untouched."""
        assert collapse_separators("05-03-2024   13:45:00") == "05-03-2024   13:45:00"


class TestParsers:
    """Tests for the individual grammars."""

    def test_day_first(self):
        """DD-MM-YYYY HH:MM:SS reorders to year-month-day."""
        assert parse_day_first("05-03-2024 13:45:00") == "2024-03-05T13:45:00"

    def test_day_first_requires_two_digit_fields(self):
        """Single-digit day or month does not match."""
        assert parse_day_first("5-3-2024 13:45:00") is None

    def test_month_name_with_weekday(self):
        """Weekday prefix is optional and ignored."""
        assert parse_month_name("Tue Mar 5 13:45:00 2024") == "2024-03-05T13:45:00"

    def test_month_name_without_weekday(self):
        """Day numbers are zero-padded."""
        assert parse_month_name("Dec 31 23:59:59 2023") == "2023-12-31T23:59:59"

    def test_unknown_month(self):
        """Month abbreviations outside Jan-Dec do not match."""
        assert parse_month_name("Foo 5 13:45:00 2024") is None

    def test_patterns_are_ordered(self):
        """Day-first is tried before month-name."""
        assert [p.format for p in TIMESTAMP_PATTERNS] == [
            TimestampFormat.DAY_FIRST,
            TimestampFormat.BRACKET_MONTH_NAME,
        ]
        assert TIMESTAMP_PATTERNS[1].timezone_rule is TimezoneRule.FORCE_UTC


class TestApplyTimezonePolicy:
    """Tests for apply_timezone_policy."""

    def test_policies(self):
        """Each policy picks its suffix."""
        iso = "2024-03-05T13:45:00"
        assert apply_timezone_policy(iso, "default") == iso + "Z"
        assert apply_timezone_policy(iso, "offset", "-05:00") == iso + "-05:00"
        assert apply_timezone_policy(iso, "none") == iso

    def test_unknown_policy_adds_no_suffix(self):
        """Unrecognized policies behave like "none"."""
        assert apply_timezone_policy("2024-03-05T13:45:00", "bogus") == (
            "2024-03-05T13:45:00"
        )


class TestNormalizeTimestamp:
    """Tests for normalize_timestamp."""

    def test_day_first_default_policy(self):
        """Default policy appends Z."""
        assert normalize_timestamp("05-03-2024 13:45:00") == "2024-03-05T13:45:00Z"

    def test_day_first_offset_policy(self):
        """Offset policy appends the caller's offset."""
        assert (
            normalize_timestamp("05-03-2024 13:45:00", "offset", "+02:00")
            == "2024-03-05T13:45:00+02:00"
        )

    def test_day_first_none_policy(self):
        """None policy appends nothing."""
        assert normalize_timestamp("05-03-2024 13:45:00", "none") == (
            "2024-03-05T13:45:00"
        )

    def test_spaced_separators(self):
        """Spaced-out separators are collapsed before matching."""
        assert normalize_timestamp("05 - 03 - 2024 13 : 45 : 00") == (
            "2024-03-05T13:45:00Z"
        )

    @pytest.mark.parametrize("policy", ["default", "offset", "none", "bogus"])
    def test_month_name_stamps_are_always_utc(self, policy):
        """Bracket-log month-name stamps get Z regardless of the caller policy."""
        assert (
            normalize_timestamp("Tue Mar 5 13:45:00 2024", policy, "+02:00")
            == "2024-03-05T13:45:00Z"
        )

    @pytest.mark.parametrize(
        "value",
        [
            "2024-03-05T13:45:00",
            "not a timestamp",
            "05/03/2024 13:45:00",
            "05-03-2024",
            "",
            "٠٥-٠٣-٢٠٢٤ 13:45:00",
            "Mar ٥ 13:45:00 2024",
        ],
    )
    def test_unrecognized_values_pass_through(self, value):
        """Values matching no grammar are returned unchanged."""
        assert normalize_timestamp(value, "offset", "+02:00") == value

    @pytest.mark.parametrize(
        "value,policy",
        [
            ("05-03-2024 13:45:00", "default"),
            ("05-03-2024 13:45:00", "offset"),
            ("Tue Mar 5 13:45:00 2024", "none"),
        ],
    )
    def test_normalizing_twice_is_noop(self, value, policy):
        """Already normalized values match no grammar and pass through."""
        once = normalize_timestamp(value, policy, "+02:00")
        assert normalize_timestamp(once, policy, "+02:00") == once

    def test_match_timestamp_reports_pattern(self):
        """match_timestamp returns the matching pattern and zone-less value."""
        pattern, iso = match_timestamp("Mar 5 13:45:00 2024")
        assert pattern.format is TimestampFormat.BRACKET_MONTH_NAME
        assert iso == "2024-03-05T13:45:00"
        assert match_timestamp("nope") is None


class TestNormalizeTimestampColumn:
    """Tests for in-place column normalization."""

    def test_normalizes_in_place(self):
        """The selected field is replaced."""
        row = ["05-03-2024 13:45:00", "INFO"]
        normalize_timestamp_column(row, 0)
        assert row == ["2024-03-05T13:45:00Z", "INFO"]

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_out_of_range_index_is_noop(self, index):
        """Negative and out-of-range indices leave the row untouched."""
        row = ["05-03-2024 13:45:00", "INFO"]
        normalize_timestamp_column(row, index)
        assert row == ["05-03-2024 13:45:00", "INFO"]

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_field_is_noop(self, value):
        """Empty and whitespace-only fields stay as they are."""
        row = [value]
        normalize_timestamp_column(row, 0)
        assert row == [value]
