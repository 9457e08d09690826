"""
Unit tests for the CSV and JSON emitters.
"""

import csv
import io
import json

import pytest

from kix_log_converter.export import (
    CSVEmitter,
    JSONEmitter,
    iter_csv_chunks,
    iter_json_chunks,
)

# =============================================================================
# CSV
# =============================================================================


class TestCSVEmitter:
    """Tests for CSV field quoting and line formatting."""

    @pytest.fixture
    def emitter(self):
        return CSVEmitter(separator=";")

    def test_plain_fields_unquoted(self, emitter):
        """Fields without special characters are written as-is."""
        assert emitter.format_row(["a", "b", "c"]) == "a;b;c\n"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("x,y", '"x,y"'),
            ("x;y", '"x;y"'),
            ('say "hi"', '"say ""hi"""'),
            ("line\nbreak", '"line\nbreak"'),
            ("carriage\rreturn", '"carriage\rreturn"'),
        ],
    )
    def test_quote_triggers(self, emitter, value, expected):
        """Quotes, line breaks, commas and semicolons force quoting."""
        assert emitter.quote_field(value) == expected

    def test_custom_separator_is_quoted(self):
        """A field containing a custom separator is quoted."""
        emitter = CSVEmitter(separator="|")
        assert emitter.format_row(["a|b", "c"]) == '"a|b"|c\n'

    def test_comma_quoted_even_with_other_separator(self):
        """Commas are always quoted, whatever the separator."""
        emitter = CSVEmitter(separator="\t")
        assert emitter.format_row(["a,b", "c"]) == '"a,b"\tc\n'

    def test_empty_fields(self, emitter):
        """Empty fields stay empty."""
        assert emitter.format_row(["", "x", ""]) == ";x;\n"

    def test_header_uses_same_quoting(self, emitter):
        """
        Header names are quoted by the same rule as fields.

        Deliberately stricter than a raw separator join, so a header name
        containing the separator cannot shift the columns.
        """
        assert emitter.format_header(["time", "a;b"]) == 'time;"a;b"\n'


class TestIterCSVChunks:
    """Tests for streamed CSV output."""

    def test_header_only_for_no_rows(self):
        """With no rows only the header line is produced."""
        assert list(iter_csv_chunks([], ["col1", "col2"])) == ["col1;col2\n"]

    def test_one_chunk_per_row(self):
        """Header plus one chunk for each row."""
        chunks = list(iter_csv_chunks([["1", "2"], ["3", "4"]], ["a", "b"]))
        assert chunks == ["a;b\n", "1;2\n", "3;4\n"]

    def test_readable_by_csv_module(self):
        """Output parses back with a standard CSV reader."""
        rows = [["1", 'quote "x"', "multi\nline"], ["2", "a,b;c", ""]]
        text = "".join(iter_csv_chunks(rows, ["id", "msg", "extra"]))

        parsed = list(csv.reader(io.StringIO(text, newline=""), delimiter=";"))
        assert parsed == [["id", "msg", "extra"]] + rows


# =============================================================================
# JSON
# =============================================================================


class TestJSONEmitter:
    """Tests for JSON object formatting."""

    def test_to_object_fills_missing_fields(self):
        """Missing trailing fields map to empty strings."""
        emitter = JSONEmitter(["a", "b", "c"])
        assert emitter.to_object(["1"]) == {"a": "1", "b": "", "c": ""}

    def test_comma_between_objects(self):
        """Only rows after the first are prefixed with a comma."""
        emitter = JSONEmitter(["a"])
        assert emitter.format_row(["1"]) == '{"a":"1"}'
        assert emitter.format_row(["2"]) == ',{"a":"2"}'
        assert emitter.rows_written == 2

    def test_non_ascii_is_literal(self):
        """Non-ASCII characters are not escaped."""
        emitter = JSONEmitter(["msg"])
        assert emitter.format_row(["Grüße"]) == '{"msg":"Grüße"}'


class TestIterJSONChunks:
    """Tests for streamed JSON output."""

    def test_empty_array(self):
        """No rows produce an empty array."""
        assert "".join(iter_json_chunks([], ["a", "b"])) == "[]"

    def test_valid_json_with_key_order(self):
        """Output is a valid array whose objects follow header order."""
        rows = [["3", "x"], ["1", 'with "quotes"\nand newline']]
        text = "".join(iter_json_chunks(rows, ["zeta", "alpha"]))

        parsed = json.loads(text)
        assert parsed == [
            {"zeta": "3", "alpha": "x"},
            {"zeta": "1", "alpha": 'with "quotes"\nand newline'},
        ]
        assert [list(obj) for obj in parsed] == [["zeta", "alpha"]] * 2

    def test_all_values_are_strings(self):
        """Numeric-looking values stay strings."""
        text = "".join(iter_json_chunks([["42"]], ["n"]))
        assert json.loads(text) == [{"n": "42"}]
