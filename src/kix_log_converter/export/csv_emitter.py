"""
Streaming CSV emitter.

Writes a header line and one line per projected row. Rows are formatted one
at a time, so output can be streamed without holding the result in memory.
"""

from typing import Iterable, Iterator, Sequence

from ..config.constants import CSV_QUOTE_TRIGGERS, DEFAULT_OUTPUT_FIELD_SEPARATOR

LINE_TERMINATOR = "\n"


class CSVEmitter:
    """
    CSV line formatter with a configurable field separator.

    A field is quoted when it contains a double quote, a line break, a comma,
    a semicolon or the separator itself; embedded quotes are doubled.

    Usage:
        emitter = CSVEmitter(separator=";")
        sink.write(emitter.format_header(["col1", "col2"]))
        for row in rows:
            sink.write(emitter.format_row(row))
    """

    def __init__(self, separator: str = DEFAULT_OUTPUT_FIELD_SEPARATOR):
        """
        Initialize CSV emitter.

        Args:
            separator: Output field separator (default: semicolon)
        """
        self.separator = separator

    def needs_quoting(self, value: str) -> bool:
        if any(char in value for char in CSV_QUOTE_TRIGGERS):
            return True
        return bool(self.separator) and self.separator in value

    def quote_field(self, value: object) -> str:
        """Quote a single field if required."""
        text = "" if value is None else str(value)
        if self.needs_quoting(text):
            return '"' + text.replace('"', '""') + '"'
        return text

    def format_line(self, fields: Sequence[object]) -> str:
        return (
            self.separator.join(self.quote_field(f) for f in fields)
            + LINE_TERMINATOR
        )

    def format_header(self, header_names: Sequence[str]) -> str:
        """Format the header line."""
        return self.format_line(header_names)

    def format_row(self, row: Sequence[str]) -> str:
        """Format one projected row."""
        return self.format_line(row)


def iter_csv_chunks(
    rows: Iterable[Sequence[str]],
    header_names: Sequence[str],
    separator: str = DEFAULT_OUTPUT_FIELD_SEPARATOR,
) -> Iterator[str]:
    """
    Yield the CSV output as text chunks: the header, then one line per row.

    Args:
        rows: Projected rows (consumed lazily)
        header_names: Column names for the header line
        separator: Output field separator

    Yields:
        One line of CSV text at a time
    """
    emitter = CSVEmitter(separator=separator)
    yield emitter.format_header(header_names)
    for row in rows:
        yield emitter.format_row(row)
