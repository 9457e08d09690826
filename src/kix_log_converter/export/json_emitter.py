"""
Streaming JSON emitter.

Writes a JSON array of objects, one object per projected row, mapping header
name to field value in column order. Each object is serialized on its own so
the array never has to be built in memory.
"""

import json
from typing import Iterable, Iterator, Sequence


class JSONEmitter:
    """
    Incremental JSON array writer.

    Produces ``[``, comma-separated compact objects, then ``]``. With no rows
    the output is ``[]``.

    Usage:
        emitter = JSONEmitter(["timestamp", "level"])
        sink.write(emitter.open())
        for row in rows:
            sink.write(emitter.format_row(row))
        sink.write(emitter.close())
    """

    def __init__(self, header_names: Sequence[str]):
        """
        Initialize JSON emitter.

        Args:
            header_names: Object keys, one per column
        """
        self.header_names = list(header_names)
        self._rows_written = 0

    @property
    def rows_written(self) -> int:
        return self._rows_written

    def open(self) -> str:
        return "["

    def close(self) -> str:
        return "]"

    def to_object(self, row: Sequence[str]) -> dict[str, str]:
        """Map header names to field values; missing fields become ""."""
        obj = {}
        for idx, name in enumerate(self.header_names):
            obj[name] = row[idx] if idx < len(row) else ""
        return obj

    def format_row(self, row: Sequence[str]) -> str:
        """Serialize one row, prefixed with a comma after the first."""
        encoded = json.dumps(
            self.to_object(row), ensure_ascii=False, separators=(",", ":")
        )
        prefix = "," if self._rows_written else ""
        self._rows_written += 1
        return prefix + encoded


def iter_json_chunks(
    rows: Iterable[Sequence[str]],
    header_names: Sequence[str],
) -> Iterator[str]:
    """
    Yield the JSON array as text chunks.

    Args:
        rows: Projected rows (consumed lazily)
        header_names: Object keys, one per column

    Yields:
        "[", one serialized object per row, then "]"
    """
    emitter = JSONEmitter(header_names)
    yield emitter.open()
    for row in rows:
        yield emitter.format_row(row)
    yield emitter.close()
