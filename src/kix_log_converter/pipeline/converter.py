"""
Conversion pipeline: buffer -> detection -> tokenizer -> projection -> emitter.

Three operations share the same pipeline:

- preview_rows: bounded, returns rows in memory
- convert_to_csv: streams CSV lines into a sink
- convert_to_json: streams a JSON array into a sink

Detection runs once per call on a sample of the input and applies to every
row. All state is local to a call; nothing is shared between conversions.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Protocol, Union

import pandas as pd

from ..config.constants import OUTPUT_FORMAT_CSV, OUTPUT_FORMAT_JSON
from ..config.settings import ConversionOptions
from ..export import iter_csv_chunks, iter_json_chunks
from ..ingestion.detection import DetectionResult, detect_input
from ..ingestion.file_utils import decode_buffer
from ..ingestion.tokenizer import iter_raw_rows
from ..normalization.projection import ColumnSpec, project_row

logger = logging.getLogger(__name__)

InputBuffer = Union[bytes, bytearray, str]
OptionsLike = Union[ConversionOptions, dict[str, Any], None]


class TextSink(Protocol):
    """Anything accepting incremental text writes."""

    def write(self, text: str) -> Any: ...


@dataclass
class ConversionStats:
    """Counters for one conversion call."""

    detected: Optional[DetectionResult] = None
    column_count: int = 0
    output_format: str = ""
    lines_read: int = 0
    rows_written: int = 0
    lines_skipped: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "detected": self.detected.to_dict() if self.detected else None,
            "column_count": self.column_count,
            "output_format": self.output_format,
            "lines_read": self.lines_read,
            "rows_written": self.rows_written,
            "lines_skipped": self.lines_skipped,
        }


@dataclass
class PreviewResult:
    """Rows returned by a preview, with the detection that produced them."""

    rows: list[list[str]]
    detected: DetectionResult
    column_count: int
    header_names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize using the request layer's field names."""
        return {
            "rows": self.rows,
            "detected": self.detected.to_dict(),
            "colCount": self.column_count,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Preview rows as a DataFrame with the resolved header names."""
        return pd.DataFrame(self.rows, columns=self.header_names, dtype=str)


def _coerce_options(options: OptionsLike) -> ConversionOptions:
    if options is None:
        return ConversionOptions()
    if isinstance(options, dict):
        return ConversionOptions.from_dict(options)
    return options


def _detect(
    buffer: InputBuffer, options: ConversionOptions
) -> tuple[str, DetectionResult]:
    text = decode_buffer(buffer)
    return text, detect_input(text, options.log_format, options.delimiter)


def _project_all(
    raw_rows: Iterator[list[str]],
    spec: ColumnSpec,
    options: ConversionOptions,
    stats: ConversionStats,
) -> Iterator[list[str]]:
    for raw in raw_rows:
        stats.rows_written += 1
        yield project_row(
            raw,
            spec.column_count,
            options.timestamp_column_index,
            options.timezone_policy,
            options.timezone_offset,
        )


def preview_rows(buffer: InputBuffer, options: OptionsLike = None) -> PreviewResult:
    """
    Detect, tokenize and project up to ``options.row_limit`` rows.

    For tabular input without an explicit column count or headers, the
    widest row seen in the preview determines the column count.

    Args:
        buffer: Raw input bytes (or already decoded text)
        options: ConversionOptions or a request dictionary

    Returns:
        PreviewResult with projected rows, detection and column count
    """
    opts = _coerce_options(options)
    text, detection = _detect(buffer, opts)

    raw_rows = []
    max_fields = 0
    for raw in iter_raw_rows(text, detection):
        max_fields = max(max_fields, len(raw))
        raw_rows.append(raw)
        if len(raw_rows) >= opts.row_limit:
            break

    spec = ColumnSpec.resolve(
        detection.log_format,
        opts.column_count,
        opts.header_names,
        observed_max=max_fields,
    )
    rows = [
        project_row(
            raw,
            spec.column_count,
            opts.timestamp_column_index,
            opts.timezone_policy,
            opts.timezone_offset,
        )
        for raw in raw_rows
    ]

    logger.debug(
        f"Preview: {len(rows)} rows, {spec.column_count} columns, "
        f"format={detection.log_format}"
    )
    return PreviewResult(
        rows=rows,
        detected=detection,
        column_count=spec.column_count,
        header_names=spec.header_names,
    )


def _start(
    buffer: InputBuffer,
    opts: ConversionOptions,
    stats: ConversionStats,
) -> tuple[Iterator[list[str]], ColumnSpec]:
    text, detection = _detect(buffer, opts)
    spec = ColumnSpec.resolve(
        detection.log_format, opts.column_count, opts.header_names
    )
    stats.detected = detection
    stats.column_count = spec.column_count
    rows = _project_all(iter_raw_rows(text, detection, stats), spec, opts, stats)
    return rows, spec


def iter_csv_output(
    buffer: InputBuffer,
    options: OptionsLike = None,
    stats: Optional[ConversionStats] = None,
) -> Iterator[str]:
    """
    Yield CSV output chunk by chunk: the header line, then one line per row.

    Suitable for streaming responses; nothing is buffered beyond one row.
    """
    opts = _coerce_options(options)
    stats = stats if stats is not None else ConversionStats()
    stats.output_format = OUTPUT_FORMAT_CSV
    rows, spec = _start(buffer, opts, stats)
    yield from iter_csv_chunks(rows, spec.header_names, opts.output_field_separator)


def iter_json_output(
    buffer: InputBuffer,
    options: OptionsLike = None,
    stats: Optional[ConversionStats] = None,
) -> Iterator[str]:
    """Yield a JSON array chunk by chunk: "[", one object per row, "]"."""
    opts = _coerce_options(options)
    stats = stats if stats is not None else ConversionStats()
    stats.output_format = OUTPUT_FORMAT_JSON
    rows, spec = _start(buffer, opts, stats)
    yield from iter_json_chunks(rows, spec.header_names)


def _write_all(chunks: Iterator[str], sink: TextSink) -> None:
    for chunk in chunks:
        sink.write(chunk)
    flush = getattr(sink, "flush", None)
    if callable(flush):
        flush()


def convert_to_csv(
    buffer: InputBuffer,
    sink: TextSink,
    options: OptionsLike = None,
) -> ConversionStats:
    """
    Convert the whole input to CSV, writing each line to ``sink``.

    The sink is flushed (if it supports it) but not closed; closing is the
    caller's end-of-stream signal. Write errors propagate unchanged.

    Args:
        buffer: Raw input bytes (or already decoded text)
        sink: Text sink with a ``write`` method
        options: ConversionOptions or a request dictionary

    Returns:
        ConversionStats for the call
    """
    stats = ConversionStats()
    _write_all(iter_csv_output(buffer, options, stats), sink)
    logger.info(
        f"CSV conversion complete: {stats.rows_written} rows written, "
        f"{stats.lines_skipped} lines skipped"
    )
    return stats


def convert_to_json(
    buffer: InputBuffer,
    sink: TextSink,
    options: OptionsLike = None,
) -> ConversionStats:
    """
    Convert the whole input to a JSON array, writing each object to ``sink``.

    Same contract as convert_to_csv.
    """
    stats = ConversionStats()
    _write_all(iter_json_output(buffer, options, stats), sink)
    logger.info(
        f"JSON conversion complete: {stats.rows_written} rows written, "
        f"{stats.lines_skipped} lines skipped"
    )
    return stats


def convert(
    buffer: InputBuffer,
    sink: TextSink,
    options: OptionsLike = None,
) -> ConversionStats:
    """Convert to the format named by ``options.output_format``."""
    opts = _coerce_options(options)
    if opts.output_format == OUTPUT_FORMAT_JSON:
        return convert_to_json(buffer, sink, opts)
    return convert_to_csv(buffer, sink, opts)


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure root logging for scripts.

    Logs go to stderr so converted output can be written to stdout.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
