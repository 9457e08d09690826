"""Conversion pipeline: preview, CSV and JSON streaming conversion."""

from .converter import (
    ConversionStats,
    PreviewResult,
    TextSink,
    convert,
    convert_to_csv,
    convert_to_json,
    iter_csv_output,
    iter_json_output,
    preview_rows,
    setup_logging,
)

__all__ = [
    # Operations
    "preview_rows",
    "convert_to_csv",
    "convert_to_json",
    "convert",
    "iter_csv_output",
    "iter_json_output",
    # Results
    "ConversionStats",
    "PreviewResult",
    "TextSink",
    # Logging
    "setup_logging",
]
