"""
Input ingestion layer: decoding, format detection and tokenization.

Turns a raw byte buffer of unknown shape into raw rows:

- Tabular logs split by an inferred delimiter (tab, comma, semicolon,
  pipe, or runs of spaces)
- KIX bracket logs of the form ``[timestamp][level][component] message``

Usage:
    from kix_log_converter.ingestion import (
        decode_buffer,
        detect_input,
        iter_raw_rows,
    )

    text = decode_buffer(buffer)
    detection = detect_input(text)
    for row in iter_raw_rows(text, detection):
        print(row)
"""

from .detection import (
    DelimiterDetection,
    DelimiterScore,
    DetectionResult,
    classify_log_format,
    detect_delimiter,
    detect_input,
    is_bracketed_line,
    resolve_delimiter_option,
    sample_lines,
    score_delimiter,
    score_delimiters,
)
from .exceptions import ConversionError, OptionsError
from .file_utils import decode_buffer, is_gzip_file, read_input_buffer
from .security import output_filename, sanitize_output_name
from .tokenizer import (
    KIX_BRACKET_PATTERN,
    iter_lines,
    iter_raw_rows,
    parse_bracket_line,
    split_by_delimiter,
    tokenize_line,
)

__all__ = [
    # Detection
    "DelimiterDetection",
    "DelimiterScore",
    "DetectionResult",
    "classify_log_format",
    "detect_delimiter",
    "detect_input",
    "is_bracketed_line",
    "resolve_delimiter_option",
    "sample_lines",
    "score_delimiter",
    "score_delimiters",
    # Tokenizer
    "KIX_BRACKET_PATTERN",
    "iter_lines",
    "iter_raw_rows",
    "parse_bracket_line",
    "split_by_delimiter",
    "tokenize_line",
    # Exceptions
    "ConversionError",
    "OptionsError",
    # File utilities
    "decode_buffer",
    "is_gzip_file",
    "read_input_buffer",
    # Output naming
    "output_filename",
    "sanitize_output_name",
]
