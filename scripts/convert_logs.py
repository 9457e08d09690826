#!/usr/bin/env python3
"""
CLI script for converting loosely-structured logs to CSV or JSON.

Detects the input shape automatically:
- Tabular logs (tab, comma, semicolon, pipe, or runs of spaces)
- KIX bracket logs: [timestamp][level][component] message

Usage:
    # Convert to CSV (semicolon separated) next to the current directory
    python scripts/convert_logs.py --input data/export.log

    # Convert to JSON on stdout
    python scripts/convert_logs.py --input data/export.log --format json --output -

    # Preview the first 20 rows
    python scripts/convert_logs.py --input data/export.log --preview --rows 20

    # Normalize the first column as a timestamp with a fixed offset
    python scripts/convert_logs.py --input data/export.log \\
        --timestamp-column 0 --timezone-policy offset --timezone-offset +02:00
"""

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path
from typing import Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kix_log_converter.config import (
    ConversionOptions,
    get_settings,
    parse_header_names,
)
from kix_log_converter.config.constants import (
    LOG_FORMATS,
    OUTPUT_FORMATS,
    TIMEZONE_POLICIES,
)
from kix_log_converter.ingestion import (
    ConversionError,
    output_filename,
    read_input_buffer,
)
from kix_log_converter.pipeline import convert, preview_rows, setup_logging

logger = logging.getLogger(__name__)


def parse_headers_arg(value: str) -> list[str]:
    """Parse --headers as a JSON list or a comma-separated list."""
    if value.lstrip().startswith("["):
        return parse_header_names(value)
    return [name.strip() for name in value.split(",") if name.strip()]


def build_options(
    defaults: ConversionOptions, args: argparse.Namespace
) -> ConversionOptions:
    """
    Overlay command-line flags on the configured defaults.

    Flags left unset keep the value from the config file or environment.
    """
    overrides = {
        "log_format": args.log_format,
        "delimiter": args.delimiter,
        "row_limit": args.rows,
        "column_count": args.columns,
        "timestamp_column_index": args.timestamp_column,
        "timezone_policy": args.timezone_policy,
        "timezone_offset": args.timezone_offset,
        "output_field_separator": args.separator,
        "output_format": args.format,
        "output_name": args.name,
    }
    if args.headers is not None:
        overrides["header_names"] = parse_headers_arg(args.headers)

    changes = {key: value for key, value in overrides.items() if value is not None}
    return dataclasses.replace(defaults, **changes)


def resolve_output_path(
    output: Optional[str], options: ConversionOptions
) -> Optional[Path]:
    """Return the output path, or None for stdout."""
    if output == "-":
        return None
    if output:
        return Path(output)
    return Path(output_filename(options.output_name, options.output_format))


def run_preview(buffer: bytes, options: ConversionOptions) -> int:
    """Print detection info and the first rows as a table."""
    result = preview_rows(buffer, options)

    print()
    print("Log Preview")
    print("=" * 50)
    print(f"  Format: {result.detected.log_format}")
    print(f"  Delimiter: {result.detected.label}")
    print(f"  Columns: {result.column_count}")
    print(f"  Rows shown: {len(result.rows)}")
    print()

    if result.rows:
        print(result.to_dataframe().to_string(index=False))
    else:
        print("  (no rows)")
    return 0


def run_conversion(
    buffer: bytes,
    options: ConversionOptions,
    output_path: Optional[Path],
) -> int:
    """Convert the buffer and write it to a file or stdout."""
    start = time.time()

    if output_path is None:
        stats = convert(buffer, sys.stdout, options)
    else:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            stats = convert(buffer, f, options)

    duration = time.time() - start

    # Summary goes to stderr when the data itself went to stdout
    out = sys.stderr if output_path is None else sys.stdout
    print(file=out)
    print("Conversion Summary", file=out)
    print("=" * 50, file=out)
    print(f"  Format: {stats.detected.log_format} -> {stats.output_format}", file=out)
    print(f"  Delimiter: {stats.detected.label}", file=out)
    print(f"  Columns: {stats.column_count}", file=out)
    print(f"  Rows Written: {stats.rows_written:,}", file=out)
    if stats.lines_skipped:
        print(f"  Lines Skipped: {stats.lines_skipped:,}", file=out)
    if output_path is not None:
        print(f"  Output: {output_path}", file=out)
    print(f"  Duration: {duration:.1f}s", file=out)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Convert loosely-structured logs to CSV or JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Auto-detect and convert to CSV
  python scripts/convert_logs.py --input data/export.log

  # KIX bracket log to JSON on stdout
  python scripts/convert_logs.py --input kix.log --log-format kix_bracket --format json -o -

  # Preview with custom headers
  python scripts/convert_logs.py --input data/export.log --preview --headers time,host,msg
        """,
    )

    parser.add_argument(
        "--input", "-i", type=str, required=True, help="Input log file (.gz supported)"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output file, or '-' for stdout (default: <name>.<format>)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the first rows instead of converting",
    )
    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="Output format")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="Input log format")
    parser.add_argument(
        "--delimiter",
        type=str,
        help="Input delimiter: auto, tab, comma, semicolon, pipe, spaces, or a character",
    )
    parser.add_argument("--rows", type=int, help="Preview row limit (default: 200)")
    parser.add_argument(
        "--columns", type=int, help="Columns per row (default: auto)"
    )
    parser.add_argument(
        "--timestamp-column",
        type=int,
        help="Zero-based column to normalize as timestamp (default: -1, disabled)",
    )
    parser.add_argument(
        "--timezone-policy",
        choices=TIMEZONE_POLICIES,
        help="Timezone suffix for day-first timestamps",
    )
    parser.add_argument(
        "--timezone-offset", type=str, help="Offset for --timezone-policy offset"
    )
    parser.add_argument(
        "--headers",
        type=str,
        help="Header names as JSON list or comma-separated list",
    )
    parser.add_argument(
        "--separator", type=str, help="CSV output field separator (default: ';')"
    )
    parser.add_argument("--name", type=str, help="Base name for the output file")
    parser.add_argument("--config", type=str, help="YAML config file")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    if args.config and not Path(args.config).exists():
        parser.error(f"Config file not found: {args.config}")

    settings = get_settings(args.config)
    level = logging.getLevelName(settings.log_level.upper())
    if args.verbose or not isinstance(level, int):
        level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(level=level)

    options = build_options(settings.conversion, args)
    errors = options.validate()
    if errors:
        parser.error("; ".join(errors))

    try:
        buffer = read_input_buffer(args.input)
    except (OSError, EOFError) as e:
        print(f"❌ Cannot read input: {e}")
        return 1

    try:
        if args.preview:
            return run_preview(buffer, options)
        return run_conversion(
            buffer, options, resolve_output_path(args.output, options)
        )
    except ConversionError as e:
        print(f"❌ Conversion failed: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
