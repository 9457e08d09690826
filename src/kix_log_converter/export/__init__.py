"""
Streaming emitters for normalized rows.

- CSV with a configurable field separator (default ";")
- JSON array of objects keyed by header name

Both emit one chunk per row so output can be written as it is produced.
"""

from .csv_emitter import CSVEmitter, iter_csv_chunks
from .json_emitter import JSONEmitter, iter_json_chunks

__all__ = [
    "CSVEmitter",
    "JSONEmitter",
    "iter_csv_chunks",
    "iter_json_chunks",
]
