"""
Shared file utilities for reading log inputs.

Inputs are read into memory as bytes; the engine decodes and iterates them.
"""

import gzip
from pathlib import Path
from typing import Union

GZIP_MAGIC = b"\x1f\x8b"
UTF8_BOM = "\ufeff"


def is_gzip_file(path: Path) -> bool:
    """Check for gzip by extension or by magic bytes."""
    if path.suffix.lower() == ".gz":
        return True
    with open(path, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def read_input_buffer(file_path: Union[str, Path]) -> bytes:
    """
    Read an input file into memory, decompressing gzip transparently.

    Gzip detection is performed by:
    1. Checking for .gz file extension
    2. Checking for gzip magic bytes (0x1f 0x8b) even without .gz extension

    Args:
        file_path: Path to the file

    Returns:
        Raw file content

    Raises:
        FileNotFoundError: If file doesn't exist
        PermissionError: If file cannot be read
        gzip.BadGzipFile: If file has .gz extension but is not valid gzip
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if is_gzip_file(path):
        with gzip.open(path, "rb") as f:
            return f.read()

    return path.read_bytes()


def decode_buffer(buffer: Union[bytes, bytearray, str]) -> str:
    """
    Decode an input buffer as UTF-8 text.

    Invalid byte sequences are replaced rather than rejected, and a leading
    byte-order mark (common in Excel exports) is removed.
    """
    if isinstance(buffer, (bytes, bytearray)):
        text = bytes(buffer).decode("utf-8", errors="replace")
    else:
        text = buffer
    if text.startswith(UTF8_BOM):
        text = text[len(UTF8_BOM):]
    return text
