"""
Output naming safeguards.

Export names come from users; they are reduced to a conservative character
set before they are used as file names.
"""

import re

from ..config.constants import (
    DEFAULT_OUTPUT_NAME,
    OUTPUT_FORMAT_CSV,
    OUTPUT_FORMAT_JSON,
)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_.]")


def sanitize_output_name(name: str) -> str:
    """
    Replace every character outside ``[a-zA-Z0-9-_.]`` with ``_``.

    Empty names fall back to "export".

    Args:
        name: Requested base name

    Returns:
        File-system safe base name
    """
    return _UNSAFE_NAME_CHARS.sub("_", name or DEFAULT_OUTPUT_NAME)


def output_filename(name: str, output_format: str = OUTPUT_FORMAT_CSV) -> str:
    """Build the export file name: sanitized base name plus .json or .csv."""
    ext = OUTPUT_FORMAT_JSON if output_format == OUTPUT_FORMAT_JSON else OUTPUT_FORMAT_CSV
    return f"{sanitize_output_name(name)}.{ext}"

