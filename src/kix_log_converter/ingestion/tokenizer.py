"""
Line tokenizer for tabular and KIX bracket logs.

Tabular lines are split by the detected delimiter. Bracket lines must match

    [timestamp][level][component] message

and always produce four fields. Lines that do not match (stack-trace
continuations and similar noise) produce no row.
"""

import io
import logging
import re
from typing import TYPE_CHECKING, Iterator, Optional

from ..config.constants import SPACES_DELIMITER

if TYPE_CHECKING:
    from ..pipeline.converter import ConversionStats
    from .detection import DetectionResult

logger = logging.getLogger(__name__)

_MULTI_SPACE_RE = re.compile(r"\s{2,}")

KIX_BRACKET_PATTERN = re.compile(
    r"^\[([^\]]*)\]\[([^\]]*)\]\[([^\]]*)\]\s*(.*)$", re.DOTALL
)


def iter_lines(text: str) -> Iterator[str]:
    """
    Lazily yield the lines of ``text`` without their terminators.

    ``\\n``, ``\\r\\n`` and a lone ``\\r`` all end a line. Empty lines are
    yielded as empty strings; callers decide whether to skip them.
    """
    for line in io.StringIO(text, newline=None):
        if line.endswith("\n"):
            line = line[:-1]
        yield line


def split_by_delimiter(line: str, delimiter: str) -> list[str]:
    """
    Split a tabular line by a delimiter or the "spaces" pseudo-delimiter.

    An empty delimiter leaves the line as a single field.
    """
    if delimiter == SPACES_DELIMITER:
        return _MULTI_SPACE_RE.split(line.strip())
    if not delimiter:
        return [line]
    return line.split(delimiter)


def parse_bracket_line(line: str) -> Optional[list[str]]:
    """
    Parse a ``[timestamp][level][component] message`` line.

    Returns:
        [timestamp, level, component, message] or None if the line does
        not have the bracket shape
    """
    match = KIX_BRACKET_PATTERN.match(line)
    if not match:
        return None
    timestamp, level, component, message = match.groups()
    return [timestamp, level, component, message.rstrip()]


def tokenize_line(line: str, detection: "DetectionResult") -> Optional[list[str]]:
    """
    Split one line into raw fields according to the detected format.

    Args:
        line: A single line without its terminator
        detection: DetectionResult of the current input

    Returns:
        Raw row, or None if a bracket-format line does not match
    """
    if detection.is_bracketed:
        fields = parse_bracket_line(line)
        if fields is None:
            logger.debug(f"Skipping non-bracket line: {line[:100]!r}")
        return fields
    return split_by_delimiter(line, detection.delimiter)


def iter_raw_rows(
    text: str,
    detection: "DetectionResult",
    stats: Optional["ConversionStats"] = None,
) -> Iterator[list[str]]:
    """
    Yield raw rows for every usable line of ``text``.

    Empty lines and non-matching bracket lines are skipped. If ``stats`` is
    given, its lines_read and lines_skipped counters are updated.
    """
    for line in iter_lines(text):
        if not line:
            continue
        if stats is not None:
            stats.lines_read += 1
        fields = tokenize_line(line, detection)
        if fields is None:
            if stats is not None:
                stats.lines_skipped += 1
            continue
        yield fields
