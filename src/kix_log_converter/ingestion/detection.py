"""
Delimiter detection and log-format classification.

Both run once per input on a leading sample of the text. The resulting
DetectionResult is applied uniformly to every line of a conversion; it is
never re-evaluated mid-stream.

Delimiter scoring:
    For every candidate, each sampled line is split and only splits with more
    than one field are kept.

    score = 0.6 * coverage + 0.2 * [avg_fields > 1] + 0.2 * [variance < 1]

    coverage is the share of sampled lines that split, variance the
    population variance of their field counts. A delimiter must be both
    present and regular to score well, so commas inside free-text messages
    do not win over a consistent tab.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from ..config.constants import (
    DELIMITER_ALIASES,
    DELIMITER_CANDIDATES,
    DELIMITER_LABELS,
    DETECTION_SAMPLE_LINES,
    FALLBACK_DELIMITER,
    FALLBACK_LABEL,
    KIX_BRACKET_LABEL,
    LOG_FORMAT_AUTO,
    LOG_FORMAT_KIX_BRACKET,
    LOG_FORMAT_TABULAR,
    MIN_DELIMITER_SCORE,
    NO_SPLIT_VARIANCE,
    SCORE_WEIGHT_COVERAGE,
    SCORE_WEIGHT_MULTI_FIELD,
    SCORE_WEIGHT_STABLE,
    SPACES_DELIMITER,
)
from .tokenizer import iter_lines

logger = logging.getLogger(__name__)

_MULTI_SPACE_RE = re.compile(r"\s{2,}")


@dataclass(frozen=True)
class DelimiterScore:
    """Scoring breakdown for one candidate delimiter."""

    delimiter: str
    coverage: float
    avg_fields: float
    variance: float
    score: float


@dataclass(frozen=True)
class DelimiterDetection:
    """Chosen delimiter and its display label."""

    delimiter: str
    label: str

    @property
    def is_fallback(self) -> bool:
        return self.label == FALLBACK_LABEL


@dataclass(frozen=True)
class DetectionResult:
    """
    Detection outcome for one input.

    Attributes:
        delimiter: Candidate character, "spaces", or tab on fallback.
            None for bracketed input, which is not split by a delimiter.
        label: Human-readable name of the delimiter or format
        log_format: "tabular" or "kix_bracket"
    """

    delimiter: Optional[str]
    label: str
    log_format: str

    @property
    def is_bracketed(self) -> bool:
        return self.log_format == LOG_FORMAT_KIX_BRACKET

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "delimiter": self.delimiter,
            "label": self.label,
            "logFormat": self.log_format,
        }


def sample_lines(text: str, limit: int = DETECTION_SAMPLE_LINES) -> list[str]:
    """Return the first ``limit`` non-empty lines of ``text``."""
    sample = []
    for line in iter_lines(text):
        if not line:
            continue
        sample.append(line)
        if len(sample) >= limit:
            break
    return sample


def score_delimiter(lines: list[str], delimiter: str) -> DelimiterScore:
    """Score a single candidate delimiter against sampled lines."""
    counts = [n for n in (len(line.split(delimiter)) for line in lines) if n > 1]

    if counts:
        avg_fields = float(np.mean(counts))
        variance = float(np.var(counts))
    else:
        avg_fields = 0.0
        variance = NO_SPLIT_VARIANCE

    coverage = len(counts) / len(lines) if lines else 0.0
    score = (
        SCORE_WEIGHT_COVERAGE * coverage
        + (SCORE_WEIGHT_MULTI_FIELD if avg_fields > 1 else 0.0)
        + (SCORE_WEIGHT_STABLE if variance < 1 else 0.0)
    )

    return DelimiterScore(
        delimiter=delimiter,
        coverage=coverage,
        avg_fields=avg_fields,
        variance=variance,
        score=score,
    )


def score_delimiters(
    lines: list[str],
    candidates: Iterable[str] = DELIMITER_CANDIDATES,
) -> list[DelimiterScore]:
    """Score every candidate delimiter, preserving candidate order."""
    return [score_delimiter(lines, d) for d in candidates]


def _splits_on_spaces(lines: list[str]) -> bool:
    """True if every line splits into more than one field on runs of spaces."""
    return bool(lines) and all(
        len(_MULTI_SPACE_RE.split(line.strip())) > 1 for line in lines
    )


def detect_delimiter(sample_text: str) -> DelimiterDetection:
    """
    Infer the field delimiter of tabular text.

    Args:
        sample_text: Input text; only the first 50 non-empty lines are used

    Returns:
        DelimiterDetection with the winning delimiter, the "spaces"
        pseudo-delimiter, or tab with a fallback label
    """
    lines = sample_lines(sample_text)
    if not lines:
        logger.debug("No usable lines in sample, falling back to tab")
        return DelimiterDetection(FALLBACK_DELIMITER, FALLBACK_LABEL)

    scores = score_delimiters(lines)
    # max() keeps the first of equal scores, so candidate order breaks ties
    best = max(scores, key=lambda s: s.score)

    if best.score < MIN_DELIMITER_SCORE:
        if _splits_on_spaces(lines):
            return DelimiterDetection(
                SPACES_DELIMITER, DELIMITER_LABELS[SPACES_DELIMITER]
            )
        logger.debug(f"Best delimiter score {best.score:.2f} too low, using tab")
        return DelimiterDetection(FALLBACK_DELIMITER, FALLBACK_LABEL)

    return DelimiterDetection(
        best.delimiter, DELIMITER_LABELS.get(best.delimiter, best.delimiter)
    )


def is_bracketed_line(line: str) -> bool:
    """True if a line looks like ``[a][b][c] message``."""
    return line.startswith("[") and line.count("][") >= 2


def classify_log_format(requested: str, sample_text: str) -> str:
    """
    Decide between tabular and bracketed input.

    An explicit request is honored unconditionally. For "auto", the first
    non-blank line alone decides the format of the whole input; it is
    bracketed only if "[" is its very first character.
    """
    if requested != LOG_FORMAT_AUTO:
        return requested

    for line in iter_lines(sample_text):
        if not line.strip():
            continue
        # Tested unstripped: the tokenizer anchors on a leading "["
        if is_bracketed_line(line):
            return LOG_FORMAT_KIX_BRACKET
        return LOG_FORMAT_TABULAR

    return LOG_FORMAT_TABULAR


def resolve_delimiter_option(delimiter: str) -> str:
    """Map a delimiter option such as "tab" or "comma" to its character."""
    return DELIMITER_ALIASES.get(delimiter, delimiter)


def detect_input(
    text: str,
    log_format: str = LOG_FORMAT_AUTO,
    delimiter: str = "auto",
) -> DetectionResult:
    """
    Classify the input and, for tabular data, pick its delimiter.

    Args:
        text: Decoded input text
        log_format: "auto", "tabular" or "kix_bracket"
        delimiter: "auto", a candidate character (or alias), or "spaces".
            An empty string is treated as "auto".

    Returns:
        DetectionResult applied to every line of the conversion
    """
    resolved_format = classify_log_format(log_format, text)

    if resolved_format == LOG_FORMAT_KIX_BRACKET:
        result = DetectionResult(None, KIX_BRACKET_LABEL, LOG_FORMAT_KIX_BRACKET)
    elif not delimiter or delimiter == "auto":
        detected = detect_delimiter(text)
        result = DetectionResult(
            detected.delimiter, detected.label, LOG_FORMAT_TABULAR
        )
    else:
        chosen = resolve_delimiter_option(delimiter)
        result = DetectionResult(
            chosen, DELIMITER_LABELS.get(chosen, chosen), LOG_FORMAT_TABULAR
        )

    logger.debug(
        f"Detected format={result.log_format}, delimiter={result.delimiter!r} "
        f"({result.label})"
    )
    return result
