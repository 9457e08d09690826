"""
Constants for delimiter detection, log-format classification and output defaults.
"""

# =============================================================================
# Column Defaults
# =============================================================================

# Column count used when neither the caller nor the data determines one
DEFAULT_COLUMN_COUNT = 12

# Number of non-empty lines sampled for delimiter detection
DETECTION_SAMPLE_LINES = 50

# Rows returned by a preview unless the caller asks for a different limit
DEFAULT_PREVIEW_ROW_LIMIT = 200

# =============================================================================
# Delimiter Detection
# =============================================================================

SPACES_DELIMITER = "spaces"

# Candidate order matters: on equal scores the earlier candidate wins
DELIMITER_CANDIDATES = ["\t", ",", ";", "|"]

DELIMITER_LABELS = {
    "\t": "Tab",
    ",": "Comma",
    ";": "Semicolon",
    "|": "Pipe",
    SPACES_DELIMITER: "Multiple spaces",
}

FALLBACK_DELIMITER = "\t"
FALLBACK_LABEL = "Tab (fallback)"

# Aliases accepted for the delimiter option
DELIMITER_ALIASES = {
    "tab": "\t",
    "\\t": "\t",
    "comma": ",",
    "semicolon": ";",
    "pipe": "|",
}

# Score weights: coverage, average field count > 1, variance < 1
SCORE_WEIGHT_COVERAGE = 0.6
SCORE_WEIGHT_MULTI_FIELD = 0.2
SCORE_WEIGHT_STABLE = 0.2

# Best score below this triggers the fallback path
MIN_DELIMITER_SCORE = 0.5

# Variance reported when no sampled line splits on a candidate
NO_SPLIT_VARIANCE = 999.0

# =============================================================================
# Log Formats
# =============================================================================

LOG_FORMAT_AUTO = "auto"
LOG_FORMAT_TABULAR = "tabular"
LOG_FORMAT_KIX_BRACKET = "kix_bracket"

LOG_FORMATS = [LOG_FORMAT_AUTO, LOG_FORMAT_TABULAR, LOG_FORMAT_KIX_BRACKET]

KIX_BRACKET_LABEL = "KIX bracket log"

# [timestamp][level][component] message
KIX_BRACKET_COLUMNS = ["timestamp", "level", "component", "message"]
KIX_BRACKET_COLUMN_COUNT = len(KIX_BRACKET_COLUMNS)

# =============================================================================
# Timestamps
# =============================================================================

TIMEZONE_POLICY_DEFAULT = "default"
TIMEZONE_POLICY_OFFSET = "offset"
TIMEZONE_POLICY_NONE = "none"

TIMEZONE_POLICIES = [
    TIMEZONE_POLICY_DEFAULT,
    TIMEZONE_POLICY_OFFSET,
    TIMEZONE_POLICY_NONE,
]

DEFAULT_TIMEZONE_OFFSET = "+00:00"

MONTH_ABBREVIATIONS = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "Apr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Aug": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}

# =============================================================================
# Output
# =============================================================================

OUTPUT_FORMAT_CSV = "csv"
OUTPUT_FORMAT_JSON = "json"
OUTPUT_FORMATS = [OUTPUT_FORMAT_CSV, OUTPUT_FORMAT_JSON]

DEFAULT_OUTPUT_FIELD_SEPARATOR = ";"
DEFAULT_OUTPUT_NAME = "export"

# Characters that always force a CSV field to be quoted
CSV_QUOTE_TRIGGERS = ('"', "\n", "\r", ",", ";")
