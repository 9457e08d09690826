"""Configuration module for the log converter."""

from .config_loader import load_yaml_config
from .constants import (
    DEFAULT_COLUMN_COUNT,
    DEFAULT_OUTPUT_FIELD_SEPARATOR,
    DEFAULT_PREVIEW_ROW_LIMIT,
    DELIMITER_CANDIDATES,
    LOG_FORMAT_AUTO,
    LOG_FORMAT_KIX_BRACKET,
    LOG_FORMAT_TABULAR,
    MONTH_ABBREVIATIONS,
    OUTPUT_FORMAT_CSV,
    OUTPUT_FORMAT_JSON,
    SPACES_DELIMITER,
    TIMEZONE_POLICY_DEFAULT,
    TIMEZONE_POLICY_NONE,
    TIMEZONE_POLICY_OFFSET,
)
from .settings import (
    ConversionOptions,
    Settings,
    clear_settings_cache,
    get_settings,
    parse_header_names,
)

__all__ = [
    # Settings
    "ConversionOptions",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "parse_header_names",
    "load_yaml_config",
    # Constants
    "DEFAULT_COLUMN_COUNT",
    "DEFAULT_OUTPUT_FIELD_SEPARATOR",
    "DEFAULT_PREVIEW_ROW_LIMIT",
    "DELIMITER_CANDIDATES",
    "LOG_FORMAT_AUTO",
    "LOG_FORMAT_KIX_BRACKET",
    "LOG_FORMAT_TABULAR",
    "MONTH_ABBREVIATIONS",
    "OUTPUT_FORMAT_CSV",
    "OUTPUT_FORMAT_JSON",
    "SPACES_DELIMITER",
    "TIMEZONE_POLICY_DEFAULT",
    "TIMEZONE_POLICY_NONE",
    "TIMEZONE_POLICY_OFFSET",
]
