"""
Conversion options and application settings.

Supports loading from:
1. YAML config files (kix-converter.yaml)
2. Environment variables (fallback)

Request-layer dictionaries using the upload form's camelCase keys
(``logType``, ``colCount``, ``tsCol``, ...) are accepted as well.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from ..ingestion.exceptions import OptionsError
from .constants import (
    DEFAULT_OUTPUT_FIELD_SEPARATOR,
    DEFAULT_OUTPUT_NAME,
    DEFAULT_PREVIEW_ROW_LIMIT,
    DEFAULT_TIMEZONE_OFFSET,
    DELIMITER_ALIASES,
    DELIMITER_CANDIDATES,
    LOG_FORMAT_AUTO,
    LOG_FORMATS,
    OUTPUT_FORMAT_CSV,
    OUTPUT_FORMATS,
    SPACES_DELIMITER,
    TIMEZONE_POLICIES,
    TIMEZONE_POLICY_DEFAULT,
)

logger = logging.getLogger(__name__)

# snake_case field -> camelCase key used by the upload form
REQUEST_KEY_ALIASES = {
    "log_format": "logType",
    "delimiter": "delimiter",
    "row_limit": "previewRows",
    "column_count": "colCount",
    "timestamp_column_index": "tsCol",
    "timezone_policy": "isoMode",
    "timezone_offset": "tzOffset",
    "header_names": "headers",
    "output_field_separator": "csvDelim",
    "output_format": "format",
    "output_name": "outName",
}


def _to_int(value: Any, default: int) -> int:
    """Parse an int leniently, using default on error."""
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def parse_header_names(value: Any) -> list[str]:
    """
    Parse caller header names.

    Accepts a list or a JSON-encoded list. Anything malformed counts as
    "no headers supplied".
    """
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.debug(f"Ignoring malformed header JSON: {value[:100]!r}")
            return []
    if not isinstance(value, (list, tuple)):
        return []
    return [str(name) for name in value]


# =============================================================================
# Conversion Options
# =============================================================================


@dataclass
class ConversionOptions:
    """
    Options for preview and conversion.

    Attributes:
        log_format: "auto" (classify from the first non-empty line),
            "tabular" or "kix_bracket". Default "auto".
        delimiter: "auto", one of tab / "," / ";" / "|" (or the aliases
            "tab", "comma", "semicolon", "pipe"), or "spaces". Default "auto".
        row_limit: Maximum rows returned by a preview. Default 200.
        column_count: Columns per output row; 0 resolves automatically.
        timestamp_column_index: Column holding the timestamp; -1 disables
            normalization. Default -1.
        timezone_policy: "default" (append Z), "offset" (append
            timezone_offset) or "none". Default "default".
        timezone_offset: Offset used with the "offset" policy. Default "+00:00".
        header_names: Output column names; empty synthesizes defaults.
        output_field_separator: CSV output separator. Default ";".
        output_format: "csv" or "json". Default "csv".
        output_name: Base name for exported files. Default "export".
    """

    log_format: str = LOG_FORMAT_AUTO
    delimiter: str = "auto"
    row_limit: int = DEFAULT_PREVIEW_ROW_LIMIT
    column_count: int = 0
    timestamp_column_index: int = -1
    timezone_policy: str = TIMEZONE_POLICY_DEFAULT
    timezone_offset: str = DEFAULT_TIMEZONE_OFFSET
    header_names: list[str] = field(default_factory=list)
    output_field_separator: str = DEFAULT_OUTPUT_FIELD_SEPARATOR
    output_format: str = OUTPUT_FORMAT_CSV
    output_name: str = DEFAULT_OUTPUT_NAME

    def validate(self) -> list[str]:
        """Validate option values. Returns list of errors."""
        errors = []

        if self.log_format not in LOG_FORMATS:
            errors.append(
                f"log_format must be one of {', '.join(LOG_FORMATS)}, "
                f"got {self.log_format!r}"
            )
        valid_delimiters = (
            ["auto", SPACES_DELIMITER] + DELIMITER_CANDIDATES + list(DELIMITER_ALIASES)
        )
        if self.delimiter not in valid_delimiters:
            errors.append(f"delimiter is not supported, got {self.delimiter!r}")
        if self.row_limit < 1:
            errors.append(f"row_limit must be >= 1, got {self.row_limit}")
        if self.column_count < 0:
            errors.append(f"column_count must be >= 0, got {self.column_count}")
        if self.timezone_policy not in TIMEZONE_POLICIES:
            errors.append(
                f"timezone_policy must be one of {', '.join(TIMEZONE_POLICIES)}, "
                f"got {self.timezone_policy!r}"
            )
        if not self.output_field_separator:
            errors.append("output_field_separator must not be empty")
        if self.output_format not in OUTPUT_FORMATS:
            errors.append(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, "
                f"got {self.output_format!r}"
            )

        return errors

    def validate_or_raise(self) -> "ConversionOptions":
        """Raise OptionsError listing every invalid value, else return self."""
        errors = self.validate()
        if errors:
            raise OptionsError("; ".join(errors))
        return self

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "log_format": self.log_format,
            "delimiter": self.delimiter,
            "row_limit": self.row_limit,
            "column_count": self.column_count,
            "timestamp_column_index": self.timestamp_column_index,
            "timezone_policy": self.timezone_policy,
            "timezone_offset": self.timezone_offset,
            "header_names": list(self.header_names),
            "output_field_separator": self.output_field_separator,
            "output_format": self.output_format,
            "output_name": self.output_name,
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "ConversionOptions":
        """
        Create from a configuration or request dictionary.

        snake_case keys take precedence over their camelCase aliases.
        """

        def get(name: str, default: Any = None) -> Any:
            if name in config:
                return config[name]
            return config.get(REQUEST_KEY_ALIASES[name], default)

        row_limit = _to_int(get("row_limit"), 0) or DEFAULT_PREVIEW_ROW_LIMIT

        return cls(
            log_format=str(get("log_format", LOG_FORMAT_AUTO)),
            delimiter=str(get("delimiter", "auto")),
            row_limit=row_limit,
            column_count=_to_int(get("column_count"), 0),
            timestamp_column_index=_to_int(get("timestamp_column_index"), -1),
            timezone_policy=str(get("timezone_policy", TIMEZONE_POLICY_DEFAULT)),
            timezone_offset=str(get("timezone_offset", DEFAULT_TIMEZONE_OFFSET)),
            header_names=parse_header_names(get("header_names")),
            output_field_separator=str(
                get("output_field_separator", DEFAULT_OUTPUT_FIELD_SEPARATOR)
            ),
            output_format=str(get("output_format", OUTPUT_FORMAT_CSV)),
            output_name=str(get("output_name", DEFAULT_OUTPUT_NAME)),
        )

    @classmethod
    def from_env(cls) -> "ConversionOptions":
        """Create from environment variables."""

        def safe_int(key: str, default: int) -> int:
            """Safely parse int from env var, using default on error."""
            return _to_int(os.environ.get(key), default)

        return cls(
            log_format=os.environ.get("KIX_LOG_FORMAT", LOG_FORMAT_AUTO),
            delimiter=os.environ.get("KIX_DELIMITER", "auto"),
            row_limit=safe_int("KIX_ROW_LIMIT", DEFAULT_PREVIEW_ROW_LIMIT),
            column_count=safe_int("KIX_COLUMN_COUNT", 0),
            timestamp_column_index=safe_int("KIX_TIMESTAMP_COLUMN", -1),
            timezone_policy=os.environ.get(
                "KIX_TIMEZONE_POLICY", TIMEZONE_POLICY_DEFAULT
            ),
            timezone_offset=os.environ.get(
                "KIX_TIMEZONE_OFFSET", DEFAULT_TIMEZONE_OFFSET
            ),
            header_names=parse_header_names(os.environ.get("KIX_HEADERS")),
            output_field_separator=os.environ.get(
                "KIX_OUTPUT_SEPARATOR", DEFAULT_OUTPUT_FIELD_SEPARATOR
            ),
            output_format=os.environ.get("KIX_OUTPUT_FORMAT", OUTPUT_FORMAT_CSV),
            output_name=os.environ.get("KIX_OUTPUT_NAME", DEFAULT_OUTPUT_NAME),
        )


# =============================================================================
# Main Settings
# =============================================================================


@dataclass
class Settings:
    """Application settings for the converter tools."""

    log_level: str = "INFO"

    # Defaults applied to every conversion unless overridden per call
    conversion: ConversionOptions = field(default_factory=ConversionOptions)

    def validate(self) -> list[str]:
        """Validate settings. Returns list of errors."""
        errors = []

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            errors.append(f"log_level is not a logging level: {self.log_level!r}")

        # Validate nested settings
        errors.extend(self.conversion.validate())

        return errors

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "Settings":
        """Create Settings from a configuration dictionary (e.g., from YAML)."""
        log_cfg = config.get("logging", {}) or {}
        conversion = config.get("conversion", {}) or {}

        return cls(
            log_level=str(log_cfg.get("level", "INFO")),
            conversion=ConversionOptions.from_dict(conversion),
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            log_level=os.environ.get("KIX_LOG_LEVEL", "INFO"),
            conversion=ConversionOptions.from_env(),
        )


# Default config file path
DEFAULT_CONFIG_PATH = Path("kix-converter.yaml")


@lru_cache
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.

    Loads from a YAML config file if available, otherwise from env vars.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Settings instance
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        from .config_loader import load_yaml_config

        try:
            return Settings.from_dict(load_yaml_config(path))
        except OptionsError as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Falling back to environment variables")

    return Settings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
