"""
Pytest configuration and shared fixtures for unit tests.
"""

import pytest

from kix_log_converter.config import clear_settings_cache


@pytest.fixture
def comma_text() -> str:
    """Comma-separated text with a uniform field count."""
    return "a,b,c\nd,e,f\ng,h,i\n"


@pytest.fixture
def bracket_text() -> str:
    """KIX bracket log including a stack-trace continuation line."""
    return (
        "[Tue Mar 5 13:45:00 2024][INFO][auth] login ok\n"
        "[Tue Mar 5 13:45:01 2024][ERROR][db] connection lost\n"
        "    at com.kix.db.Pool.acquire(Pool.java:88)\n"
        "[Wed Mar 6 09:00:00 2024][WARN][scheduler] job delayed\n"
    )


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """
    Run with an empty working directory and no KIX_* environment.

    Clears the settings cache before and after the test.
    """
    monkeypatch.chdir(tmp_path)
    for key in [
        "KIX_LOG_LEVEL",
        "KIX_LOG_FORMAT",
        "KIX_DELIMITER",
        "KIX_ROW_LIMIT",
        "KIX_COLUMN_COUNT",
        "KIX_TIMESTAMP_COLUMN",
        "KIX_TIMEZONE_POLICY",
        "KIX_TIMEZONE_OFFSET",
        "KIX_HEADERS",
        "KIX_OUTPUT_SEPARATOR",
        "KIX_OUTPUT_FORMAT",
        "KIX_OUTPUT_NAME",
    ]:
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield tmp_path
    clear_settings_cache()
