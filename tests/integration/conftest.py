"""
Shared fixtures for integration tests.

Provides:
- Paths to the sample log files under tests/fixtures/conversion
- An isolated settings environment (empty cwd, no KIX_* variables)
- A text sink that records every write
"""

import os
from pathlib import Path

import pytest

from kix_log_converter.config import clear_settings_cache

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures" / "conversion"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample log files."""
    return FIXTURES_DIR


@pytest.fixture
def tab_log(fixtures_dir) -> bytes:
    """Tab-separated log with day-first timestamps in column 0."""
    return (fixtures_dir / "tabular_tab.log").read_bytes()


@pytest.fixture
def semicolon_csv(fixtures_dir) -> bytes:
    """Semicolon-separated export including its header line."""
    return (fixtures_dir / "semicolon.csv").read_bytes()


@pytest.fixture
def bracket_log(fixtures_dir) -> bytes:
    """KIX bracket log with stack-trace continuation lines."""
    return (fixtures_dir / "kix_bracket.log").read_bytes()


@pytest.fixture
def spaces_log(fixtures_dir) -> bytes:
    """Log whose columns are separated by runs of spaces."""
    return (fixtures_dir / "spaces.log").read_bytes()


class RecordingSink:
    """Text sink that keeps every chunk written to it."""

    def __init__(self):
        self.chunks: list[str] = []
        self.flushed = False

    def write(self, text: str) -> int:
        self.chunks.append(text)
        return len(text)

    def flush(self) -> None:
        self.flushed = True

    def getvalue(self) -> str:
        return "".join(self.chunks)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Run with an empty working directory and no KIX_* environment."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("KIX_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield tmp_path
    clear_settings_cache()
