"""
Pytest configuration and fixtures for performance tests.

Provides fixtures for generating large in-memory log buffers.
"""

import random
from datetime import datetime, timedelta

import pytest

LEVELS = ["INFO", "WARN", "ERROR", "DEBUG"]
COMPONENTS = ["auth", "db", "scheduler", "mail", "api"]


class CountingSink:
    """Text sink that only counts characters written."""

    def __init__(self):
        self.size = 0

    def write(self, text: str) -> int:
        self.size += len(text)
        return len(text)


@pytest.fixture
def counting_sink():
    """Factory for fresh counting sinks."""
    return CountingSink


@pytest.fixture
def tabular_log_generator():
    """Factory fixture for tab-separated logs with day-first timestamps."""

    def _generate(num_lines: int, seed: int = 42) -> bytes:
        rng = random.Random(seed)
        start = datetime(2024, 3, 5, 0, 0, 0)
        lines = []
        for i in range(num_lines):
            ts = start + timedelta(seconds=i)
            lines.append(
                "\t".join(
                    [
                        ts.strftime("%d-%m-%Y %H:%M:%S"),
                        f"web{rng.randint(1, 20):02d}",
                        rng.choice(LEVELS),
                        f"request {i} handled, status={rng.choice([200, 404, 500])}",
                    ]
                )
            )
        return ("\n".join(lines) + "\n").encode("utf-8")

    return _generate


@pytest.fixture
def bracket_log_generator():
    """Factory fixture for KIX bracket logs with occasional stack traces."""

    def _generate(num_lines: int, seed: int = 42) -> bytes:
        rng = random.Random(seed)
        start = datetime(2024, 3, 5, 0, 0, 0)
        lines = []
        for i in range(num_lines):
            ts = start + timedelta(seconds=i)
            stamp = f"{ts:%a %b} {ts.day} {ts:%H:%M:%S %Y}"
            lines.append(
                f"[{stamp}][{rng.choice(LEVELS)}][{rng.choice(COMPONENTS)}] event {i}"
            )
            if i % 10 == 9:
                lines.append("    at com.kix.Worker.run(Worker.java:12)")
        return ("\n".join(lines) + "\n").encode("utf-8")

    return _generate
