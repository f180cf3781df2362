"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from stamp.core.config import StampConfig
from stamp.core.counters import CounterManager
from stamp.core.factory import AppContext
from stamp.core.generator import Generator

# 2025-11-12 09:05:07, a Wednesday
FIXED_NOW = datetime(2025, 11, 12, 9, 5, 7)


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def counter_file(tmp_path):
    """Path for a counter file that doesn't exist yet."""
    return tmp_path / "stamp" / "counters.json"


@pytest.fixture
def fixed_clock():
    """Clock returning FIXED_NOW (naive, or aware in the requested zone)."""

    def _clock(tz=None):
        if tz is None:
            return FIXED_NOW
        return FIXED_NOW.replace(tzinfo=tz)

    return _clock


@pytest.fixture
def generator(fixed_clock):
    """Generator pinned to FIXED_NOW in local time."""
    return Generator(clock=fixed_clock)


@pytest.fixture
def make_entries():
    """Factory creating files (and directories for names ending in /)."""

    def _make_entries(directory: Path, *names: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        for name in names:
            if name.endswith("/"):
                (directory / name.rstrip("/")).mkdir()
            else:
                (directory / name).write_text("")
        return directory

    return _make_entries


@pytest.fixture
def app_context(tmp_path, counter_file, generator):
    """AppContext wired to temp paths and the fixed clock."""
    config = StampConfig(counter_file=counter_file, project_start=1)
    return AppContext(
        config=config,
        counters=CounterManager(counter_file, project_start=1),
        generator=generator,
        config_file=tmp_path / "config.yaml",
    )


@pytest.fixture
def sample_counters():
    """Sample counter file contents."""
    return {
        "project": 412,
        "analog": {
            "2025-11-11": 4,
            "2025-11-12": 2,
        },
    }
