"""Shared test fixtures for wordtally."""

import os
import tempfile
from datetime import datetime

import pytest

from wordtally.tracker.clock import DayClock


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "storage_dir": os.path.join(tmp_dir, "data", "storage"),
        },
        "tracking": {
            "debounce_seconds": 0.05,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


class ManualClock:
    """A settable stand-in for ``datetime.now``."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def manual_clock():
    """Clock fixed at 2024-01-01 09:00 local time; move it by assigning ``.now``."""
    return ManualClock(datetime(2024, 1, 1, 9, 0))


@pytest.fixture
def day_clock(manual_clock):
    return DayClock(now_fn=manual_clock)
