"""Shared pytest fixtures for edconf tests."""
import gc
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List

import pytest
import yaml

from edconf.infrastructure.logger import Logger, LogLevel


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def root_dir(temp_dir: Path) -> Path:
    """Create a distribution root directory."""
    root = temp_dir / "emacs.d"
    root.mkdir()
    return root


@pytest.fixture
def sample_config(root_dir: Path) -> Dict[str, Any]:
    """Provide a sample edconf configuration."""
    return {
        "edconf": {
            "root": str(root_dir),
            "host": "alpha",
            "settings": {
                "encoding": "utf-8",
                "history_length": 500,
                "make_backups": True,
            },
            "modes": ["whitespace", "lint", "readonly"],
            "auto_modes": [
                {"pattern": r"\.txt$", "mode": "whitespace"},
                {"pattern": "foo", "mode": "lint"},
                {"pattern": "^/etc/", "mode": "readonly", "name": "system-files"},
            ],
            "subsystems": [],
            "gc": {"startup_threshold": 50000},
            "logging": {"level": "DEBUG"},
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "edconf.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


class ListHandler(logging.Handler):
    """Collects emitted records for assertions."""

    def __init__(self):
        super().__init__()
        self.records: List[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def log_records() -> ListHandler:
    """Handler capturing records from the ``quiet_logger`` fixture."""
    return ListHandler()


@pytest.fixture
def quiet_logger(log_records: ListHandler) -> Logger:
    """Debug-level logger that only writes into ``log_records``."""
    return Logger(name="edconf.test", level=LogLevel.DEBUG, handlers=[log_records])


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep EDCONF_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("EDCONF_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture(autouse=True)
def preserve_gc_threshold():
    """Restore the interpreter's GC threshold after each test."""
    saved = gc.get_threshold()
    yield
    gc.set_threshold(*saved)
