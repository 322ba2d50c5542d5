"""Shared fixtures for the reinmap test-suite."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"
CONFIG_DIR = FIXTURES / "configs"
OBSERVATIONS_CSV = FIXTURES / "observations" / "reindeer.csv"


@pytest.fixture
def config_copy(tmp_path: Path) -> Path:
    """A writable copy of the fixture configuration directory."""

    target = tmp_path / "config"
    shutil.copytree(CONFIG_DIR, target)
    return target
