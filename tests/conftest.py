"""Shared test fixtures and configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generator

import pytest

from trialrun.settings import reset_settings
from trialrun.suite.membership import SuiteRegistry

TESTS_DIR = Path(__file__).parent


# ============================================================================
# PYTEST CONFIG & MARKERS
# ============================================================================


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test (fast, no I/O)")
    config.addinivalue_line(
        "markers", "integration: mark test as integration (runs whole suites end to end)"
    )


# ============================================================================
# SHARED FIXTURES
# ============================================================================


@pytest.fixture
def registry() -> SuiteRegistry:
    """A suite registry private to one test."""
    return SuiteRegistry()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point HOME and cwd at an empty directory and drop cached settings."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for name in (
        "TRIALRUN_LOG_LEVEL",
        "TRIALRUN_DEBUG",
        "TRIALRUN_OUTPUT_FORMAT",
        "TRIALRUN_SHOW_SKIPPED",
    ):
        # set first so teardown also removes values folded in from YAML
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_settings()
    yield work
    reset_settings()


@pytest.fixture
def tests_dir() -> Path:
    """Directory holding the importable sample modules."""
    return TESTS_DIR
