"""Shared pytest fixtures and test helpers for preludekit tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from preludekit import VariantRow, reset_settings


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run each test with default settings: no PRELUDEKIT_* env vars, no config file.

    CWD moves to a temp dir so opt-in walk-up discovery cannot find a developer's
    pyproject.toml.
    """
    for key in list(os.environ):
        if key.startswith("PRELUDEKIT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def outcome_row() -> VariantRow:
    """Two-label row: ``ok`` carries an int, ``error`` a str."""
    return VariantRow("Outcome", ok=int, error=str)
