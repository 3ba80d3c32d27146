"""Pytest configuration and fixtures for validation package tests."""

import os
import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_validation import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings from its own environment."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for settings files."""
    return tmp_path


@pytest.fixture
def env_vars(monkeypatch):
    """Helper to set environment variables."""

    def _set_env(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key, str(value))

    return _set_env


@pytest.fixture
def clear_env(monkeypatch):
    """Clear all DATAKNOBS_VALIDATION_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("DATAKNOBS_VALIDATION_"):
            monkeypatch.delenv(key)
