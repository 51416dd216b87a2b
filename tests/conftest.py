"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_theory.core import Key, Pitch


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def key():
    """Shorthand for parsing spelled keys."""
    return Key.parse


@pytest.fixture
def pitch():
    """Shorthand for parsing spelled pitches."""
    return Pitch.parse
