"""Shared fixtures for httpconv tests.

The process-wide default registries are reset after every test so a test
that extends them cannot leak custom entries into the next one.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

import httpconv

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_default_registries() -> Iterator[None]:
    yield
    httpconv.methods.reset()
    httpconv.headers.reset()
    httpconv.mime_types.reset()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the YAML fixtures."""
    return FIXTURES_DIR
