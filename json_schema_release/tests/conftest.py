from __future__ import annotations

import shutil

import pytest

from .helpers import TEST_DATA


@pytest.fixture
def workspace(tmp_path):
    """Temporary release directory holding copies of the test schemas."""
    for schema in TEST_DATA.glob("*.json"):
        shutil.copy(schema, tmp_path / schema.name)
    return tmp_path
