"""
Pytest configuration for teller_types tests.
"""

from pathlib import Path

import pytest


@pytest.fixture
def schemas_dir(tmp_path) -> Path:
    """Scratch directory for exported schema files."""
    return tmp_path / "schemas"
