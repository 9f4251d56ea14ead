"""
Pytest configuration and fixtures for cbac tests.

This module provides shared fixtures used across unit and integration
tests: a temporary directory and a sample engine configuration.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_yaml() -> str:
    """Return a simple engine configuration YAML for testing."""
    return """
name: documents
accesses:
  - view
  - edit
  - delete
grants:
  alice:
    doc-1: [view, edit]
    doc-2: [view]
  bob:
    doc-2: [view, edit, delete]
"""


@pytest.fixture
def sample_config_path(temp_dir: Path, sample_config_yaml: str) -> Path:
    """Write the sample configuration to a file."""
    path = temp_dir / "documents.yaml"
    path.write_text(sample_config_yaml)
    return path
