"""
Pytest configuration and shared fixtures for Merkle sum tree tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Isolates tests from SUMTREE_* environment and global config
3. Provides commonly-used fixtures via pytest's autodiscovery
"""

import logging
import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures import SCENARIO_VALUES, make_tree  # noqa: E402
from sumtree.config import set_default_config  # noqa: E402


# =============================================================================
# Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def _isolate_runtime(monkeypatch):
    """Clear SUMTREE_* env vars, reset the default config and CLI log handlers."""
    for name in list(os.environ):
        if name.startswith("SUMTREE_"):
            monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def scenario_values():
    """The 8-leaf example [1..8]."""
    return list(SCENARIO_VALUES)


@pytest.fixture
def scenario_tree():
    """A tree built over [1..8]."""
    return make_tree()


@pytest.fixture
def scenario_root(scenario_tree):
    """Root commitment of the [1..8] tree."""
    return scenario_tree.commit()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
