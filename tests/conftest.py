"""
Pytest configuration and shared fixtures for mpverify tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_trees = importlib.import_module("fixtures.trees")

make_leaves = _trees.make_leaves
make_tree = _trees.make_tree

from mpverify.config import runtime as _runtime
from mpverify.crypto.hashing import sha256
from mpverify.merkle.pair_hasher import combine_ordered


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def four_leaf_tree():
    """
    The classic four-leaf tree.

    Returns a dict with l1..l4 = sha256(b"leaf1")..sha256(b"leaf4"),
    node12, node34 and root, all built with combine_ordered.
    """
    l1, l2, l3, l4 = make_leaves(4)
    node12 = combine_ordered(l1, l2)
    node34 = combine_ordered(l3, l4)
    root = combine_ordered(node12, node34)
    return {
        "l1": l1,
        "l2": l2,
        "l3": l3,
        "l4": l4,
        "node12": node12,
        "node34": node34,
        "root": root,
    }


@pytest.fixture
def random_digest():
    """A digest that is not part of any fixture tree."""
    return sha256(b"random")


@pytest.fixture
def eight_leaf_tree():
    """Packed tree array over eight leaves."""
    leaves = make_leaves(8)
    return leaves, make_tree(leaves)


@pytest.fixture(autouse=True)
def reset_default_config():
    """Keep the process-wide default config from leaking between tests."""
    _runtime.set_default_config(None)
    yield
    _runtime.set_default_config(None)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove MPVERIFY_* variables from the environment."""
    import os
    for key in list(os.environ):
        if key.startswith(_runtime.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
