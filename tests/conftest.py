"""
Pytest configuration and shared fixtures.

Poseidon2 parameters are built once per session and shared by every hasher, the
same way production code passes one instance by reference.
"""

import sys
from pathlib import Path

import pytest

# tests/ is inside the repository root, so parent is the root
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from constraints.hasher import Poseidon2Hash  # noqa: E402
from primitives.poseidon2 import Poseidon2Params  # noqa: E402
from protocol.config import CircuitConfig  # noqa: E402

SMALL_DEPTH = 4


@pytest.fixture(scope="session")
def params() -> Poseidon2Params:
    return Poseidon2Params.default()


@pytest.fixture(scope="session")
def hasher(params) -> Poseidon2Hash:
    return Poseidon2Hash(params)


@pytest.fixture(scope="session")
def small_config() -> CircuitConfig:
    """Depth-4 tree with the default 128-bit leaf fields."""
    return CircuitConfig(tree_depth=SMALL_DEPTH)
