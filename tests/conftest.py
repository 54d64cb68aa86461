"""Pytest configuration and shared fixtures for simplerank tests.

This module provides:
- A deterministic numpy RNG fixture for random graph generation
- A helper fixture that builds random edge lists from that RNG
"""

import os
from typing import Callable, List, Tuple

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def random_edges(rng: np.random.Generator) -> Callable[[int, int], List[Tuple[int, int]]]:
    """Return a factory producing ``n_edges`` random (source, target) pairs over ``n_nodes`` keys."""

    def _make(n_nodes: int, n_edges: int) -> List[Tuple[int, int]]:
        pairs = rng.integers(0, n_nodes, size=(n_edges, 2))
        return [(int(u), int(v)) for u, v in pairs]

    return _make
