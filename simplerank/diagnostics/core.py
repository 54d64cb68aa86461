"""Core diagnostic functions for score vectors."""

from __future__ import annotations

from typing import Hashable, Sequence, Tuple

import numpy as np


def score_mass(scores: np.ndarray) -> float:
    """
    Return the total probability mass of a score vector.

    Parameters
    ----------
    scores:
        One-dimensional array of per-node scores.

    Raises
    ------
    ValueError
        If scores is not one-dimensional.
    """
    scores = np.asarray(scores, dtype=np.float64)
    if scores.ndim != 1:
        raise ValueError(f"score vector must be 1D, got shape {scores.shape}.")
    return float(scores.sum())


def assert_probability_vector(
    scores: np.ndarray,
    atol: float = 1e-9,
) -> None:
    """
    Assert that a score vector is a probability distribution.

    Every entry must be finite and non-negative and the entries must sum
    to 1 within ``atol``. An empty vector is accepted.

    Parameters
    ----------
    scores:
        One-dimensional array of per-node scores.
    atol:
        Absolute tolerance for ``|sum - 1|``.

    Raises
    ------
    ValueError
        If any of the conditions above does not hold.
    """
    scores = np.asarray(scores, dtype=np.float64)
    mass = score_mass(scores)
    if scores.size == 0:
        return

    if not np.all(np.isfinite(scores)):
        raise ValueError("Score vector contains non-finite values.")

    if np.any(scores < 0.0):
        raise ValueError(f"Score vector has negative entries: min={scores.min()}.")

    if abs(mass - 1.0) > atol:
        raise ValueError(
            f"Score vector is not normalized within tolerance {atol}. "
            f"Total mass found: {mass}"
        )


def is_sorted_by_score(ranked: Sequence[Tuple[Hashable, float]]) -> bool:
    """Return True if (key, score) pairs are in non-increasing score order."""
    return all(ranked[i][1] >= ranked[i + 1][1] for i in range(len(ranked) - 1))
