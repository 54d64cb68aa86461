"""
Utility functions for rank graphs.

Provides the presentation-time ordering of score vectors and a helper that
loads a GraphStore from an iterable of edge tuples.
"""

from typing import Hashable, Iterable, List, Sequence, Tuple

import numpy as np

from .store import GraphStore


def rank_order(scores: np.ndarray) -> np.ndarray:
    """
    Return node indices ordered by score, highest first.

    Equal scores keep ascending index order, so the ordering is fully
    deterministic for a given score vector.

    Args:
        scores: One-dimensional score vector.

    Returns:
        Integer array of node indices.

    Example:
        >>> rank_order(np.array([0.2, 0.5, 0.2, 0.1])).tolist()
        [1, 0, 2, 3]
    """
    return np.argsort(-np.asarray(scores, dtype=np.float64), kind="stable")


def ranked_items(
    keys: Sequence[Hashable], scores: np.ndarray
) -> List[Tuple[Hashable, float]]:
    """
    Pair keys with their scores in rank order.

    ``keys[i]`` must be the key of node index ``i``.
    """
    return [(keys[i], float(scores[i])) for i in rank_order(scores)]


def store_from_edges(edges: Iterable[Tuple]) -> GraphStore:
    """
    Build a GraphStore from ``(source, target)`` or ``(source, target, weight)`` tuples.

    Args:
        edges: Iterable of edge tuples, inserted in iteration order.

    Returns:
        Populated GraphStore.

    Raises:
        ValueError: If a tuple has neither 2 nor 3 items, or carries an
            invalid weight.
    """
    store = GraphStore()
    for edge in edges:
        if len(edge) == 2:
            store.add_edge(edge[0], edge[1])
        elif len(edge) == 3:
            store.add_edge(edge[0], edge[1], edge[2])
        else:
            raise ValueError(f"Edge must be (source, target[, weight]), got {edge!r}")
    return store
