"""
Graph store and PageRank solver for simplerank.

This package provides:
- GraphStore: keys interned to dense indices, weighted adjacency
- power_iteration / PageRank: damped power iteration with dangling-mass
  redistribution and an L1 convergence test
- Helpers for deterministic rank ordering and loading edge tuples

Results are always presented highest score first, ties in insertion order.
"""

from .pagerank import (
    PageRank,
    RankConfig,
    RankResult,
    Transition,
    build_transition,
    pagerank_step,
    power_iteration,
)
from .store import GraphStore
from .utils import rank_order, ranked_items, store_from_edges

__all__ = [
    "GraphStore",
    "PageRank",
    "RankConfig",
    "RankResult",
    "Transition",
    "build_transition",
    "pagerank_step",
    "power_iteration",
    "rank_order",
    "ranked_items",
    "store_from_edges",
]

# Example usage:
# from simplerank.graphs import PageRank
#
# pr = PageRank()
# pr.add_edge('A', 'B')
# pr.add_edge('B', 'C')
# pr.calculate()
# pr.nodes()  # [('C', ...), ('B', ...), ('A', ...)]
