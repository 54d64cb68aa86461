"""simplerank - generic PageRank over incrementally built directed graphs."""

__version__ = "0.1.0"

from .diagnostics import (
    assert_probability_vector,
    debug_context,
    is_debug_enabled,
    is_sorted_by_score,
    score_mass,
    set_debug_enabled,
)
from .graphs import (
    GraphStore,
    PageRank,
    RankConfig,
    RankResult,
    power_iteration,
    rank_order,
    ranked_items,
    store_from_edges,
)
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "__version__",
    # Graphs
    "GraphStore",
    "PageRank",
    "RankConfig",
    "RankResult",
    "power_iteration",
    "rank_order",
    "ranked_items",
    "store_from_edges",
    # Diagnostics
    "score_mass",
    "assert_probability_vector",
    "is_sorted_by_score",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
