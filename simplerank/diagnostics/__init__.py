"""Diagnostics and debugging utilities for simplerank."""

from .core import (
    assert_probability_vector,
    is_sorted_by_score,
    score_mass,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "score_mass",
    "assert_probability_vector",
    "is_sorted_by_score",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
