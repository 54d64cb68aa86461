"""Debug mode for simplerank.

While debug mode is on, every solver iteration (``power_iteration`` and
``PageRank.calculate_step``) passes the freshly computed score vector through
``assert_probability_vector``. A transition that leaks or creates mass then
fails on the iteration where it happens instead of surfacing later as a
ranking that does not sum to 1.

The check costs one O(N) pass per iteration, so it is off by default. Set
SIMPLERANK_DEBUG=1 (also ``true``, ``yes``, ``on``) to enable it at import
time, or toggle it at runtime with set_debug_enabled / debug_context.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "SIMPLERANK_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(_DEBUG_ENV_VAR)


def is_debug_enabled() -> bool:
    """Return True if score vectors are checked after every iteration."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Turn per-iteration score checks on or off for the whole process.

    Parameters
    ----------
    enabled:
        Whether the solver should verify mass conservation, finiteness and
        non-negativity of each iterate.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily switch per-iteration score checks, restoring the previous
    setting on exit (including when the block raises).

    Example
    -------
    >>> with debug_context(True):
    ...     result = pr.calculate()  # doctest: +SKIP
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev
