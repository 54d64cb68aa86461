"""
PageRank algorithm using power iteration.

Computes importance scores for the nodes of a GraphStore with a damped
random walk. Dangling nodes (zero out-weight) hand their mass to every node
uniformly, so the score vector stays a probability distribution at every
iteration without renormalisation. Convergence is measured with the L1
norm of the change between consecutive iterations.

References:
    - Page, L., Brin, S., Motwani, R., Winograd, T. "The PageRank Citation Ranking:
      Bringing Order to the Web" (1998).
    - Langville, A. N., Meyer, C. D. "Deeper Inside PageRank" (2004).
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from typing import Hashable, Iterable, List, Optional, Tuple

import numpy as np

from ..diagnostics import assert_probability_vector, is_debug_enabled
from ..logging import get_logger
from .store import GraphStore
from .utils import ranked_items, store_from_edges

logger = get_logger(__name__)

DEFAULT_DAMPING = 0.85
DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 100


@dataclass(frozen=True)
class RankConfig:
    """
    Configuration for a PageRank computation.

    Args:
        damping: Probability of following an outgoing edge rather than
            teleporting. Must be in [0, 1).
        tolerance: Iteration stops once the L1 change of the score vector
            drops below this value. Must be positive.
        max_iterations: Hard cap on the number of iterations. Must be >= 1.
    """

    damping: float = DEFAULT_DAMPING
    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        """Validate RankConfig invariants."""
        if not (0.0 <= self.damping < 1.0):
            raise ValueError(f"damping must be in [0, 1), got {self.damping}.")

        if not (self.tolerance > 0.0 and math.isfinite(self.tolerance)):
            raise ValueError(f"tolerance must be positive and finite, got {self.tolerance}.")

        if (
            isinstance(self.max_iterations, bool)
            or not isinstance(self.max_iterations, (int, np.integer))
            or self.max_iterations < 1
        ):
            raise ValueError(
                f"max_iterations must be an integer >= 1, got {self.max_iterations!r}."
            )

    @classmethod
    def from_env(cls) -> "RankConfig":
        """Build a config from SIMPLERANK_* environment variables."""
        return cls(
            damping=float(os.environ.get("SIMPLERANK_DAMPING", DEFAULT_DAMPING)),
            tolerance=float(os.environ.get("SIMPLERANK_TOLERANCE", DEFAULT_TOLERANCE)),
            max_iterations=int(
                os.environ.get("SIMPLERANK_MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS)
            ),
        )


@dataclass
class RankResult:
    """Outcome of one compute pass."""

    scores: np.ndarray
    iterations: int
    delta: float
    converged: bool
    message: str


@dataclass(frozen=True)
class Transition:
    """Edge arrays of a GraphStore in the form the iteration consumes."""

    sources: np.ndarray
    targets: np.ndarray
    shares: np.ndarray
    dangling: np.ndarray

    @property
    def n(self) -> int:
        return int(self.dangling.shape[0])


def build_transition(store: GraphStore) -> Transition:
    """
    Flatten the store's adjacency into parallel edge arrays.

    ``shares[e]`` is ``weight(e) / out_weight(source(e))``. Zero-weight
    entries carry no mass and are left out; a node whose out-weight is zero
    is dangling.
    """
    n = store.node_count()
    sources: List[int] = []
    targets: List[int] = []
    weights: List[float] = []
    out_weight = np.zeros(n, dtype=np.float64)

    for i in range(n):
        out_weight[i] = store.out_weight(i)
        for j, w in store.successors(i):
            if w > 0.0:
                sources.append(i)
                targets.append(j)
                weights.append(w)

    src = np.asarray(sources, dtype=np.intp)
    shares = np.asarray(weights, dtype=np.float64) / out_weight[src]
    return Transition(
        sources=src,
        targets=np.asarray(targets, dtype=np.intp),
        shares=shares,
        dangling=out_weight == 0.0,
    )


def pagerank_step(
    scores: np.ndarray, transition: Transition, damping: float
) -> Tuple[np.ndarray, float, float]:
    """
    Apply one damped PageRank update.

    Returns:
        Tuple of (new scores, L1 delta, dangling mass of the input scores).
    """
    n = transition.n
    dangling_mass = float(scores[transition.dangling].sum())

    # Mass flowing along edges, accumulated per target
    flow = np.bincount(
        transition.targets,
        weights=scores[transition.sources] * transition.shares,
        minlength=n,
    )

    new_scores = (1.0 - damping) / n + damping * (flow + dangling_mass / n)
    delta = float(np.abs(new_scores - scores).sum())
    return new_scores, delta, dangling_mass


def _frozen(scores: np.ndarray) -> np.ndarray:
    scores = np.array(scores, dtype=np.float64)
    scores.setflags(write=False)
    return scores


def power_iteration(store: GraphStore, config: Optional[RankConfig] = None) -> RankResult:
    """
    Compute PageRank scores for every node of ``store``.

    Starts from the uniform vector 1/N and iterates until the L1 change
    drops below ``config.tolerance`` or ``config.max_iterations`` is hit.
    Hitting the cap is not an error: the last iterate is returned with
    ``converged=False``.

    Args:
        store: Graph to rank. It must not be mutated during the call.
        config: Solver configuration (defaults to RankConfig()).

    Returns:
        RankResult whose ``scores[i]`` belongs to node index ``i``.

    Complexity: O(k * (V + E)) where k is the number of iterations.

    Example:
        >>> store = GraphStore()
        >>> store.add_edge('A', 'B')
        >>> result = power_iteration(store)
        >>> round(float(result.scores.sum()), 6)
        1.0
    """
    if config is None:
        config = RankConfig()

    n = store.node_count()
    if n == 0:
        return RankResult(
            scores=_frozen(np.zeros(0)),
            iterations=0,
            delta=0.0,
            converged=True,
            message="Empty graph.",
        )

    transition = build_transition(store)
    scores = np.full(n, 1.0 / n, dtype=np.float64)
    delta = math.inf
    converged = False
    iterations = 0

    while iterations < config.max_iterations:
        scores, delta, dangling_mass = pagerank_step(scores, transition, config.damping)
        iterations += 1
        logger.debug(
            "iteration %d: delta=%.3e dangling_mass=%.3e", iterations, delta, dangling_mass
        )

        if is_debug_enabled():
            assert_probability_vector(scores)

        if delta < config.tolerance:
            converged = True
            break

    if converged:
        message = f"Converged after {iterations} iterations."
        logger.info(
            "PageRank on %d nodes converged after %d iterations (delta=%.3e)",
            n, iterations, delta,
        )
    else:
        message = f"Stopped at max_iterations={config.max_iterations} without convergence."
        logger.warning(
            "PageRank on %d nodes did not converge in %d iterations (delta=%.3e, tolerance=%.3e)",
            n, iterations, delta, config.tolerance,
        )

    return RankResult(
        scores=_frozen(scores),
        iterations=iterations,
        delta=delta,
        converged=converged,
        message=message,
    )


class PageRank:
    """
    Incrementally built graph plus its most recent PageRank scores.

    Edges can be added at any time. Scores only change when ``calculate``
    or ``calculate_step`` runs; edges added afterwards are not reflected
    until the next call.

    Args:
        damping: Default damping factor.
        tolerance: Default L1 convergence threshold.
        max_iterations: Default iteration cap.
        config: Full configuration; takes precedence over the three
            arguments above when given.

    Example:
        >>> pr = PageRank()
        >>> pr.add_edge('A', 'B')
        >>> pr.add_edge('B', 'C')
        >>> _ = pr.calculate()
        >>> pr.nodes()[0][0]
        'C'
    """

    def __init__(
        self,
        damping: float = DEFAULT_DAMPING,
        tolerance: float = DEFAULT_TOLERANCE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        config: Optional[RankConfig] = None,
        store: Optional[GraphStore] = None,
    ) -> None:
        self.config = config if config is not None else RankConfig(
            damping=damping, tolerance=tolerance, max_iterations=max_iterations
        )
        self.store = store if store is not None else GraphStore()
        self.last_result: Optional[RankResult] = None
        self._scores = _frozen(np.zeros(0))
        self._transition: Optional[Transition] = None
        self._transition_key: Tuple[int, int] = (-1, -1)

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple], **kwargs) -> "PageRank":
        """Create a PageRank over ``(source, target[, weight])`` tuples."""
        return cls(store=store_from_edges(edges), **kwargs)

    def add_edge(self, source: Hashable, target: Hashable, weight: float = 1.0) -> None:
        self.store.add_edge(source, target, weight)

    def get_or_create_node(self, key: Hashable) -> int:
        return self.store.get_or_create_node(key)

    def node_count(self) -> int:
        return self.store.node_count()

    def edge_count(self) -> int:
        return self.store.edge_count()

    def __len__(self) -> int:
        return self.store.node_count()

    def is_empty(self) -> bool:
        return self.store.is_empty()

    def in_degree(self, key: Hashable) -> Optional[int]:
        return self.store.in_degree(key)

    def out_degree(self, key: Hashable) -> Optional[int]:
        return self.store.out_degree(key)

    def set_damping_factor(self, factor: int) -> None:
        """
        Set the damping factor as a percentage.

        Args:
            factor: Integer in [0, 100); 85 means a damping factor of 0.85.

        Raises:
            ValueError: If factor is not an integer or is outside [0, 100).
        """
        if isinstance(factor, bool) or not isinstance(factor, (int, np.integer)):
            raise ValueError(f"Damping percentage must be an integer, got {factor!r}.")
        if not 0 <= factor < 100:
            raise ValueError(f"Damping percentage must be in [0, 100), got {factor}.")
        self.config = replace(self.config, damping=factor / 100.0)

    def calculate(
        self,
        damping: Optional[float] = None,
        tolerance: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> RankResult:
        """
        Recompute all scores from the current graph.

        Arguments override the instance configuration for this call only.
        Every call restarts from the uniform vector, so repeated calls on
        an unchanged graph give identical results.

        Raises:
            ValueError: If the effective configuration is invalid. Existing
                scores are left untouched in that case.
        """
        overrides = {
            name: value
            for name, value in (
                ("damping", damping),
                ("tolerance", tolerance),
                ("max_iterations", max_iterations),
            )
            if value is not None
        }
        config = replace(self.config, **overrides) if overrides else self.config

        result = power_iteration(self.store, config)
        self._scores = result.scores
        self.last_result = result
        return result

    def calculate_step(self) -> float:
        """
        Advance the current scores by a single iteration.

        Seeds with the uniform vector when nothing has been computed yet or
        nodes were added since the last computation. ``last_result`` is
        cleared, since it no longer describes the current scores.

        Returns:
            L1 change produced by this iteration.
        """
        n = self.store.node_count()
        if n == 0:
            return 0.0

        if self._scores.shape[0] != n:
            self._scores = _frozen(np.full(n, 1.0 / n))

        new_scores, delta, _ = pagerank_step(
            self._scores, self._current_transition(), self.config.damping
        )
        if is_debug_enabled():
            assert_probability_vector(new_scores)
        self._scores = _frozen(new_scores)
        self.last_result = None
        return delta

    def score(self, key: Hashable) -> Optional[float]:
        """Return the current score of ``key``; None if the key is unknown."""
        idx = self.store.index_of(key)
        if idx is None:
            return None
        if idx >= self._scores.shape[0]:
            return 0.0
        return float(self._scores[idx])

    def scores(self) -> np.ndarray:
        """Return the score vector in node-index order (zeros for unscored nodes)."""
        n = self.store.node_count()
        if self._scores.shape[0] == n:
            return self._scores
        padded = np.zeros(n, dtype=np.float64)
        padded[: self._scores.shape[0]] = self._scores
        return _frozen(padded)

    def nodes(self) -> List[Tuple[Hashable, float]]:
        """
        Return (key, score) for every node, highest score first.

        Ties are broken by node insertion order. The ordering is recomputed
        from the score vector on every call.
        """
        return ranked_items(self.store.keys(), self.scores())

    def _current_transition(self) -> Transition:
        key = (self.store.node_count(), self.store.edge_count())
        if self._transition is None or key != self._transition_key:
            self._transition = build_transition(self.store)
            self._transition_key = key
        return self._transition
