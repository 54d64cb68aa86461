"""
Graph store for incremental PageRank graphs.

Interns caller keys to dense integer indices (insertion order) and keeps a
weighted adjacency mapping per source index. All operations are O(1)
amortized except the iterators, which are linear in what they yield.
"""

import math
from typing import Dict, Hashable, Iterator, List, Optional, Tuple


class GraphStore:
    """
    Directed, weighted multigraph keyed by arbitrary hashable objects.

    Nodes are interned on first appearance: ``key -> index`` through a dict
    and ``index -> key`` through a list, so indices are contiguous and never
    reused. Repeated insertions of the same (source, target) pair accumulate
    their weights into a single adjacency entry.

    Complexity:
        - add_edge: O(1) amortized
        - get_or_create_node: O(1) amortized
        - successors: O(out-degree)
        - edges: O(E) where E is the number of distinct pairs
    """

    def __init__(self) -> None:
        self._index: Dict[Hashable, int] = {}
        self._keys: List[Hashable] = []
        self._adj: List[Dict[int, float]] = []
        self._out_weight: List[float] = []
        self._in_count: List[int] = []
        self._out_count: List[int] = []
        self._edge_count = 0

    def get_or_create_node(self, key: Hashable) -> int:
        """
        Return the index of ``key``, interning it if it is new.

        Args:
            key: Hashable node identifier.

        Returns:
            Dense zero-based node index.
        """
        idx = self._index.get(key)
        if idx is None:
            idx = len(self._keys)
            self._index[key] = idx
            self._keys.append(key)
            self._adj.append({})
            self._out_weight.append(0.0)
            self._in_count.append(0)
            self._out_count.append(0)
        return idx

    def add_edge(self, source: Hashable, target: Hashable, weight: float = 1.0) -> None:
        """
        Add ``weight`` to the edge from source to target.

        Unknown keys are created. Self-edges are allowed.

        Args:
            source: Source node key.
            target: Target node key.
            weight: Non-negative finite weight added to the pair (default 1.0).

        Raises:
            ValueError: If weight is negative, NaN or infinite, or if adding it
                would overflow the source's accumulated out-weight. The store
                is left unchanged in that case.
        """
        weight = float(weight)
        if not math.isfinite(weight) or weight < 0.0:
            raise ValueError(f"Edge weight must be finite and non-negative, got {weight}")

        # Pair weight never exceeds the out-weight total, so one check covers both
        known = self._index.get(source)
        total = weight if known is None else self._out_weight[known] + weight
        if not math.isfinite(total):
            raise ValueError(
                f"Edge weight {weight} overflows the accumulated out-weight of {source!r}"
            )

        u = self.get_or_create_node(source)
        v = self.get_or_create_node(target)

        self._adj[u][v] = self._adj[u].get(v, 0.0) + weight
        self._out_weight[u] += weight
        self._out_count[u] += 1
        self._in_count[v] += 1
        self._edge_count += 1

    def node_count(self) -> int:
        """Return the number of interned nodes."""
        return len(self._keys)

    def edge_count(self) -> int:
        """Return the number of edge insertions (not distinct pairs)."""
        return self._edge_count

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._index

    def is_empty(self) -> bool:
        return not self._keys

    def index_of(self, key: Hashable) -> Optional[int]:
        return self._index.get(key)

    def key_of(self, index: int) -> Hashable:
        """
        Return the key interned at ``index``.

        Raises:
            IndexError: If index is not a valid node index.
        """
        if not 0 <= index < len(self._keys):
            raise IndexError(f"Node index {index} out of range for {len(self._keys)} nodes")
        return self._keys[index]

    def keys(self) -> List[Hashable]:
        """Return all node keys in index (insertion) order."""
        return list(self._keys)

    def out_weight(self, index: int) -> float:
        return self._out_weight[index]

    def successors(self, index: int) -> Iterator[Tuple[int, float]]:
        """
        Yield (target_index, weight) pairs for the outgoing edges of a node.

        Each call walks the adjacency mapping afresh, so the iterator can be
        recreated any number of times.
        """
        yield from self._adj[index].items()

    def in_degree(self, key: Hashable) -> Optional[int]:
        """Return the number of edge insertions into ``key``, or None if unknown."""
        idx = self._index.get(key)
        return None if idx is None else self._in_count[idx]

    def out_degree(self, key: Hashable) -> Optional[int]:
        """Return the number of edge insertions out of ``key``, or None if unknown."""
        idx = self._index.get(key)
        return None if idx is None else self._out_count[idx]

    def edges(self) -> Iterator[Tuple[Hashable, Hashable, float]]:
        """
        Yield (source_key, target_key, weight) for every distinct pair.

        Sources come in index order; targets in first-insertion order.
        """
        for u, targets in enumerate(self._adj):
            for v, weight in targets.items():
                yield self._keys[u], self._keys[v], weight
