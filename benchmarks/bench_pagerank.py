"""Benchmark graph construction and PageRank computation."""

import time
from typing import Dict

import numpy as np

from simplerank import PageRank


def benchmark_pagerank(
    n_nodes: int,
    n_edges: int,
    seed: int = 0,
    repeats: int = 5,
) -> Dict[str, float]:
    """Benchmark edge insertion and calculate() on a random graph.

    Args:
        n_nodes: Number of distinct node keys to draw from.
        n_edges: Number of edge insertions.
        seed: Seed for the numpy RNG.
        repeats: Number of calculate() calls to average over.

    Returns:
        Dictionary with timing results.
    """
    rng = np.random.default_rng(seed)
    pairs = rng.integers(0, n_nodes, size=(n_edges, 2))

    pr = PageRank()
    start = time.perf_counter()
    for u, v in pairs:
        pr.add_edge(int(u), int(v))
    build_time = time.perf_counter() - start

    # Warmup
    result = pr.calculate()

    start = time.perf_counter()
    for _ in range(repeats):
        result = pr.calculate()
    solve_time = (time.perf_counter() - start) / repeats

    start = time.perf_counter()
    pr.nodes()
    sort_time = time.perf_counter() - start

    return {
        "n_nodes": pr.node_count(),
        "n_edges": n_edges,
        "build_time_sec": build_time,
        "solve_time_sec": solve_time,
        "sort_time_sec": sort_time,
        "iterations": result.iterations,
    }


if __name__ == "__main__":
    print("Benchmarking PageRank...")

    for n_nodes, n_edges in [(1_000, 10_000), (100_000, 1_000_000)]:
        results = benchmark_pagerank(n_nodes=n_nodes, n_edges=n_edges)
        print(f"PageRank ({results['n_nodes']} nodes, {n_edges} edges):")
        print(f"  Build: {results['build_time_sec']*1e3:.1f} ms")
        print(f"  Solve: {results['solve_time_sec']*1e3:.1f} ms ({results['iterations']} iterations)")
        print(f"  Sort:  {results['sort_time_sec']*1e3:.1f} ms")
