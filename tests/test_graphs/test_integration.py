"""Integration tests for the graphs package within simplerank."""


def test_graphs_import_from_main():
    """Test that graph types can be imported from the main package."""
    from simplerank import GraphStore, PageRank, RankConfig, power_iteration

    assert GraphStore is not None
    assert PageRank is not None
    assert RankConfig is not None
    assert power_iteration is not None


def test_graphs_in_all_exports():
    """Test that graph exports are in __all__."""
    import simplerank

    graph_exports = {
        "GraphStore", "PageRank", "RankConfig", "RankResult", "power_iteration",
        "rank_order", "ranked_items", "store_from_edges",
    }
    assert graph_exports.issubset(set(simplerank.__all__)), "Graph exports missing from __all__"


def test_graphs_functional_integration():
    """Test a build / compute / query round in a realistic usage scenario."""
    from simplerank import PageRank, assert_probability_vector

    pr = PageRank()
    links = [
        ("home", "about"), ("home", "blog"), ("blog", "post-1"), ("blog", "post-2"),
        ("post-1", "home"), ("post-2", "home"), ("post-2", "post-1"), ("about", "home"),
    ]
    for source, target in links:
        pr.add_edge(source, target)

    result = pr.calculate()
    assert result.converged
    assert_probability_vector(result.scores)

    ranked = pr.nodes()
    assert ranked[0][0] == "home"
    assert {key for key, _ in ranked} == {"home", "about", "blog", "post-1", "post-2"}
