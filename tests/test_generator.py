import pytest

from spbench.dijkstra import shortest_paths
from spbench.exceptions import ConfigError
from spbench.generator import GRAPH_TYPES, PRESETS, WEIGHT_DISTS, generate_graph


def _edge_set(graph):
    return list(graph.edges())


def test_same_seed_same_graph():
    a = generate_graph(n=50, m=200, seed=5)
    b = generate_graph(n=50, m=200, seed=5)
    c = generate_graph(n=50, m=200, seed=6)
    assert _edge_set(a.graph) == _edge_set(b.graph)
    assert _edge_set(a.graph) != _edge_set(c.graph)


@pytest.mark.parametrize("graph_type", GRAPH_TYPES)
@pytest.mark.parametrize("weight_dist", WEIGHT_DISTS)
def test_families_are_valid_and_connected(graph_type, weight_dist):
    gen = generate_graph(n=30, m=90, graph_type=graph_type, weight_dist=weight_dist,
                         w_min=2, w_max=50, seed=1)
    g = gen.graph
    pairs = [(u, v) for u, v, _ in g.edges()]
    assert len(pairs) == len(set(pairs))
    assert all(u != v for u, v in pairs)
    assert all(2 <= w <= 50 for _, _, w in g.edges())
    res = shortest_paths(g, gen.source)
    assert all(res.reachable(v) for v in g.vertices())
    assert gen.metadata["graph_type"] == graph_type


def test_erdos_renyi_edge_count():
    assert generate_graph(n=20, m=60, seed=0).graph.edge_count() == 60


def test_edge_count_capped_by_pairs():
    assert generate_graph(n=4, m=100, seed=0).graph.edge_count() == 12
    assert generate_graph(n=4, m=100, graph_type="dag", seed=0).graph.edge_count() == 6


def test_dag_edges_point_forward():
    g = generate_graph(n=25, m=80, graph_type="dag", seed=2).graph
    assert all(u < v for u, v, _ in g.edges())


def test_grid_without_m_has_only_neighbor_edges():
    g = generate_graph(n=9, graph_type="grid", seed=0).graph
    # 3x3 grid: 12 undirected neighbor pairs
    assert g.edge_count() == 24


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(n=0),
        dict(n=5, source=5),
        dict(n=5, w_min=-1),
        dict(n=5, w_min=10, w_max=1),
        dict(n=5, graph_type="star"),
        dict(n=5, weight_dist="normal"),
        dict(n=5, m=-1),
    ],
)
def test_invalid_arguments(kwargs):
    with pytest.raises(ConfigError):
        generate_graph(**kwargs)


def test_presets_are_valid_keyword_sets():
    for cases in PRESETS.values():
        for case in cases:
            assert case["graph_type"] in GRAPH_TYPES
            assert case["weight_dist"] in WEIGHT_DISTS
            assert case["source"] == 0
