import math

import pytest

from spbench.exceptions import InputError, InvalidVertex, InvalidWeight
from spbench.graph import Graph


def test_add_vertex_allocates_consecutive_ids():
    g = Graph()
    assert [g.add_vertex() for _ in range(3)] == [0, 1, 2]
    assert len(g) == 3
    assert list(g.vertices()) == [0, 1, 2]


def test_preallocated_vertices_continue_numbering():
    g = Graph(2)
    assert g.add_vertex() == 2


def test_neighbors_keep_insertion_order_and_parallel_edges(abc_graph):
    abc_graph.add_edge(0, 1, 0.5)
    abc_graph.add_edge(0, 0, 3)
    assert abc_graph.neighbors(0) == [(1, 1), (2, 10), (1, 0.5), (0, 3)]
    assert abc_graph.out_degree(0) == 4
    assert abc_graph.edge_count() == 5


def test_neighbors_returns_a_copy(abc_graph):
    abc_graph.neighbors(0).append((2, 0))
    assert abc_graph.neighbors(0) == [(1, 1), (2, 10)]


@pytest.mark.parametrize("u, v", [(0, 5), (5, 0), (-1, 0), (0, None)])
def test_add_edge_rejects_unknown_endpoints(abc_graph, u, v):
    with pytest.raises(InvalidVertex):
        abc_graph.add_edge(u, v, 1)
    assert abc_graph.edge_count() == 3


@pytest.mark.parametrize("w", [-1, -0.5, math.nan, "3", None, True])
def test_add_edge_rejects_bad_weight_and_leaves_graph_unchanged(abc_graph, w):
    before = [abc_graph.neighbors(v) for v in abc_graph.vertices()]
    with pytest.raises(InvalidWeight):
        abc_graph.add_edge(0, 1, w)
    assert [abc_graph.neighbors(v) for v in abc_graph.vertices()] == before


def test_zero_weight_is_allowed():
    g = Graph(2)
    g.add_edge(0, 1, 0)
    assert g.neighbors(1) == []
    assert g.neighbors(0) == [(1, 0)]


def test_neighbors_of_missing_vertex():
    with pytest.raises(InvalidVertex):
        Graph(1).neighbors(1)


def test_errors_are_input_errors():
    assert issubclass(InvalidVertex, InputError)
    assert issubclass(InvalidWeight, ValueError)


def test_from_edges_and_edges_roundtrip():
    edges = [(0, 1, 2), (1, 2, 3.5), (2, 0, 0)]
    g = Graph.from_edges(3, edges)
    assert list(g.edges()) == edges


def test_contains():
    g = Graph(2)
    assert 0 in g and 1 in g
    assert 2 not in g
    assert -1 not in g
    assert "0" not in g


def test_str_lists_nodes_then_edges(abc_graph):
    text = str(abc_graph)
    assert text.splitlines()[:3] == ["Node: 0", "Node: 1", "Node: 2"]
    assert "Edge: 0 -> 1, weight: 1" in text
    assert repr(abc_graph) == "Graph(n=3, m=3)"


def test_negative_vertex_count():
    with pytest.raises(InvalidVertex):
        Graph(-1)
