import pytest

from spbench.graph import Graph


@pytest.fixture
def abc_graph():
    """A->B 1, B->C 2, A->C 10 with A=0, B=1, C=2."""
    g = Graph()
    a, b, c = g.add_vertex(), g.add_vertex(), g.add_vertex()
    g.add_edge(a, b, 1)
    g.add_edge(b, c, 2)
    g.add_edge(a, c, 10)
    return g


@pytest.fixture
def sections_file(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text(
        "# Nodes\n"
        "1\n2\n3\n4\n5\n6\n"
        "# Edges\n"
        "1 2 7\n"
        "1 3 9\n"
        "1 6 14\n"
        "2 3 10\n"
        "2 4 15\n"
        "3 4 11\n"
        "3 6 2\n"
        "4 5 6\n"
        "5 6 9\n"
        "# ShortestPath\n"
        "1 3 6 5\n",
        encoding="utf-8",
    )
    return path
