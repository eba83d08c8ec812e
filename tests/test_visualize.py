import matplotlib.pyplot as plt
import pytest

from spbench.cli import EXAMPLE_GRAPH
from spbench.dijkstra import shortest_paths
from spbench.generator import generate_graph
from spbench.visualize import downsample_edges, draw_shortest_paths, main, to_networkx


def test_downsample_is_deterministic():
    edges = [(i, i + 1, 1) for i in range(50)]
    assert downsample_edges(edges, 100) == edges
    a = downsample_edges(edges, 10, seed=1)
    assert len(a) == 10
    assert a == downsample_edges(edges, 10, seed=1)


def test_to_networkx_keeps_parallel_edges_and_isolated_nodes(abc_graph):
    abc_graph.add_edge(0, 1, 4)
    abc_graph.add_vertex()
    G = to_networkx(abc_graph)
    assert G.number_of_nodes() == 4
    assert G.number_of_edges() == 4


def test_draw_writes_png(tmp_path):
    gen = generate_graph(n=15, m=40, seed=2)
    res = shortest_paths(gen.graph, gen.source)
    out = tmp_path / "tree.png"
    fig = draw_shortest_paths(gen.graph, res, path=res.path(14), out=str(out), show_weights=True)
    plt.close(fig)
    assert out.stat().st_size > 0


def test_unknown_layout(abc_graph):
    with pytest.raises(ValueError):
        draw_shortest_paths(abc_graph, shortest_paths(abc_graph, 0), layout="circle")


def test_main(sections_file, tmp_path, capsys):
    out = tmp_path / "g.png"
    assert main([str(sections_file), "--undirected", "--target", "4", "--out", str(out)]) == 0
    assert out.exists()
    assert "Wrote" in capsys.readouterr().out


def test_main_maps_file_ids(tmp_path, capsys):
    graph = tmp_path / "graph.txt"
    graph.write_text(EXAMPLE_GRAPH, encoding="utf-8")
    out = tmp_path / "tree.png"
    assert main([str(graph), "--target", "4", "--out", str(out)]) == 0
    assert out.exists()


def test_main_reports_unknown_node(sections_file, tmp_path, capsys):
    out = tmp_path / "g.png"
    assert main([str(sections_file), "--directed", "--target", "9", "--out", str(out)]) == 64
    assert "node 9 is not in the graph" in capsys.readouterr().err
    assert not out.exists()
