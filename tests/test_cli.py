import json

from spbench.cli import EXAMPLE_GRAPH, main


def _run(capsys, argv):
    code = main(argv)
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_example_is_a_checkable_graph(tmp_path, capsys):
    code, out, _ = _run(capsys, ["--example"])
    assert code == 0
    assert out == EXAMPLE_GRAPH
    path = tmp_path / "example.txt"
    path.write_text(out, encoding="utf-8")
    code, out, _ = _run(capsys, ["--graph", str(path), "--check"])
    assert code == 0
    data = json.loads(out)
    assert data["check"] == "ok"
    assert data["source"] == 1
    assert data["target"] == 4
    assert data["path"] == [1, 2, 3, 4]
    assert data["expected_path"] == [1, 2, 3, 4]
    assert data["distances"] == [0, 1, 3, 4]
    assert data["labels"] == [1, 2, 3, 4]


def test_sections_file_is_undirected_by_default(sections_file, capsys):
    code, out, _ = _run(capsys, ["--graph", str(sections_file), "--check"])
    assert code == 0
    data = json.loads(out)
    assert data["check"] == "ok"
    assert data["path"] == [1, 3, 6, 5]
    assert data["distances"][4] == 20

    code, out, _ = _run(capsys, ["--graph", str(sections_file), "--check", "--directed"])
    assert code == 1
    data = json.loads(out)
    assert data["check"] == "mismatch"
    assert data["path"] == [1, 3, 4, 5]
    assert data["expected_path"] == [1, 3, 6, 5]


def test_source_and_target_are_file_ids(tmp_path, capsys):
    path = tmp_path / "graph.txt"
    path.write_text(EXAMPLE_GRAPH, encoding="utf-8")
    code, out, _ = _run(capsys, ["--graph", str(path), "--target", "4"])
    assert code == 0
    data = json.loads(out)
    assert data["target"] == 4
    assert data["path"] == [1, 2, 3, 4]

    code, out, _ = _run(capsys, ["--graph", str(path), "--source", "3", "--target", "1"])
    assert code == 0
    data = json.loads(out)
    assert data["source"] == 3
    assert data["path"] == [3, 2, 1]
    assert data["distances"] == [3, 2, 0, 1]

    code, _, err = _run(capsys, ["--graph", str(path), "--target", "0"])
    assert code == 64
    assert "node 0 is not in the graph" in err


def test_check_needs_expected_path(tmp_path, capsys):
    path = tmp_path / "g.csv"
    path.write_text("0,1,1\n", encoding="utf-8")
    code, _, err = _run(capsys, ["--graph", str(path), "--check"])
    assert code == 64
    assert "ShortestPath" in err


def test_unreachable_is_null(tmp_path, capsys):
    path = tmp_path / "g.csv"
    path.write_text("0,1,2\n2,1,1\n", encoding="utf-8")
    code, out, _ = _run(capsys, ["--graph", str(path), "--target", "2"])
    assert code == 0
    data = json.loads(out)
    assert data["distances"] == [0, 2, None]
    assert data["predecessors"] == [None, 0, None]
    assert data["path"] == []
    assert "labels" not in data


def test_input_errors_exit_64(tmp_path, capsys):
    code, _, err = _run(capsys, ["--graph", str(tmp_path / "missing.csv")])
    assert code == 64
    assert err.startswith("error:")

    path = tmp_path / "g.csv"
    path.write_text("0,1,-2\n", encoding="utf-8")
    code, _, err = _run(capsys, ["--graph", str(path)])
    assert code == 64
    assert "negative weight" in err

    path.write_text("0,1,2\n", encoding="utf-8")
    code, _, err = _run(capsys, ["--graph", str(path), "--source", "9"])
    assert code == 64

    code, _, _ = _run(capsys, ["--random", "--n", "0"])
    assert code == 64


def test_random_with_exports(tmp_path, capsys):
    tree_json = tmp_path / "tree.json"
    tree_xml = tmp_path / "tree.graphml"
    metrics = tmp_path / "metrics.json"
    code, out, _ = _run(
        capsys,
        [
            "--random", "--n", "25", "--m", "80", "--seed", "3",
            "--target", "24",
            "--export-json", str(tree_json),
            "--export-graphml", str(tree_xml),
            "--metrics-out", str(metrics),
        ],
    )
    assert code == 0
    data = json.loads(out)
    assert len(data["distances"]) == 25
    assert data["path"][0] == 0 and data["path"][-1] == 24
    assert len(json.loads(tree_json.read_text())["nodes"]) == 25
    assert tree_xml.read_text().startswith("<?xml")
    m = json.loads(metrics.read_text())
    assert m["n"] == 25 and m["m"] == 80
    assert m["peak_mib"] is not None
    assert m["counters"]["edges_relaxed"] == 80


def test_log_json_replaces_result_line(capsys):
    code, out, _ = _run(capsys, ["--random", "--log-json"])
    assert code == 0
    event = json.loads(out)
    assert event["event"] == "run"
    assert event["n"] == 10


def test_print_graph_and_profile(tmp_path, capsys):
    path = tmp_path / "g.csv"
    path.write_text("0,1,2\n", encoding="utf-8")
    code, _, err = _run(capsys, ["--graph", str(path), "--print-graph", "--profile"])
    assert code == 0
    assert "Edge: 0 -> 1, weight: 2" in err
    assert "cumulative" in err or "ncalls" in err


def test_non_utf8_graph_exits_64(tmp_path, capsys):
    path = tmp_path / "g.txt"
    path.write_bytes(b"\xff\xfe\x00\x01")
    code, _, err = _run(capsys, ["--graph", str(path)])
    assert code == 64
    assert "UTF-8" in err


def test_unexpected_error_exits_70(monkeypatch, capsys):
    from spbench.dijkstra import DijkstraEngine

    def fail(self):
        raise RuntimeError("heap exploded")

    monkeypatch.setattr(DijkstraEngine, "solve", fail)
    code, out, err = _run(capsys, ["--random"])
    assert code == 70
    assert out == ""
    assert err == "internal error: heap exploded\n"
