import math

import pytest

from spbench.exceptions import InvalidVertex
from spbench.graph import Graph
from spbench.path import path_weight, reconstruct_path


def test_reconstruct_basic():
    preds = [None, 0, 1, 1]
    assert reconstruct_path(preds, 0, 3) == [0, 1, 3]
    assert reconstruct_path(preds, 0, 0) == [0]


def test_unreachable_target_gives_empty_path():
    preds = [None, 0, None]
    assert reconstruct_path(preds, 0, 2) == []


def test_chain_that_misses_source():
    # 2 hangs off 1, but the walk ends at a root other than the source
    preds = [None, None, 1]
    assert reconstruct_path(preds, 0, 2) == []


def test_cyclic_table_does_not_loop_forever():
    preds = [None, 2, 1]
    assert reconstruct_path(preds, 0, 1) == []


@pytest.mark.parametrize("source, target", [(0, 3), (-1, 0), (3, 0)])
def test_out_of_range(source, target):
    with pytest.raises(InvalidVertex):
        reconstruct_path([None, 0, 1], source, target)


def test_path_weight_picks_cheapest_parallel_edge():
    g = Graph.from_edges(3, [(0, 1, 4), (0, 1, 1), (1, 2, 2)])
    assert path_weight(g, [0, 1, 2]) == 3
    assert path_weight(g, [0]) == 0
    assert math.isinf(path_weight(g, [2, 0]))
