import math

import pytest

np = pytest.importorskip("numpy")

from dijkstra_ipq.exceptions import GraphFormatError, InputError  # noqa: E402
from dijkstra_ipq.graph_numpy import graph_from_matrix, graph_to_matrix  # noqa: E402
from dijkstra_ipq.solver import DijkstraSolver  # noqa: E402


def test_matrix_round_trip(city_graph):
    ids = sorted(city_graph)
    mat = graph_to_matrix(city_graph, ids)
    assert mat.shape == (6, 6)
    assert mat[ids.index(5950), ids.index(2944)] == 850
    assert math.isinf(mat[ids.index(6068), ids.index(5950)])
    assert graph_from_matrix(mat, ids) == city_graph


def test_solver_on_matrix_graph():
    mat = np.array(
        [
            [0, 4, 1, np.inf],
            [0, 0, 0, 1],
            [0, 2, 0, 5],
            [0, 0, 0, 0],
        ]
    )
    g = graph_from_matrix(mat)
    assert g == {0: {1: 4, 2: 1}, 1: {3: 1}, 2: {1: 2, 3: 5}, 3: {}}
    assert DijkstraSolver(g, 0, True).distances() == {0: 0, 1: 3, 2: 1, 3: 4}


def test_undirected_matrix():
    g = graph_from_matrix([[0, 2.5], [0, 0]], nodes=[10, 20], directed=False)
    assert g == {10: {20: 2.5}, 20: {10: 2.5}}


def test_bad_matrices():
    with pytest.raises(InputError):
        graph_from_matrix([[0, 1, 2]])
    with pytest.raises(InputError):
        graph_from_matrix([[0, 1], [1, 0]], nodes=[1])
    with pytest.raises(GraphFormatError):
        graph_from_matrix([[0, -1], [0, 0]])
