import pytest

from dijkstra_ipq.exceptions import InvalidSourceError
from dijkstra_ipq.generator import random_edges, random_graph
from dijkstra_ipq.graph import from_edges
from dijkstra_ipq.reference import dijkstra_reference
from dijkstra_ipq.solver import DijkstraSolver


def test_reference_matches_city_graph(city_graph):
    ref = dijkstra_reference(city_graph, 5950)
    assert ref.distances[9583] == 2305
    assert ref.distances[4907] == 1830


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("directed", [True, False])
def test_solver_agrees_with_reference(seed, directed):
    graph = random_graph(40, 120, seed=seed, directed=directed)
    ref = dijkstra_reference(graph, 0)
    solver = DijkstraSolver(graph, 0, directed)
    assert solver.distances() == ref.distances


@pytest.mark.parametrize("seed", range(4))
def test_sparse_graphs_with_unreachable_nodes(seed):
    # no backbone: several nodes stay out of reach
    graph = from_edges(random_edges(30, 25, seed=seed, backbone=False))
    source = next(iter(graph))
    solver = DijkstraSolver(graph, source, True)
    assert solver.distances() == dijkstra_reference(graph, source).distances


def test_reference_rejects_missing_source():
    with pytest.raises(InvalidSourceError):
        dijkstra_reference({0: {}}, 1)
