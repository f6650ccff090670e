import io
import json
import math

import pytest

from dijkstra_ipq.exceptions import InputError, InvalidSourceError, UnreachableDestinationError
from dijkstra_ipq.logger import StdLogger
from dijkstra_ipq.path import PathStep
from dijkstra_ipq.solver import DijkstraSolver, SolverConfig


def test_known_distances_on_city_graph(city_graph):
    solver = DijkstraSolver(city_graph, 5950, True)
    dist = solver.distances()
    assert dist == {2944: 850, 3948: 1795, 4907: 1830, 5950: 0, 6068: 1272, 9583: 2305}
    assert solver.previous() == {
        2944: 5950,
        3948: 2944,
        4907: 2944,
        5950: None,
        6068: 5950,
        9583: 3948,
    }


def test_shortest_path_to_9583(city_graph):
    path = DijkstraSolver(city_graph, 5950, True).shortest_path_to(9583)
    assert len(path) == 4
    assert path[0] == PathStep(node=5950, weight=0, accumulated_weight=0)
    assert path[3].node == 9583
    assert path[3].accumulated_weight == 2305
    assert [s.node for s in path] == [5950, 2944, 3948, 9583]
    assert [s.weight for s in path] == [0, 850, 945, 510]


def test_shortest_path_to_4907(city_graph):
    path = DijkstraSolver(city_graph, 5950, True).shortest_path_to(4907)
    assert len(path) == 3
    assert path[0].node == 5950
    assert path[2].node == 4907
    assert path[2].accumulated_weight == 1830
    assert path[2].weight == 980


def test_path_to_source_is_single_step(city_graph):
    path = DijkstraSolver(city_graph, 5950, True).shortest_path_to(5950)
    assert path == [PathStep(node=5950, weight=0, accumulated_weight=0)]


def test_repeated_runs_are_identical(city_graph, undirected_graph):
    for graph, directed, source in ((city_graph, True, 5950), (undirected_graph, False, 1)):
        first = DijkstraSolver(graph, source, directed)
        second = DijkstraSolver(graph, source, directed)
        assert first.distances() == second.distances()
        assert first.previous() == second.previous()


def test_undirected_distances_and_unreached_node(undirected_graph):
    solver = DijkstraSolver(undirected_graph, 1)
    dist = solver.distances()
    assert dist == {1: 0, 2: 7, 3: 9, 4: 20, 5: 20, 6: 11, 9: math.inf}
    assert solver.previous()[9] is None
    assert [s.node for s in solver.shortest_path_to(5)] == [1, 3, 6, 5]
    with pytest.raises(UnreachableDestinationError):
        solver.shortest_path_to(9)


def test_pruning_does_not_change_distances(undirected_graph):
    pruned = DijkstraSolver(undirected_graph, 4)
    full = DijkstraSolver(undirected_graph, 4, config=SolverConfig(prune_settled=False))
    assert pruned.distances() == full.distances()
    assert pruned.summary()["neighbors_pruned"] > 0
    assert full.summary()["neighbors_pruned"] == 0


def test_directed_graph_is_never_pruned(city_graph):
    solver = DijkstraSolver(city_graph, 5950, True)
    counters = solver.summary()
    assert counters["neighbors_pruned"] == 0
    assert counters["pops"] == 6
    assert counters["edges_scanned"] == 15


def test_missing_source_is_rejected(city_graph):
    with pytest.raises(InvalidSourceError):
        DijkstraSolver(city_graph, 1, True)
    with pytest.raises(InputError):
        DijkstraSolver({}, 0)


def test_sink_only_nodes_are_included():
    graph = {1: {2: 4}, 2: {3: 1}}
    solver = DijkstraSolver(graph, 1, True)
    assert solver.distances() == {1: 0, 2: 4, 3: 5}
    assert [s.node for s in solver.shortest_path_to(3)] == [1, 2, 3]
    # a sink can also be the source
    assert DijkstraSolver(graph, 3, True).distances() == {1: math.inf, 2: math.inf, 3: 0}


def test_unknown_destination(city_graph):
    solver = DijkstraSolver(city_graph, 5950, True)
    with pytest.raises(InputError):
        solver.shortest_path_to(42)


def test_directed_unreachable_destination():
    solver = DijkstraSolver({1: {2: 1}, 3: {1: 1}}, 1, True)
    assert solver.distances()[3] == math.inf
    with pytest.raises(UnreachableDestinationError):
        solver.shortest_path_to(3)


def test_float_weights():
    graph = {0: {1: 0.5, 2: 2.0}, 1: {2: 0.25}, 2: {}}
    solver = DijkstraSolver(graph, 0, True)
    assert solver.distances()[2] == pytest.approx(0.75)
    path = solver.shortest_path_to(2)
    assert [s.weight for s in path] == pytest.approx([0, 0.5, 0.25])


def test_results_are_copies(city_graph):
    solver = DijkstraSolver(city_graph, 5950, True)
    solver.distances()[9583] = -1
    solver.previous()[9583] = None
    assert solver.distances()[9583] == 2305
    assert solver.result().previous[9583] == 3948
    assert city_graph[5950] == {6068: 1272, 2944: 850}


def test_metrics_and_time(city_graph):
    solver = DijkstraSolver(city_graph, 5950, True)
    assert solver.algorithm_time() >= 0.0
    metrics = solver.metrics(peak_mib=1.5)
    assert metrics.n == 6
    assert metrics.m == 15
    assert metrics.directed is True
    assert metrics.peak_mib == 1.5
    assert metrics.wall_ms == pytest.approx(solver.algorithm_time() * 1000.0)
    assert metrics.counters == solver.summary()


def test_solver_logs_events(city_graph):
    stream = io.StringIO()
    logger = StdLogger(level="debug", json_fmt=True, stream=stream)
    DijkstraSolver(city_graph, 5950, True, logger=logger)
    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert [e["event"] for e in events] == ["solver.init", "solver.done"]
    assert events[0]["n"] == 6
    assert events[1]["pops"] == 6


def test_solver_queue_follows_queue_protocol(city_graph):
    solver = DijkstraSolver(city_graph, 5950, True)
    queue = solver._queue
    for name in ("is_empty", "push", "pop", "purge", "count", "contains", "change_priority"):
        assert callable(getattr(queue, name))
    assert queue.is_empty()
    assert queue.count() == 0
