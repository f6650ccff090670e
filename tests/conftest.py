from __future__ import annotations

import pytest

from dijkstra_ipq.graph import Graph


def make_city_graph() -> Graph:
    """Six-node directed graph whose shortest paths from 5950 are known."""
    return {
        2944: {3948: 945, 4907: 980, 5950: 850},
        3948: {5950: 1328, 9583: 510, 6068: 772, 2944: 945},
        4907: {2944: 980, 9583: 1152},
        5950: {6068: 1272, 2944: 850},
        6068: {3948: 772},
        9583: {3948: 510, 6068: 885, 2944: 1445},
    }


def make_undirected_graph() -> Graph:
    """Small symmetric graph with an isolated node 9."""
    return {
        1: {2: 7, 3: 9, 6: 14},
        2: {1: 7, 3: 10, 4: 15},
        3: {1: 9, 2: 10, 4: 11, 6: 2},
        4: {2: 15, 3: 11, 5: 6},
        5: {4: 6, 6: 9},
        6: {1: 14, 3: 2, 5: 9},
        9: {},
    }


@pytest.fixture
def city_graph() -> Graph:
    return make_city_graph()


@pytest.fixture
def undirected_graph() -> Graph:
    return make_undirected_graph()
