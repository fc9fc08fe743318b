"""
Pytest configuration and common fixtures for the test suite.
"""

import os
import sys

import networkx as nx
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from graceful.graph import Graph, normalize_edges  # noqa: E402


def from_networkx(G: nx.Graph, name: str = "nx") -> Graph:
    """Normalize a networkx graph (isolated nodes are dropped)."""
    return normalize_edges([(int(u), int(v)) for u, v in G.edges()], name=name)


def brute_force_graceful_number(graph: Graph, max_span: int = 12) -> int:
    """Smallest span of a graceful coloring, by backtracking over colors 1..k."""
    order = list(graph.vertices)
    adj = graph.adjacency

    def consistent(colors, v):
        for u in adj[v]:
            if u in colors and colors[u] == colors[v]:
                return False
        for j in adj[v] | {v}:
            if j not in colors:
                continue
            labels = [abs(colors[i] - colors[j]) for i in adj[j] if i in colors]
            if len(labels) != len(set(labels)):
                return False
        return True

    def extend(colors, idx, k):
        if idx == len(order):
            return True
        v = order[idx]
        for color in range(1, k + 1):
            colors[v] = color
            if consistent(colors, v) and extend(colors, idx + 1, k):
                return True
            del colors[v]
        return False

    for k in range(1, max_span + 1):
        if extend({}, 0, k):
            return k
    raise AssertionError(f"no graceful coloring of {graph.name} with span <= {max_span}")


@pytest.fixture
def path4():
    """Path 1-2-3-4."""
    return normalize_edges([(1, 2), (2, 3), (3, 4)], name="P4")


@pytest.fixture
def star3():
    """Star with center 1 and leaves 2, 3, 4."""
    return normalize_edges([(1, 2), (1, 3), (1, 4)], name="K1_3")


@pytest.fixture
def two_triangles():
    """Two disjoint triangles on non-contiguous ids."""
    return normalize_edges(
        [(10, 11), (11, 12), (12, 10), (20, 21), (21, 22), (22, 20)],
        name="2K3",
    )


@pytest.fixture
def path4_with_isolated():
    """Path 1-2-3-4 plus the isolated vertex 5."""
    return Graph(name="P4+K1", num_vertices=5, edges=((1, 2), (2, 3), (3, 4)))


@pytest.fixture
def small_test_graphs():
    """Small graphs paired with their graceful chromatic number."""
    return [
        ("K2", normalize_edges([(1, 2)], name="K2"), 2),
        ("P3", from_networkx(nx.path_graph(3), "P3"), 3),
        ("P4", from_networkx(nx.path_graph(4), "P4"), 3),
        ("C4", from_networkx(nx.cycle_graph(4), "C4"), 4),
        ("K3", from_networkx(nx.complete_graph(3), "K3"), 4),
        ("K1_3", from_networkx(nx.star_graph(3), "K1_3"), 4),
    ]


@pytest.fixture
def medium_test_graphs():
    """Medium-sized graphs for heuristic feasibility checks."""
    graphs = [
        ("Petersen", from_networkx(nx.petersen_graph(), "Petersen")),
        ("Wheel 8", from_networkx(nx.wheel_graph(8), "Wheel8")),
        ("Grid 3x3", from_networkx(nx.convert_node_labels_to_integers(nx.grid_2d_graph(3, 3)), "Grid3x3")),
        ("K6", from_networkx(nx.complete_graph(6), "K6")),
        ("Star 7", from_networkx(nx.star_graph(7), "Star7")),
    ]
    for seed in range(5):
        G = nx.gnp_random_graph(15, 0.3, seed=seed)
        graphs.append((f"G(15,0.3) seed {seed}", from_networkx(G, f"gnp_{seed}")))
    return graphs


@pytest.fixture
def random_small_graphs():
    """Random graphs small enough for brute force and exact MIP."""
    graphs = []
    for seed in range(4):
        G = nx.gnp_random_graph(6, 0.45, seed=100 + seed)
        if G.number_of_edges() == 0:
            continue
        graphs.append(from_networkx(G, f"small_{seed}"))
    return graphs
