"""
Tests for the greedy graceful coloring heuristic.
"""

import logging

import pytest

from graceful.exceptions import DegenerateGraphError
from graceful.graph import Graph, normalize_edges
from graceful.greedy import (
    coloring_span,
    find_violations,
    greedy_graceful_coloring,
    verify_graceful_coloring,
)


class TestScenarios:
    def test_path4(self, path4):
        colors = greedy_graceful_coloring(path4)
        # vertex 3 cannot take 3: edges 1-2 and 2-3 would both get label 1
        assert colors == {1: 1, 2: 2, 3: 4, 4: 1}
        assert coloring_span(colors) <= 5
        assert verify_graceful_coloring(path4, colors)

    def test_star_center_first(self, star3):
        colors = greedy_graceful_coloring(star3)
        assert colors == {1: 1, 2: 2, 3: 3, 4: 4}
        assert verify_graceful_coloring(star3, colors)

    def test_star_center_last(self):
        g = normalize_edges([(4, 1), (4, 2), (4, 3)])
        colors = greedy_graceful_coloring(g)
        assert colors == {1: 1, 2: 2, 3: 3, 4: 4}
        labels = {abs(colors[leaf] - colors[4]) for leaf in (1, 2, 3)}
        assert len(labels) == 3

    def test_isolated_vertex_gets_color_one(self, path4_with_isolated, path4):
        colors = greedy_graceful_coloring(path4_with_isolated)
        assert colors[5] == 1
        assert verify_graceful_coloring(path4_with_isolated, colors)
        del colors[5]
        assert colors == greedy_graceful_coloring(path4)

    def test_two_triangles_colored_independently(self, two_triangles):
        colors = greedy_graceful_coloring(two_triangles)
        assert colors == {1: 1, 2: 2, 3: 4, 4: 1, 5: 2, 6: 4}
        assert coloring_span(colors) == 4

    def test_single_edge(self):
        g = normalize_edges([(8, 9)])
        assert greedy_graceful_coloring(g) == {1: 1, 2: 2}

    def test_empty_graph_is_degenerate(self):
        with pytest.raises(DegenerateGraphError):
            greedy_graceful_coloring(Graph(name="empty", num_vertices=0, edges=()))


class TestFeasibility:
    def test_medium_graphs(self, medium_test_graphs):
        for name, g in medium_test_graphs:
            colors = greedy_graceful_coloring(g)
            assert set(colors) == set(g.vertices), name
            assert find_violations(g, colors) == [], name

    def test_upper_bounds_known_values(self, small_test_graphs):
        for name, g, expected in small_test_graphs:
            colors = greedy_graceful_coloring(g)
            assert verify_graceful_coloring(g, colors), name
            assert coloring_span(colors) >= expected, name

    def test_color_classes_are_two_packings(self, medium_test_graphs):
        for name, g in medium_test_graphs:
            colors = greedy_graceful_coloring(g)
            for v in g.vertices:
                for u in g.adjacency[v]:
                    assert colors[u] != colors[v], name
                    for w in g.adjacency[u]:
                        if w != v:
                            assert colors[w] != colors[v], name


class TestDeterminism:
    def test_permuted_input_gives_same_coloring(self):
        edges = [(5, 1), (1, 2), (2, 7), (7, 5), (2, 9), (9, 3), (3, 5)]
        first = normalize_edges(edges)
        second = normalize_edges([(v, u) for u, v in reversed(edges)])
        assert first == second
        assert greedy_graceful_coloring(first) == greedy_graceful_coloring(second)

    def test_repeated_runs_agree(self, medium_test_graphs):
        _, g = medium_test_graphs[0]
        assert greedy_graceful_coloring(g) == greedy_graceful_coloring(g)

    def test_graph_is_not_mutated(self, two_triangles):
        before = dict(two_triangles.adjacency)
        greedy_graceful_coloring(two_triangles)
        assert two_triangles.adjacency == before


class TestVerification:
    def test_adjacent_equal_colors(self, path4):
        violations = find_violations(path4, {1: 1, 2: 1, 3: 2, 4: 3})
        assert any("share color" in v for v in violations)

    def test_equal_labels(self, path4):
        # 1-2 and 2-3 both get label 1
        assert not verify_graceful_coloring(path4, {1: 1, 2: 2, 3: 3, 4: 5})

    def test_distance_two_equal_colors(self, path4):
        assert not verify_graceful_coloring(path4, {1: 1, 2: 2, 3: 1, 4: 3})

    def test_missing_and_non_positive(self, path4):
        violations = find_violations(path4, {1: 0, 2: 2, 3: 4})
        assert "vertex 4 is not colored" in violations
        assert "vertex 1 has non-positive color 0" in violations

    def test_optimal_path4_coloring(self, path4):
        assert verify_graceful_coloring(path4, {1: 2, 2: 1, 3: 3, 4: 2})

    def test_span_of_empty_coloring(self):
        with pytest.raises(DegenerateGraphError):
            coloring_span({})


def test_rounds_are_logged(caplog, path4):
    logger = logging.getLogger("test.greedy")
    with caplog.at_level(logging.DEBUG, logger="test.greedy"):
        greedy_graceful_coloring(path4, logger=logger)
    rounds = [r for r in caplog.records if r.name == "test.greedy"]
    assert len(rounds) == 4
    assert "color 3: packing=[3] colored=[]" in rounds[2].getMessage()
