"""
Greedy 2-packing heuristic for graceful coloring.

A graceful coloring assigns positive integers to vertices so that adjacent
vertices differ and any two edges sharing an endpoint carry different labels,
where the label of an edge is the absolute difference of its endpoint colors.

## Algorithm:
1. Start with all vertices uncolored and the current color c = 1
2. Repeat until all vertices are colored:
   a. Build a maximal 2-packing (vertices pairwise at distance >= 3) among the
      uncolored vertices, scanning them in ascending vertex index
   b. Keep the packed vertices w that are safe for c: for every colored
      neighbor z of w and every colored neighbor y != w of z,
      c != 2 * color(z) - color(y)
   c. Assign c to the safe vertices and advance c by one
3. Return the coloring

Colors are handed out in strictly increasing rounds, so every colored vertex
has a color below c and the label test in 2b reduces to a single equation.
A round may color nothing; c keeps growing until the test passes.
"""

import logging
from typing import Optional

from .exceptions import DegenerateGraphError
from .graph import Graph

_log = logging.getLogger(__name__)


def greedy_graceful_coloring(
    graph: Graph,
    logger: Optional[logging.Logger] = None,
) -> dict[int, int]:
    """
    Color a graph gracefully with the greedy 2-packing heuristic.

    Args:
        graph: The graph to color
        logger: Logger for per-round diagnostics (default: module logger)

    Returns:
        Dictionary mapping each vertex to its color (1-indexed)

    Raises:
        DegenerateGraphError: If the graph has no vertices

    Example:
        >>> g = normalize_edges([(1, 2), (2, 3), (3, 4)])
        >>> greedy_graceful_coloring(g)  # {1: 1, 4: 1, 2: 2, 3: 4}
    """
    log = logger or _log
    if graph.num_vertices == 0:
        raise DegenerateGraphError(f"Graph {graph.name} has no vertices")

    adj = graph.adjacency
    colors: dict[int, int] = {}
    remaining = set(graph.vertices)
    current_color = 1

    while remaining:
        # Maximal 2-packing in ascending vertex order
        two_packing = []
        eliminated: set[int] = set()
        for w in sorted(remaining):
            if w in eliminated:
                continue
            two_packing.append(w)
            eliminated.add(w)
            for z in adj[w]:
                eliminated.add(z)
                eliminated.update(adj[z])

        to_color = [w for w in two_packing if _is_safe(w, current_color, adj, colors)]

        for v in to_color:
            colors[v] = current_color
        remaining.difference_update(to_color)

        log.debug(
            "color %d: packing=%s colored=%s remaining=%d",
            current_color,
            two_packing,
            to_color,
            len(remaining),
        )
        current_color += 1

    return colors


def _is_safe(
    w: int,
    color: int,
    adjacency: dict[int, frozenset[int]],
    colors: dict[int, int],
) -> bool:
    """Whether giving w the color leaves every edge pair through a colored neighbor distinct."""
    for z in adjacency[w]:
        if z not in colors:
            continue
        for y in adjacency[z]:
            if y != w and y in colors and color == 2 * colors[z] - colors[y]:
                return False
    return True


def coloring_span(coloring: dict[int, int]) -> int:
    """
    Largest color used by a coloring.

    Raises:
        DegenerateGraphError: If the coloring is empty
    """
    if not coloring:
        raise DegenerateGraphError("Span of an empty coloring is undefined")
    return max(coloring.values())


def find_violations(graph: Graph, coloring: dict[int, int]) -> list[str]:
    """
    List every way in which a coloring fails to be graceful.

    Args:
        graph: The graph
        coloring: Color assignment to check

    Returns:
        Human-readable violation messages, empty if the coloring is graceful
    """
    violations = []

    for v in graph.vertices:
        if v not in coloring:
            violations.append(f"vertex {v} is not colored")
        elif coloring[v] < 1:
            violations.append(f"vertex {v} has non-positive color {coloring[v]}")
    if violations:
        return violations

    for u, v in graph.edges:
        if coloring[u] == coloring[v]:
            violations.append(f"adjacent vertices {u} and {v} share color {coloring[u]}")

    for j in graph.vertices:
        seen: dict[int, int] = {}
        for i in sorted(graph.adjacency[j]):
            label = abs(coloring[i] - coloring[j])
            if label in seen:
                violations.append(f"edges {seen[label]}-{j} and {i}-{j} share label {label}")
            else:
                seen[label] = i

    return violations


def verify_graceful_coloring(graph: Graph, coloring: dict[int, int]) -> bool:
    """
    Verify that a coloring is graceful.

    Args:
        graph: The graph
        coloring: Color assignment to verify

    Returns:
        True if every vertex is colored, adjacent vertices differ and edges
        sharing an endpoint carry distinct labels
    """
    return not find_violations(graph, coloring)
