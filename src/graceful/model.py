"""
MIP model for the graceful chromatic number.

## Formulation:
- x[v] in [1, inf), integer: color of vertex v
- z in [1, M1], integer: span, minimized
- b[i,j], binary, for adjacent i < j: orders x[i] and x[j]
- c[i,j], binary, for non-adjacent i < j with a common neighbor: orders x[i] and x[j]
- d[i,j,k], binary, for neighbors i < k of j: orders x[i] + x[k] and 2 x[j]

With D the maximum degree, M1 = 2D^2 - D + 1 bounds the span and
M2 = 4D^2 - 2D bounds |x[i] + x[k] - 2 x[j]| whenever x[i] != x[k].

x[i] + x[k] != 2 x[j] together with x[i] != x[k] gives
|x[i] - x[j]| != |x[k] - x[j]|, so edges ij and kj get different labels.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ortools.linear_solver import pywraplp

from .exceptions import DegenerateGraphError, MalformedInputError, SolverUnavailableError
from .graph import Graph

_log = logging.getLogger(__name__)


def big_m_constants(max_degree: int) -> tuple[int, int]:
    """Return (M1, M2) for the vertex and label disequalities."""
    big_m_vertex = 2 * max_degree**2 - max_degree + 1
    big_m_label = 4 * max_degree**2 - 2 * max_degree
    return big_m_vertex, big_m_label


def adjacent_pairs(graph: Graph) -> list[tuple[int, int]]:
    return list(graph.edges)


def distance_two_pairs(graph: Graph) -> list[tuple[int, int]]:
    """Non-adjacent pairs i < j that share at least one neighbor."""
    pairs = set()
    for v in graph.vertices:
        nbrs = sorted(graph.adjacency[v])
        for a, i in enumerate(nbrs):
            for j in nbrs[a + 1 :]:
                if j not in graph.adjacency[i]:
                    pairs.add((i, j))
    return sorted(pairs)


def label_triples(graph: Graph) -> list[tuple[int, int, int]]:
    """Triples (i, j, k) where i < k are both neighbors of the center j."""
    triples = []
    for j in graph.vertices:
        nbrs = sorted(graph.adjacency[j])
        for a, i in enumerate(nbrs):
            for k in nbrs[a + 1 :]:
                triples.append((i, j, k))
    return triples


@dataclass
class GracefulModel:
    """A built MIP model together with handles to its variables."""

    graph: Graph
    solver: pywraplp.Solver
    x: dict[int, pywraplp.Variable]
    z: pywraplp.Variable
    big_m_vertex: int
    big_m_label: int
    b: dict[tuple[int, int], pywraplp.Variable] = field(default_factory=dict)
    c: dict[tuple[int, int], pywraplp.Variable] = field(default_factory=dict)
    d: dict[tuple[int, int, int], pywraplp.Variable] = field(default_factory=dict)
    warm_start: Optional[dict[int, int]] = None

    @property
    def num_variables(self) -> int:
        return self.solver.NumVariables()

    @property
    def num_constraints(self) -> int:
        return self.solver.NumConstraints()


def build_model(
    graph: Graph,
    warm_start: Optional[dict[int, int]] = None,
    solver_name: str = "SCIP",
    logger: Optional[logging.Logger] = None,
) -> GracefulModel:
    """
    Build the graceful coloring MIP for a graph.

    Args:
        graph: The graph to color
        warm_start: Optional feasible coloring used as a solution hint
        solver_name: OR-Tools backend ("SCIP", "CBC")
        logger: Logger for model diagnostics (default: module logger)

    Returns:
        GracefulModel ready to be solved

    Raises:
        DegenerateGraphError: If the graph has no vertices
        SolverUnavailableError: If OR-Tools cannot create the backend
        MalformedInputError: If the warm start does not color every vertex
    """
    log = logger or _log
    if graph.num_vertices == 0:
        raise DegenerateGraphError(f"Graph {graph.name} has no vertices")

    solver = pywraplp.Solver.CreateSolver(solver_name)
    if solver is None:
        raise SolverUnavailableError(f"OR-Tools backend {solver_name} is not available")

    big_m, big_m_label = big_m_constants(graph.max_degree)

    # Decision variables
    x = {v: solver.IntVar(1, solver.infinity(), f"x_{v}") for v in graph.vertices}
    z = solver.IntVar(1, big_m, "z")

    # Constraint 1: every color is at most the span
    for v in graph.vertices:
        solver.Add(x[v] <= z, f"span_{v}")

    # Constraint 2: adjacent vertices get distinct colors
    b = {}
    for i, j in adjacent_pairs(graph):
        b[i, j] = solver.BoolVar(f"b_{i}_{j}")
        solver.Add(x[i] - x[j] >= 1 - big_m * (1 - b[i, j]), f"adj_{i}_{j}_a")
        solver.Add(x[j] - x[i] >= 1 - big_m * b[i, j], f"adj_{i}_{j}_b")

    # Constraint 3: vertices at distance 2 get distinct colors
    c = {}
    for i, j in distance_two_pairs(graph):
        c[i, j] = solver.BoolVar(f"c_{i}_{j}")
        solver.Add(x[i] - x[j] >= 1 - big_m * (1 - c[i, j]), f"dist2_{i}_{j}_a")
        solver.Add(x[j] - x[i] >= 1 - big_m * c[i, j], f"dist2_{i}_{j}_b")

    # Constraint 4: edges sharing a vertex get distinct labels
    d = {}
    for i, j, k in label_triples(graph):
        d[i, j, k] = solver.BoolVar(f"d_{i}_{j}_{k}")
        solver.Add(x[i] + x[k] - 2 * x[j] >= 1 - big_m_label * (1 - d[i, j, k]), f"label_{i}_{j}_{k}_a")
        solver.Add(2 * x[j] - x[i] - x[k] >= 1 - big_m_label * d[i, j, k], f"label_{i}_{j}_{k}_b")

    # Objective: minimize the span
    solver.Minimize(z)

    model = GracefulModel(
        graph=graph,
        solver=solver,
        x=x,
        z=z,
        big_m_vertex=big_m,
        big_m_label=big_m_label,
        b=b,
        c=c,
        d=d,
    )

    if warm_start is not None:
        _apply_warm_start(model, warm_start)

    log.debug(
        "model %s: %d variables, %d constraints, M1=%d, M2=%d, warm start=%s",
        graph.name,
        model.num_variables,
        model.num_constraints,
        big_m,
        big_m_label,
        warm_start is not None,
    )
    return model


def _apply_warm_start(model: GracefulModel, coloring: dict[int, int]) -> None:
    """Hint x[v] = coloring[v] and z = span to the backend."""
    missing = [v for v in model.graph.vertices if v not in coloring]
    if missing:
        raise MalformedInputError(f"Warm start for {model.graph.name} leaves vertices {missing} uncolored")

    variables = [model.x[v] for v in model.graph.vertices]
    values = [float(coloring[v]) for v in model.graph.vertices]
    variables.append(model.z)
    values.append(float(max(values)))

    model.solver.SetHint(variables, values)
    model.warm_start = dict(coloring)
