import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ortools.linear_solver import pywraplp

from .graph import Graph
from .greedy import verify_graceful_coloring
from .model import GracefulModel, build_model

_log = logging.getLogger(__name__)


class SolverStatus(Enum):
    """Status of the solver after optimization."""

    OPTIMAL = "optimal"
    FEASIBLE_TIMEOUT = "feasible-timeout"
    INFEASIBLE = "infeasible"
    ERROR = "error"


@dataclass
class SolverResult:
    """Result of solving the graceful coloring model of a graph."""

    graph_name: str
    status: SolverStatus
    span: Optional[int]  # Optimal/best found span
    vertex_colors: Optional[dict[int, int]]  # Color of every vertex
    runtime_ms: float
    num_variables: int
    num_constraints: int
    best_bound: Optional[float] = None  # Dual bound if not optimal

    @property
    def has_solution(self) -> bool:
        return self.vertex_colors is not None


class ILPSolver:
    """
    MIP-based solver for the graceful chromatic number.

    Uses OR-Tools with SCIP backend by default.
    """

    def __init__(
        self,
        time_limit_seconds: float = 900.0,
        solver_name: str = "SCIP",
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the solver.

        Args:
            time_limit_seconds: Maximum solving time
            solver_name: Backend solver ("SCIP", "CBC")
            logger: Logger for solver diagnostics (default: module logger)
        """
        self.time_limit_seconds = time_limit_seconds
        self.solver_name = solver_name
        self.logger = logger or _log

    def build(self, graph: Graph, warm_start: Optional[dict[int, int]] = None) -> GracefulModel:
        return build_model(graph, warm_start=warm_start, solver_name=self.solver_name, logger=self.logger)

    def solve(self, graph: Graph, warm_start: Optional[dict[int, int]] = None) -> SolverResult:
        """
        Build and solve the model of a graph.

        Args:
            graph: The graph to color
            warm_start: Optional feasible coloring to seed the search

        Returns:
            SolverResult with solution details
        """
        return self.solve_model(self.build(graph, warm_start))

    def solve_model(self, model: GracefulModel, time_limit_seconds: Optional[float] = None) -> SolverResult:
        """
        Run a built model within the time budget and decode its solution.

        Args:
            model: Model from build_model
            time_limit_seconds: Overrides the configured time limit

        Returns:
            SolverResult; span and vertex_colors are None unless a feasible
            assignment was found
        """
        solver = model.solver
        limit = self.time_limit_seconds if time_limit_seconds is None else time_limit_seconds
        solver.SetTimeLimit(int(limit * 1000))

        self.logger.debug("Solving %s with %s (limit %.1fs)...", model.graph.name, self.solver_name, limit)

        start = time.perf_counter()
        status = solver.Solve()
        runtime_ms = (time.perf_counter() - start) * 1000.0

        if status == pywraplp.Solver.OPTIMAL:
            result_status = SolverStatus.OPTIMAL
        elif status == pywraplp.Solver.FEASIBLE:
            result_status = SolverStatus.FEASIBLE_TIMEOUT
        elif status == pywraplp.Solver.INFEASIBLE:
            result_status = SolverStatus.INFEASIBLE
        else:
            result_status = SolverStatus.ERROR

        # extract solution if found
        span = None
        vertex_colors = None
        best_bound = None

        if result_status in (SolverStatus.OPTIMAL, SolverStatus.FEASIBLE_TIMEOUT):
            span = int(round(solver.Objective().Value()))
            vertex_colors = {v: int(round(var.solution_value())) for v, var in model.x.items()}
            best_bound = solver.Objective().BestBound()

            self.logger.debug("  Solution found: span %d (bound %.2f)", span, best_bound)
            self.logger.debug("  Colors: %s", vertex_colors)
        else:
            self.logger.debug("  No solution: %s", result_status.value)

        return SolverResult(
            graph_name=model.graph.name,
            status=result_status,
            span=span,
            vertex_colors=vertex_colors,
            runtime_ms=runtime_ms,
            num_variables=model.num_variables,
            num_constraints=model.num_constraints,
            best_bound=best_bound,
        )

    def verify_solution(self, graph: Graph, result: SolverResult) -> bool:
        """
        Verify that a solution is a graceful coloring with the reported span.

        Args:
            graph: The graph
            result: The solver result to verify

        Returns:
            True if the solution is graceful and within the reported span
        """
        if result.vertex_colors is None or result.span is None:
            return False

        if not verify_graceful_coloring(graph, result.vertex_colors):
            return False

        # z only bounds the colors from above until the solver proves optimality
        return max(result.vertex_colors.values()) <= result.span
