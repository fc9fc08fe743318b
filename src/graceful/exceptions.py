"""
Custom exceptions for the graceful coloring solver.
"""


class GracefulColoringError(Exception):
    """Base exception for graceful coloring errors."""
    pass


class MalformedInputError(GracefulColoringError, ValueError):
    """Raised when an edge record cannot be parsed into a pair of integers."""
    pass


class DegenerateGraphError(GracefulColoringError, ValueError):
    """Raised when a graph has no vertices, so no span is defined."""
    pass


class SolverUnavailableError(GracefulColoringError, RuntimeError):
    """Raised when the requested OR-Tools backend cannot be created."""
    pass


class NoSolutionError(GracefulColoringError, RuntimeError):
    """Raised when the solver finishes without any feasible assignment."""

    def __init__(self, graph_name: str, status):
        self.graph_name = graph_name
        self.status = status
        super().__init__(f"Solution not found for {graph_name} (status: {status.value})")
