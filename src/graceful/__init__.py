"""
Graceful Graph Coloring

This package computes the graceful chromatic number of simple graphs with a
greedy 2-packing heuristic and an exact MIP model.
"""

import logging

from .exceptions import (
    DegenerateGraphError,
    GracefulColoringError,
    MalformedInputError,
    NoSolutionError,
    SolverUnavailableError,
)
from .graph import VERTEX_BASE, Graph, normalize_edges
from .greedy import coloring_span, find_violations, greedy_graceful_coloring, verify_graceful_coloring
from .ilp_solver import ILPSolver, SolverResult, SolverStatus
from .model import GracefulModel, big_m_constants, build_model
from .runner import ExperimentRunner, GracefulReport, Solver

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    # Graph
    "Graph",
    "normalize_edges",
    "VERTEX_BASE",
    # Heuristic
    "greedy_graceful_coloring",
    "coloring_span",
    "verify_graceful_coloring",
    "find_violations",
    # MIP
    "GracefulModel",
    "build_model",
    "big_m_constants",
    "ILPSolver",
    "SolverResult",
    "SolverStatus",
    # Runner
    "ExperimentRunner",
    "GracefulReport",
    "Solver",
    # Errors
    "GracefulColoringError",
    "MalformedInputError",
    "DegenerateGraphError",
    "NoSolutionError",
    "SolverUnavailableError",
]
