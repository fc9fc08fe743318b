"""
Experiment runner for graceful coloring.

Runs the greedy heuristic and the warm-started MIP on each graph and writes
one CSV report per graph.
"""

import csv
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from .exceptions import GracefulColoringError, NoSolutionError
from .graph import Graph
from .greedy import coloring_span, greedy_graceful_coloring
from .ilp_solver import SolverResult, SolverStatus

_log = logging.getLogger(__name__)


class Solver(Protocol):
    """Protocol for graceful coloring solvers."""

    def solve(self, graph: Graph, warm_start: Optional[dict[int, int]] = None) -> SolverResult: ...


CSV_HEADER = ["G", "|V|", "|E|", "density", "maxDegree", "minDegree", "greedy", "span", "time(milliseconds)", "status"]


@dataclass
class GracefulReport:
    """Summary of one processed graph."""

    graph_name: str
    num_vertices: int
    num_edges: int
    density: float
    max_degree: int
    min_degree: int
    greedy_span: int
    span: int
    runtime_ms: float
    status: SolverStatus
    greedy_coloring: dict[int, int]
    vertex_colors: dict[int, int]

    @classmethod
    def from_result(cls, graph: Graph, greedy_coloring: dict[int, int], result: SolverResult) -> "GracefulReport":
        if not result.has_solution:
            raise NoSolutionError(graph.name, result.status)
        return cls(
            graph_name=graph.name,
            num_vertices=graph.num_vertices,
            num_edges=graph.num_edges,
            density=graph.density,
            max_degree=graph.max_degree,
            min_degree=graph.min_degree,
            greedy_span=coloring_span(greedy_coloring),
            span=result.span,
            runtime_ms=result.runtime_ms,
            status=result.status,
            greedy_coloring=greedy_coloring,
            vertex_colors=result.vertex_colors,
        )

    def csv_fields(self) -> list:
        """Row values in CSV_HEADER order."""
        return [
            self.graph_name,
            self.num_vertices,
            self.num_edges,
            self.density,
            self.max_degree,
            self.min_degree,
            self.greedy_span,
            self.span,
            f"{self.runtime_ms:.0f}",
            self.status.value,
        ]


class ExperimentRunner:
    """Runs the heuristic and the MIP on graphs and collects reports."""

    def __init__(
        self,
        solver: Solver,
        output_dir: Path | None = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the experiment runner.

        Args:
            solver: The MIP solver to use
            output_dir: Directory for output files (default: ./output)
            logger: Logger for progress messages (default: module logger)
        """
        self.solver = solver
        self.output_dir = Path(output_dir) if output_dir else Path.cwd() / "output"
        self.logger = logger or _log
        self.results: list[GracefulReport] = []
        self.failures: list[tuple[Path, str]] = []

    def run_graph(self, graph: Graph) -> GracefulReport:
        """
        Color one graph: heuristic first, then the MIP seeded with it.

        Raises:
            NoSolutionError: If the solver returns no assignment
        """
        greedy = greedy_graceful_coloring(graph, logger=self.logger)
        self.logger.info("%s: greedy span %d", graph.name, coloring_span(greedy))

        result = self.solver.solve(graph, warm_start=greedy)
        report = GracefulReport.from_result(graph, greedy, result)
        self.logger.info("%s: %s span %d in %.0fms", graph.name, report.status.value, report.span, report.runtime_ms)

        self.results.append(report)
        return report

    def run_file(self, filepath: Path) -> tuple[GracefulReport, Path]:
        """Run a single edge-list file and write its CSV report."""
        graph = Graph.from_file(filepath)
        report = self.run_graph(graph)
        return report, self.write_report(report)

    def write_report(self, report: GracefulReport) -> Path:
        """Write the header and the report row to output_dir/<graph>.csv."""
        filepath = self.output_dir / f"{report.graph_name}.csv"
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            writer.writerow(report.csv_fields())

        return filepath

    def run_directory(
        self,
        directory: Path,
        pattern: str = "*.txt",
    ) -> list[GracefulReport]:
        """
        Run every graph file in a directory.

        Each file is independent: a failure is logged, recorded in
        self.failures and the batch continues.

        Args:
            directory: Directory containing edge-list files
            pattern: Glob pattern for graph files

        Returns:
            List of reports of the graphs that were solved
        """
        directory = Path(directory)
        files = sorted(directory.glob(pattern))

        reports = []
        for i, filepath in enumerate(files):
            self.logger.info("[%d/%d] Processing %s...", i + 1, len(files), filepath.name)

            try:
                report, csv_path = self.run_file(filepath)
            except GracefulColoringError as e:
                self.logger.error("%s: %s", filepath.name, e)
                self.failures.append((filepath, str(e)))
                continue

            print(f"{filepath.name}: {report.status.value} - span {report.span} "
                  f"(greedy {report.greedy_span}) in {report.runtime_ms:.0f}ms -> {csv_path}")
            reports.append(report)

        return reports

    def save_results_csv(self, filename: str | None = None) -> Path:
        """
        Save all reports to a single CSV file.

        Args:
            filename: Output filename (default: results_TIMESTAMP.csv)

        Returns:
            Path to the saved file
        """
        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"results_{timestamp}.csv"

        filepath = self.output_dir / filename
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for report in self.results:
                writer.writerow(report.csv_fields())

        return filepath

    def print_summary(self):
        """Print a summary of results."""
        if not self.results:
            print("No results to summarize.")
            return

        print(f"\n{'=' * 60}")
        print("SUMMARY")
        print(f"{'=' * 60}")

        total = len(self.results)
        optimal = sum(1 for r in self.results if r.status == SolverStatus.OPTIMAL)
        timeout = sum(1 for r in self.results if r.status == SolverStatus.FEASIBLE_TIMEOUT)
        improved = sum(1 for r in self.results if r.span < r.greedy_span)

        print(f"Total graphs: {total}")
        print(f"  Optimal:          {optimal} ({100 * optimal / total:.1f}%)")
        print(f"  Feasible-timeout: {timeout} ({100 * timeout / total:.1f}%)")
        print(f"  Failed:           {len(self.failures)}")
        print(f"  Span below greedy: {improved}")

        avg_gap = sum(r.greedy_span - r.span for r in self.results) / total
        avg_time = sum(r.runtime_ms for r in self.results) / total
        print(f"\n  Avg greedy - span: {avg_gap:.2f}")
        print(f"  Avg time:          {avg_time:.0f}ms")

    def print_table(self):
        """Print results as a formatted table."""
        if not self.results:
            print("No results to display.")
            return

        print(
            f"\n{'Graph':<30} {'V':>6} {'E':>6} {'Dmax':>5} {'Greedy':>7} {'Span':>5} "
            f"{'Status':<17} {'Time(ms)':>10}"
        )
        print("-" * 92)

        for r in self.results:
            print(
                f"{r.graph_name:<30} {r.num_vertices:>6} {r.num_edges:>6} {r.max_degree:>5} "
                f"{r.greedy_span:>7} {r.span:>5} {r.status.value:<17} {r.runtime_ms:>10.0f}"
            )
