"""
Graph data structure and edge-list normalizer.

Input file format:
- One edge per line as two whitespace-separated integers "u v"
- Vertex identifiers may be arbitrary (non-contiguous) integers
- Self-loops are discarded and repeated edges are merged

Vertices are re-indexed to the compact range 1..n, ranked by sorted original id.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from .exceptions import MalformedInputError

VERTEX_BASE = 1


@dataclass(frozen=True)
class Graph:
    """An undirected simple graph on vertices VERTEX_BASE..VERTEX_BASE+n-1, read-only once built."""

    name: str
    num_vertices: int
    edges: tuple[tuple[int, int], ...]
    original_ids: tuple[int, ...] = ()

    # Derived data, computed after loading
    adjacency: dict[int, frozenset[int]] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        """Validate the edge set and compute the adjacency."""
        if self.num_vertices < 0:
            raise MalformedInputError(f"Negative vertex count in {self.name}: {self.num_vertices}")

        if not self.original_ids:
            object.__setattr__(self, "original_ids", tuple(range(VERTEX_BASE, VERTEX_BASE + self.num_vertices)))
        elif len(self.original_ids) != self.num_vertices:
            raise MalformedInputError(
                f"Original id count mismatch in {self.name}: expected {self.num_vertices}, "
                f"got {len(self.original_ids)}"
            )

        canonical = set()
        for u, v in self.edges:
            if u == v:
                raise MalformedInputError(f"Self-loop on vertex {u} in {self.name}")
            if not (self._in_range(u) and self._in_range(v)):
                raise MalformedInputError(f"Invalid vertex in edge ({u}, {v}) in {self.name}")
            edge = (min(u, v), max(u, v))
            if edge in canonical:
                raise MalformedInputError(f"Duplicate edge {edge} in {self.name}")
            canonical.add(edge)
        object.__setattr__(self, "edges", tuple(sorted(canonical)))

        neighbors: dict[int, set[int]] = {v: set() for v in self.vertices}
        for u, v in self.edges:
            neighbors[u].add(v)
            neighbors[v].add(u)
        object.__setattr__(self, "adjacency", {v: frozenset(adj) for v, adj in neighbors.items()})

    def _in_range(self, v: int) -> bool:
        return VERTEX_BASE <= v < VERTEX_BASE + self.num_vertices

    @classmethod
    def from_file(cls, filepath: str | Path) -> "Graph":
        """
        Parse an edge-list file into a normalized graph.

        Args:
            filepath: Path to the edge-list file

        Returns:
            Graph named after the file stem

        Raises:
            MalformedInputError: If any line, blank ones included, is not an integer pair
        """
        filepath = Path(filepath)

        with open(filepath, "r") as f:
            lines = [line.strip() for line in f.readlines()]

        records = []
        for i, line in enumerate(lines):
            records.append(parse_edge_line(line, i + 1, filepath))

        return normalize_edges(records, name=filepath.stem)

    @property
    def vertices(self) -> range:
        return range(VERTEX_BASE, VERTEX_BASE + self.num_vertices)

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def degree(self, v: int) -> int:
        return len(self.adjacency[v])

    @property
    def max_degree(self) -> int:
        return max((self.degree(v) for v in self.vertices), default=0)

    @property
    def min_degree(self) -> int:
        return min((self.degree(v) for v in self.vertices), default=0)

    @property
    def density(self) -> float:
        """Edge density 2|E| / (|V|(|V|-1)); 0.0 for fewer than two vertices."""
        n = self.num_vertices
        if n < 2:
            return 0.0
        return 2.0 * self.num_edges / (n * (n - 1))

    def original_id(self, v: int) -> int:
        """Map an internal vertex back to the identifier it had in the input."""
        return self.original_ids[v - VERTEX_BASE]

    def edge_records(self) -> list[tuple[int, int]]:
        """Edges expressed in original vertex identifiers."""
        return [(self.original_id(u), self.original_id(v)) for u, v in self.edges]

    def __str__(self) -> str:
        return f"Graph({self.name}: n={self.num_vertices}, m={self.num_edges}, maxdeg={self.max_degree})"


def parse_edge_line(line: str, line_number: int, source: str | Path = "<input>") -> tuple[int, int]:
    """Read the first two whitespace-separated fields of a line as an integer edge."""
    parts = line.split()
    if len(parts) < 2:
        raise MalformedInputError(f"Invalid edge format on line {line_number} in {source}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as e:
        raise MalformedInputError(f"Invalid edge on line {line_number} in {source}: {e}") from e


def normalize_edges(records: Iterable[Sequence[int]], name: str = "graph") -> Graph:
    """
    Build a canonical graph from raw vertex pairs.

    Self-loops are dropped, edges are deduplicated irrespective of endpoint
    order, and the distinct ids of the retained edges are ranked in sorted
    order onto VERTEX_BASE, VERTEX_BASE+1, ...

    Args:
        records: Raw (u, v) pairs with arbitrary integer ids
        name: Name of the resulting graph

    Returns:
        The normalized Graph

    Raises:
        MalformedInputError: If a record is not a pair of integers
    """
    unique_edges: set[tuple[int, int]] = set()
    for idx, record in enumerate(records):
        if len(record) != 2 or not all(isinstance(x, int) and not isinstance(x, bool) for x in record):
            raise MalformedInputError(f"Invalid edge record #{idx + 1} in {name}: {record!r}")
        u, v = record
        if u != v:
            unique_edges.add((u, v) if u < v else (v, u))

    all_vertices = sorted({v for edge in unique_edges for v in edge})
    vertex_map = {v: i for i, v in enumerate(all_vertices, start=VERTEX_BASE)}

    return Graph(
        name=name,
        num_vertices=len(all_vertices),
        edges=tuple((vertex_map[u], vertex_map[v]) for u, v in unique_edges),
        original_ids=tuple(all_vertices),
    )
