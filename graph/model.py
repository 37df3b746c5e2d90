"""Graph data model for storing local import relationships."""

from typing import Dict, Iterator, List, Optional, Set, Tuple


class ImportGraph:
    """
    A directed graph of local imports, rooted at an entry file.

    Nodes are virtual file paths, and edges represent 'importer -> imported'
    relationships. Import specifiers that did not resolve to a file are
    tracked separately as missing.
    """

    def __init__(self, start: str):
        self._start = start
        self._depths: Dict[str, int] = {start: 0}
        self._edges: Dict[str, Set[str]] = {}
        self._missing: Dict[str, Set[str]] = {}  # importer -> set of raw specifiers

    @property
    def start(self) -> str:
        """Return the entry file the graph was built from."""
        return self._start

    @property
    def nodes(self) -> Set[str]:
        """Return all nodes in the graph."""
        return set(self._depths)

    @property
    def edges(self) -> Dict[str, Set[str]]:
        """Return adjacency list representation of edges."""
        return {k: v.copy() for k, v in self._edges.items()}

    @property
    def missing(self) -> Dict[str, Set[str]]:
        """Return missing imports (importer -> set of unresolved specifiers)."""
        return {k: v.copy() for k, v in self._missing.items()}

    def add_node(self, node: str, depth: int) -> None:
        """
        Add a node reached at the given hop depth.

        A node keeps the smallest depth it has been seen at.
        """
        current = self._depths.get(node)
        if current is None or depth < current:
            self._depths[node] = depth

    def add_edge(self, source: str, target: str, depth: int) -> None:
        """
        Add a directed edge from source to target.

        ``depth`` is the hop depth of ``target`` along this edge.
        """
        self.add_node(source, max(depth - 1, 0))
        self.add_node(target, depth)

        if source not in self._edges:
            self._edges[source] = set()
        self._edges[source].add(target)

    def add_missing(self, source: str, spec: str) -> None:
        """Record an import specifier of ``source`` that matched no file."""
        if source not in self._missing:
            self._missing[source] = set()
        self._missing[source].add(spec)

    def depth_of(self, node: str) -> Optional[int]:
        """Return the hop depth of a node, or None if it is not in the graph."""
        return self._depths.get(node)

    def get_missing(self, source: str) -> Set[str]:
        """Get all unresolved specifiers imported by the source file."""
        return self._missing.get(source, set()).copy()

    def has_missing(self) -> bool:
        """Check if there are any missing imports."""
        return bool(self._missing)

    def get_targets(self, source: str) -> Set[str]:
        """Get all files that the source file imports."""
        return self._edges.get(source, set()).copy()

    def get_sources(self, target: str) -> Set[str]:
        """Get all files that import the target file."""
        sources = set()
        for source, targets in self._edges.items():
            if target in targets:
                sources.add(source)
        return sources

    def iter_edges(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all edges as (source, target) tuples, sorted."""
        for source in sorted(self._edges):
            for target in sorted(self._edges[source]):
                yield source, target

    def iter_missing(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all missing imports as (source, spec) tuples, sorted."""
        for source in sorted(self._missing):
            for spec in sorted(self._missing[source]):
                yield source, spec

    def has_path(self, path: List[str]) -> bool:
        """Check that every consecutive pair in ``path`` is an edge."""
        return all(
            target in self._edges.get(source, ())
            for source, target in zip(path, path[1:])
        )

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._depths)

    def __contains__(self, node: str) -> bool:
        """Check if a node is in the graph."""
        return node in self._depths

    def __repr__(self) -> str:
        missing_count = sum(len(m) for m in self._missing.values())
        edge_count = sum(len(t) for t in self._edges.values())
        return f"ImportGraph(start={self._start!r}, nodes={len(self._depths)}, edges={edge_count}, missing={missing_count})"
