"""JSON exporters for import graphs and scan results (machine-friendly format)."""

import json
from typing import Dict, List, Any

from graph.model import ImportGraph
from scanner.models import ScanResult


def to_json(
    graph: ImportGraph,
    indent: int = 2,
    include_missing: bool = True,
) -> str:
    """
    Convert an import graph to JSON format.

    Args:
        graph: The import graph to export.
        indent: JSON indentation level.
        include_missing: If True, include missing (unresolved) imports.

    Returns:
        JSON string representation of the graph.
    """
    nodes: List[Dict[str, Any]] = [
        {"path": node, "depth": graph.depth_of(node)}
        for node in sorted(graph.nodes)
    ]

    edges: List[Dict[str, Any]] = [
        {"source": source, "target": target}
        for source, target in graph.iter_edges()
    ]

    data: Dict[str, Any] = {
        "start": graph.start,
        "nodes": nodes,
        "edges": edges,
    }

    if include_missing:
        data["missing"] = [
            {"source": source, "import": spec}
            for source, spec in graph.iter_missing()
        ]

    return json.dumps(data, indent=indent)


def result_to_json(result: ScanResult, indent: int = 2) -> str:
    """Convert a scan result to JSON, using the tool-facing field names."""
    return json.dumps(result.to_dict(), indent=indent)
