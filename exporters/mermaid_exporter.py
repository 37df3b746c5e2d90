"""Mermaid flowchart exporter for import graphs."""

import re
from typing import Dict, List, Optional, Sequence, Set, Tuple

from graph.model import ImportGraph


def to_mermaid(
    graph: ImportGraph,
    orientation: str = "LR",
    group_by_directory: bool = False,
    include_missing: bool = True,
    highlight_path: Optional[Sequence[str]] = None,
) -> str:
    """
    Convert an import graph to Mermaid flowchart syntax.

    Args:
        graph: The import graph to export.
        orientation: Flowchart orientation (LR, TD, TB, RL, BT).
        group_by_directory: If True, group nodes by top-level directory.
        include_missing: If True, show missing (unresolved) imports.
        highlight_path: Import path to emphasize, e.g. a scan's import_path.

    Returns:
        Mermaid flowchart string.
    """
    lines = [f"flowchart {orientation}"]

    taken: Set[str] = set()
    node_ids: Dict[str, str] = {}
    for node in sorted(graph.nodes):
        node_ids[node] = _unique_id(node, taken)

    # Keyed by (source, spec): one node per dangling import
    missing_ids: Dict[Tuple[str, str], str] = {}
    if include_missing:
        for source, spec in graph.iter_missing():
            missing_ids[(source, spec)] = _unique_id(f"missing_{source}_{spec}", taken)

    if group_by_directory:
        lines.extend(_grouped_nodes(graph, node_ids, taken))
    else:
        for node in sorted(graph.nodes):
            lines.append(f'    {node_ids[node]}["{node}"]')

    if missing_ids:
        lines.append("")
        lines.append("    %% Missing imports")
        for (_, spec), missing_id in missing_ids.items():
            lines.append(f'    {missing_id}["{spec} [MISSING]"]')
            lines.append(f"    style {missing_id} stroke:#ff0000,stroke-dasharray: 5 5")

    path = list(highlight_path or [])
    path_edges: Set[Tuple[str, str]] = set(zip(path, path[1:]))

    lines.append("")
    for source, target in graph.iter_edges():
        arrow = "==>" if (source, target) in path_edges else "-->"
        lines.append(f"    {node_ids[source]} {arrow} {node_ids[target]}")

    for (source, spec), missing_id in missing_ids.items():
        lines.append(f"    {node_ids[source]} -.-> {missing_id}")

    highlighted = [node for node in path if node in node_ids]
    if highlighted:
        lines.append("")
        lines.append("    %% Import path")
        for node in highlighted:
            lines.append(f"    style {node_ids[node]} stroke:#ff9900,stroke-width:3px")

    return "\n".join(lines)


def _grouped_nodes(graph: ImportGraph, node_ids: Dict[str, str], taken: Set[str]) -> List[str]:
    """Generate node definitions inside subgraphs, one per top-level directory."""
    lines: List[str] = []

    groups: Dict[str, Set[str]] = {}
    for node in graph.nodes:
        parts = node.lstrip("/").split("/")
        top_dir = parts[0] if len(parts) > 1 else "root"
        groups.setdefault(top_dir, set()).add(node)

    for group_name in sorted(groups):
        subgraph_id = _unique_id(f"dir_{group_name}", taken)
        lines.append(f"    subgraph {subgraph_id}[{group_name}]")
        for node in sorted(groups[group_name]):
            lines.append(f'        {node_ids[node]}["{node}"]')
        lines.append("    end")

    return lines


def _sanitize_id(value: str) -> str:
    """
    Convert a path or label to a valid Mermaid node ID.

    Mermaid IDs can only contain letters, digits, and underscores.
    """
    # Replace path separators and dots with underscores
    sanitized = re.sub(r"[/\\.\-]", "_", value.lstrip("/"))
    # Remove any remaining invalid characters
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "", sanitized)
    # Ensure it starts with a letter
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n_" + sanitized
    return sanitized or "unknown"


def _unique_id(value: str, taken: Set[str]) -> str:
    """Sanitize value into an ID not yet in taken, and reserve it."""
    base = _sanitize_id(value)
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}_{suffix}"
        suffix += 1
    taken.add(candidate)
    return candidate
