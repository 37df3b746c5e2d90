"""ASCII tree-style exporters for import graphs and scan results."""

from typing import Optional, Set, List, Tuple

from graph.model import ImportGraph
from scanner.models import ScanResult


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def _chars(style: str) -> Tuple[str, str, str, str]:
    if style == "ascii":
        return (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    return (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)


def to_ascii(
    graph: ImportGraph,
    style: str = "tree",
    include_missing: bool = True,
    highlight: Optional[str] = None,
) -> str:
    """
    Convert an import graph to an ASCII tree rooted at its start file.

    A file that already appeared earlier in the tree is marked with [*] and
    not expanded again.

    Args:
        graph: The import graph to export.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        include_missing: If True, show missing (unresolved) imports.
        highlight: File to mark with [MATCH], typically a scan's filename.

    Returns:
        ASCII tree string.
    """
    lines: List[str] = []
    _render_node(
        graph=graph,
        node=graph.start,
        prefix="",
        is_last=True,
        chars=_chars(style),
        rendered=set(),
        lines=lines,
        is_root=True,
        include_missing=include_missing,
        highlight=highlight,
    )
    return "\n".join(lines)


def _render_node(
    graph: ImportGraph,
    node: str,
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    rendered: Set[str],
    lines: List[str],
    is_root: bool = False,
    include_missing: bool = True,
    highlight: Optional[str] = None,
) -> None:
    """
    Recursively render a node and its imports.

    Args:
        graph: The import graph.
        node: Current node to render.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child of its parent.
        chars: Character set (branch, last, vertical, space).
        rendered: Nodes already written out (modified in place).
        lines: Output lines list (modified in place).
        is_root: Whether this is the start file.
        include_missing: If True, show missing (unresolved) imports.
        highlight: File to mark with [MATCH].
    """
    branch, last, vertical, space = chars

    seen = node in rendered
    markers = ""
    if node == highlight:
        markers += " [MATCH]"
    if seen:
        markers += " [*]"

    if is_root:
        lines.append(f"{node}{markers}")
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{node}{markers}")

    if seen:
        return

    rendered.add(node)

    children = sorted(graph.get_targets(node))
    missing_specs = sorted(graph.get_missing(node)) if include_missing else []
    total_items = len(children) + len(missing_specs)

    if is_root:
        child_prefix = ""
    else:
        child_prefix = prefix + (space if is_last else vertical)

    for index, child in enumerate(children, start=1):
        _render_node(
            graph=graph,
            node=child,
            prefix=child_prefix,
            is_last=(index == total_items),
            chars=chars,
            rendered=rendered,
            lines=lines,
            include_missing=include_missing,
            highlight=highlight,
        )

    for index, spec in enumerate(missing_specs, start=len(children) + 1):
        connector = last if index == total_items else branch
        lines.append(f"{child_prefix}{connector}{spec} [MISSING]")


def result_to_ascii(
    result: ScanResult,
    search_pattern: Optional[str] = None,
    style: str = "tree",
) -> str:
    """
    Render a scan result as a short human-readable report.

    Args:
        result: The scan result to render.
        search_pattern: Pattern that was searched for, shown in the header.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).

    Returns:
        Report text.
    """
    if result.error:
        return f"ERROR: {result.error}"

    _, last, _, space = _chars(style)
    label = f'"{search_pattern}"' if search_pattern is not None else "pattern"
    lines: List[str] = []

    if result.found:
        lines.append(f"FOUND {label} in {result.filename}")
        lines.append("")
        lines.append("Import path:")
        for depth, file in enumerate(result.import_path):
            marker = " [MATCH]" if file == result.filename else ""
            if depth == 0:
                lines.append(f"{file}{marker}")
            else:
                lines.append(f"{space * (depth - 1)}{last}{file}{marker}")
    else:
        lines.append(f"NOT FOUND {label}")

    lines.append("")
    lines.append(f"Scanned {len(result.scanned_files)} file(s):")
    for file in result.scanned_files:
        lines.append(f"  {file}")

    return "\n".join(lines)
