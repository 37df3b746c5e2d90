"""Breadth-first traversal of the local import graph."""

from collections import deque
from collections.abc import Mapping
from typing import Any, Iterator, Optional, Tuple

from graph.model import ImportGraph
from .events import (
    ScanObserver,
    log_observer,
    SCAN_STARTED,
    FILE_MISSING,
    FILE_SCANNED,
    PATTERN_FOUND,
    IMPORTS_FOUND,
    IMPORT_QUEUED,
    IMPORT_UNRESOLVED,
    SCAN_FINISHED,
)
from .models import (
    DEFAULT_MAX_DEPTH,
    INVALID_FILES_ERROR,
    FrontierEntry,
    ScanRequest,
    ScanResult,
    max_depth_error,
    search_pattern_error,
    start_file_error,
)
from .parser import extract_imports
from .resolver import resolve_import_path, find_file_with_extension


def iter_local_imports(
    files: Mapping,
    current_file: str,
    source: Any,
) -> Iterator[Tuple[str, Optional[str]]]:
    """
    Yield ``(spec, matched_file)`` for every relative import in ``source``.

    ``matched_file`` is None when the specifier does not probe to any file
    in ``files``.
    """
    for spec in extract_imports(source):
        candidate = resolve_import_path(current_file, spec)
        yield spec, find_file_with_extension(files, candidate)


def validate_request(request: ScanRequest) -> Optional[str]:
    """Return the validation error for a request, or None if it is usable."""
    if not isinstance(request.files, Mapping):
        return INVALID_FILES_ERROR

    if not isinstance(request.start_file, str) or request.start_file not in request.files:
        return start_file_error(request.start_file)

    if not isinstance(request.search_pattern, str):
        return search_pattern_error(request.search_pattern)

    max_depth = request.max_depth
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        return max_depth_error(max_depth)

    return None


def scan(
    request: ScanRequest,
    observer: Optional[ScanObserver] = None,
) -> ScanResult:
    """
    Find the first file reachable from the start file that contains a pattern.

    Files are visited breadth-first along resolved local imports, so the
    reported import path is a shortest one. Every file is expanded at most
    once, which makes cyclic imports safe.

    Args:
        request: What to search for, and where.
        observer: Callback receiving progress events. Defaults to
                  ``log_observer``.

    Returns:
        ScanResult. Invalid input is reported through ``error``, never raised.
    """
    error = validate_request(request)
    if error is not None:
        return ScanResult.failure(error)

    notify = observer if observer is not None else log_observer
    files = request.files
    pattern = request.search_pattern
    max_depth = request.max_depth

    notify(
        SCAN_STARTED,
        start_file=request.start_file,
        search_pattern=pattern,
        max_depth=max_depth,
    )

    # dict keeps insertion order for scanned_files
    scanned = {}
    queue = deque([FrontierEntry(request.start_file, 0, (request.start_file,))])

    while queue:
        file, depth, path = queue.popleft()

        if file in scanned or depth > max_depth:
            continue

        scanned[file] = None

        if file not in files:
            notify(FILE_MISSING, file=file, depth=depth)
            continue

        source = files[file]
        notify(FILE_SCANNED, file=file, depth=depth)

        if isinstance(source, str) and pattern in source:
            notify(PATTERN_FOUND, file=file, search_pattern=pattern, import_path=path)
            notify(SCAN_FINISHED, found=True, search_pattern=pattern, scanned=len(scanned))
            return ScanResult(
                found=True,
                filename=file,
                scanned_files=list(scanned),
                import_path=list(path),
            )

        if depth >= max_depth:
            continue

        imports = list(iter_local_imports(files, file, source))
        if imports:
            notify(IMPORTS_FOUND, file=file, depth=depth, count=len(imports))

        for spec, found_file in imports:
            if found_file is None:
                notify(IMPORT_UNRESOLVED, file=file, spec=spec, depth=depth)
            elif found_file not in scanned:
                notify(IMPORT_QUEUED, file=found_file, depth=depth + 1)
                queue.append(FrontierEntry(found_file, depth + 1, path + (found_file,)))

    notify(SCAN_FINISHED, found=False, search_pattern=pattern, scanned=len(scanned))

    return ScanResult(found=False, scanned_files=list(scanned))


async def scan_for_issue(
    files: Mapping,
    start_file: str,
    search_pattern: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    observer: Optional[ScanObserver] = None,
) -> ScanResult:
    """Asynchronous entry point for callers that invoke the scanner as a tool."""
    request = ScanRequest(
        files=files,
        start_file=start_file,
        search_pattern=search_pattern,
        max_depth=max_depth,
    )
    return scan(request, observer=observer)


def build_import_graph(
    files: Mapping,
    start_file: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ImportGraph:
    """
    Map the local import graph reachable from a start file.

    Args:
        files: Virtual file set.
        start_file: Entry file; must be a key of ``files``.
        max_depth: Files further than this many hops are not expanded.

    Returns:
        ImportGraph with resolved edges and unresolved (missing) specifiers.

    Raises:
        TypeError: If ``files`` is not a mapping.
        KeyError: If ``start_file`` is not in ``files``.
    """
    if not isinstance(files, Mapping):
        raise TypeError(INVALID_FILES_ERROR)
    if start_file not in files:
        raise KeyError(start_file)

    graph = ImportGraph(start_file)
    queue = deque([(start_file, 0)])
    expanded = set()

    while queue:
        file, depth = queue.popleft()
        if file in expanded:
            continue
        expanded.add(file)

        if depth >= max_depth:
            continue

        for spec, found_file in iter_local_imports(files, file, files[file]):
            if found_file is None:
                graph.add_missing(file, spec)
                continue

            graph.add_edge(file, found_file, depth + 1)
            if found_file not in expanded:
                queue.append((found_file, depth + 1))

    return graph
