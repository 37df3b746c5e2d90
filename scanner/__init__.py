"""Scanner module for locating a pattern along a project's local import graph."""

from .builder import scan, scan_for_issue, build_import_graph
from .discovery import iter_files, load_directory, load_snapshot, load_file_set, SnapshotError
from .models import ScanRequest, ScanResult, DEFAULT_MAX_DEPTH
from .parser import extract_imports
from .resolver import resolve_import_path, find_file_with_extension
from .triage import locate_issue

__all__ = [
    "scan",
    "scan_for_issue",
    "build_import_graph",
    "iter_files",
    "load_directory",
    "load_snapshot",
    "load_file_set",
    "SnapshotError",
    "ScanRequest",
    "ScanResult",
    "DEFAULT_MAX_DEPTH",
    "extract_imports",
    "resolve_import_path",
    "find_file_with_extension",
    "locate_issue",
]
