"""Request and result types for import-graph scans."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple


DEFAULT_MAX_DEPTH = 5

INVALID_FILES_ERROR = "Invalid currentFiles object"


@dataclass
class ScanRequest:
    """
    Parameters of a single scan.

    Attributes:
        files: Virtual file set mapping path -> source text. Read only.
        start_file: Entry file the search starts from.
        search_pattern: Literal substring to look for.
        max_depth: Maximum number of import hops from the start file.
    """
    files: Mapping[str, Any]
    start_file: str
    search_pattern: str
    max_depth: int = DEFAULT_MAX_DEPTH


class FrontierEntry(NamedTuple):
    """A queued file, tagged with its hop depth and the path used to reach it."""
    file: str
    depth: int
    import_path: Tuple[str, ...]


@dataclass
class ScanResult:
    """
    Outcome of a scan.

    When ``found`` is True, ``import_path`` runs from the start file to
    ``filename``. Validation failures set ``error`` and leave everything
    else empty.
    """
    found: bool
    filename: Optional[str] = None
    scanned_files: List[str] = field(default_factory=list)
    import_path: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "ScanResult":
        """Build a result for a request that failed validation."""
        return cls(found=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Return the tool-facing representation (camelCase keys)."""
        return {
            "found": self.found,
            "filename": self.filename,
            "scannedFiles": list(self.scanned_files),
            "importPath": list(self.import_path),
            "error": self.error,
        }


def start_file_error(start_file: Any) -> str:
    return f"Start file not found: {start_file}"


def search_pattern_error(pattern: Any) -> str:
    return f"Invalid search pattern: {pattern!r}"


def max_depth_error(max_depth: Any) -> str:
    return f"Invalid max depth: {max_depth!r}"
