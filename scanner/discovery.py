"""Loading virtual file sets from disk or from snapshot documents."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterator, Set, Optional

from .parser import parse_file, SNAPSHOT_SUFFIXES


logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = {".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"}
DEFAULT_EXCLUDE_DIRS = {
    ".git", ".hg", ".svn",
    "node_modules", "bower_components",
    ".next", ".nuxt", ".cache", "coverage",
    ".idea", ".vscode",
    "build", "dist", "out",
}


class SnapshotError(ValueError):
    """Raised when a snapshot document cannot be turned into a file set."""


def iter_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over source files in a directory tree.

    Args:
        root: Root directory to scan.
        include_ext: Set of file extensions to include (e.g., {'.js', '.jsx'}).
                    If None, uses DEFAULT_EXTENSIONS.
        exclude_dirs: Set of directory names to skip.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Maximum directory depth to descend. None means unlimited.

    Yields:
        Path objects for matching files, in sorted order.
    """
    if include_ext is None:
        include_ext = DEFAULT_EXTENSIONS
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    root = root.resolve()

    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if max_depth is not None and depth > max_depth:
            return

        try:
            entries = sorted(current.iterdir())
        except PermissionError:
            logger.warning("Permission denied: %s", current)
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name in exclude_dirs:
                    continue
                yield from _walk(entry, depth + 1)
            elif entry.is_file():
                if entry.suffix.lower() in include_ext:
                    yield entry

    yield from _walk(root, 0)


def to_virtual_path(file_path: Path, root: Path) -> str:
    """
    Return the '/'-rooted POSIX path of a file relative to root.

    Symlinks are not followed, so a file reached through a linked directory
    keeps the path it was found under.
    """
    root = root.resolve()
    try:
        rel_path = file_path.relative_to(root)
    except ValueError:
        rel_path = file_path.resolve().relative_to(root)
    return "/" + rel_path.as_posix()


def load_directory(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Dict[str, str]:
    """
    Read a project directory into a virtual file set.

    Files that are not valid UTF-8 are skipped.

    Returns:
        Mapping of virtual path (e.g. "/src/App.jsx") to source text.
    """
    files: Dict[str, str] = {}
    for file_path in iter_files(root, include_ext, exclude_dirs, max_depth):
        try:
            files[to_virtual_path(file_path, root)] = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Skipping %s: %s", file_path, e)

    logger.debug("Loaded %d file(s) from %s", len(files), root)
    return files


def load_snapshot(path: Path) -> Dict[str, str]:
    """
    Load a virtual file set from a JSON, YAML or TOML document.

    The document is either the mapping itself or a mapping with a
    ``files`` key holding it.

    Raises:
        SnapshotError: If the document cannot be parsed or has the wrong shape.
    """
    if path.suffix.lower() not in SNAPSHOT_SUFFIXES:
        raise SnapshotError(f"Unsupported snapshot format: {path.suffix or path.name}")

    data = parse_file(path)
    if data is None:
        raise SnapshotError(f"Could not parse snapshot: {path}")

    if isinstance(data, Mapping) and isinstance(data.get("files"), Mapping):
        data = data["files"]

    if not isinstance(data, Mapping):
        raise SnapshotError(f"Snapshot is not a mapping of files: {path}")

    files: Dict[str, str] = {}
    for name, source in data.items():
        if not isinstance(name, str) or not isinstance(source, str):
            raise SnapshotError(f"Snapshot entry {name!r} is not a path -> text pair")
        files[name] = source

    logger.debug("Loaded %d file(s) from snapshot %s", len(files), path)
    return files


def load_file_set(source: Path, **options) -> Dict[str, str]:
    """Load a directory or a snapshot file, whichever ``source`` is."""
    if source.is_dir():
        return load_directory(source, **options)
    if source.is_file():
        return load_snapshot(source)
    raise SnapshotError(f"No such file or directory: {source}")
