"""Path resolution utilities for mapping import specifiers to virtual files."""

from typing import Mapping, Optional, Tuple


# Tried in order when an import omits its extension
PROBE_EXTENSIONS: Tuple[str, ...] = ("", ".js", ".jsx", ".ts", ".tsx")


def resolve_import_path(current_file: str, import_path: str) -> str:
    """
    Resolve a relative import specifier against the importing file.

    Only leading ``./`` and ``../`` segments are interpreted; the rest of the
    specifier is appended as written. Popping stops once the directory is
    exhausted, and whatever is left of the specifier is appended verbatim.

    Args:
        current_file: Path of the importing file (e.g., "/src/App.jsx").
        import_path: Relative specifier (e.g., "../hooks/useTodos").

    Returns:
        Candidate path, possibly without an extension.
    """
    rooted, dir_parts = _split_directory(current_file)

    if import_path.startswith("./"):
        remainder = import_path[2:]
    elif import_path.startswith("../"):
        remainder = import_path
        while remainder.startswith("../") and dir_parts:
            dir_parts.pop()
            remainder = remainder[3:]
    else:
        return import_path

    return _join(rooted, dir_parts, remainder)


def find_file_with_extension(
    files: Mapping[str, object],
    base_path: str,
) -> Optional[str]:
    """
    Find the file an extensionless candidate path refers to.

    Args:
        files: Virtual file set.
        base_path: Candidate path from ``resolve_import_path``.

    Returns:
        The first ``base_path + extension`` present in ``files``, or None.
    """
    for ext in PROBE_EXTENSIONS:
        full_path = base_path + ext
        if full_path in files:
            return full_path

    return None


def _split_directory(file_path: str) -> Tuple[bool, list]:
    """Split a file path into (is_rooted, directory segments)."""
    parts = file_path.split("/")[:-1]
    rooted = bool(parts) and parts[0] == ""
    if rooted:
        parts = parts[1:]
    return rooted, parts


def _join(rooted: bool, dir_parts: list, remainder: str) -> str:
    prefix = "/".join(dir_parts)
    if rooted:
        return f"/{prefix}/{remainder}" if prefix else f"/{remainder}"
    return f"{prefix}/{remainder}" if prefix else remainder
