"""Parsers for extracting local imports from source text and loading snapshots."""

import json
import re
import tomllib
from pathlib import Path
from typing import Any, List, Optional

import yaml


# import X from './x', import { a, b } from "../y", import * as z from './z'
# The clause is matched within a single line.
IMPORT_RE = re.compile(
    r"""(?<![\w$])import[ \t]+[\w$ \t{},*]*?[ \t]*from[ \t]+['"](\.\.?/[^'"\r\n]+)['"]"""
)

SNAPSHOT_SUFFIXES = {".json", ".yaml", ".yml", ".toml"}


def extract_imports(source: Any) -> List[str]:
    """
    Extract relative import specifiers from source text.

    Only ES module ``import ... from '<spec>'`` statements whose specifier
    starts with ``./`` or ``../`` are recognized. Package imports are
    ignored. Multi-line statements, dynamic ``import()`` and re-exports are
    not recognized.

    Args:
        source: Source text of one file. Anything that is not a string
                yields no imports.

    Returns:
        Import specifiers in order of appearance, duplicates included.
    """
    if not isinstance(source, str) or not source:
        return []

    return [match.group(1) for match in IMPORT_RE.finditer(source)]


def parse_file(file_path: Path) -> Optional[Any]:
    """
    Parse a snapshot document and return its contents.

    Args:
        file_path: Path to a JSON, YAML or TOML file.

    Returns:
        Parsed data structure, or None if the file cannot be read or parsed.
    """
    suffix = file_path.suffix.lower()

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)

        elif suffix == ".json":
            return json.loads(content)

        elif suffix == ".toml":
            return tomllib.loads(content)

        else:
            # Try to parse as JSON first, then YAML
            try:
                return json.loads(content)
            except json.JSONDecodeError:
                return yaml.safe_load(content)

    except (ValueError, yaml.YAMLError):
        return None
