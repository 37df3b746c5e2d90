"""Choosing where to start a scan and what to look for, from an error report."""

import logging
import re
from typing import Mapping, Optional, Tuple

from .builder import scan
from .events import ScanObserver
from .models import DEFAULT_MAX_DEPTH, ScanRequest, ScanResult, INVALID_FILES_ERROR


logger = logging.getLogger(__name__)

# Most specific first
FILENAME_PATTERNS = (
    re.compile(r"(?:in|Source:)\s+([^\s:]+\.(?:jsx?|tsx?)):(\d+)"),
    re.compile(r"([^\s:]+\.(?:jsx?|tsx?)):(\d+)"),
    re.compile(r"([^\s]+\.(?:jsx?|tsx?))"),
)

# Node-only constructs that break in the browser, checked in order
ISSUE_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("process", "process."),
    ("module.exports", "module.exports"),
    ("exports.", "exports."),
    ("__dirname", "__dirname"),
    ("__filename", "__filename"),
)
DEFAULT_ISSUE_PATTERN = "require("


def extract_filename_from_error(message: Optional[str]) -> Optional[str]:
    """
    Pull a source filename out of an error message.

    Recognizes "in components/List.jsx:142", "Source: App.tsx:3",
    "List.jsx:142" and a bare "List.jsx", in that order of preference.
    """
    if not message:
        return None

    for pattern in FILENAME_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)

    return None


def pattern_for_issue(issue: Optional[str]) -> str:
    """Return the token to search for, given a description of the problem."""
    lowered = (issue or "").lower()
    for needle, pattern in ISSUE_PATTERNS:
        if needle in lowered:
            return pattern
    return DEFAULT_ISSUE_PATTERN


def match_start_file(files: Mapping, candidate: Optional[str]) -> Optional[str]:
    """
    Map a filename from an error message onto a key of the file set.

    Error messages often drop the leading "/" or the directory prefix, so a
    unique key ending in "/<candidate>" is accepted as well.
    """
    if not candidate:
        return None
    if candidate in files:
        return candidate

    suffix = "/" + re.sub(r"^(?:\.{0,2}/)+", "", candidate)
    matches = [name for name in files if name.endswith(suffix)]
    if len(matches) == 1:
        return matches[0]
    return None


def locate_issue(
    files: Mapping,
    error_message: str,
    issue: Optional[str] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    observer: Optional[ScanObserver] = None,
) -> ScanResult:
    """
    Find the file responsible for a browser-incompatibility error.

    The scan starts from the file named in the error message, or from the
    first file of the set when none can be matched. The search pattern is
    derived from ``issue`` if given, otherwise from the message itself.
    """
    if not isinstance(files, Mapping):
        return ScanResult.failure(INVALID_FILES_ERROR)

    named = extract_filename_from_error(error_message)
    start_file = match_start_file(files, named)
    if start_file is None:
        if named:
            logger.info("Could not match %s to a file, starting from the first file", named)
        start_file = next(iter(files), named)

    search_pattern = pattern_for_issue(issue if issue is not None else error_message)
    logger.info('Invoking file scan for "%s" from %s', search_pattern, start_file)

    request = ScanRequest(
        files=files,
        start_file=start_file,
        search_pattern=search_pattern,
        max_depth=max_depth,
    )
    return scan(request, observer=observer)
