"""Observer hooks for scan progress.

The scanner reports what it is doing through a plain callable so that the
traversal itself stays free of output. ``log_observer`` is used when the
caller does not pass one.
"""

import logging
from typing import Any, Callable, List, Tuple


logger = logging.getLogger(__name__)

# observer(event, **fields)
ScanObserver = Callable[..., None]

SCAN_STARTED = "scan_started"
FILE_MISSING = "file_missing"
FILE_SCANNED = "file_scanned"
PATTERN_FOUND = "pattern_found"
IMPORTS_FOUND = "imports_found"
IMPORT_QUEUED = "import_queued"
IMPORT_UNRESOLVED = "import_unresolved"
SCAN_FINISHED = "scan_finished"


def log_observer(event: str, **fields: Any) -> None:
    """Forward a scan event to the module logger."""
    if event == SCAN_STARTED:
        logger.info(
            'Searching for "%s" from %s (max depth %s)',
            fields.get("search_pattern"),
            fields.get("start_file"),
            fields.get("max_depth"),
        )
    elif event == FILE_MISSING:
        logger.warning("File not available: %s", fields.get("file"))
    elif event == FILE_SCANNED:
        logger.debug("Scanning [depth %s]: %s", fields.get("depth"), fields.get("file"))
    elif event == PATTERN_FOUND:
        logger.info(
            'Found "%s" in %s via %s',
            fields.get("search_pattern"),
            fields.get("file"),
            " -> ".join(fields.get("import_path", ())),
        )
    elif event == IMPORTS_FOUND:
        logger.debug("%s: %s import(s)", fields.get("file"), fields.get("count"))
    elif event == IMPORT_QUEUED:
        logger.debug("Queued: %s", fields.get("file"))
    elif event == IMPORT_UNRESOLVED:
        logger.debug("Not available: %s (from %s)", fields.get("spec"), fields.get("file"))
    elif event == SCAN_FINISHED and not fields.get("found"):
        logger.info(
            '"%s" not found in %s scanned file(s)',
            fields.get("search_pattern"),
            fields.get("scanned"),
        )


class EventRecorder:
    """Observer that keeps every event in memory, in emission order."""

    def __init__(self):
        self.events: List[Tuple[str, dict]] = []

    def __call__(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def names(self) -> List[str]:
        """Return the event names in order."""
        return [name for name, _ in self.events]
