"""Infrastructure: read the captured run log for error reports.

The reader never raises. Any failure degrades to a short placeholder
describing what went wrong, so the governor can always submit a report.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_log_file(path: Path) -> str:
    """Return the contents of *path*, or ``"(ExcType: message)"`` on failure."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except Exception as exc:  # noqa: BLE001
        logger.debug("could not read log file %s: %s", path, exc)
        return f"({type(exc).__name__}: {exc})"
