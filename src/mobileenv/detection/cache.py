"""Detection cache: memoizes the last successful detection report.

Holds at most one report. It is empty when created, overwritten by every
successful detection pass, and never expires on its own. Callers force a
fresh pass with ``DetectOptions(bypass_cache=True)`` or by calling
``invalidate()``. A failed pass never touches the cache.

The stored report is handed out as-is, not copied. Every holder of it
sees the same object, so it must be treated as read-only once cached;
copy it (e.g. with ``copy.deepcopy``) before making changes.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class DetectionCache:
    """Single-slot cache for a detection report.

    One instance is owned by (or shared between) orchestrators; there is
    no process-wide global.
    """

    def __init__(self) -> None:
        self._report: dict[str, Any] | None = None

    @property
    def is_populated(self) -> bool:
        """True once a report has been stored and not invalidated."""
        return self._report is not None

    def get(self) -> dict[str, Any] | None:
        """Return the cached report, or None if the cache is empty.

        The returned dict is the cached object itself. Do not mutate it.
        """
        return self._report

    def store(self, report: dict[str, Any]) -> None:
        """Replace the cached report."""
        self._report = report
        logger.debug("Cached detection report with %d keys", len(report))

    def invalidate(self) -> None:
        """Drop the cached report."""
        if self._report is not None:
            logger.debug("Detection cache invalidated")
        self._report = None
