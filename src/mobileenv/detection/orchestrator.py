"""Parallel detection orchestrator.

Runs every configured detector concurrently and folds the results into a
single report::

    {"detectVersion": "4.0", "issues": [...], "<subsystem>": ..., ...}

Algorithm:
    1. If the cache holds a report and ``bypass_cache`` is not set,
       return it without calling any detector.
    2. Start a fresh report with the schema version and an empty
       ``issues`` list.
    3. Launch one task per detector, all with the same options.
    4. As each detector succeeds, merge its result into the report
       under a lock.
    5. On the first failure, cancel and drain the remaining tasks,
       discard the partial report and raise ``DetectorFailure``. The
       cache is left as it was.
    6. Once every detector has succeeded, cache the report and return it.

Total latency is that of the slowest detector. There are no retries.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from mobileenv.config import DetectOptions
from mobileenv.detection.adapter import Detector, run_detector
from mobileenv.detection.cache import DetectionCache
from mobileenv.detection.merge import merge

logger = logging.getLogger(__name__)

DEFAULT_DETECT_VERSION = "4.0"


class DetectionOrchestrator:
    """Fans out to a set of detectors and merges their results.

    Usage::

        orchestrator = DetectionOrchestrator([certs, devices, xcode])
        report = await orchestrator.detect_all(DetectOptions())

    Args:
        detectors: Detectors to run on every pass (a list or a
            ``DetectorRegistry``).
        cache: Cache to read from and store into. A private one is
            created when omitted; pass the same instance to share it.
        detect_version: Schema version stamped into each report.
    """

    def __init__(
        self,
        detectors: Iterable[Detector],
        cache: DetectionCache | None = None,
        detect_version: str = DEFAULT_DETECT_VERSION,
    ) -> None:
        self._detectors: list[Detector] = list(detectors)
        self._cache = cache if cache is not None else DetectionCache()
        self._detect_version = detect_version

    @property
    def detectors(self) -> list[Detector]:
        return list(self._detectors)

    @property
    def cache(self) -> DetectionCache:
        return self._cache

    @property
    def detect_version(self) -> str:
        return self._detect_version

    def invalidate(self) -> None:
        """Drop the cached report so the next pass re-detects."""
        self._cache.invalidate()

    def _new_report(self) -> dict[str, Any]:
        return {"detectVersion": self._detect_version, "issues": []}

    async def detect_all(self, options: DetectOptions | None = None) -> dict[str, Any]:
        """Run all detectors concurrently and return the merged report.

        Args:
            options: Options passed to every detector. Defaults to
                ``DetectOptions()``.

        Returns:
            The merged detection report. On a cache hit this is the
            cached object itself, shared with every other caller; treat
            it as read-only and copy it before making changes.

        Raises:
            DetectorFailure: If any detector fails. No report is returned
                and the cache is unchanged.
        """
        if options is None:
            options = DetectOptions()

        cached = self._cache.get()
        if cached is not None and not options.bypass_cache:
            logger.debug("Returning cached detection report")
            return cached

        report = self._new_report()
        lock = asyncio.Lock()

        async def collect(detector: Detector) -> None:
            outcome = await run_detector(detector, options)
            if outcome.error is not None:
                raise outcome.error
            async with lock:
                merge(outcome.result, report)

        tasks = [
            asyncio.create_task(collect(detector), name=f"detect:{detector.name}")
            for detector in self._detectors
        ]
        if tasks:
            try:
                done, pending = await asyncio.wait(
                    tasks, return_when=asyncio.FIRST_EXCEPTION
                )
            except asyncio.CancelledError:
                await _cancel_and_drain(tasks)
                raise

            failures = [
                t.exception()
                for t in tasks
                if t in done and not t.cancelled() and t.exception() is not None
            ]
            if failures:
                await _cancel_and_drain(pending)
                logger.warning(
                    "Detection pass aborted; %d detector(s) still running were cancelled",
                    len(pending),
                )
                raise failures[0]

        self._cache.store(report)
        logger.debug("Detection pass complete with %d detector(s)", len(tasks))
        return report

    def detect_all_sync(self, options: DetectOptions | None = None) -> dict[str, Any]:
        """Blocking wrapper around ``detect_all`` for synchronous callers.

        Must not be called from inside a running event loop.
        """
        return asyncio.run(self.detect_all(options))


async def _cancel_and_drain(tasks: Iterable[asyncio.Task[Any]]) -> None:
    """Cancel tasks and wait for them so none outlive the pass."""
    tasks = list(tasks)
    for task in tasks:
        task.cancel()
    if tasks:
        await asyncio.gather(*tasks, return_exceptions=True)
