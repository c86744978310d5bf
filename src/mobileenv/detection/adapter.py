"""Detector adapters: one uniform shape for every subsystem detector.

Subsystem detectors (SDK, NDK, devices, certificates, provisioning
profiles, simulators, Xcode, ...) live outside this package. The
orchestrator only sees the ``Detector`` contract::

    async def detect(self, options: DetectOptions) -> Mapping[str, Any]

``CallableDetector`` adapts plain or ``async`` functions to it, and
``run_detector`` normalises any detector call to a ``DetectionOutcome``
holding either a result or an error.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from mobileenv.config import DetectOptions
from mobileenv.exceptions import DetectorFailure

logger = logging.getLogger(__name__)

DetectFunc = Callable[[DetectOptions], Union[Mapping[str, Any], Awaitable[Mapping[str, Any]]]]


class Detector(ABC):
    """Abstract base class for subsystem detectors."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier of the subsystem (e.g. 'certs', 'sdk')."""

    @abstractmethod
    async def detect(self, options: DetectOptions) -> Mapping[str, Any]:
        """Query the subsystem.

        Args:
            options: Detection options, passed through unmodified.

        Returns:
            A mapping of report keys to subsystem payloads.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class CallableDetector(Detector):
    """Wraps a plain or coroutine function as a ``Detector``.

    Plain functions run in a worker thread so that subsystems that shell
    out or walk the filesystem do not block the event loop.
    """

    def __init__(self, name: str, func: DetectFunc) -> None:
        self._name = name
        self._func = func

    @property
    def name(self) -> str:
        return self._name

    async def detect(self, options: DetectOptions) -> Mapping[str, Any]:
        if inspect.iscoroutinefunction(self._func):
            return await self._func(options)
        result = await asyncio.to_thread(self._func, options)
        if inspect.isawaitable(result):
            return await result
        return result


class KeyedDetector(Detector):
    """Places a detector's bare payload under a single report key.

    Some subsystems return a list or an object rather than a keyed
    mapping (e.g. the Android device list). Wrapping them as
    ``{key: payload}`` lets the merger slot them into the report.
    """

    def __init__(self, detector: Detector, key: str | None = None) -> None:
        self._detector = detector
        self._key = key or detector.name

    @property
    def name(self) -> str:
        return self._detector.name

    @property
    def key(self) -> str:
        return self._key

    async def detect(self, options: DetectOptions) -> Mapping[str, Any]:
        payload = await self._detector.detect(options)
        return {self._key: payload}


@dataclass(frozen=True)
class DetectionOutcome:
    """Result of one detector call: exactly one of result / error is set.

    Attributes:
        name: Name of the detector.
        result: The detector's mapping, or None on failure.
        error: The failure, or None on success.
    """

    name: str
    result: Mapping[str, Any] | None = None
    error: DetectorFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def run_detector(detector: Detector, options: DetectOptions) -> DetectionOutcome:
    """Run one detector and capture its outcome instead of raising.

    Any exception is wrapped in ``DetectorFailure``. A detector that
    returns something other than a mapping is also treated as failed.
    Cancellation is never captured.
    """
    logger.debug("Running detector %s", detector.name)
    try:
        result = await detector.detect(options)
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        logger.warning("Detector %s failed", detector.name, exc_info=True)
        failure = DetectorFailure(detector.name, exc)
        failure.__cause__ = exc
        return DetectionOutcome(name=detector.name, error=failure)

    if not isinstance(result, Mapping):
        cause = TypeError(
            f"detector returned {type(result).__name__}, expected a mapping"
        )
        logger.warning("Detector %s returned an invalid result", detector.name)
        failure = DetectorFailure(detector.name, cause)
        failure.__cause__ = cause
        return DetectionOutcome(name=detector.name, error=failure)

    logger.debug("Detector %s finished with keys: %s", detector.name, list(result))
    return DetectionOutcome(name=detector.name, result=result)
