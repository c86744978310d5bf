"""Android development environment detection.

Android subsystem detectors return bare payloads (the SDK description, the
device list, ...) rather than keyed mappings. Each one is wrapped in a
``KeyedDetector`` so its payload lands under its own report key:

    {"detectVersion": ..., "issues": [], "home": "/home/me/.android",
     "sdk": {...}, "ndk": {...}, "genymotion": {...},
     "devices": [...], "emulators": [...]}

``home`` comes from ``options.android_home_path``, else ``$ANDROID_HOME``,
else ``~/.android``, expanded to an absolute path.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import Any

from mobileenv.config import DetectOptions
from mobileenv.detection.adapter import CallableDetector, Detector, KeyedDetector
from mobileenv.detection.cache import DetectionCache
from mobileenv.detection.orchestrator import DetectionOrchestrator
from mobileenv.detection.registry import DetectorRegistry, require_detectors
from mobileenv.platforms.paths import expand_path

ANDROID_DETECTOR_NAMES: tuple[str, ...] = (
    "sdk",
    "ndk",
    "genymotion",
    "devices",
    "emulators",
)

DEFAULT_ANDROID_HOME = "~/.android"


def resolve_android_home(options: DetectOptions) -> str:
    """Return the absolute Android home directory for ``options``."""
    home = options.android_home_path or os.environ.get("ANDROID_HOME") or DEFAULT_ANDROID_HOME
    return expand_path(home)


def _detect_home(options: DetectOptions) -> dict[str, Any]:
    return {"home": resolve_android_home(options)}


class AndroidEnvironment:
    """Detects the Android development environment.

    Args:
        detectors: The Android subsystem detectors. Each detector's name
            is used as its report key.
        cache: Report cache; a private one is created when omitted.
        required: Detector names that must be present. Defaults to
            ``ANDROID_DETECTOR_NAMES``.

    Raises:
        ConfigurationError: If a required detector is missing or a
            detector name is already taken (``home`` is reserved).
    """

    def __init__(
        self,
        detectors: Iterable[Detector],
        cache: DetectionCache | None = None,
        required: Iterable[str] = ANDROID_DETECTOR_NAMES,
    ) -> None:
        registry = DetectorRegistry()
        for detector in detectors:
            registry.register(KeyedDetector(detector))
        require_detectors(registry, required)
        # "home" is reserved for the resolved Android home directory.
        registry.register(CallableDetector("home", _detect_home))
        self._orchestrator = DetectionOrchestrator(registry, cache=cache)

    @property
    def orchestrator(self) -> DetectionOrchestrator:
        return self._orchestrator

    async def detect(self, options: DetectOptions | None = None) -> dict[str, Any]:
        """Detect the entire Android environment.

        Raises:
            DetectorFailure: If any subsystem detector fails.
        """
        return await self._orchestrator.detect_all(options)

    def detect_sync(self, options: DetectOptions | None = None) -> dict[str, Any]:
        """Blocking variant of ``detect``."""
        return self._orchestrator.detect_all_sync(options)
