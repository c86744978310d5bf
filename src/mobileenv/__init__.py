"""mobileenv: Concurrent environment detection for mobile toolchains.

Aggregates independent Android and iOS subsystem detectors (SDK, NDK,
devices, emulators, certificates, provisioning profiles, simulators,
Xcode installs) into a single cached report, and resolves which
device/certificate/provisioning-profile combinations can sign a build
for a physical device.

Public API::

    from mobileenv import DetectionOrchestrator, DetectOptions
    from mobileenv.signing import find_valid_combos
"""

from __future__ import annotations

from mobileenv.config import DetectOptions
from mobileenv.detection import (
    CallableDetector,
    DetectionCache,
    DetectionOrchestrator,
    Detector,
    DetectorRegistry,
    merge,
)

__version__ = "0.1.0"

__all__ = [
    "CallableDetector",
    "DetectOptions",
    "DetectionCache",
    "DetectionOrchestrator",
    "Detector",
    "DetectorRegistry",
    "__version__",
    "merge",
]
