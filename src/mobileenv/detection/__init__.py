"""Concurrent detection engine.

Runs independent subsystem detectors in parallel, merges their partial
results into one report and memoizes the last successful report.

Public API::

    from mobileenv.detection import DetectionOrchestrator, DetectorRegistry

    registry = DetectorRegistry()
    registry.register_function("xcode", detect_xcode)
    orchestrator = DetectionOrchestrator(registry)
    report = orchestrator.detect_all_sync()
"""

from __future__ import annotations

from mobileenv.detection.adapter import (
    CallableDetector,
    DetectionOutcome,
    Detector,
    KeyedDetector,
    run_detector,
)
from mobileenv.detection.cache import DetectionCache
from mobileenv.detection.merge import ValueKind, classify, merge
from mobileenv.detection.orchestrator import DEFAULT_DETECT_VERSION, DetectionOrchestrator
from mobileenv.detection.registry import DetectorRegistry, require_detectors

__all__ = [
    "CallableDetector",
    "DEFAULT_DETECT_VERSION",
    "DetectionCache",
    "DetectionOrchestrator",
    "DetectionOutcome",
    "Detector",
    "DetectorRegistry",
    "KeyedDetector",
    "ValueKind",
    "classify",
    "merge",
    "require_detectors",
    "run_detector",
]
