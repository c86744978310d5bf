"""Detector registry for assembling a detection pass.

The ``DetectorRegistry`` keeps an ordered set of named ``Detector``
instances. Platform facades build one registry per platform and hand it
to a ``DetectionOrchestrator``. Registration order is kept so that reports
and logs list subsystems predictably; it has no effect on the merge,
because every detector runs concurrently.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from mobileenv.detection.adapter import CallableDetector, DetectFunc, Detector
from mobileenv.exceptions import ConfigurationError


class DetectorRegistry:
    """Ordered registry of subsystem detectors.

    Attributes:
        detectors: Registered detectors in registration order.
    """

    def __init__(self) -> None:
        self.detectors: list[Detector] = []

    def register(self, detector: Detector) -> Detector:
        """Add a detector to the registry.

        Args:
            detector: A ``Detector`` instance.

        Returns:
            The registered detector.

        Raises:
            ConfigurationError: If a detector with the same name is
                already registered.
        """
        if detector.name in self.names():
            raise ConfigurationError(f"Detector '{detector.name}' is already registered")
        self.detectors.append(detector)
        return detector

    def register_function(self, name: str, func: DetectFunc) -> Detector:
        """Register a plain or async function as a detector."""
        return self.register(CallableDetector(name, func))

    def get(self, name: str) -> Detector | None:
        """Return the detector registered under ``name``, if any."""
        for detector in self.detectors:
            if detector.name == name:
                return detector
        return None

    def names(self) -> list[str]:
        return [d.name for d in self.detectors]

    def __iter__(self) -> Iterator[Detector]:
        return iter(self.detectors)

    def __len__(self) -> int:
        return len(self.detectors)

    def __contains__(self, name: object) -> bool:
        return name in self.names()


def require_detectors(detectors: Iterable[Detector], required: Iterable[str]) -> None:
    """Check that every name in ``required`` has a detector.

    Raises:
        ConfigurationError: Listing the missing detector names.
    """
    names = {d.name for d in detectors}
    missing = [name for name in required if name not in names]
    if missing:
        raise ConfigurationError(f"Missing detector(s): {', '.join(missing)}")
