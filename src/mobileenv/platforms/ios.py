"""iOS development environment detection.

Runs the iOS subsystem detectors concurrently and merges their results:

- ``certs``: signing certificates grouped by keychain and type
  (``{"certs": {"keychains": {...}, "wwdr": ...}}``).
- ``devices``: connected devices (``{"devices": [...]}``).
- ``env``: command line tools and ``security``/``xcode-select`` paths.
- ``provisioning``: installed profiles grouped by type
  (``{"provisioning": {"development": [...], ...}}``).
- ``simulators``: installed simulators.
- ``xcode``: Xcode installs and their SDKs.

Detectors may also contribute diagnostic records under ``issues``; they
are concatenated into the report's ``issues`` list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from mobileenv.config import DetectOptions
from mobileenv.detection.adapter import Detector
from mobileenv.detection.cache import DetectionCache
from mobileenv.detection.orchestrator import DetectionOrchestrator
from mobileenv.detection.registry import require_detectors
from mobileenv.signing.combos import find_valid_combos
from mobileenv.signing.models import Combo

logger = logging.getLogger(__name__)

IOS_DETECT_VERSION = "4.0"

IOS_DETECTOR_NAMES: tuple[str, ...] = (
    "certs",
    "devices",
    "env",
    "provisioning",
    "simulators",
    "xcode",
)


class IOSEnvironment:
    """Detects the iOS development environment.

    Args:
        detectors: The iOS subsystem detectors.
        cache: Report cache; a private one is created when omitted.
        required: Detector names that must be present. Defaults to
            ``IOS_DETECTOR_NAMES``.

    Raises:
        ConfigurationError: If a required detector is missing.
    """

    def __init__(
        self,
        detectors: Iterable[Detector],
        cache: DetectionCache | None = None,
        required: Iterable[str] = IOS_DETECTOR_NAMES,
    ) -> None:
        detector_list = list(detectors)
        require_detectors(detector_list, required)
        self._orchestrator = DetectionOrchestrator(
            detector_list, cache=cache, detect_version=IOS_DETECT_VERSION,
        )

    @property
    def orchestrator(self) -> DetectionOrchestrator:
        return self._orchestrator

    async def detect(self, options: DetectOptions | None = None) -> dict[str, Any]:
        """Detect the entire iOS environment.

        Raises:
            DetectorFailure: If any subsystem detector fails.
        """
        return await self._orchestrator.detect_all(options)

    def detect_sync(self, options: DetectOptions | None = None) -> dict[str, Any]:
        """Blocking variant of ``detect``."""
        return self._orchestrator.detect_all_sync(options)

    async def find_valid_device_cert_profile_combos(
        self, options: DetectOptions | None = None
    ) -> list[Combo]:
        """Find every valid device/certificate/provisioning profile combination.

        Handy for picking the parameters of a device build. Profiles are
        filtered by ``options.app_id`` when set.

        Raises:
            DetectorFailure: If detection fails.
            NoDevicesFound: If no device is connected.
            NoCertificatesFound: If no keychain holds a certificate.
            NoProfilesFound: If no profile covers the devices and certificates.
        """
        if options is None:
            options = DetectOptions()
        report = await self.detect(options)

        devices = report.get("devices") or []
        keychains = (report.get("certs") or {}).get("keychains") or {}
        provisioning = report.get("provisioning") or {}
        logger.debug(
            "Resolving combos for %d device(s) across %d keychain(s)",
            len(devices), len(keychains),
        )
        return find_valid_combos(devices, keychains, provisioning, app_id=options.app_id)
