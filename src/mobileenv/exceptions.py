"""mobileenv exception hierarchy.

All public exceptions inherit from MobileEnvError, giving callers a single
base class to catch when they want to handle any detection or signing
failure without swallowing unrelated errors.
"""

from __future__ import annotations


class MobileEnvError(Exception):
    """Base exception for all mobileenv errors."""


class ConfigurationError(MobileEnvError):
    """Raised when detection options or detector wiring are invalid.

    Covers unreadable or malformed options files, option values of the
    wrong type, and duplicate or missing detector registrations.
    """


class DetectorFailure(MobileEnvError):
    """Raised when a single subsystem detector fails.

    One failing detector aborts the whole detection pass. The original
    exception is chained as ``__cause__`` and kept on ``cause``.

    Attributes:
        detector: Name of the detector that failed.
        cause: The exception raised (or returned) by the detector.
    """

    def __init__(self, detector: str, cause: BaseException | None = None) -> None:
        self.detector = detector
        self.cause = cause
        message = f"Detector '{detector}' failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ComboResolutionError(MobileEnvError):
    """Raised when no signing combination can be resolved.

    Base class for the precondition failures of the combination resolver.
    """


class NoDevicesFound(ComboResolutionError):
    """Raised when no iOS devices are connected."""

    def __init__(self, message: str = "No iOS devices connected") -> None:
        super().__init__(message)


class NoCertificatesFound(ComboResolutionError):
    """Raised when no signing certificates are present in any keychain."""

    def __init__(self, message: str = "No iOS certificates") -> None:
        super().__init__(message)


class NoProfilesFound(ComboResolutionError):
    """Raised when no provisioning profile covers the devices and certificates."""

    def __init__(self, message: str = "No provisioning profiles found") -> None:
        super().__init__(message)
