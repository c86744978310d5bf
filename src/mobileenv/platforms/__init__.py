"""Platform facades wiring subsystem detectors into a detection pass.

Public API::

    from mobileenv.platforms import AndroidEnvironment, IOSEnvironment

    ios = IOSEnvironment(ios_detectors)
    report = ios.detect_sync()
"""

from __future__ import annotations

from mobileenv.platforms.android import (
    ANDROID_DETECTOR_NAMES,
    AndroidEnvironment,
    resolve_android_home,
)
from mobileenv.platforms.ios import IOS_DETECT_VERSION, IOS_DETECTOR_NAMES, IOSEnvironment
from mobileenv.platforms.paths import expand_path

__all__ = [
    "ANDROID_DETECTOR_NAMES",
    "AndroidEnvironment",
    "IOS_DETECTOR_NAMES",
    "IOS_DETECT_VERSION",
    "IOSEnvironment",
    "expand_path",
    "resolve_android_home",
]
