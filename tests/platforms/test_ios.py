"""Tests for the iOS environment facade and device combo resolution."""

from __future__ import annotations

import asyncio
import copy
from typing import Any, Mapping

import pytest

from mobileenv.config import DetectOptions
from mobileenv.detection.adapter import CallableDetector, Detector
from mobileenv.detection.cache import DetectionCache
from mobileenv.exceptions import ConfigurationError, DetectorFailure, NoDevicesFound
from mobileenv.platforms.ios import IOS_DETECTOR_NAMES, IOSEnvironment
from mobileenv.signing.models import Combo


def _detectors_from_report(report: dict[str, Any]) -> list[Detector]:
    """Split a merged report back into one detector per iOS subsystem."""
    slices = {
        "certs": {"certs": report["certs"]},
        "devices": {"devices": report["devices"]},
        "env": {"env": {"os": {"name": "Mac OS X", "version": "14.4"}}},
        "provisioning": {"provisioning": report["provisioning"]},
        "simulators": {"simulators": {"ios": {}, "watchos": {}}},
        "xcode": {"xcode": {"15.3:15E204a": {"selected": True}}},
    }
    return [CallableDetector(name, lambda o, s=s: s) for name, s in slices.items()]


class TestConstruction:

    def test_requires_all_subsystems(self, ios_report: dict[str, Any]) -> None:
        detectors = [d for d in _detectors_from_report(ios_report) if d.name != "xcode"]
        with pytest.raises(ConfigurationError, match="xcode"):
            IOSEnvironment(detectors)

    def test_custom_required_set(self) -> None:
        env = IOSEnvironment([CallableDetector("devices", lambda o: {"devices": []})], required=["devices"])
        assert [d.name for d in env.orchestrator.detectors] == ["devices"]

    def test_detector_names(self) -> None:
        assert IOS_DETECTOR_NAMES == ("certs", "devices", "env", "provisioning", "simulators", "xcode")


class TestDetect:

    def test_full_report(self, ios_report: dict[str, Any]) -> None:
        env = IOSEnvironment(_detectors_from_report(ios_report))
        report = env.detect_sync()
        assert report["detectVersion"] == "4.0"
        assert report["issues"] == []
        assert report["devices"] == ios_report["devices"]
        assert report["provisioning"]["adhoc"][0]["uuid"] == "P-ADHOC"
        assert report["xcode"] == {"15.3:15E204a": {"selected": True}}

    def test_cache_shared_by_reference(self, ios_report: dict[str, Any]) -> None:
        cache = DetectionCache()
        env = IOSEnvironment(_detectors_from_report(ios_report), cache=cache)
        report = asyncio.run(env.detect())
        assert cache.get() is report

    def test_failure_propagates(self, ios_report: dict[str, Any]) -> None:
        def broken(options: DetectOptions) -> Mapping[str, Any]:
            raise RuntimeError("simctl crashed")

        detectors = [
            d if d.name != "simulators" else CallableDetector("simulators", broken)
            for d in _detectors_from_report(ios_report)
        ]
        with pytest.raises(DetectorFailure, match="simulators"):
            IOSEnvironment(detectors).detect_sync()


class TestFindCombos:

    def test_resolves_from_report(self, ios_report: dict[str, Any]) -> None:
        env = IOSEnvironment(_detectors_from_report(ios_report))
        combos = asyncio.run(env.find_valid_device_cert_profile_combos())
        assert combos == [
            Combo("P-DEV", "iPhone Developer: Jane (AAA111)", "D1"),
            Combo("P-ADHOC", "iPhone Distribution: Acme (BBB222)", "D1"),
        ]

    def test_app_id_from_options(self, ios_report: dict[str, Any]) -> None:
        env = IOSEnvironment(_detectors_from_report(ios_report))
        combos = asyncio.run(
            env.find_valid_device_cert_profile_combos(DetectOptions(app_id="com.acme.app"))
        )
        assert [c.profile_uuid for c in combos] == ["P-DEV", "P-ADHOC"]

    def test_no_devices(self, ios_report: dict[str, Any]) -> None:
        report = copy.deepcopy(ios_report)
        report["devices"] = []
        env = IOSEnvironment(_detectors_from_report(report))
        with pytest.raises(NoDevicesFound):
            asyncio.run(env.find_valid_device_cert_profile_combos())

    def test_uses_cached_report(self, ios_report: dict[str, Any]) -> None:
        calls: list[str] = []

        def devices(options: DetectOptions) -> Mapping[str, Any]:
            calls.append("devices")
            return {"devices": ios_report["devices"]}

        detectors = [
            d if d.name != "devices" else CallableDetector("devices", devices)
            for d in _detectors_from_report(ios_report)
        ]
        env = IOSEnvironment(detectors)
        env.detect_sync()
        asyncio.run(env.find_valid_device_cert_profile_combos())
        assert calls == ["devices"]
        asyncio.run(env.find_valid_device_cert_profile_combos(DetectOptions(bypass_cache=True)))
        assert calls == ["devices", "devices"]
