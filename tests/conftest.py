"""Shared fixtures for mobileenv tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest
from hypothesis import HealthCheck, settings

# Hypothesis builds its unicode charmap cache on a cold start, which can trip
# the input-generation speed health check on the first text-based property test.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")

PEM_HEADER = "-----BEGIN CERTIFICATE-----\n"
PEM_FOOTER = "\n-----END CERTIFICATE-----\n"

# Two certificate bodies that differ within the first 60 characters.
BODY_DEV = "MIIFnjCCBIagAwIBAgIIDEVELOPERcertificateBODYaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
BODY_DIST = "MIIFnjCCBIagAwIBAgIIDISTRIBUTIONcertBODYbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"


def _pem(body: str) -> str:
    return f"{PEM_HEADER}{body}{PEM_FOOTER}"


@pytest.fixture
def make_pem() -> Callable[[str], str]:
    """Return a helper that wraps a base64 body in PEM armour."""
    return _pem


@pytest.fixture
def ios_report() -> dict[str, Any]:
    """A merged iOS detection report with one device, two certs, two profiles."""
    return {
        "detectVersion": "4.0",
        "issues": [],
        "devices": [
            {"udid": "D1", "name": "Jane's iPhone", "productVersion": "17.4"},
        ],
        "certs": {
            "keychains": {
                "login.keychain-db": {
                    "developer": [
                        {"name": "iPhone Developer: Jane (AAA111)", "pem": _pem(BODY_DEV)},
                    ],
                    "distribution": [
                        {"name": "iPhone Distribution: Acme (BBB222)", "pem": _pem(BODY_DIST)},
                    ],
                },
            },
        },
        "provisioning": {
            "development": [
                {
                    "uuid": "P-DEV",
                    "name": "Acme Dev",
                    "appId": "com.acme.*",
                    "devices": ["D1", "D2"],
                    "certs": [BODY_DEV + "TAIL"],
                    "expired": False,
                },
            ],
            "adhoc": [
                {
                    "uuid": "P-ADHOC",
                    "name": "Acme AdHoc",
                    "appId": "com.acme.app",
                    "devices": ["D1"],
                    "certs": [BODY_DIST],
                    "expired": False,
                },
            ],
            "distribution": [],
        },
    }
