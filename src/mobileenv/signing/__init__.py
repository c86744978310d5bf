"""Signing resolution for deploying builds to physical iOS devices.

Public API::

    from mobileenv.signing import find_valid_combos

    combos = find_valid_combos(devices, certificates, profiles, app_id="com.example.app")
    for combo in combos:
        print(combo.profile_uuid, combo.cert_name, combo.device_udid)
"""

from __future__ import annotations

from mobileenv.signing.combos import find_valid_combos
from mobileenv.signing.models import (
    FINGERPRINT_PREFIX_LENGTH,
    Certificate,
    Combo,
    Device,
    ProvisioningProfile,
    cert_fingerprint_prefix,
)
from mobileenv.signing.profiles import (
    app_id_matches,
    find_profiles,
    flatten_certificates,
    flatten_profiles,
)

__all__ = [
    "FINGERPRINT_PREFIX_LENGTH",
    "Certificate",
    "Combo",
    "Device",
    "ProvisioningProfile",
    "app_id_matches",
    "cert_fingerprint_prefix",
    "find_profiles",
    "find_valid_combos",
    "flatten_certificates",
    "flatten_profiles",
]
