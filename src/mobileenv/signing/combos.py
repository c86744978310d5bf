"""Device/certificate/provisioning-profile combination resolver.

Given a snapshot of connected devices, keychain certificates and installed
provisioning profiles, lists every (profile, certificate, device) triple
that can sign and deploy a build to a physical device.

Matching Algorithm:
    1. At least one device is required (``NoDevicesFound``).
    2. Certificates are flattened across keychains and types; at least
       one is required (``NoCertificatesFound``).
    3. Profiles are narrowed with ``find_profiles`` to those covering the
       app id, one of the devices and one of the certificates; at least
       one is required (``NoProfilesFound``).
    4. For each profile, each device it authorizes, each certificate and
       each embedded fingerprint: a fingerprint that starts with the
       certificate's 60-character prefix yields a ``Combo``.

Expired profiles are considered unless ``include_expired=False``. A
certificate without PEM data never matches.

Emission order is profile, device, certificate, fingerprint. Duplicates
(a device reported twice, or two fingerprints matching one certificate)
are emitted as-is. Two certificates sharing their first 60 body
characters both match the same fingerprint.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from mobileenv.exceptions import NoCertificatesFound, NoDevicesFound, NoProfilesFound
from mobileenv.signing.models import Combo, Device
from mobileenv.signing.profiles import (
    CertificateInput,
    ProfileInput,
    find_profiles,
    flatten_certificates,
    flatten_profiles,
)

logger = logging.getLogger(__name__)


def _as_device(item: Device | Mapping[str, Any]) -> Device:
    return item if isinstance(item, Device) else Device.from_dict(item)


def find_valid_combos(
    devices: Iterable[Device | Mapping[str, Any]],
    certificates: CertificateInput,
    profiles: ProfileInput,
    app_id: str | None = None,
    include_expired: bool = True,
) -> list[Combo]:
    """Resolve every valid (profile, certificate, device) combination.

    Args:
        devices: Connected devices (``Device`` objects or mappings with a
            ``udid`` key).
        certificates: Certificates grouped by keychain and type, or a
            flat sequence.
        profiles: Provisioning profiles grouped by type, or a flat
            sequence.
        app_id: Optional application identifier to filter profiles by.
        include_expired: Consider expired profiles. Pass False to resolve
            only against profiles that are still valid.

    Returns:
        Combos in profile, device, certificate, fingerprint order.

    Raises:
        NoDevicesFound: If ``devices`` is empty.
        NoCertificatesFound: If no certificate is present.
        NoProfilesFound: If no profile matches the devices and certificates.
    """
    device_list = [_as_device(d) for d in devices]
    if not device_list:
        raise NoDevicesFound()

    cert_list = flatten_certificates(certificates)
    if not cert_list:
        raise NoCertificatesFound()

    matched = find_profiles(
        flatten_profiles(profiles),
        app_id=app_id,
        device_udids=[d.udid for d in device_list],
        certs=cert_list,
        include_expired=include_expired,
    )
    if not matched:
        raise NoProfilesFound()

    # An empty prefix would match every fingerprint.
    prefixes = [(cert, cert.fingerprint_prefix) for cert in cert_list if cert.fingerprint_prefix]
    combos: list[Combo] = []
    for profile in matched:
        for device in device_list:
            if not profile.authorizes(device.udid):
                continue
            for cert, prefix in prefixes:
                for fingerprint in profile.certs:
                    if fingerprint.startswith(prefix):
                        combos.append(Combo(profile.uuid, cert.name, device.udid))

    logger.debug(
        "Resolved %d combo(s) from %d profile(s), %d device(s), %d certificate(s)",
        len(combos), len(matched), len(device_list), len(cert_list),
    )
    return combos
