"""Flattening and querying of certificates and provisioning profiles.

Certificate and provisioning detectors group their results:

- certificates by keychain, then by type::

      {"/Users/me/Library/Keychains/login.keychain-db":
          {"developer": [cert, ...], "distribution": [cert, ...]}}

- provisioning profiles by type::

      {"development": [profile, ...], "adhoc": [...], "distribution": [...]}

The helpers here flatten those groupings into ordered lists of model
objects and select the profiles usable with a given set of devices and
certificates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from mobileenv.signing.models import Certificate, ProvisioningProfile

logger = logging.getLogger(__name__)

# Profile groups in the order they are searched; unknown groups follow.
PROFILE_TYPES: tuple[str, ...] = ("development", "adhoc", "enterprise", "distribution")

CertificateInput = Mapping[str, Mapping[str, Sequence[Any]]] | Sequence[Any]
ProfileInput = Mapping[str, Sequence[Any]] | Sequence[Any]


def _as_certificate(item: Any, keychain: str = "", type: str = "") -> Certificate:
    if isinstance(item, Certificate):
        return item
    return Certificate.from_dict(item, keychain=keychain, type=type)


def _as_profile(item: Any, type: str = "") -> ProvisioningProfile:
    if isinstance(item, ProvisioningProfile):
        return item
    return ProvisioningProfile.from_dict(item, type=type)


def flatten_certificates(certificates: CertificateInput) -> list[Certificate]:
    """Flatten a keychain/type grouping of certificates into one list.

    Args:
        certificates: Either ``{keychain: {type: [cert, ...]}}`` or an
            already flat sequence. Entries may be ``Certificate`` objects
            or detector mappings.

    Returns:
        Certificates in keychain order, then type order, then list order.
    """
    if not isinstance(certificates, Mapping):
        return [_as_certificate(c) for c in certificates]

    flat: list[Certificate] = []
    for keychain, types in certificates.items():
        for cert_type, certs in types.items():
            flat.extend(_as_certificate(c, keychain, cert_type) for c in certs)
    return flat


def flatten_profiles(profiles: ProfileInput) -> list[ProvisioningProfile]:
    """Flatten a type grouping of provisioning profiles into one list.

    Args:
        profiles: Either ``{type: [profile, ...]}`` or an already flat
            sequence of ``ProvisioningProfile`` objects or mappings.

    Returns:
        Profiles in ``PROFILE_TYPES`` order, then any other group in
        mapping order.
    """
    if not isinstance(profiles, Mapping):
        return [_as_profile(p) for p in profiles]

    ordered = [t for t in PROFILE_TYPES if t in profiles]
    ordered.extend(t for t in profiles if t not in PROFILE_TYPES)

    flat: list[ProvisioningProfile] = []
    for profile_type in ordered:
        group = profiles[profile_type]
        if not isinstance(group, Sequence) or isinstance(group, str):
            logger.debug("Skipping non-list provisioning group %r", profile_type)
            continue
        flat.extend(_as_profile(p, profile_type) for p in group)
    return flat


def app_id_matches(profile_app_id: str, app_id: str) -> bool:
    """Check whether a profile's application identifier covers ``app_id``.

    ``*`` covers every app. ``com.example.*`` covers every identifier that
    starts with ``com.example.``. Anything else must match exactly.
    """
    if profile_app_id == "*" or profile_app_id == app_id:
        return True
    if profile_app_id.endswith("*"):
        return app_id.startswith(profile_app_id[:-1])
    return False


def find_profiles(
    profiles: Iterable[ProvisioningProfile],
    app_id: str | None = None,
    device_udids: Iterable[str] | None = None,
    certs: Iterable[Certificate] | None = None,
    include_expired: bool = False,
) -> list[ProvisioningProfile]:
    """Select the provisioning profiles usable for a build.

    A profile is kept when all of the following hold:

    - it is not expired (unless ``include_expired``),
    - ``app_id`` is None or the profile's app id covers it,
    - ``device_udids`` is None or the profile authorizes at least one,
    - ``certs`` is None or the profile embeds at least one of them.

    Args:
        profiles: Candidate profiles.
        app_id: Application identifier to filter by.
        device_udids: UDIDs of the devices to deploy to.
        certs: Certificates available for signing.
        include_expired: Keep expired profiles as well.

    Returns:
        Matching profiles, in input order.
    """
    udids = set(device_udids) if device_udids is not None else None
    cert_list = list(certs) if certs is not None else None

    matches: list[ProvisioningProfile] = []
    for profile in profiles:
        if profile.expired and not include_expired:
            continue
        if app_id and not app_id_matches(profile.app_id, app_id):
            continue
        if udids is not None and not any(udid in udids for udid in profile.devices):
            continue
        if cert_list is not None and not any(profile.embeds(c) for c in cert_list):
            continue
        matches.append(profile)
    logger.debug("Matched %d provisioning profile(s)", len(matches))
    return matches
