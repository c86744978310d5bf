"""Data models for signing resolution: Device, Certificate, ProvisioningProfile, Combo.

Detectors report devices, certificates and provisioning profiles as plain
mappings inside the detection report. These classes give the resolver a
typed view over those mappings; keys the resolver does not use are kept
in ``extra`` so no detector information is lost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

PEM_HEADER = "-----BEGIN CERTIFICATE-----\n"

# Width of the stripped-PEM prefix compared against profile fingerprints.
FINGERPRINT_PREFIX_LENGTH = 60


def cert_fingerprint_prefix(pem: str) -> str:
    """Return the prefix used to match a certificate against a profile.

    The PEM header line is stripped and the first 60 characters of the
    base64 body are kept. Certificates whose bodies share those 60
    characters produce the same prefix.
    """
    if pem.startswith(PEM_HEADER):
        pem = pem[len(PEM_HEADER):]
    return pem[:FINGERPRINT_PREFIX_LENGTH]


@dataclass(frozen=True)
class Device:
    """A connected iOS device.

    Attributes:
        udid: Unique device identifier.
        name: Display name reported by the device, if any.
        extra: Remaining attributes reported by the device detector.
    """

    udid: str
    name: str = ""
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Device:
        extra = {k: v for k, v in data.items() if k not in ("udid", "name")}
        return cls(udid=str(data["udid"]), name=data.get("name") or "", extra=extra)


@dataclass(frozen=True)
class Certificate:
    """A signing certificate found in a keychain.

    Attributes:
        name: Certificate common name (e.g. "iPhone Developer: Jane (ABC123)").
        pem: PEM-encoded certificate body.
        keychain: Keychain the certificate was found in.
        type: Certificate category within the keychain ("developer",
            "distribution", ...).
        expired: True if the certificate has expired.
        invalid: True if the certificate failed validation.
        extra: Remaining attributes reported by the certificate detector.
    """

    name: str
    pem: str
    keychain: str = ""
    type: str = ""
    expired: bool = False
    invalid: bool = False
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def fingerprint_prefix(self) -> str:
        return cert_fingerprint_prefix(self.pem)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], keychain: str = "", type: str = ""
    ) -> Certificate:
        """Build a certificate from a keychain listing entry.

        Raises:
            ValueError: If ``pem`` is missing or not a string.
        """
        pem = data.get("pem")
        if not isinstance(pem, str):
            raise ValueError(f"Certificate {data.get('name', '')!r} has no PEM data")
        known = ("name", "pem", "keychain", "type", "expired", "invalid")
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(
            name=str(data.get("name", "")),
            pem=pem,
            keychain=data.get("keychain") or keychain,
            type=data.get("type") or type,
            expired=bool(data.get("expired", False)),
            invalid=bool(data.get("invalid", False)),
            extra=extra,
        )


@dataclass(frozen=True)
class ProvisioningProfile:
    """An installed provisioning profile.

    Attributes:
        uuid: Unique profile identifier.
        devices: Authorized device UDIDs, in profile order.
        certs: Embedded certificate fingerprints (stripped PEM bodies or
            prefixes of them), in profile order.
        name: Profile display name.
        app_id: Application identifier the profile covers, possibly a
            wildcard such as ``com.example.*`` or ``*``.
        team_id: Developer team identifier.
        type: Profile group ("development", "adhoc", "enterprise",
            "distribution").
        expired: True if the profile has expired.
        managed: True if the profile is managed by Xcode.
        extra: Remaining attributes reported by the profile detector.
    """

    uuid: str
    devices: tuple[str, ...] = ()
    certs: tuple[str, ...] = ()
    name: str = ""
    app_id: str = ""
    team_id: str = ""
    type: str = ""
    expired: bool = False
    managed: bool = False
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def authorizes(self, udid: str) -> bool:
        """True if the profile lists ``udid`` as an authorized device."""
        return udid in self.devices

    def embeds(self, cert: Certificate) -> bool:
        """True if any embedded fingerprint starts with the certificate prefix."""
        prefix = cert.fingerprint_prefix
        if not prefix:
            return False
        return any(fp.startswith(prefix) for fp in self.certs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], type: str = "") -> ProvisioningProfile:
        known = (
            "uuid", "devices", "certs", "name", "appId", "app_id",
            "teamId", "team_id", "type", "expired", "managed",
        )
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(
            uuid=str(data["uuid"]),
            devices=tuple(data.get("devices") or ()),
            certs=tuple(data.get("certs") or ()),
            name=data.get("name") or "",
            app_id=data.get("appId") or data.get("app_id") or "",
            team_id=data.get("teamId") or data.get("team_id") or "",
            type=data.get("type") or type,
            expired=bool(data.get("expired", False)),
            managed=bool(data.get("managed", False)),
            extra=extra,
        )


@dataclass(frozen=True)
class Combo:
    """One deployable (profile, certificate, device) signing combination."""

    profile_uuid: str
    cert_name: str
    device_udid: str

    def to_dict(self) -> dict[str, str]:
        return {
            "profileUUID": self.profile_uuid,
            "certName": self.cert_name,
            "deviceUDID": self.device_udid,
        }
