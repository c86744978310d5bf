"""Tests for certificate/profile flattening and the profile query."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from mobileenv.signing.models import Certificate, ProvisioningProfile
from mobileenv.signing.profiles import (
    app_id_matches,
    find_profiles,
    flatten_certificates,
    flatten_profiles,
)

BODY_A = "MIIFaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
BODY_B = "MIIFbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"


class TestFlattenCertificates:

    def test_keychain_type_grouping(self, ios_report: dict[str, Any]) -> None:
        certs = flatten_certificates(ios_report["certs"]["keychains"])
        assert [c.name for c in certs] == [
            "iPhone Developer: Jane (AAA111)",
            "iPhone Distribution: Acme (BBB222)",
        ]
        assert certs[0].keychain == "login.keychain-db"
        assert certs[0].type == "developer"
        assert certs[1].type == "distribution"

    def test_multiple_keychains_keep_order(self) -> None:
        grouping = {
            "login": {"developer": [{"name": "A", "pem": ""}]},
            "system": {"developer": [{"name": "B", "pem": ""}], "distribution": [{"name": "C", "pem": ""}]},
        }
        assert [c.name for c in flatten_certificates(grouping)] == ["A", "B", "C"]

    def test_flat_sequence(self) -> None:
        cert = Certificate(name="A", pem="")
        assert flatten_certificates([cert, {"name": "B", "pem": ""}])[0] is cert
        assert len(flatten_certificates([cert, {"name": "B", "pem": ""}])) == 2

    def test_empty(self) -> None:
        assert flatten_certificates({}) == []
        assert flatten_certificates({"login": {"developer": []}}) == []


class TestFlattenProfiles:

    def test_type_order(self) -> None:
        grouping = {
            "distribution": [{"uuid": "P4"}],
            "custom": [{"uuid": "P5"}],
            "adhoc": [{"uuid": "P2"}],
            "development": [{"uuid": "P1"}],
            "enterprise": [{"uuid": "P3"}],
        }
        profiles = flatten_profiles(grouping)
        assert [p.uuid for p in profiles] == ["P1", "P2", "P3", "P4", "P5"]
        assert [p.type for p in profiles] == [
            "development", "adhoc", "enterprise", "distribution", "custom",
        ]

    def test_skips_non_list_groups(self) -> None:
        profiles = flatten_profiles({"development": [{"uuid": "P1"}], "count": 1, "note": "x"})
        assert [p.uuid for p in profiles] == ["P1"]

    def test_flat_sequence(self) -> None:
        profile = ProvisioningProfile("P1")
        assert flatten_profiles([profile]) == [profile]


class TestAppIdMatches:

    @pytest.mark.parametrize(
        "profile_app_id, app_id, expected",
        [
            ("*", "com.acme.app", True),
            ("com.acme.app", "com.acme.app", True),
            ("com.acme.*", "com.acme.app", True),
            ("com.acme.*", "com.acme.app.widget", True),
            ("com.acme.*", "com.other.app", False),
            ("com.acme.app", "com.acme.app2", False),
            ("", "com.acme.app", False),
        ],
    )
    def test_matching(self, profile_app_id: str, app_id: str, expected: bool) -> None:
        assert app_id_matches(profile_app_id, app_id) is expected


class TestFindProfiles:

    @pytest.fixture
    def certs(self, make_pem: Callable[[str], str]) -> list[Certificate]:
        return [Certificate(name="A", pem=make_pem(BODY_A)), Certificate(name="B", pem=make_pem(BODY_B))]

    def test_no_filters_keeps_valid(self) -> None:
        profiles = [ProvisioningProfile("P1"), ProvisioningProfile("P2", expired=True)]
        assert [p.uuid for p in find_profiles(profiles)] == ["P1"]

    def test_include_expired(self) -> None:
        profiles = [ProvisioningProfile("P1", expired=True)]
        assert len(find_profiles(profiles, include_expired=True)) == 1

    def test_app_id_filter(self) -> None:
        profiles = [
            ProvisioningProfile("P1", app_id="com.acme.*"),
            ProvisioningProfile("P2", app_id="com.other.app"),
        ]
        assert [p.uuid for p in find_profiles(profiles, app_id="com.acme.app")] == ["P1"]

    def test_device_filter(self) -> None:
        profiles = [
            ProvisioningProfile("P1", devices=("D1", "D9")),
            ProvisioningProfile("P2", devices=("D2",)),
            ProvisioningProfile("P3"),
        ]
        assert [p.uuid for p in find_profiles(profiles, device_udids=["D9"])] == ["P1"]

    def test_cert_filter(self, certs: list[Certificate]) -> None:
        profiles = [
            ProvisioningProfile("P1", certs=(BODY_B,)),
            ProvisioningProfile("P2", certs=("UNRELATED",)),
        ]
        assert [p.uuid for p in find_profiles(profiles, certs=certs)] == ["P1"]

    def test_all_filters_preserve_order(self, certs: list[Certificate]) -> None:
        profiles = [
            ProvisioningProfile("P2", app_id="*", devices=("D1",), certs=(BODY_A,)),
            ProvisioningProfile("P1", app_id="com.acme.app", devices=("D1",), certs=(BODY_B,)),
        ]
        found = find_profiles(profiles, app_id="com.acme.app", device_udids=["D1"], certs=certs)
        assert [p.uuid for p in found] == ["P2", "P1"]
