"""Tests for version coordinates and the permissive version parse."""

import dataclasses

import pytest

from spec_verifier.models.coordinate import (
    ArtifactVersion,
    VersionCoordinate,
    strip_approved_qualifier,
)


# ═══════════════════════════════════════════
# Approved Qualifier Stripping
# ═══════════════════════════════════════════


class TestStripApprovedQualifier:
    @pytest.mark.parametrize(
        "version, expected",
        [
            ("2.3.4-SNAPSHOT", "2.3.4"),
            ("2.4.11-RC1", "2.4.11"),
            ("3.1.7", "3.1.7"),
            ("4.5-b2", "4.5-b2"),
            ("3.0.0-M1", "3.0.0"),
        ],
    )
    def test_strip(self, version, expected):
        assert strip_approved_qualifier(version) == expected

    def test_snapshot_checked_before_milestone(self):
        assert strip_approved_qualifier("2.0-M3-SNAPSHOT") == "2.0-M3"

    def test_substring_match_is_not_anchored(self):
        assert strip_approved_qualifier("1.0-MyPatch") == "1.0"

    def test_snapshot_must_be_suffix(self):
        assert strip_approved_qualifier("1.0-SNAPSHOT.1") == "1.0-SNAPSHOT.1"

    def test_none(self):
        assert strip_approved_qualifier(None) is None


# ═══════════════════════════════════════════
# ArtifactVersion
# ═══════════════════════════════════════════


class TestArtifactVersion:
    def test_full_version(self):
        v = ArtifactVersion.parse("2.3.4-SNAPSHOT")
        assert (v.major, v.minor, v.incremental) == (2, 3, 4)
        assert v.qualifier == "SNAPSHOT"
        assert v.build_number is None

    def test_major_minor(self):
        v = ArtifactVersion.parse("4.5")
        assert (v.major, v.minor, v.incremental) == (4, 5, 0)
        assert v.qualifier is None

    def test_numeric_rest_is_build_number(self):
        v = ArtifactVersion.parse("1.0-3")
        assert v.build_number == 3
        assert v.qualifier is None

    def test_unparsable_becomes_qualifier(self):
        v = ArtifactVersion.parse("1.0.0.1")
        assert (v.major, v.minor, v.incremental) == (0, 0, 0)
        assert v.qualifier == "1.0.0.1"

    def test_numeric_ordering(self):
        assert ArtifactVersion.parse("2.10") > ArtifactVersion.parse("2.9")
        assert ArtifactVersion.parse("3.0") > ArtifactVersion.parse("2.99")

    def test_release_ranks_above_qualifier(self):
        assert ArtifactVersion.parse("2.0-M1") < ArtifactVersion.parse("2.0")

    def test_missing_components_compare_as_zero(self):
        assert ArtifactVersion.parse("2.3") == ArtifactVersion.parse("2.3.0")

    def test_str(self):
        assert str(ArtifactVersion.parse("1.1-b07")) == "1.1-b07"


# ═══════════════════════════════════════════
# VersionCoordinate
# ═══════════════════════════════════════════


class TestVersionCoordinate:
    def test_absolute_version(self):
        c = VersionCoordinate("jakarta.wombat", "jakarta.wombat-api", "1.1.2-SNAPSHOT")
        assert c.absolute_version == "1.1.2"

    def test_equality(self):
        a = VersionCoordinate("g", "a", "1.0")
        assert a == VersionCoordinate("g", "a", "1.0")
        assert a != VersionCoordinate("g", "a", "1.1")
        assert a != VersionCoordinate("g", "b", "1.0")

    def test_equality_with_none_fields(self):
        assert VersionCoordinate(None, "a", None) == VersionCoordinate(None, "a", None)
        assert VersionCoordinate(None, "a", None) != VersionCoordinate("g", "a", None)

    def test_hashable(self):
        specs = {VersionCoordinate("g", "a", "1.0"): "spec"}
        assert specs[VersionCoordinate("g", "a", "1.0")] == "spec"

    def test_replace_reparses_version(self):
        c = dataclasses.replace(VersionCoordinate("g", "a", "1.0"), version="2.5.1")
        assert c.parsed.major == 2
        assert c.parsed.minor == 5

    def test_build_number(self):
        assert VersionCoordinate("g", "a", "2.4-b07").build_number == "07"
        assert VersionCoordinate("g", "a", "2.4-b07-SNAPSHOT").build_number == "07"
        assert VersionCoordinate("g", "a", "2.4").build_number is None

    def test_from_properties(self):
        c = VersionCoordinate.from_properties({"groupId": "g", "artifactId": "a", "version": "1"})
        assert c == VersionCoordinate("g", "a", "1")

    def test_str(self):
        assert str(VersionCoordinate("g", "a", "1.0")) == "[ g:a:1.0 ]"
