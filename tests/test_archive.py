"""Tests for archive reading and distribution checks."""

import zipfile

import pytest

from spec_verifier.core.archive import ArchiveFormatError, SpecArchive
from spec_verifier.core.distribution import DistributionChecker, verify_archive
from spec_verifier.models.config import SpecConfig
from spec_verifier.models.coordinate import VersionCoordinate


# ═══════════════════════════════════════════
# SpecArchive
# ═══════════════════════════════════════════


class TestSpecArchive:
    def test_read_coordinate(self, final_api_jar):
        with SpecArchive(final_api_jar) as archive:
            coordinate = archive.read_coordinate()
        assert coordinate == VersionCoordinate("jakarta.wombat", "jakarta.wombat-api", "1.1.2")

    def test_read_metadata(self, final_api_jar):
        with SpecArchive(final_api_jar) as archive:
            metadata = archive.read_metadata()
        assert metadata.bundle_symbolic_name == "jakarta.wombat-api"
        assert metadata.errors == ()

    def test_class_names(self, final_api_jar):
        with SpecArchive(final_api_jar) as archive:
            names = list(archive.class_names())
        assert names == ["jakarta.wombat.Wombat", "jakarta.wombat.spi.WombatProvider"]

    def test_manifest_names_in_other_case(self, make_jar, final_api_manifest):
        manifest = {key.upper(): value for key, value in final_api_manifest.items()}
        jar = make_jar("upper.jar", manifest=manifest)
        with SpecArchive(jar) as archive:
            metadata = archive.read_metadata()
        assert metadata.errors == ()
        assert metadata.extension_name == "jakarta.wombat"

    def test_missing_pom_properties(self, make_jar):
        jar = make_jar("no-pom.jar", with_pom=False)
        with SpecArchive(jar) as archive:
            with pytest.raises(ArchiveFormatError, match="pom.properties"):
                archive.read_coordinate()

    def test_missing_manifest(self, make_jar):
        jar = make_jar("no-manifest.jar", with_manifest=False)
        with SpecArchive(jar) as archive:
            with pytest.raises(ArchiveFormatError, match="MANIFEST.MF"):
                archive.read_manifest()

    def test_not_a_zip(self, tmp_path):
        path = tmp_path / "broken.jar"
        path.write_text("not a zip")
        with pytest.raises(zipfile.BadZipFile):
            SpecArchive(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SpecArchive(tmp_path / "absent.jar")


# ═══════════════════════════════════════════
# verify_archive
# ═══════════════════════════════════════════


class TestVerifyArchive:
    def test_compliant(self, final_api_jar, final_api_config):
        result = verify_archive(final_api_jar, final_api_config)
        assert result.passed
        assert result.coordinate.artifact_id == "jakarta.wombat-api"
        assert result.metadata["spec.bundle.version"] == "1.1.2"

    def test_wrong_package_class(self, make_jar, final_api_config, final_api_manifest):
        jar = make_jar(
            "stray.jar",
            manifest=final_api_manifest,
            classes=["jakarta.wombat.Wombat", "jakarta.annotation.Generated"],
        )
        result = verify_archive(jar, final_api_config)
        assert [str(d) for d in result.diagnostics] == [
            "ERROR: jar file includes class in wrong package (jakarta.annotation)"
        ]
        assert result.has_errors

    def test_coordinate_override(self, final_api_jar, final_api_config):
        coordinate = VersionCoordinate("org.wombat", "jakarta.wombat-api", "1.1.2")
        result = verify_archive(final_api_jar, final_api_config, coordinate)
        assert [str(d) for d in result.diagnostics] == [
            'WARNING: groupId (org.wombat) must start with "javax." or "jakarta."'
        ]


# ═══════════════════════════════════════════
# DistributionChecker
# ═══════════════════════════════════════════


class TestDistributionChecker:
    def test_matches_declared_specs(self, final_api_jar, final_api_config, tmp_path):
        coordinate = VersionCoordinate("jakarta.wombat", "jakarta.wombat-api", "1.1.2")
        results = DistributionChecker({coordinate: final_api_config}).check(tmp_path)
        assert len(results) == 1
        assert results[0].passed

    def test_undeclared_archive_reports_missing_configuration(self, final_api_jar, tmp_path):
        results = DistributionChecker().check(tmp_path)
        assert [str(d) for d in results[0].diagnostics] == [
            "ERROR: missing configuration ( spec-version api-package spec-impl-version )"
        ]

    def test_unreadable_archive_is_skipped(self, final_api_jar, make_jar, tmp_path):
        make_jar("a-no-pom.jar", with_pom=False)
        (tmp_path / "z-broken.jar").write_text("not a zip")
        results = DistributionChecker().check(tmp_path)
        skipped = [r for r in results if r.skipped]
        assert len(results) == 3
        assert [r.archive.rsplit("/", 1)[-1] for r in skipped] == ["a-no-pom.jar", "z-broken.jar"]

    def test_includes_and_excludes(self, make_jar, tmp_path):
        make_jar("wombat-api.jar")
        make_jar("wombat-sources.jar")
        (tmp_path / "notes.txt").write_text("hello")
        checker = DistributionChecker()
        found = checker.find_archives(tmp_path, includes="*.jar", excludes="*-sources.jar")
        assert [p.name for p in found] == ["wombat-api.jar"]

    def test_nested_directories(self, make_jar, tmp_path):
        (tmp_path / "modules").mkdir()
        make_jar("modules/wombat-api.jar")
        found = DistributionChecker().find_archives(tmp_path, includes="**/*.jar")
        assert [p.relative_to(tmp_path).as_posix() for p in found] == ["modules/wombat-api.jar"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DistributionChecker().check(tmp_path / "absent")

    def test_config_for_unknown_coordinate(self):
        config = DistributionChecker().config_for(VersionCoordinate("g", "a", "1"))
        assert config == SpecConfig()
