"""Tests for the report backends."""

import json

import pytest
from rich.console import Console

from spec_verifier.models.coordinate import VersionCoordinate
from spec_verifier.models.diagnostics import Category, Diagnostic, VerificationResult
from spec_verifier.reporters import ConsoleReporter, JSONReporter, Reporter, get_reporter


@pytest.fixture
def failing_result():
    return VerificationResult(
        coordinate=VersionCoordinate("jakarta.wombat", "jakarta.wombat-api", "1.1.2"),
        description="{ groupIdPrefix=jakarta. API final }",
        diagnostics=(
            Diagnostic.error(Category.EXTRACTION_MISSING, "Extension-Name not found in MANIFEST"),
            Diagnostic.warning(Category.CONSISTENCY_MISMATCH, "Extension-Name () should be jakarta.wombat"),
        ),
    )


@pytest.fixture
def passing_result():
    return VerificationResult(coordinate=VersionCoordinate("jakarta.fish", "jakarta.fish-api", "2.0"))


class TestVerificationResult:
    def test_flags(self, failing_result, passing_result):
        assert failing_result.has_errors
        assert not failing_result.passed
        assert passing_result.passed
        assert not passing_result.has_errors

    def test_skipped_is_not_passed(self):
        assert not VerificationResult(coordinate=None, skipped="bad zip").passed

    def test_to_dict(self, failing_result):
        d = failing_result.to_dict()
        assert d["coordinate"]["artifact_id"] == "jakarta.wombat-api"
        assert d["passed"] is False
        assert d["diagnostics"][0] == {
            "severity": "ERROR",
            "category": "extraction_missing",
            "message": "Extension-Name not found in MANIFEST",
        }


# ═══════════════════════════════════════════
# Console
# ═══════════════════════════════════════════


class TestConsoleReporter:
    def make(self):
        console = Console(record=True, width=200, color_system=None)
        return ConsoleReporter(console=console), console

    def test_prints_diagnostics(self, failing_result):
        reporter, console = self.make()
        reporter.report(failing_result)
        reporter.finalize()
        text = console.export_text()
        assert "[ jakarta.wombat:jakarta.wombat-api:1.1.2 ]" in text
        assert "{ groupIdPrefix=jakarta. API final }" in text
        assert "- ERROR: Extension-Name not found in MANIFEST" in text
        assert "- WARNING: Extension-Name () should be jakarta.wombat" in text
        assert "0 passed, 1 with diagnostics, 0 skipped" in text

    def test_passing_result_is_quiet(self, passing_result):
        reporter, console = self.make()
        reporter.report(passing_result)
        reporter.finalize()
        text = console.export_text()
        assert "jakarta.fish" not in text
        assert "Verified 1 artifact(s), no issues" in text

    def test_skipped(self):
        reporter, console = self.make()
        reporter.report(VerificationResult(coordinate=None, archive="dist/bad.jar", skipped="File is not a zip file"))
        reporter.finalize()
        text = console.export_text()
        assert "dist/bad.jar" in text
        assert "skipped: File is not a zip file" in text


# ═══════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════


class TestJSONReporter:
    def test_writes_file(self, tmp_path, failing_result, passing_result):
        output = tmp_path / "reports" / "spec.json"
        reporter = JSONReporter(output_path=output)
        reporter.report(failing_result)
        reporter.report(passing_result)
        reporter.finalize()

        data = json.loads(output.read_text())
        assert data["total"] == 2
        assert data["passed"] == 1
        assert len(data["results"][0]["diagnostics"]) == 2

    def test_writes_stdout(self, capsys, passing_result):
        reporter = JSONReporter()
        reporter.report(passing_result)
        reporter.finalize()
        data = json.loads(capsys.readouterr().out)
        assert data["results"][0]["passed"] is True


class TestFactory:
    def test_console(self):
        reporter = get_reporter("console")
        assert isinstance(reporter, ConsoleReporter)
        assert isinstance(reporter, Reporter)

    def test_json(self, tmp_path):
        reporter = get_reporter("json", str(tmp_path / "out.json"))
        assert isinstance(reporter, JSONReporter)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown report format"):
            get_reporter("xml")
