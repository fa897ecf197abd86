"""
Diagnostics — findings produced while verifying a spec artifact.
"""

from dataclasses import dataclass, field
from enum import Enum

from spec_verifier.models.coordinate import VersionCoordinate


class Severity(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


class Category(Enum):
    """Kind of disagreement a diagnostic reports."""

    CONFIG_INCOMPLETE = "config_incomplete"
    EXTRACTION_MISSING = "extraction_missing"
    FORMAT_MISMATCH = "format_mismatch"
    CONSISTENCY_MISMATCH = "consistency_mismatch"
    NAMING_VIOLATION = "naming_violation"
    PROGRESSION_VIOLATION = "progression_violation"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    category: Category

    @classmethod
    def error(cls, category: Category, message: str) -> "Diagnostic":
        return cls(Severity.ERROR, message, category)

    @classmethod
    def warning(cls, category: Category, message: str) -> "Diagnostic":
        return cls(Severity.WARNING, message, category)

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "category": self.category.value,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.message}"


@dataclass
class VerificationResult:
    """Outcome of verifying one artifact, as handed to reporters."""

    coordinate: VersionCoordinate | None
    description: str = ""
    diagnostics: tuple[Diagnostic, ...] = ()
    archive: str | None = None
    skipped: str | None = None  # reason the archive could not be verified
    metadata: dict = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    @property
    def passed(self) -> bool:
        return not self.diagnostics and self.skipped is None

    def to_dict(self) -> dict:
        return {
            "coordinate": self.coordinate.to_dict() if self.coordinate else None,
            "description": self.description,
            "archive": self.archive,
            "skipped": self.skipped,
            "passed": self.passed,
            "metadata": self.metadata,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
