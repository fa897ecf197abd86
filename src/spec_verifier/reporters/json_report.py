"""
JSON Reporter — writes all verification results as one JSON document.
"""

import json
import logging
import sys
from pathlib import Path

from spec_verifier.models.diagnostics import VerificationResult

logger = logging.getLogger(__name__)


class JSONReporter:
    """
    Collects results and writes them on finalize.

    Writes to ``output_path`` when given, otherwise to stdout.
    """

    def __init__(self, output_path: Path | None = None):
        self.output_path = output_path
        self.results: list[VerificationResult] = []

    def report(self, result: VerificationResult) -> None:
        self.results.append(result)

    def to_dict(self) -> dict:
        return {
            "total": len(self.results),
            "passed": sum(1 for r in self.results if r.passed),
            "results": [r.to_dict() for r in self.results],
        }

    def finalize(self) -> None:
        document = json.dumps(self.to_dict(), indent=2)
        if self.output_path is None:
            sys.stdout.write(document + "\n")
            return

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(document + "\n")
        logger.info(f"[JSON] Report complete: {len(self.results)} results written to {self.output_path}")
