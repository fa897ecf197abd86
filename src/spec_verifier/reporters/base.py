"""
Reporter Protocol — Base interface for all report backends.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from spec_verifier.models.diagnostics import VerificationResult


@runtime_checkable
class Reporter(Protocol):
    """
    Protocol that all reporters must implement.

    Reporters receive one VerificationResult per verified artifact and
    present them in their respective format (console, JSON, etc.).
    """

    def report(self, result: VerificationResult) -> None:
        """Report the outcome of a single artifact."""
        ...

    def finalize(self) -> None:
        """Called after all artifacts have been reported."""
        ...
