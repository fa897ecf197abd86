"""Report backends for verification results."""

from spec_verifier.reporters.base import Reporter
from spec_verifier.reporters.console import ConsoleReporter
from spec_verifier.reporters.json_report import JSONReporter


def get_reporter(format_name: str, output: str | None = None) -> Reporter:
    """Factory function to create a reporter by format name."""
    from pathlib import Path

    match format_name:
        case "console":
            return ConsoleReporter()
        case "json":
            return JSONReporter(output_path=Path(output) if output else None)
        case _:
            raise ValueError(f"Unknown report format: {format_name!r}. Use 'console' or 'json'.")


__all__ = ["Reporter", "ConsoleReporter", "JSONReporter", "get_reporter"]
