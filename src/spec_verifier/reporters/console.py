"""
Console Reporter — prints diagnostics for humans.

Artifacts without diagnostics print nothing; the others print their
coordinate, the configuration summary and one ``- <diagnostic>`` line per
finding.
"""

import logging

from rich.console import Console
from rich.markup import escape

from spec_verifier.models.diagnostics import Severity, VerificationResult

logger = logging.getLogger(__name__)

_STYLES = {Severity.ERROR: "bold red", Severity.WARNING: "yellow"}


class ConsoleReporter:
    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.count = 0
        self.failed = 0
        self.skipped = 0

    def report(self, result: VerificationResult) -> None:
        self.count += 1
        if result.skipped is not None:
            self.skipped += 1
            self.console.print(f"\n[bold red]{escape(result.archive or '')}[/bold red]")
            self.console.print(f"- [red]skipped: {escape(result.skipped)}[/red]")
            return
        if result.passed:
            return

        self.failed += 1
        self.console.print()
        self.console.print(f"[bold]{escape(str(result.coordinate))}[/bold]")
        if result.description:
            self.console.print(f"[dim]{escape(result.description)}[/dim]")
        for diagnostic in result.diagnostics:
            style = _STYLES[diagnostic.severity]
            self.console.print(f"- [{style}]{escape(str(diagnostic))}[/{style}]")
        self.console.print()

    def finalize(self) -> None:
        passed = self.count - self.failed - self.skipped
        if self.failed or self.skipped:
            self.console.print(
                f"[cyan]Verified {self.count} artifact(s):[/cyan] "
                f"{passed} passed, {self.failed} with diagnostics, {self.skipped} skipped"
            )
        else:
            self.console.print(f"[bold green]Verified {self.count} artifact(s), no issues[/bold green]")
        logger.debug(f"[Console] Report complete: {self.count} artifacts")
