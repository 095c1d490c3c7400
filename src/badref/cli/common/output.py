"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)

# Display labels: INFO findings are presented as warnings.
_SEVERITY_LABELS = {
    "INFO": "[warn]WARNING[/]",
    "ERROR": "[err]ERROR[/]",
}


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def findings_table(self, findings: Iterable[Any], title: str = "Findings") -> None:
        """
        Render a table of owner reference findings.

        Expects objects with `.severity`, `.category`, `.subject`,
        optional `.owner` and `.message` (like badref.core.validation.Finding).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Severity", no_wrap=True)
        t.add_column("Category", style="title", no_wrap=True)
        t.add_column("Object", style="ok")
        t.add_column("Owner", style="meta")
        t.add_column("Message")

        for f in findings:
            severity = getattr(f.severity, "value", str(f.severity))
            t.add_row(
                _SEVERITY_LABELS.get(severity, severity),
                getattr(f.category, "value", str(f.category)),
                escape(f.subject),
                escape(f.owner or ""),
                escape(f.message),
            )

        console.print(t)


out = Out()
