"""Rich terminal reporter — colour, icons, severity pills."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from keysafe.findings.models import ScanResult
from keysafe.findings.redactor import redact

_SEVERITY_STYLE = {
    "critical": "bold white on red",
    "high": "bold white on dark_orange",
    "medium": "bold black on yellow",
    "low": "bold black on bright_cyan",
}

_SEVERITY_ICON = {
    "critical": "🔴",
    "high": "🟠",
    "medium": "🟡",
    "low": "🔵",
}


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, "")
    icon = _SEVERITY_ICON.get(severity, "")
    return Text(f" {icon} {severity.upper()} ", style=style)


def render(
    result: ScanResult,
    *,
    ci_mode: bool = False,
    show_summary: bool = True,
    console: Console | None = None,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not result.findings:
        console.print()
        console.print("[bold green]✅ No private keys detected.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title="KeySafe Findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=12)
    table.add_column("Rule", style="cyan", min_width=12)
    table.add_column("Location", style="magenta")
    table.add_column("Code", min_width=15)

    for finding in result.findings:
        table.add_row(
            _severity_pill(finding.severity),
            finding.rule_name,
            f"{finding.file}:{finding.line_no}:{finding.column}",
            Text(redact(finding.snippet, ci_mode=ci_mode)),
        )

    console.print(table)

    # One message per rule; every finding of a rule shares it
    messages = {f.rule_name: f.message for f in result.findings}
    for rule_name, message in messages.items():
        console.print(f"[cyan]{rule_name}[/cyan]: {message}")

    if show_summary:
        _print_summary(console, result)

    console.print()
    if result.blocked:
        console.print(
            "[bold red]❌ BLOCKED — private keys detected at or above threshold.[/bold red]"
        )
    else:
        console.print(
            "[bold yellow]⚠️  Findings detected but below fail threshold.[/bold yellow]"
        )


def _print_summary(console: Console, result: ScanResult) -> None:
    console.print()
    console.print(f"[dim]Files scanned:[/dim]  {result.scanned_files}")
    console.print(f"[dim]Findings:[/dim]       {result.total_findings}")
    console.print(f"[dim]Blocking:[/dim]       {len(result.blocking_findings)}")
    console.print(f"[dim]Suppressed:[/dim]     {len(result.suppressed)}")
    console.print(f"[dim]Skipped:[/dim]        {len(result.skipped_files)}")
    if result.truncated:
        console.print("[dim]Truncated:[/dim]      yes (max_findings reached)")
    console.print(f"[dim]Duration:[/dim]       {result.scan_duration_ms:.0f}ms")
