"""KeySafe CLI — Typer application with scan, rules, and init commands."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from keysafe import __version__

app = typer.Typer(
    name="keysafe",
    help="Find hard-coded private keys in JavaScript and TypeScript source.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _detect_ci() -> bool:
    """Auto-detect CI environment."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _load(config: Optional[str]):
    """Load config and rules for the current directory, exit 2 on failure."""
    from keysafe.config.loader import ConfigError, load_config
    from keysafe.rules.registry import RuleError, build_registry

    root = Path.cwd()
    try:
        cfg = load_config(root, config)
        registry = build_registry(cfg, root)
    except (ConfigError, RuleError) as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return root, cfg, registry


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories (default: .)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .keysafe.toml"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="Severity threshold: low | medium | high | critical"),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode (full redaction)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be scanned without scanning"),
) -> None:
    """Scan source files for hard-coded private keys."""
    from keysafe.log import configure_logging
    from keysafe.output import terminal
    from keysafe.scanner.engine import ScanError, collect_files, scan_paths

    root, cfg, registry = _load(config)

    if debug:
        configure_logging("DEBUG")
    elif verbose:
        configure_logging("INFO")
    else:
        configure_logging(cfg.logging.level)

    # --- CLI overrides ---
    if fail_on:
        if fail_on not in ("low", "medium", "high", "critical"):
            console.print(f"[bold red]Invalid fail-on level:[/bold red] {fail_on}")
            raise typer.Exit(code=2)
        cfg.scan.fail_on = fail_on  # type: ignore[assignment]

    ci_mode = ci or _detect_ci()
    redact_fully = ci_mode and cfg.ci.full_redaction
    targets = list(paths) if paths else [root]

    logger.info("Rules enabled: %d", len(registry.enabled_rules()))
    logger.info("Scan root: %s", root)
    logger.info("CI mode: %s", ci_mode)

    if dry_run:
        files, skipped = collect_files(targets, cfg, root)
        console.print(f"[bold]Dry run — {len(files)} files would be scanned:[/bold]")
        for _, display in files:
            console.print(f"  {display}")
        for entry in skipped:
            console.print(f"  [dim]skip {entry}[/dim]")
        raise typer.Exit(code=0)

    # --- Run scan ---
    try:
        result = scan_paths(targets, cfg, registry, root)
    except ScanError as exc:
        console.print(f"[bold red]Scanner error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    logger.debug("Scan duration: %.0fms", result.scan_duration_ms)

    terminal.render(result, ci_mode=redact_fully, show_summary=cfg.output.show_summary)

    if ci_mode:
        _emit_ci_annotations(result)

    raise typer.Exit(code=1 if result.blocked else 0)


def _emit_ci_annotations(result) -> None:
    """Emit GitHub Actions annotations; the secret itself is never printed."""
    for f in result.findings:
        level = "error" if f.is_blocking else "warning"
        print(
            f"::{level} file={f.file},line={f.line_no},col={f.column}"
            f"::{f.rule_name}: {f.message}"
        )


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .keysafe.toml"),
) -> None:
    """List the registered rules and whether they are enabled."""
    _, _, registry = _load(config)

    table = Table(title="KeySafe Rules", title_style="bold", border_style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Severity")
    table.add_column("Enabled", justify="center")
    table.add_column("Tags", style="dim")
    for rule in registry.all_rules:
        table.add_row(
            rule.id,
            rule.name,
            rule.severity,
            "yes" if rule.enabled else "no",
            ", ".join(rule.tags),
        )
    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing .keysafe.toml"),
) -> None:
    """Generate a starter .keysafe.toml in the current directory."""
    from keysafe.config.defaults import DEFAULT_TOML
    from keysafe.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"keysafe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """KeySafe — find hard-coded private keys before they ship."""
