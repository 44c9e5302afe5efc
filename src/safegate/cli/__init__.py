"""
CLI for SafeGate.

Provides a command-line interface for checking a directory for files
that must be kept out of generated output.
"""

import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from safegate.core.config import LoggingConfig, SafeGateConfig, load_config
from safegate.core.security import SafetyVerdict
from safegate.infrastructure import DEFAULT_RULES
from safegate.services import create_services

# Initialize Rich Consoles; progress goes to stderr so --json output stays clean
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="safegate",
    help="SafeGate - Keep files with secrets out of packaged output",
    add_completion=False,
)


def _configure_logging(logging_config: LoggingConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, logging_config.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=logging_config.format)


def _load(config_path: Optional[Path]) -> SafeGateConfig:
    load_dotenv()
    return load_config(config_path)


def _render_verdict(verdict: SafetyVerdict, total_files: int, check_enabled: bool) -> None:
    if verdict.suspicious_files_results:
        table = Table(title="Suspicious Files", show_lines=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("File", style="yellow")
        table.add_column("Reasons")
        for i, result in enumerate(verdict.suspicious_files_results, start=1):
            table.add_row(str(i), escape(result.file_path), escape("\n".join(result.messages)))
        console.print(table)
        console.print(
            "[yellow]These files have been excluded from the output for security reasons.[/yellow]"
        )
    elif check_enabled:
        console.print("[green]No suspicious files detected.[/green]")
    else:
        console.print("[dim]Security check is disabled.[/dim]")

    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Total Files:", str(total_files))
    summary.add_row("Safe Files:", str(len(verdict.safe_raw_files)))
    if verdict.suspicious_files_results:
        summary.add_row(
            "Suspicious Files:", f"[red]{len(verdict.suspicious_files_results)}[/red]"
        )

    console.print(
        Panel(
            summary,
            title="[bold green]Security Check Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )


@app.command()
def check(
    path: Path = typer.Argument(..., help="Directory to check"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
    security_check: Optional[bool] = typer.Option(
        None, "--security-check/--no-security-check", help="Enable/disable the security check"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 when any file is flagged"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the verdict as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Check a directory and report which files are safe to include."""
    try:
        cfg = _load(config_path)
        if security_check is not None:
            cfg = replace(cfg, security=replace(cfg.security, enable_security_check=security_check))
        _configure_logging(cfg.logging, verbose)

        services = create_services(config=cfg)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=err_console,
            transient=True,
        ) as progress:
            task = progress.add_task("Collecting files...", total=None)
            raw_files = services.file_collector.collect(path)
            progress.update(task, description="Validating files...")

            def update_progress(message: str) -> None:
                progress.update(task, description=escape(message))

            verdict = asyncio.run(
                services.validator.validate(raw_files, update_progress, cfg.security)
            )

        if as_json:
            typer.echo(json.dumps(verdict.to_dict(), indent=2))
        else:
            _render_verdict(verdict, len(raw_files), cfg.security.enable_security_check)

    except Exception as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if strict and verdict.suspicious_files_results:
        raise typer.Exit(1)


@app.command()
def rules(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
):
    """List the secret-detection rules and whether they are enabled."""
    try:
        cfg = _load(config_path)
    except Exception as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    disabled = set(cfg.security.disabled_rules)
    table = Table(title="Secret Detection Rules")
    table.add_column("Rule", style="cyan")
    table.add_column("Description")
    table.add_column("Enabled", justify="center")
    for rule in DEFAULT_RULES:
        enabled = "[red]no[/red]" if rule.rule_id in disabled else "[green]yes[/green]"
        table.add_row(rule.rule_id, rule.description, enabled)
    console.print(table)


def main() -> None:
    """Entry point for the safegate command."""
    app()


if __name__ == "__main__":
    main()
