"""uiaudit export command group."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from uiaudit.io.findings_io import read_findings

export_app = typer.Typer(help="Export findings to other formats.")
console = Console()


@export_app.command()
def csv(
    findings_path: str = typer.Option(
        "./uiaudit_findings.jsonl", "-f", "--findings", help="Path to findings JSONL"
    ),
    output: str = typer.Option(..., "-o", "--out", help="Output CSV file path"),
) -> None:
    """Export findings to CSV format."""
    if not Path(findings_path).exists():
        console.print(f"[red]Findings file not found: {findings_path}[/red]")
        raise typer.Exit(1)

    _, findings = read_findings(findings_path)

    if not findings:
        console.print("[yellow]No findings to export.[/yellow]")
        raise typer.Exit(1)

    from uiaudit.io.csv_io import findings_to_csv

    row_count = findings_to_csv(findings, output)
    console.print(f"[green]Exported {row_count:,} findings to {output}[/green]")
