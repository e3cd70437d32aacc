"""uiaudit info and report commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from uiaudit.core.aggregator import aggregate, summarize
from uiaudit.core.evaluator import delta_px
from uiaudit.core.filters import apply_filters
from uiaudit.io.findings_io import read_findings
from uiaudit.models.config import ReportFilter
from uiaudit.models.finding import Finding, FindingsMeta, Severity

console = Console()

SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
    Severity.NONE: "dim",
}


def _load(findings_path: str) -> tuple[FindingsMeta | None, list[Finding]]:
    if not Path(findings_path).exists():
        console.print(f"[red]Findings file not found: {findings_path}[/red]")
        raise typer.Exit(1)
    return read_findings(findings_path)


def info(
    findings_path: str = typer.Option(
        "./uiaudit_findings.jsonl", "-f", "--findings", help="Path to findings JSONL"
    ),
) -> None:
    """Show a summary of an audit."""
    meta, findings = _load(findings_path)
    summary = summarize(
        findings,
        containers_found=meta.containers_found if meta else 0,
        containers_processed=meta.containers_processed if meta else 0,
    )

    table = Table(title="Audit Summary", show_header=False, border_style="blue")
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Usages", f"{summary.total_findings:,}")
    table.add_row("Unique assets", f"{summary.unique_assets:,}")
    table.add_row(
        "Containers", f"{summary.containers_processed:,} of {summary.containers_found:,}"
    )
    table.add_row("Types", ", ".join(f"{k} ({v})" for k, v in summary.type_counts.items()))
    table.add_row(
        "Severities", ", ".join(f"{k} ({v})" for k, v in summary.severity_counts.items()) or "-"
    )
    table.add_row("Wasted memory", f"{summary.total_waste_kb:,} KB")
    if summary.top_assets:
        top = ", ".join(f"{name} ({impact:.1f})" for name, impact in summary.top_assets)
        table.add_row("Top assets", top)

    if meta:
        table.add_row("Target", meta.target)
        table.add_row("Status", meta.status)
        table.add_row("Created", meta.created_at)

    console.print(table)


def _result_cell(f: Finding) -> str:
    delta = delta_px(f)
    if delta is None:
        return f.message
    return f"{f.message} (Δ {delta:+d}px)"


def report(
    findings_path: str = typer.Option(
        "./uiaudit_findings.jsonl", "-f", "--findings", help="Path to findings JSONL"
    ),
    text: str = typer.Option("", "--filter", help="Filter by container, asset or path"),
    min_severity: str = typer.Option(
        "low", "--min-severity", help="none, low, medium, high or critical"
    ),
    no_blurry: bool = typer.Option(False, "--no-blurry", help="Hide Blurry findings"),
    no_heavy: bool = typer.Option(False, "--no-heavy", help="Hide Heavy findings"),
    sort: str = typer.Option("impact", "--sort", help="Ordering: impact or path"),
    limit: int = typer.Option(50, "--limit", help="Maximum rows to show (0 = all)"),
) -> None:
    """Show audit findings as a table."""
    try:
        threshold = Severity(min_severity.lower())
    except ValueError:
        typer.echo(f"Error: unknown severity {min_severity!r}", err=True)
        raise typer.Exit(1)
    if sort not in ("impact", "path"):
        typer.echo(f"Error: unknown sort order {sort!r} (use impact or path)", err=True)
        raise typer.Exit(1)

    _, findings = _load(findings_path)
    flt = ReportFilter(
        text=text, show_blurry=not no_blurry, show_heavy=not no_heavy, min_severity=threshold
    )
    rows = apply_filters(aggregate(findings, sort_by_impact=sort == "impact"), flt)
    if not rows:
        console.print("[yellow]No findings match.[/yellow]")
        return

    shown = rows[:limit] if limit > 0 else rows
    table = Table(title=f"Findings ({len(shown)} of {len(rows)})", border_style="blue")
    table.add_column("Container → Path", overflow="fold")
    table.add_column("Asset")
    table.add_column("Type")
    table.add_column("Severity")
    table.add_column("Impact", justify="right")
    table.add_column("Uses", justify="right")
    table.add_column("Waste KB", justify="right")
    table.add_column("Authored", justify="right")
    table.add_column("Scale", justify="right")
    table.add_column("@Ref", justify="right")
    table.add_column("@Top", justify="right")
    table.add_column("Required", justify="right")
    table.add_column("Result", overflow="fold")

    for f in shown:
        style = SEVERITY_STYLES[f.severity]
        table.add_row(
            f"{f.container} → {f.path}",
            f.asset_name,
            f.result_type.value,
            f"[{style}]{f.severity.name}[/{style}]",
            f"{f.impact:.1f}",
            str(f.usage_count),
            str(f.waste_kb),
            f"{f.authored_width}x{f.authored_height}",
            f"{f.local_scale:.2f}",
            f"{f.display_ref_width:.0f}x{f.display_ref_height:.0f}",
            f"{f.display_top_width:.0f}x{f.display_top_height:.0f}",
            f"{f.required_width}x{f.required_height}",
            _result_cell(f),
        )

    console.print(table)
