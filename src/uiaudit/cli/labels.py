"""uiaudit labels command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from uiaudit.models.finding import ResultType
from uiaudit.models.policy import PolicyError, load_policy

console = Console()

_TYPE_STYLES = {
    ResultType.OK: "green",
    ResultType.BLURRY: "red",
    ResultType.HEAVY: "yellow",
    ResultType.CONTEXT: "dim",
}


def labels(
    assets_dir: str = typer.Argument(..., help="Directory of texture files"),
    policy_path: str = typer.Option(..., "-p", "--policy", help="Sizing policy YAML"),
    labels_path: Optional[str] = typer.Option(
        None, "-l", "--labels", help="YAML mapping of texture path to UI label"
    ),
    include_unlabeled: bool = typer.Option(
        True, "--unlabeled/--no-unlabeled", help="List textures without a label"
    ),
    output: Optional[str] = typer.Option(None, "-o", "--out", help="Also write rows to CSV"),
) -> None:
    """Audit texture files against the sizes their UI labels require."""
    from uiaudit.core.label_audit import audit_labels, load_labels

    if not Path(assets_dir).is_dir():
        typer.echo(f"Error: {assets_dir} is not a valid directory", err=True)
        raise typer.Exit(1)
    try:
        policy = load_policy(policy_path)
    except PolicyError as e:
        console.print(f"[red]Invalid policy: {e}[/red]")
        raise typer.Exit(1)

    if labels_path and not Path(labels_path).is_file():
        typer.echo(f"Error: {labels_path} not found", err=True)
        raise typer.Exit(1)

    mapping = load_labels(labels_path) if labels_path else {}
    rows = audit_labels(assets_dir, mapping, policy, include_unlabeled=include_unlabeled)
    if not rows:
        console.print("[yellow]No textures found.[/yellow]")
        return

    table = Table(title=f"Textures ({len(rows)})", border_style="blue")
    table.add_column("Path", overflow="fold")
    table.add_column("Label")
    table.add_column("Pixels", justify="right")
    table.add_column("Max display", justify="right")
    table.add_column("Required", justify="right")
    table.add_column("Result", overflow="fold")

    for r in rows:
        style = _TYPE_STYLES[r.result_type]
        sized = r.result_type is not ResultType.CONTEXT
        table.add_row(
            r.path,
            r.label or "-",
            f"{r.authored_width}x{r.authored_height}",
            f"{r.max_display_width}x{r.max_display_height}" if sized else "-",
            f"{r.required_width}x{r.required_height}" if sized else "-",
            f"[{style}]{r.message or r.result_type.value}[/{style}]",
        )
    console.print(table)

    if output:
        from uiaudit.io.csv_io import label_rows_to_csv

        count = label_rows_to_csv(rows, output)
        console.print(f"[green]Exported {count:,} rows to {output}[/green]")
