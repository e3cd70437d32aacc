"""uiaudit scan command."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from uiaudit.models.config import ScanConfig
from uiaudit.models.policy import PolicyError, load_policy

console = Console()


def scan(
    target: str = typer.Argument(..., help="Container file or directory of containers"),
    policy_path: Optional[str] = typer.Option(
        None, "-p", "--policy", help="Sizing policy YAML (see `uiaudit policy init`)"
    ),
    output: str = typer.Option(
        "./uiaudit_findings.jsonl", "-o", "--output", help="Findings output path"
    ),
    estimate_stretch: bool = typer.Option(
        False, "--estimate-stretch", help="Evaluate stretching nodes in an assumed container"
    ),
    assumed_width: int = typer.Option(800, "--assumed-width", help="Assumed container width"),
    assumed_height: int = typer.Option(600, "--assumed-height", help="Assumed container height"),
    workers: int = typer.Option(1, "--workers", help="Number of parallel workers"),
    assets_root: Optional[str] = typer.Option(
        None, "--assets-root", help="Directory texture paths are relative to"
    ),
    no_surface_scaler: bool = typer.Option(
        False, "--no-surface-scaler", help="Ignore per-canvas scaler settings"
    ),
    sort: str = typer.Option("impact", "--sort", help="Ordering: impact or path"),
    extensions: Optional[str] = typer.Option(
        None, "--extensions", help="Comma-separated container extensions"
    ),
) -> None:
    """Audit every image placement in the given containers."""
    from uiaudit.io.findings_io import write_findings
    from uiaudit.models.finding import FindingsMeta
    from uiaudit.pipeline.runner import run_audit

    if policy_path is None:
        console.print("[red]No policy assigned.[/red] Pass --policy or run `uiaudit policy init`.")
        raise typer.Exit(1)
    try:
        policy = load_policy(policy_path)
    except PolicyError as e:
        console.print(f"[red]Invalid policy: {e}[/red]")
        raise typer.Exit(1)

    if not Path(target).exists():
        typer.echo(f"Error: {target} does not exist", err=True)
        raise typer.Exit(1)
    if sort not in ("impact", "path"):
        typer.echo(f"Error: unknown sort order {sort!r} (use impact or path)", err=True)
        raise typer.Exit(1)

    config = ScanConfig(
        workers=max(1, workers),
        assets_root=assets_root,
        estimate_stretch=estimate_stretch,
        assumed_container_width=assumed_width,
        assumed_container_height=assumed_height,
        use_surface_scaler=not no_surface_scaler,
        sort_by_impact=sort == "impact",
    )
    if extensions:
        config.extensions = tuple(f".{e.strip().lstrip('.')}" for e in extensions.split(","))

    console.print(f"[bold]Auditing[/bold] {target} ...")
    result = run_audit(target, policy, config)

    meta = FindingsMeta(
        target=os.path.abspath(target),
        policy=policy.to_dict(),
        settings={
            "workers": config.workers,
            "estimate_stretch": config.estimate_stretch,
            "assumed_container": [config.assumed_container_width, config.assumed_container_height],
            "use_surface_scaler": config.use_surface_scaler,
            "sort": sort,
        },
        containers_found=result.containers_found,
        containers_processed=result.containers_processed,
        containers_failed=result.containers_failed,
        aborted=result.aborted,
        status=result.status,
        created_at=datetime.now(timezone.utc).isoformat(),
    )
    write_findings(output, meta, result.findings)

    console.print()
    console.print(f"[bold green]{result.status}[/bold green]")
    if result.containers_failed:
        console.print(f"  Failed containers: [red]{result.containers_failed:,}[/red]")
        for path, error in result.failures.items():
            console.print(f"    [dim]{path}: {error}[/dim]")
    console.print(f"  Findings: {output}")
    if result.aborted:
        console.print("\n[yellow]Aborted; partial results were saved.[/yellow]")
