"""uiaudit policy command group."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from uiaudit.core.projector import max_display_for_label, required_for_label, scale_to_top
from uiaudit.models.policy import Policy, PolicyError, dump_policy, load_policy

policy_app = typer.Typer(help="Create and inspect sizing policies.")
console = Console()


@policy_app.command()
def init(
    output: str = typer.Option("./uiaudit_policy.yaml", "-o", "--out", help="Policy YAML path"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write the default sizing policy as YAML."""
    if Path(output).exists() and not force:
        console.print(f"[red]{output} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    dump_policy(Policy(), output)
    console.print(f"[green]Wrote default policy to {output}[/green]")


@policy_app.command()
def show(
    policy_path: str = typer.Argument(..., help="Policy YAML path"),
) -> None:
    """Show a policy's rules with their display and required sizes."""
    try:
        policy = load_policy(policy_path)
    except PolicyError as e:
        console.print(f"[red]Invalid policy: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"Top {policy.top_width}x{policy.top_height}, "
        f"reference {policy.reference_width}x{policy.reference_height}, "
        f"match {policy.match:.2f} → scale x{scale_to_top(policy):.2f}"
    )

    table = Table(title="Rules", border_style="blue")
    table.add_column("Label", style="bold")
    table.add_column("Logical", justify="right")
    table.add_column("Display @Top", justify="right")
    table.add_column("Required", justify="right")

    for rule in policy.rules:
        display = max_display_for_label(policy, rule.label)
        required = required_for_label(policy, rule.label)
        if display is None or required is None:
            continue
        table.add_row(
            rule.label,
            f"{rule.logical_width}x{rule.effective_logical_height}",
            f"{display[0]}x{display[1]}",
            f"{required[0]}x{required[1]}",
        )

    console.print(table)
