"""Root Typer app with global options."""

from __future__ import annotations

from typing import Optional

import typer

from uiaudit.cli.export import export_app
from uiaudit.cli.policy import policy_app

app = typer.Typer(
    name="uiaudit",
    help="Audit UI texture resolution against a target display resolution.",
    no_args_is_help=True,
)
app.add_typer(export_app, name="export", help="Export findings to other formats.")
app.add_typer(policy_app, name="policy", help="Create and inspect sizing policies.")


def _version_callback(value: bool) -> None:
    if value:
        from uiaudit import __version__

        typer.echo(f"uiaudit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version."
    ),
) -> None:
    """uiaudit: UI texture resolution audit."""


# Import and register commands
from uiaudit.cli.scan import scan  # noqa: E402
from uiaudit.cli.report import report, info  # noqa: E402
from uiaudit.cli.labels import labels  # noqa: E402

app.command()(scan)
app.command()(info)
app.command()(report)
app.command()(labels)
