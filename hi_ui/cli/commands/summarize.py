from __future__ import annotations

from pathlib import Path

import typer

from hi_common.errors import HandoverError
from hi_runner.services.run_dir import parse_run_directory
from hi_runner.services.summary import SummaryBuilder
from hi_ui.cli.context import CLIContext


def register_summarize_command(app: typer.Typer, ctx: CLIContext) -> None:
    """Attach the `summarize` command to the root app."""

    @app.command("summarize")
    def summarize(
        run_dir: Path = typer.Argument(..., help="Existing handover_<host>_<timestamp> directory."),
        prefix: str = typer.Option("handover", "--prefix", help="Run directory name prefix."),
    ) -> None:
        """Rebuild the summary of an existing run and print it."""
        try:
            target = parse_run_directory(run_dir, prefix)
            document, path = SummaryBuilder().build_and_write(target)
        except HandoverError as exc:
            ctx.presenter.failure(exc)
            raise typer.Exit(1)
        ctx.presenter.console.print(document.render(), markup=False, highlight=False, end="")
        ctx.presenter.success(f"Summary written to {path}")
