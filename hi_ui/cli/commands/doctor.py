from __future__ import annotations

import typer

from hi_ui.cli.context import CLIContext
from hi_ui.presenter import render_doctor_report


def register_doctor_command(app: typer.Typer, ctx: CLIContext) -> None:
    """Attach the `doctor` command to the root app."""

    @app.command("doctor")
    def doctor() -> None:
        """Check which inventory tools are installed."""
        report = ctx.doctor_service.check_tools()
        ok = render_doctor_report(ctx.presenter, report)
        if not ok:
            raise typer.Exit(1)
