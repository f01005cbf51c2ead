from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from hi_common.errors import HandoverError
from hi_notify.mailer import HandoverMailer
from hi_runner.models.config import load_config
from hi_runner.services.pipeline import InventoryPipeline
from hi_runner.services.run_dir import parse_run_directory
from hi_ui.cli.context import CLIContext, password_source


def register_send_command(app: typer.Typer, ctx: CLIContext) -> None:
    """Attach the `send` command to the root app."""

    @app.command("send")
    def send(
        run_dir: Path = typer.Argument(..., help="Existing handover_<host>_<timestamp> directory."),
        config: Optional[Path] = typer.Option(
            None, "--config", "-c", help="YAML or JSON config file."
        ),
        password_stdin: bool = typer.Option(
            False, "--password-stdin", help="Read the SMTP password from stdin."
        ),
    ) -> None:
        """Mail the results of an earlier run again."""
        presenter = ctx.presenter
        try:
            cfg = load_config(config)
            target = parse_run_directory(run_dir, cfg.dir_prefix)
            pipeline = InventoryPipeline(cfg)
            outcome = pipeline.resume(target)
            assert outcome.selection is not None
            presenter.info(f"Attachment mode: {outcome.selection.mode.value}")
            HandoverMailer(cfg).deliver(outcome, password_source(cfg.mail.user, password_stdin))
        except HandoverError as exc:
            presenter.failure(exc)
            raise typer.Exit(1)
        presenter.success(f"Mail sent to {cfg.mail.recipient}")
