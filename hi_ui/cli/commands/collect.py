from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from hi_common.errors import DeliveryError, HandoverError
from hi_runner.models.config import load_config
from hi_notify.mailer import HandoverMailer
from hi_runner.services.pipeline import InventoryPipeline
from hi_ui.cli.context import CLIContext, password_source
from hi_ui.presenter import render_outcome


def register_collect_command(app: typer.Typer, ctx: CLIContext) -> None:
    """Attach the `collect` command to the root app."""

    @app.command("collect")
    def collect(
        config: Optional[Path] = typer.Option(
            None, "--config", "-c", help="YAML or JSON config file."
        ),
        output_dir: Optional[Path] = typer.Option(
            None, "--output-dir", "-o", help="Where the run directory and archives are created."
        ),
        no_mail: bool = typer.Option(False, "--no-mail", help="Collect and archive only."),
        no_light: bool = typer.Option(False, "--no-light", help="Skip the light archive."),
        probe_timeout: Optional[float] = typer.Option(
            None, "--probe-timeout", min=0.1, help="Per-probe timeout in seconds."
        ),
        password_stdin: bool = typer.Option(
            False, "--password-stdin", help="Read the SMTP password from stdin."
        ),
    ) -> None:
        """Collect the host inventory, summarize, archive and mail it."""
        presenter = ctx.presenter
        try:
            cfg = load_config(config)
            updates: dict = {}
            if output_dir is not None:
                updates["output_root"] = output_dir
            if no_light:
                updates["build_light_archive"] = False
            if probe_timeout is not None:
                updates["probe_timeout_seconds"] = probe_timeout
            if no_mail:
                updates["mail"] = cfg.mail.model_copy(update={"enabled": False})
            cfg = cfg.model_copy(update=updates)

            pipeline = InventoryPipeline(cfg)
            pipeline.ensure_privileges()
            presenter.rule("Collecting inventory")
            outcome = pipeline.run(
                progress=lambda probe, result: presenter.info(
                    f"{probe.probe_id}: {result.status.value}"
                ),
            )
            render_outcome(presenter, outcome)
            if cfg.mail.enabled:
                HandoverMailer(cfg).deliver(
                    outcome, password_source(cfg.mail.user, password_stdin)
                )
        except DeliveryError as exc:
            presenter.failure(exc)
            presenter.warning("Collected data was kept; retry with `handover send <run dir>`.")
            raise typer.Exit(1)
        except HandoverError as exc:
            presenter.failure(exc)
            raise typer.Exit(1)

        if outcome.delivered:
            presenter.success(f"Mail sent to {cfg.mail.recipient}")
        presenter.success("Done.")
