"""
Command-line interface for the server handover inventory.

Collects hardware/OS inventory into a report directory, renders a summary,
archives the results and mails them to the handover contact.
"""

from __future__ import annotations

import typer

from hi_common.logging import configure_logging
from hi_ui.cli.commands.collect import register_collect_command
from hi_ui.cli.commands.doctor import register_doctor_command
from hi_ui.cli.commands.send import register_send_command
from hi_ui.cli.commands.summarize import register_summarize_command
from hi_ui.cli.context import CLIContext

ctx_store = CLIContext()

app = typer.Typer(help="Collect a server handover inventory and mail it.", no_args_is_help=True)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON."),
) -> None:
    """Global options."""
    configure_logging(debug=debug, json=json_logs or None, force=True)


register_collect_command(app, ctx_store)
register_summarize_command(app, ctx_store)
register_send_command(app, ctx_store)
register_doctor_command(app, ctx_store)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
