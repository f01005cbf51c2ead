"""Rich console presentation for the handover CLI."""

from __future__ import annotations

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

from hi_common.errors import HandoverError
from hi_runner.models.results import ProbeStatus, RunOutcome
from hi_runner.services.doctor import DoctorReport

_LEVEL_TEMPLATES = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

_STATUS_STYLE = {
    ProbeStatus.OK: "[green]ok[/green]",
    ProbeStatus.FAILED: "[red]failed[/red]",
    ProbeStatus.SKIPPED: "[yellow]skipped[/yellow]",
}


class RichPresenter:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _emit(self, level: str, message: str) -> None:
        template = _LEVEL_TEMPLATES.get(level, "{message}")
        self.console.print(template.format(message=message))

    def info(self, message: str) -> None:
        self._emit("info", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def rule(self, title: str) -> None:
        self.console.print(Rule(title))

    def failure(self, error: HandoverError) -> None:
        """Show a typed error with the context an operator needs to retry."""
        self.error(f"{error.error_type}: {error}")
        for key, value in error.context.items():
            if value is None:
                continue
            self.console.print(f"    {key}: {value}", markup=False, highlight=False)


def render_doctor_report(presenter: RichPresenter, report: DoctorReport) -> bool:
    """
    Render a doctor report.

    Returns True when all required checks passed.
    """
    for group in report.groups:
        table = Table(title=group.title, show_lines=False, header_style="bold cyan")
        table.add_column("Item")
        table.add_column("Status", justify="center")
        table.add_column("Required", justify="center")
        table.add_column("Package")
        for item in group.items:
            table.add_row(
                item.label,
                "✓" if item.ok else "✗",
                "yes" if item.required else "no",
                item.package,
            )
        presenter.console.print(table)

    for msg in report.info_messages:
        presenter.info(msg)

    if report.total_failures > 0:
        presenter.error(f"Found {report.total_failures} failures.")
        return False

    presenter.success("All checks passed.")
    return True


def render_outcome(presenter: RichPresenter, outcome: RunOutcome) -> None:
    table = Table(title="Probes", header_style="bold cyan")
    table.add_column("Probe")
    table.add_column("File")
    table.add_column("Status", justify="center")
    table.add_column("Detail")
    for result in outcome.probes:
        table.add_row(
            result.probe_id,
            result.output_path.name,
            _STATUS_STYLE[result.status],
            result.diagnostic,
        )
    if outcome.probes:
        presenter.console.print(table)
    if outcome.failed_probes or outcome.skipped_probes:
        presenter.warning(
            f"{len(outcome.failed_probes)} probe(s) failed, "
            f"{len(outcome.skipped_probes)} skipped; see the .err files"
        )

    presenter.info(f"Report directory: {outcome.run_dir}")
    if outcome.summary_path:
        presenter.info(f"Summary: {outcome.summary_path}")
    for archive in (outcome.full_archive, outcome.light_archive):
        if archive is not None:
            presenter.info(
                f"{archive.kind.value.capitalize()} archive: {archive.path} ({archive.size_bytes} bytes)"
            )
    if outcome.selection is not None:
        presenter.info(f"Attachment mode: {outcome.selection.mode.value}")
