"""Inventory run: collect, summarize, archive and choose attachments."""

from __future__ import annotations

import logging
import os
from typing import Callable

from hi_common.errors import ArchiveError, PrivilegeError, error_to_payload
from hi_runner.models.config import SUMMARY_FILE_NAME, InventoryConfig
from hi_runner.models.results import ArchiveKind, RunOutcome
from hi_runner.services.archiver import Archiver, existing_archive
from hi_runner.services.attachments import select_attachments
from hi_runner.services.collector import ProgressCallback, ReportCollector
from hi_runner.services.command_runner import CommandRunner
from hi_runner.services.run_dir import (
    RunDirectory,
    create_run_directory,
    generate_timestamp,
    short_hostname,
)
from hi_runner.services.summary import SummaryBuilder

logger = logging.getLogger(__name__)


class InventoryPipeline:
    """Strictly sequential run over a single report directory."""

    def __init__(
        self,
        config: InventoryConfig,
        *,
        collector: ReportCollector | None = None,
        summary_builder: SummaryBuilder | None = None,
        archiver: Archiver | None = None,
        geteuid: Callable[[], int] | None = None,
        hostname: Callable[[], str] = short_hostname,
        clock: Callable[[], str] = generate_timestamp,
    ) -> None:
        self.config = config
        self.collector = collector or ReportCollector(
            CommandRunner(timeout_seconds=config.probe_timeout_seconds)
        )
        self.summary_builder = summary_builder or SummaryBuilder()
        self.archiver = archiver or Archiver()
        self._geteuid = geteuid or os.geteuid
        self._hostname = hostname
        self._clock = clock

    def ensure_privileges(self) -> None:
        if self.config.require_root and self._geteuid() != 0:
            raise PrivilegeError(
                "Root privileges are required (run with sudo)",
                context={"euid": self._geteuid()},
            )

    def run(self, progress: ProgressCallback | None = None) -> RunOutcome:
        """Execute a full run.

        Raises PrivilegeError before anything is written. Probe and archive
        failures are recorded in the outcome and never abort the run.
        """
        self.ensure_privileges()
        run_dir = create_run_directory(
            self.config.output_root,
            self.config.dir_prefix,
            self._hostname(),
            self._clock(),
        )
        logger.info("Collecting inventory into %s", run_dir.path)
        outcome = RunOutcome(
            run_dir=run_dir.path, host=run_dir.host, timestamp=run_dir.timestamp
        )
        outcome.probes = self.collector.collect(run_dir.path, progress)
        _, outcome.summary_path = self.summary_builder.build_and_write(run_dir)
        self._package(run_dir, outcome)
        self._select(outcome)
        return outcome

    def resume(self, run_dir: RunDirectory) -> RunOutcome:
        """Reconstruct the outcome of an earlier run from what is on disk."""
        outcome = RunOutcome(
            run_dir=run_dir.path, host=run_dir.host, timestamp=run_dir.timestamp
        )
        summary_path = run_dir.path / SUMMARY_FILE_NAME
        if not summary_path.is_file():
            _, summary_path = self.summary_builder.build_and_write(run_dir)
        outcome.summary_path = summary_path
        outcome.full_archive = existing_archive(run_dir.full_archive_path, ArchiveKind.FULL)
        outcome.light_archive = existing_archive(
            run_dir.light_archive_path, ArchiveKind.LIGHT
        )
        self._select(outcome)
        return outcome

    def _package(self, run_dir: RunDirectory, outcome: RunOutcome) -> None:
        try:
            outcome.full_archive = self.archiver.package_full(run_dir)
        except ArchiveError as exc:
            logger.warning("Full archive unavailable: %s", exc, extra=error_to_payload(exc))
        if not self.config.build_light_archive:
            return
        try:
            outcome.light_archive = self.archiver.package_light(
                run_dir, self.config.light_archive_files
            )
        except ArchiveError as exc:
            logger.warning("Light archive unavailable: %s", exc, extra=error_to_payload(exc))

    def _select(self, outcome: RunOutcome) -> None:
        assert outcome.summary_path is not None
        outcome.selection = select_attachments(
            outcome.summary_path,
            outcome.full_archive,
            outcome.light_archive,
            self.config.max_attach_bytes,
        )
        logger.info("Attachment mode: %s", outcome.selection.mode.value)
