"""Report collection: runs every probe once, in order."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable, Optional

from hi_runner.models.results import ProbeResult, ProbeStatus
from hi_runner.services.command_runner import CommandRunner
from hi_runner.services.probes import DEFAULT_PROBES, Probe

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Probe, ProbeResult], None]


class ReportCollector:
    """Orchestrates the ordered probe set for a single run."""

    def __init__(
        self,
        runner: CommandRunner,
        probes: Iterable[Probe] = DEFAULT_PROBES,
        which: Callable[[str], Optional[str]] = shutil.which,
    ) -> None:
        self.runner = runner
        self.probes = tuple(probes)
        self._which = which

    def collect(
        self, directory: Path, progress: ProgressCallback | None = None
    ) -> list[ProbeResult]:
        results: list[ProbeResult] = []
        for probe in self.probes:
            if probe.requires and self._which(probe.requires) is None:
                logger.info(
                    "Skipping probe %s: %s not available", probe.probe_id, probe.requires
                )
                result = self.runner.write_placeholder(probe, directory)
            else:
                logger.debug("Running probe %s", probe.probe_id)
                result = self.runner.run(probe, directory)
            if not result.ok:
                logger.debug(
                    "Probe %s did not succeed",
                    probe.probe_id,
                    extra={"probe_result": result.to_dict()},
                )
            results.append(result)
            if progress is not None:
                progress(probe, result)

        failed = sum(1 for r in results if r.status is ProbeStatus.FAILED)
        logger.info(
            "Collected %d probes into %s (%d failed)", len(results), directory, failed
        )
        return results
