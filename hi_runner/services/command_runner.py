"""Best-effort execution of probe commands into report files."""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path
from typing import Optional

from hi_common.errors import ProbeError
from hi_runner.models.results import ProbeResult, ProbeStatus
from hi_runner.services.probes import Probe

logger = logging.getLogger(__name__)


def _resolve_shell() -> Optional[str]:
    return shutil.which("bash")


class CommandRunner:
    """Run a probe command, capturing stdout and stderr into sibling files.

    A non-zero exit status or a launch failure never propagates: it is
    reported through the returned ProbeResult and the ``.err`` file.
    """

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self.timeout_seconds = timeout_seconds
        self._shell = _resolve_shell()

    def run(self, probe: Probe, directory: Path) -> ProbeResult:
        output_path = directory / probe.output_name
        error_path = directory / probe.error_name
        started = time.monotonic()
        try:
            returncode = self._execute(probe.command, output_path, error_path)
        except ProbeError as exc:
            logger.warning("Probe %s failed: %s", probe.probe_id, exc)
            with error_path.open("a", encoding="utf-8") as err:
                err.write(f"{exc}\n")
            return ProbeResult(
                probe_id=probe.probe_id,
                status=ProbeStatus.FAILED,
                output_path=output_path,
                error_path=error_path,
                diagnostic=str(exc),
                duration_s=time.monotonic() - started,
            )

        duration = time.monotonic() - started
        if returncode != 0:
            logger.info(
                "Probe %s exited with status %s", probe.probe_id, returncode
            )
            return ProbeResult(
                probe_id=probe.probe_id,
                status=ProbeStatus.FAILED,
                output_path=output_path,
                error_path=error_path,
                returncode=returncode,
                diagnostic=f"exit status {returncode}",
                duration_s=duration,
            )
        return ProbeResult(
            probe_id=probe.probe_id,
            status=ProbeStatus.OK,
            output_path=output_path,
            error_path=error_path,
            returncode=returncode,
            duration_s=duration,
        )

    def write_placeholder(self, probe: Probe, directory: Path) -> ProbeResult:
        """Stand in for a probe whose required tool is missing."""
        output_path = directory / probe.output_name
        error_path = directory / probe.error_name
        output_path.write_text(f"{probe.placeholder}\n", encoding="utf-8")
        error_path.write_text("", encoding="utf-8")
        return ProbeResult(
            probe_id=probe.probe_id,
            status=ProbeStatus.SKIPPED,
            output_path=output_path,
            error_path=error_path,
            diagnostic=f"{probe.requires} not found in PATH",
        )

    def _execute(self, command: str, output_path: Path, error_path: Path) -> int:
        with output_path.open("wb") as out, error_path.open("wb") as err:
            out.write(f"### CMD: {command}\n\n".encode("utf-8"))
            out.flush()
            try:
                completed = subprocess.run(
                    command,
                    shell=True,
                    executable=self._shell,
                    stdin=subprocess.DEVNULL,
                    stdout=out,
                    stderr=err,
                    check=False,
                    timeout=self.timeout_seconds,
                )
            except subprocess.TimeoutExpired as exc:
                raise ProbeError(
                    f"timed out after {self.timeout_seconds}s",
                    context={"command": command},
                    cause=exc,
                ) from exc
            except OSError as exc:
                raise ProbeError(
                    f"could not start command: {exc}",
                    context={"command": command},
                    cause=exc,
                ) from exc
        return completed.returncode
