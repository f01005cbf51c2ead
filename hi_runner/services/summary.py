"""One-page handover summary rendered from collected report files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from hi_common.errors import ReportError, wrap_error
from hi_runner.models.config import SUMMARY_FILE_NAME
from hi_runner.services import parsers
from hi_runner.services.parsers import NOT_AVAILABLE, or_na
from hi_runner.services.probes import (
    CPU_FILE,
    GPU_DETAILS_FILE,
    GPU_PLACEHOLDER,
    RAM_FILE,
    STORAGE_DISKS_FILE,
    SYSTEM_FILE,
)
from hi_runner.services.run_dir import RunDirectory

logger = logging.getLogger(__name__)

_BANNER = "=============================="


@dataclass(frozen=True)
class SummaryDocument:
    """Fields extracted for the summary; rendering is deterministic."""

    host: str
    timestamp: str
    directory_name: str
    cpu: parsers.CpuInfo = field(default_factory=parsers.CpuInfo)
    memory: parsers.MemoryInfo = field(default_factory=parsers.MemoryInfo)
    gpu: parsers.GpuInfo = field(default_factory=lambda: parsers.GpuInfo(available=True))
    disks: parsers.DiskCapacity = field(default_factory=parsers.DiskCapacity)
    os_name: str | None = None

    def _gpu_lines(self) -> list[str]:
        if not self.gpu.available:
            return [f"    - {GPU_PLACEHOLDER}"]
        if not self.gpu.models:
            return [f"    - {NOT_AVAILABLE}"]
        return [f"    - {model}" for model in self.gpu.models]

    def render(self) -> str:
        lines = [
            _BANNER,
            "SERVER HANDOVER - HARDWARE",
            _BANNER,
            "",
            f"Host:            {or_na(self.host)}",
            f"Timestamp (UTC): {or_na(self.timestamp)}",
            "",
            "CPU:",
            f"  Model:         {or_na(self.cpu.model)}",
            f"  Sockets:       {or_na(self.cpu.sockets)}",
            f"  Cores/Socket:  {or_na(self.cpu.cores_per_socket)}",
            f"  Threads/Core:  {or_na(self.cpu.threads_per_core)}",
            "",
            "RAM:",
            f"  Total:         {or_na(self.memory.total)}",
            "",
            "GPU:",
            f"  Count:         {or_na(self.gpu.count)}",
            "  Model(s):",
            *self._gpu_lines(),
            "",
            "Storage:",
            f"  Total raw capacity (all disks): {self.disks.render()}",
            "",
            "OS:",
            f"  {or_na(self.os_name)}",
            "",
            "See the individual reports in:",
            f"  {self.directory_name}/",
        ]
        return "\n".join(lines) + "\n"


def _read_report(directory: Path, name: str) -> str:
    path = directory / name
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        logger.debug("Report file %s missing", path)
        return ""
    except OSError as exc:
        raise wrap_error(
            ReportError, f"Cannot read report file: {exc}", context={"path": path}, cause=exc
        ) from exc


class SummaryBuilder:
    """Build the summary purely from the files of a run directory."""

    def build(self, run_dir: RunDirectory) -> SummaryDocument:
        directory = run_dir.path
        return SummaryDocument(
            host=run_dir.host,
            timestamp=run_dir.timestamp,
            directory_name=run_dir.name,
            cpu=parsers.parse_lscpu(_read_report(directory, CPU_FILE)),
            memory=parsers.parse_free_total(_read_report(directory, RAM_FILE)),
            gpu=parsers.parse_gpu_details(_read_report(directory, GPU_DETAILS_FILE)),
            disks=parsers.parse_disk_capacity(
                _read_report(directory, STORAGE_DISKS_FILE)
            ),
            os_name=parsers.parse_os_release(_read_report(directory, SYSTEM_FILE)),
        )

    def write(self, run_dir: RunDirectory, document: SummaryDocument) -> Path:
        path = run_dir.path / SUMMARY_FILE_NAME
        try:
            path.write_text(document.render(), encoding="utf-8")
        except OSError as exc:
            raise wrap_error(
                ReportError, f"Cannot write summary: {exc}", context={"path": path}, cause=exc
            ) from exc
        logger.info("Summary written to %s", path)
        return path

    def build_and_write(self, run_dir: RunDirectory) -> tuple[SummaryDocument, Path]:
        document = self.build(run_dir)
        return document, self.write(run_dir, document)
