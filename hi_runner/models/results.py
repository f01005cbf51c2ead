"""Dataclasses describing what an inventory run produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ProbeStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single probe; failures are values, never exceptions."""

    probe_id: str
    status: ProbeStatus
    output_path: Path
    error_path: Path
    returncode: Optional[int] = None
    diagnostic: str = ""
    duration_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.OK

    def to_dict(self) -> dict[str, Any]:
        return {
            "probe": self.probe_id,
            "status": self.status.value,
            "output": self.output_path.name,
            "returncode": self.returncode,
            "diagnostic": self.diagnostic,
            "duration_s": round(self.duration_s, 3),
        }


class ArchiveKind(str, Enum):
    FULL = "full"
    LIGHT = "light"


@dataclass(frozen=True)
class Archive:
    kind: ArchiveKind
    path: Path
    size_bytes: int


class AttachmentMode(str, Enum):
    SUMMARY_FULL = "summary+full"
    SUMMARY_LIGHT = "summary+light"
    SUMMARY_ONLY = "summary-only"


@dataclass(frozen=True)
class AttachmentSelection:
    """Files to attach; the summary is always first."""

    mode: AttachmentMode
    files: tuple[Path, ...]


@dataclass
class RunOutcome:
    """Everything a single run produced."""

    run_dir: Path
    host: str
    timestamp: str
    probes: list[ProbeResult] = field(default_factory=list)
    summary_path: Optional[Path] = None
    full_archive: Optional[Archive] = None
    light_archive: Optional[Archive] = None
    selection: Optional[AttachmentSelection] = None
    delivered: bool = False

    @property
    def failed_probes(self) -> list[ProbeResult]:
        return [p for p in self.probes if p.status is ProbeStatus.FAILED]

    @property
    def skipped_probes(self) -> list[ProbeResult]:
        return [p for p in self.probes if p.status is ProbeStatus.SKIPPED]
