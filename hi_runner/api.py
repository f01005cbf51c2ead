"""Stable runner API surface."""

from hi_runner.models.config import (
    DEFAULT_LIGHT_ARCHIVE_FILES,
    SUMMARY_FILE_NAME,
    InventoryConfig,
    MailConfig,
    load_config,
)
from hi_runner.models.results import (
    Archive,
    ArchiveKind,
    AttachmentMode,
    AttachmentSelection,
    ProbeResult,
    ProbeStatus,
    RunOutcome,
)
from hi_runner.services.archiver import Archiver
from hi_runner.services.attachments import choose, select_attachments
from hi_runner.services.collector import ReportCollector
from hi_runner.services.command_runner import CommandRunner
from hi_runner.services.doctor import DoctorReport, DoctorService
from hi_runner.services.pipeline import InventoryPipeline
from hi_runner.services.probes import DEFAULT_PROBES, Probe
from hi_runner.services.run_dir import RunDirectory, parse_run_directory
from hi_runner.services.summary import SummaryBuilder, SummaryDocument

__all__ = [
    "DEFAULT_LIGHT_ARCHIVE_FILES",
    "DEFAULT_PROBES",
    "SUMMARY_FILE_NAME",
    "Archive",
    "ArchiveKind",
    "Archiver",
    "AttachmentMode",
    "AttachmentSelection",
    "CommandRunner",
    "DoctorReport",
    "DoctorService",
    "InventoryConfig",
    "InventoryPipeline",
    "MailConfig",
    "Probe",
    "ProbeResult",
    "ProbeStatus",
    "ReportCollector",
    "RunDirectory",
    "RunOutcome",
    "SummaryBuilder",
    "SummaryDocument",
    "choose",
    "load_config",
    "parse_run_directory",
    "select_attachments",
]
