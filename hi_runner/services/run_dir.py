"""Helpers for run directory and identifier management."""

from __future__ import annotations

import logging
import re
import socket
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from hi_common.errors import ConfigurationError, ReportError, wrap_error

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H%M%SZ"
_MAX_COLLISION_SUFFIX = 1000


@dataclass(frozen=True)
class RunDirectory:
    """Per-run container of probe outputs, named by host and UTC timestamp."""

    path: Path
    host: str
    timestamp: str

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def full_archive_path(self) -> Path:
        return self.path.parent / f"{self.name}.tar.gz"

    @property
    def light_archive_path(self) -> Path:
        return self.path.parent / f"{self.name}_light.tar.gz"

    @property
    def mail_log_path(self) -> Path:
        return self.path / "mail.log"


def generate_timestamp(now: datetime | None = None) -> str:
    """Generate the second-resolution UTC stamp used in directory names."""
    return (now or datetime.now(UTC)).strftime(TIMESTAMP_FORMAT)


def short_hostname() -> str:
    return socket.gethostname().split(".", 1)[0] or "localhost"


def create_run_directory(
    root: Path,
    prefix: str,
    host: str,
    timestamp: str,
) -> RunDirectory:
    """Create a fresh run directory; never reuse an existing one.

    Two runs in the same second on the same host get ``-1``, ``-2``, ...
    appended to the second one's directory name.
    """
    base = f"{prefix}_{host}_{timestamp}"
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise wrap_error(
            ReportError,
            f"Cannot create output directory: {exc}",
            context={"root": root},
            cause=exc,
        ) from exc
    for attempt in range(_MAX_COLLISION_SUFFIX):
        name = base if attempt == 0 else f"{base}-{attempt}"
        candidate = root / name
        try:
            candidate.mkdir()
        except FileExistsError:
            logger.debug("Run directory %s already exists", candidate)
            continue
        except OSError as exc:
            raise wrap_error(
                ReportError,
                f"Cannot create run directory: {exc}",
                context={"path": candidate},
                cause=exc,
            ) from exc
        return RunDirectory(path=candidate.resolve(), host=host, timestamp=timestamp)
    raise ReportError(
        "Could not allocate a unique run directory",
        context={"root": root, "base": base},
    )


def parse_run_directory(path: Path, prefix: str = "handover") -> RunDirectory:
    """Recover host and timestamp from an existing run directory name."""
    pattern = re.compile(
        rf"^{re.escape(prefix)}_(?P<host>.+)_(?P<stamp>\d{{4}}-\d{{2}}-\d{{2}}T\d{{6}}Z)(?:-\d+)?$"
    )
    match = pattern.match(path.name)
    if not match or not path.is_dir():
        raise ConfigurationError(
            "Not a run directory", context={"path": path, "prefix": prefix}
        )
    return RunDirectory(
        path=path.resolve(), host=match.group("host"), timestamp=match.group("stamp")
    )
