"""Packaging of a run directory into compressed tarballs."""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path
from typing import Iterable

from hi_common.errors import ArchiveError
from hi_runner.models.results import Archive, ArchiveKind
from hi_runner.services.run_dir import RunDirectory

logger = logging.getLogger(__name__)


class Archiver:
    """Build the full archive and the curated light archive of a run."""

    def package_full(self, run_dir: RunDirectory) -> Archive:
        """Compress the whole directory, keeping it as the top-level member."""
        target = run_dir.full_archive_path
        try:
            with tarfile.open(target, "w:gz") as tar:
                tar.add(run_dir.path, arcname=run_dir.name)
        except (OSError, tarfile.TarError) as exc:
            raise ArchiveError(
                f"Failed to build full archive: {exc}",
                context={"archive": target, "directory": run_dir.path},
                cause=exc,
            ) from exc
        archive = Archive(ArchiveKind.FULL, target, target.stat().st_size)
        logger.info("Full archive %s (%d bytes)", target, archive.size_bytes)
        return archive

    def package_light(
        self, run_dir: RunDirectory, files: Iterable[str]
    ) -> Archive | None:
        """Compress a curated subset; files that were not produced are skipped.

        Returns None when none of the requested files exist.
        """
        present: list[Path] = []
        for name in files:
            path = run_dir.path / name
            if path.is_file():
                present.append(path)
            else:
                logger.debug("Light archive: %s not present, omitted", name)
        if not present:
            return None

        target = run_dir.light_archive_path
        try:
            with tarfile.open(target, "w:gz") as tar:
                for path in present:
                    tar.add(path, arcname=path.name)
        except (OSError, tarfile.TarError) as exc:
            raise ArchiveError(
                f"Failed to build light archive: {exc}",
                context={"archive": target, "directory": run_dir.path},
                cause=exc,
            ) from exc
        archive = Archive(ArchiveKind.LIGHT, target, target.stat().st_size)
        logger.info("Light archive %s (%d bytes)", target, archive.size_bytes)
        return archive


def existing_archive(path: Path, kind: ArchiveKind) -> Archive | None:
    """Describe an archive left on disk by an earlier run, if any."""
    if not path.is_file():
        return None
    return Archive(kind, path, path.stat().st_size)
