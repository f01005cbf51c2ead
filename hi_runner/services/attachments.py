"""Size-based choice of the artifacts that accompany the notification."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from hi_runner.models.results import Archive, AttachmentMode, AttachmentSelection

DEFAULT_MAX_ATTACH_BYTES = 10 * 1024 * 1024


def _fits(size: Optional[int], ceiling: int) -> bool:
    return size is not None and 0 < size <= ceiling


def choose(
    full_size: Optional[int],
    light_size: Optional[int],
    ceiling: int = DEFAULT_MAX_ATTACH_BYTES,
) -> AttachmentMode:
    """Fall back full -> light -> summary only.

    A size of None or 0 means the archive does not exist.
    """
    if _fits(full_size, ceiling):
        return AttachmentMode.SUMMARY_FULL
    if _fits(light_size, ceiling):
        return AttachmentMode.SUMMARY_LIGHT
    return AttachmentMode.SUMMARY_ONLY


def select_attachments(
    summary_path: Path,
    full: Archive | None,
    light: Archive | None,
    ceiling: int = DEFAULT_MAX_ATTACH_BYTES,
) -> AttachmentSelection:
    mode = choose(
        full.size_bytes if full else None,
        light.size_bytes if light else None,
        ceiling,
    )
    files: tuple[Path, ...] = (summary_path,)
    if mode is AttachmentMode.SUMMARY_FULL and full is not None:
        files += (full.path,)
    elif mode is AttachmentMode.SUMMARY_LIGHT and light is not None:
        files += (light.path,)
    return AttachmentSelection(mode=mode, files=files)
