"""Attachment fallback full -> light -> summary only."""

from __future__ import annotations

from pathlib import Path

import pytest

from hi_runner.models.results import Archive, ArchiveKind, AttachmentMode
from hi_runner.services.attachments import choose, select_attachments

pytestmark = pytest.mark.unit_runner

MIB = 1024 * 1024
CEILING = 10 * MIB


@pytest.mark.parametrize(
    ("full", "light", "expected"),
    [
        (5 * MIB, 2 * MIB, AttachmentMode.SUMMARY_FULL),
        (5 * MIB, None, AttachmentMode.SUMMARY_FULL),
        (15 * MIB, 2 * MIB, AttachmentMode.SUMMARY_LIGHT),
        (50 * MIB, 20 * MIB, AttachmentMode.SUMMARY_ONLY),
        (CEILING, None, AttachmentMode.SUMMARY_FULL),
        (CEILING + 1, CEILING, AttachmentMode.SUMMARY_LIGHT),
        (0, 2 * MIB, AttachmentMode.SUMMARY_LIGHT),
        (None, None, AttachmentMode.SUMMARY_ONLY),
        (15 * MIB, 0, AttachmentMode.SUMMARY_ONLY),
    ],
)
def test_choose(full, light, expected) -> None:
    assert choose(full, light, CEILING) is expected


def test_default_ceiling_is_ten_mib() -> None:
    assert choose(10 * MIB, None) is AttachmentMode.SUMMARY_FULL
    assert choose(10 * MIB + 1, None) is AttachmentMode.SUMMARY_ONLY


def test_select_attachments_always_starts_with_summary(tmp_path: Path) -> None:
    summary = tmp_path / "summary.txt"
    full = Archive(ArchiveKind.FULL, tmp_path / "run.tar.gz", 15 * MIB)
    light = Archive(ArchiveKind.LIGHT, tmp_path / "run_light.tar.gz", 2 * MIB)

    selection = select_attachments(summary, full, light, CEILING)
    assert selection.mode is AttachmentMode.SUMMARY_LIGHT
    assert selection.files == (summary, light.path)

    selection = select_attachments(summary, None, None, CEILING)
    assert selection.mode is AttachmentMode.SUMMARY_ONLY
    assert selection.files == (summary,)

    small_full = Archive(ArchiveKind.FULL, tmp_path / "run.tar.gz", MIB)
    selection = select_attachments(summary, small_full, light, CEILING)
    assert selection.files == (summary, small_full.path)
