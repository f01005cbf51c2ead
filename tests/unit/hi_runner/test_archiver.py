"""Full and light archives of a run directory."""

from __future__ import annotations

import tarfile

import pytest

from hi_common.errors import ArchiveError
from hi_runner.models.results import ArchiveKind
from hi_runner.services import archiver as archiver_module
from hi_runner.services.archiver import Archiver, existing_archive
from hi_runner.services.run_dir import RunDirectory

pytestmark = pytest.mark.unit_runner


def _write(run_dir: RunDirectory, *names: str) -> None:
    for name in names:
        (run_dir.path / name).write_text(f"content of {name}\n")


def test_full_archive_contains_directory(run_dir: RunDirectory) -> None:
    _write(run_dir, "10_cpu.txt", "10_cpu.txt.err", "40_pci.txt")

    archive = Archiver().package_full(run_dir)

    assert archive.kind is ArchiveKind.FULL
    assert archive.path == run_dir.path.parent / f"{run_dir.name}.tar.gz"
    assert archive.size_bytes == archive.path.stat().st_size > 0
    with tarfile.open(archive.path, "r:gz") as tar:
        names = set(tar.getnames())
    assert f"{run_dir.name}/10_cpu.txt" in names
    assert f"{run_dir.name}/40_pci.txt" in names


def test_light_archive_keeps_subset_and_omits_missing(run_dir: RunDirectory) -> None:
    _write(run_dir, "10_cpu.txt", "40_pci.txt")

    archive = Archiver().package_light(run_dir, ["10_cpu.txt", "55_smart.txt"])

    assert archive is not None
    assert archive.kind is ArchiveKind.LIGHT
    assert archive.path.name == f"{run_dir.name}_light.tar.gz"
    with tarfile.open(archive.path, "r:gz") as tar:
        assert tar.getnames() == ["10_cpu.txt"]


def test_light_archive_without_any_file_is_none(run_dir: RunDirectory) -> None:
    assert Archiver().package_light(run_dir, ["missing.txt"]) is None
    assert not run_dir.light_archive_path.exists()


def test_tar_failure_raises_archive_error(
    run_dir: RunDirectory, monkeypatch: pytest.MonkeyPatch
) -> None:
    def boom(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(archiver_module.tarfile, "open", boom)

    with pytest.raises(ArchiveError) as excinfo:
        Archiver().package_full(run_dir)
    assert "disk full" in str(excinfo.value)


def test_existing_archive(run_dir: RunDirectory) -> None:
    assert existing_archive(run_dir.full_archive_path, ArchiveKind.FULL) is None
    run_dir.full_archive_path.write_bytes(b"x" * 10)
    found = existing_archive(run_dir.full_archive_path, ArchiveKind.FULL)
    assert found is not None and found.size_bytes == 10
