from __future__ import annotations

import pytest

from hi_runner.services.doctor import DoctorService
from hi_runner.services.probes import PROBE_TOOLS

pytestmark = pytest.mark.unit_runner


def test_all_tools_present_as_root() -> None:
    service = DoctorService(which=lambda name: f"/usr/bin/{name}", geteuid=lambda: 0)

    report = service.check_tools()

    assert report.total_failures == 0
    tools = report.groups[0]
    assert {item.label for item in tools.items} == set(PROBE_TOOLS)
    assert all(item.ok for item in tools.items)
    assert not any("sudo" in msg for msg in report.info_messages)


def test_missing_required_tool_counts_as_failure() -> None:
    missing = {"dmidecode", "nvidia-smi"}
    service = DoctorService(
        which=lambda name: None if name in missing else f"/usr/bin/{name}",
        geteuid=lambda: 1000,
    )

    report = service.check_tools()

    # nvidia-smi is optional and privileges are informational
    assert report.total_failures == 1
    dmidecode = next(i for i in report.groups[0].items if i.label == "dmidecode")
    assert dmidecode.ok is False
    assert dmidecode.package == "dmidecode"
    assert any("sudo" in msg for msg in report.info_messages)
