"""
Service for checking which inventory tools are available on this host.
"""

from __future__ import annotations

import os
import platform
import shutil
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from hi_runner.services.probes import PROBE_TOOLS


@dataclass
class DoctorCheckItem:
    label: str
    ok: bool
    required: bool
    package: str = ""


@dataclass
class DoctorCheckGroup:
    title: str
    items: List[DoctorCheckItem]
    failures: int


@dataclass
class DoctorReport:
    groups: List[DoctorCheckGroup]
    info_messages: List[str]
    total_failures: int


class DoctorService:
    """Check local prerequisites for an inventory run."""

    def __init__(
        self,
        which: Callable[[str], Optional[str]] = shutil.which,
        geteuid: Callable[[], int] | None = None,
    ) -> None:
        self._which = which
        self._geteuid = geteuid or os.geteuid

    def _check_command(self, name: str) -> bool:
        return self._which(name) is not None

    def _build_check_group(
        self, title: str, items: List[Tuple[str, bool, bool, str]]
    ) -> DoctorCheckGroup:
        failures = 0
        check_items = []
        for label, ok, required, package in items:
            check_items.append(DoctorCheckItem(label, ok, required, package))
            failures += 0 if ok or not required else 1
        return DoctorCheckGroup(title, check_items, failures)

    def check_tools(self) -> DoctorReport:
        """Check inventory tools, marking the ones probes cannot do without."""
        items = [
            (tool, self._check_command(tool), required, package)
            for tool, (package, required) in sorted(PROBE_TOOLS.items())
        ]
        tools_group = self._build_check_group("Inventory Tools", items)

        privileged = self._geteuid() == 0
        priv_group = self._build_check_group(
            "Privileges", [("running as root", privileged, False, "")]
        )

        messages = [
            f"Python: {platform.python_version()} on {platform.system()} {platform.release()}"
        ]
        if not privileged:
            messages.append("`handover collect` must be run with sudo.")
        groups = [tools_group, priv_group]
        return DoctorReport(
            groups=groups,
            info_messages=messages,
            total_failures=sum(g.failures for g in groups),
        )
