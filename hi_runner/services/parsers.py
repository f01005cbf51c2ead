"""Per-topic parsers for collected report files.

Each parser takes the raw text of one report file and returns a small record;
fields that cannot be found are ``None`` so the caller decides how to render
them. Parsers never raise on malformed input.
"""

from __future__ import annotations

import csv
import io
import ipaddress
from dataclasses import dataclass, field
from typing import Iterator, Optional

from hi_runner.services.probes import GPU_PLACEHOLDER

NOT_AVAILABLE = "n/a"

_CMD_HEADER = "### CMD:"
_TIB = 1024 ** 4


def payload_lines(text: str) -> Iterator[str]:
    """Yield report lines without the command header line."""
    for line in text.splitlines():
        if line.startswith(_CMD_HEADER):
            continue
        yield line


def _label_value(line: str) -> tuple[str, str] | None:
    if ":" not in line:
        return None
    key, value = line.split(":", 1)
    return key.strip(), value.strip()


@dataclass(frozen=True)
class CpuInfo:
    model: Optional[str] = None
    sockets: Optional[str] = None
    cores_per_socket: Optional[str] = None
    threads_per_core: Optional[str] = None


_LSCPU_FIELDS = {
    "Model name": "model",
    "Socket(s)": "sockets",
    "Core(s) per socket": "cores_per_socket",
    "Thread(s) per core": "threads_per_core",
}


def parse_lscpu(text: str) -> CpuInfo:
    found: dict[str, str] = {}
    for line in payload_lines(text):
        pair = _label_value(line)
        if pair is None:
            continue
        key, value = pair
        attr = _LSCPU_FIELDS.get(key)
        if attr and value and attr not in found:
            found[attr] = value
    return CpuInfo(**found)


@dataclass(frozen=True)
class MemoryInfo:
    total: Optional[str] = None


def parse_free_total(text: str) -> MemoryInfo:
    """Read the total from the ``Mem:`` row of ``free -h``."""
    for line in payload_lines(text):
        parts = line.split()
        if len(parts) >= 2 and parts[0] == "Mem:":
            return MemoryInfo(total=parts[1])
    return MemoryInfo()


@dataclass(frozen=True)
class GpuInfo:
    available: bool
    count: Optional[int] = None
    models: tuple[str, ...] = field(default_factory=tuple)


def parse_gpu_details(text: str) -> GpuInfo:
    """Parse ``nvidia-smi --query-gpu=index,name,... --format=csv`` output."""
    lines = [line for line in payload_lines(text) if line.strip()]
    if not lines:
        return GpuInfo(available=True)
    if lines[0].strip() == GPU_PLACEHOLDER:
        return GpuInfo(available=False, count=0)

    rows = list(csv.reader(io.StringIO("\n".join(lines))))
    if rows and rows[0] and rows[0][0].strip().lower() == "index":
        rows = rows[1:]
    names = [row[1].strip() for row in rows if len(row) >= 2 and row[1].strip()]
    if not names:
        return GpuInfo(available=True)
    return GpuInfo(available=True, count=len(names), models=tuple(sorted(set(names))))


@dataclass(frozen=True)
class DiskCapacity:
    total_bytes: Optional[int] = None
    disk_count: int = 0

    def render(self) -> str:
        if not self.total_bytes:
            return NOT_AVAILABLE
        return f"{self.total_bytes / _TIB:.2f} TB"


def parse_disk_capacity(text: str) -> DiskCapacity:
    """Sum byte sizes of ``disk`` rows from ``lsblk -d -b -o NAME,SIZE,TYPE``."""
    total = 0
    count = 0
    for line in payload_lines(text):
        parts = line.split()
        if len(parts) < 2:
            continue
        size, dev_type = parts[-2], parts[-1]
        if dev_type != "disk" or not size.isdigit():
            continue
        total += int(size)
        count += 1
    if count == 0:
        return DiskCapacity()
    return DiskCapacity(total_bytes=total, disk_count=count)


def parse_os_release(text: str) -> Optional[str]:
    """Return PRETTY_NAME from an embedded /etc/os-release."""
    for line in payload_lines(text):
        if line.startswith("PRETTY_NAME="):
            value = line.split("=", 1)[1].strip().strip('"').strip("'")
            return value or None
    return None


@dataclass(frozen=True)
class DmiSerials:
    system: Optional[str] = None
    baseboard: Optional[str] = None
    chassis: Optional[str] = None


_DMI_SECTIONS = {
    "System Information": "system",
    "Base Board Information": "baseboard",
    "Chassis Information": "chassis",
}


def parse_dmidecode_serials(text: str) -> DmiSerials:
    found: dict[str, str] = {}
    section: Optional[str] = None
    for line in payload_lines(text):
        if not line.strip():
            continue
        if not line[0].isspace():
            section = _DMI_SECTIONS.get(line.strip())
            continue
        if section is None or section in found:
            continue
        pair = _label_value(line)
        if pair and pair[0] == "Serial Number" and pair[1]:
            found[section] = pair[1]
    return DmiSerials(**found)


def _is_reportable_address(token: str) -> bool:
    try:
        address = ipaddress.ip_address(token)
    except ValueError:
        return False
    return not (address.is_loopback or address.is_link_local)


def parse_ip_brief(text: str) -> list[str]:
    """Collect non-loopback addresses from the ``ip -br a`` block."""
    addresses: list[str] = []
    started = False
    for line in payload_lines(text):
        if not line.strip():
            if started:
                break
            continue
        started = True
        parts = line.split()
        # interface rows carry an upper-case operstate; route rows do not
        if len(parts) < 3 or parts[0] == "lo" or not parts[1].isupper():
            continue
        for token in parts[2:]:
            address = token.split("/", 1)[0]
            if _is_reportable_address(address):
                addresses.append(address)
    return addresses


def or_na(value: object) -> str:
    if value is None:
        return NOT_AVAILABLE
    text = str(value).strip()
    return text or NOT_AVAILABLE
