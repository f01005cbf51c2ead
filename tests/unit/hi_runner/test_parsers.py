"""Per-topic parsers over literal report fixtures."""

from __future__ import annotations

import pytest

from hi_runner.services import parsers
from hi_runner.services.probes import GPU_PLACEHOLDER

pytestmark = pytest.mark.unit_runner


LSCPU = """### CMD: lscpu

Architecture:                       x86_64
CPU op-mode(s):                     32-bit, 64-bit
Vendor ID:                          AuthenticAMD
BIOS Vendor ID:                     Advanced Micro Devices, Inc.
Model name:                         AMD EPYC 7543 32-Core Processor
BIOS Model name:                    AMD EPYC 7543 32-Core Processor
Thread(s) per core:                 2
Core(s) per socket:                 32
Socket(s):                          2
"""

FREE = """### CMD: free -h; echo; head -n 40 /proc/meminfo

               total        used        free      shared  buff/cache   available
Mem:           503Gi        12Gi       480Gi       5.0Mi        11Gi       488Gi
Swap:          8.0Gi          0B       8.0Gi

MemTotal:       527961424 kB
"""

GPU_CSV = """### CMD: nvidia-smi --query-gpu=index,name --format=csv

index, name, uuid, pci.bus_id
0, NVIDIA A100-SXM4-80GB, GPU-1, 00000000:07:00.0
1, NVIDIA A100-SXM4-80GB, GPU-2, 00000000:0B:00.0
2, NVIDIA H100 PCIe, GPU-3, 00000000:48:00.0
"""

LSBLK_BYTES = """### CMD: lsblk -d -b -n -o NAME,SIZE,TYPE

sda   1099511627776 disk
nvme0n1 2199023255552 disk
sr0      1073741312 rom
loop0      65536000 loop
"""

SYSTEM = """### CMD: hostname; cat /etc/os-release

node1

NAME="Ubuntu"
VERSION="20.04.6 LTS (Focal Fossa)"
PRETTY_NAME="Ubuntu 20.04.6 LTS"
"""

DMIDECODE = """### CMD: dmidecode -t system -t baseboard -t chassis

# dmidecode 3.2
Handle 0x0001, DMI type 1, 27 bytes
System Information
\tManufacturer: Supermicro
\tProduct Name: AS-2124GQ
\tSerial Number: S123456X

Handle 0x0002, DMI type 2, 15 bytes
Base Board Information
\tManufacturer: Supermicro
\tSerial Number: BB98765

Handle 0x0003, DMI type 3, 22 bytes
Chassis Information
\tSerial Number: C0FFEE
"""

IP_BRIEF = """### CMD: ip -br a || true; echo; ip r || true

lo               UNKNOWN        127.0.0.1/8 ::1/128
eno1             UP             10.0.0.5/24 fe80::1/64
ib0              UP             192.168.100.5/24 2001:db8::5/64
docker0          DOWN           172.17.0.1/16

default via 10.0.0.1 dev eno1 proto static
10.0.0.0/24 dev eno1 proto kernel scope link src 10.0.0.5
"""


def test_parse_lscpu_uses_exact_labels() -> None:
    cpu = parsers.parse_lscpu(LSCPU)
    assert cpu.model == "AMD EPYC 7543 32-Core Processor"
    assert cpu.sockets == "2"
    assert cpu.cores_per_socket == "32"
    assert cpu.threads_per_core == "2"


def test_parse_lscpu_missing_fields_are_none() -> None:
    cpu = parsers.parse_lscpu("### CMD: lscpu\n\nArchitecture: aarch64\n")
    assert cpu == parsers.CpuInfo()


def test_parse_free_total() -> None:
    assert parsers.parse_free_total(FREE).total == "503Gi"
    assert parsers.parse_free_total("").total is None


def test_parse_gpu_details_counts_and_dedupes() -> None:
    gpu = parsers.parse_gpu_details(GPU_CSV)
    assert gpu.available is True
    assert gpu.count == 3
    assert gpu.models == ("NVIDIA A100-SXM4-80GB", "NVIDIA H100 PCIe")


def test_parse_gpu_details_placeholder() -> None:
    gpu = parsers.parse_gpu_details(f"{GPU_PLACEHOLDER}\n")
    assert gpu.available is False
    assert gpu.count == 0
    assert gpu.models == ()


def test_parse_gpu_details_empty_output() -> None:
    gpu = parsers.parse_gpu_details("### CMD: nvidia-smi\n\n")
    assert gpu.available is True
    assert gpu.count is None


def test_disk_capacity_sums_only_disks() -> None:
    capacity = parsers.parse_disk_capacity(LSBLK_BYTES)
    assert capacity.disk_count == 2
    assert capacity.total_bytes == 1099511627776 + 2199023255552
    assert capacity.render() == "3.00 TB"


def test_disk_capacity_without_disks_is_na() -> None:
    capacity = parsers.parse_disk_capacity("### CMD: lsblk\n\nsr0 1024 rom\n")
    assert capacity.total_bytes is None
    assert capacity.render() == "n/a"


def test_parse_os_release() -> None:
    assert parsers.parse_os_release(SYSTEM) == "Ubuntu 20.04.6 LTS"
    assert parsers.parse_os_release("PRETTY_NAME=\n") is None
    assert parsers.parse_os_release("") is None


def test_parse_dmidecode_serials() -> None:
    serials = parsers.parse_dmidecode_serials(DMIDECODE)
    assert serials.system == "S123456X"
    assert serials.baseboard == "BB98765"
    assert serials.chassis == "C0FFEE"


def test_parse_ip_brief_skips_loopback_link_local_and_routes() -> None:
    assert parsers.parse_ip_brief(IP_BRIEF) == [
        "10.0.0.5",
        "192.168.100.5",
        "2001:db8::5",
        "172.17.0.1",
    ]


def test_or_na() -> None:
    assert parsers.or_na(None) == "n/a"
    assert parsers.or_na("  ") == "n/a"
    assert parsers.or_na(0) == "0"
