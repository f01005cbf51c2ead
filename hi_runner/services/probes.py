"""Static probe table: one external command per topic file.

File name prefixes group related topics in a directory listing; no probe
depends on the output of another.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

GPU_PLACEHOLDER = "nvidia-smi not available"


@dataclass(frozen=True)
class Probe:
    """A single command mapped to one topic and one output file."""

    probe_id: str
    command: str
    output_name: str
    requires: Optional[str] = None
    placeholder: str = ""

    @property
    def error_name(self) -> str:
        return f"{self.output_name}.err"


SYSTEM_FILE = "00_system.txt"
CPU_FILE = "10_cpu.txt"
RAM_FILE = "20_ram.txt"
GPU_OVERVIEW_FILE = "30_gpu_overview.txt"
GPU_DETAILS_FILE = "31_gpu_details.csv"
STORAGE_DISKS_FILE = "56_storage_disks.txt"
NETWORK_FILE = "60_network.txt"
SERIALS_FILE = "70_serials.txt"


DEFAULT_PROBES: tuple[Probe, ...] = (
    Probe(
        "system",
        "hostname; echo; hostname -f 2>/dev/null || true; echo; uname -a; echo; "
        "uptime -p || true; echo; cat /etc/os-release",
        SYSTEM_FILE,
    ),
    Probe("cpu", "lscpu", CPU_FILE),
    Probe(
        "ram",
        "free -h; echo; head -n 40 /proc/meminfo; echo; dmidecode -t memory",
        RAM_FILE,
    ),
    Probe(
        "gpu_overview",
        "nvidia-smi",
        GPU_OVERVIEW_FILE,
        requires="nvidia-smi",
        placeholder=GPU_PLACEHOLDER,
    ),
    Probe(
        "gpu_details",
        "nvidia-smi --query-gpu=index,name,uuid,pci.bus_id,serial,driver_version,"
        "vbios_version,memory.total --format=csv",
        GPU_DETAILS_FILE,
        requires="nvidia-smi",
        placeholder=GPU_PLACEHOLDER,
    ),
    Probe("pci", "lspci -nn | sort", "40_pci.txt"),
    Probe(
        "pci_filtered",
        'lspci -nn | grep -Ei "vga|3d|nvidia|amd|ethernet|network|infiniband" || true',
        "41_pci_filtered.txt",
    ),
    Probe(
        "storage_lsblk",
        "lsblk -o NAME,MODEL,SERIAL,SIZE,TYPE,FSTYPE,MOUNTPOINT,UUID,ROTA,TRAN -e7",
        "50_storage_lsblk.txt",
    ),
    Probe("storage_blkid", "blkid || true", "51_storage_blkid.txt"),
    Probe("storage_df", "df -hT || true", "52_storage_df.txt"),
    Probe("nvme_list", "nvme list 2>/dev/null || true", "53_nvme_list.txt"),
    Probe(
        "nvme_details",
        'for d in /dev/nvme*n1; do [ -e "$d" ] || continue; echo "== $d =="; '
        'nvme id-ctrl "$d" || true; echo; done',
        "54_nvme_details.txt",
    ),
    Probe(
        "smart",
        'for d in /dev/sd? /dev/nvme?n1; do [ -e "$d" ] || continue; echo "== $d =="; '
        'smartctl -H -i "$d" || true; echo; done',
        "55_smart.txt",
    ),
    Probe("storage_disks", "lsblk -d -b -n -o NAME,SIZE,TYPE", STORAGE_DISKS_FILE),
    Probe("network", "ip -br a || true; echo; ip r || true", NETWORK_FILE),
    Probe(
        "network_hw",
        "lshw -class network -short 2>/dev/null || true",
        "61_network_hw.txt",
    ),
    Probe("serials", "dmidecode -t system -t baseboard -t chassis", SERIALS_FILE),
)


# Tool -> Debian package providing it, used by the doctor checks.
PROBE_TOOLS: dict[str, tuple[str, bool]] = {
    "hostname": ("hostname", True),
    "lscpu": ("util-linux", True),
    "lsblk": ("util-linux", True),
    "blkid": ("util-linux", False),
    "free": ("procps", True),
    "df": ("coreutils", True),
    "dmidecode": ("dmidecode", True),
    "lspci": ("pciutils", True),
    "lshw": ("lshw", False),
    "smartctl": ("smartmontools", False),
    "nvme": ("nvme-cli", False),
    "ip": ("iproute2", True),
    "nvidia-smi": ("nvidia driver", False),
}
