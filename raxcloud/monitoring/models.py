"""Value objects mirroring Cloud Monitoring JSON resources."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type


@dataclass(frozen=True)
class Entity:
    id: str
    label: str = ""
    ip_addresses: Dict[str, str] = field(default_factory=dict)
    metadata: Optional[Dict[str, str]] = None
    managed: bool = False
    uri: Optional[str] = None
    agent_id: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Entity":
        return cls(
            id=raw["id"],
            label=raw.get("label", ""),
            ip_addresses=raw.get("ip_addresses") or {},
            metadata=raw.get("metadata"),
            managed=bool(raw.get("managed", False)),
            uri=raw.get("uri"),
            agent_id=raw.get("agent_id"),
            created_at=raw.get("created_at"),
            updated_at=raw.get("updated_at"),
        )


@dataclass(frozen=True)
class Check:
    id: str
    label: str = ""
    type: str = ""
    details: Dict[str, Any] = field(default_factory=dict)
    monitoring_zones_poll: List[str] = field(default_factory=list)
    timeout: Optional[int] = None
    period: Optional[int] = None
    target_alias: Optional[str] = None
    target_hostname: Optional[str] = None
    target_resolver: Optional[str] = None
    disabled: bool = False
    metadata: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Check":
        return cls(
            id=raw["id"],
            label=raw.get("label", ""),
            type=raw.get("type", ""),
            details=raw.get("details") or {},
            monitoring_zones_poll=raw.get("monitoring_zones_poll") or [],
            timeout=raw.get("timeout"),
            period=raw.get("period"),
            target_alias=raw.get("target_alias"),
            target_hostname=raw.get("target_hostname"),
            target_resolver=raw.get("target_resolver"),
            disabled=bool(raw.get("disabled", False)),
            metadata=raw.get("metadata"),
        )


def _pick(cls, raw: Dict[str, Any]):
    """Build a record dataclass from the keys it declares; extra keys are ignored."""
    return cls(**{name: raw.get(name) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class CpuInfo:
    name: Optional[str] = None
    vendor: Optional[str] = None
    model: Optional[str] = None
    mhz: Optional[int] = None
    total_cores: Optional[int] = None
    total_sockets: Optional[int] = None
    user: Optional[int] = None
    sys: Optional[int] = None
    idle: Optional[int] = None


@dataclass(frozen=True)
class MemoryInfo:
    total: Optional[int] = None
    used: Optional[int] = None
    free: Optional[int] = None
    actual_used: Optional[int] = None
    actual_free: Optional[int] = None
    ram: Optional[int] = None
    used_percent: Optional[float] = None
    free_percent: Optional[float] = None
    swap_total: Optional[int] = None
    swap_used: Optional[int] = None
    swap_free: Optional[int] = None
    swap_page_in: Optional[int] = None
    swap_page_out: Optional[int] = None


@dataclass(frozen=True)
class NetworkInterfaceInfo:
    name: Optional[str] = None
    type: Optional[str] = None
    address: Optional[str] = None
    address6: Optional[str] = None
    netmask: Optional[str] = None
    broadcast: Optional[str] = None
    hwaddr: Optional[str] = None
    mtu: Optional[int] = None
    flags: Optional[int] = None
    rx_bytes: Optional[int] = None
    rx_packets: Optional[int] = None
    rx_errors: Optional[int] = None
    tx_bytes: Optional[int] = None
    tx_packets: Optional[int] = None
    tx_errors: Optional[int] = None


@dataclass(frozen=True)
class SystemInfo:
    name: Optional[str] = None
    arch: Optional[str] = None
    version: Optional[str] = None
    vendor: Optional[str] = None
    vendor_name: Optional[str] = None
    vendor_version: Optional[str] = None


@dataclass(frozen=True)
class DiskInfo:
    name: Optional[str] = None
    reads: Optional[int] = None
    writes: Optional[int] = None
    read_bytes: Optional[int] = None
    write_bytes: Optional[int] = None
    rtime: Optional[int] = None
    wtime: Optional[int] = None
    time: Optional[int] = None


@dataclass(frozen=True)
class FilesystemInfo:
    dir_name: Optional[str] = None
    dev_name: Optional[str] = None
    sys_type_name: Optional[str] = None
    options: Optional[str] = None
    total: Optional[int] = None
    free: Optional[int] = None
    used: Optional[int] = None
    avail: Optional[int] = None
    files: Optional[int] = None
    free_files: Optional[int] = None


@dataclass(frozen=True)
class ProcessInfo:
    pid: Optional[int] = None
    exe_name: Optional[str] = None
    exe_cwd: Optional[str] = None
    exe_root: Optional[str] = None
    state_name: Optional[str] = None
    state_threads: Optional[int] = None
    cred_user: Optional[str] = None
    cred_group: Optional[str] = None
    memory_size: Optional[int] = None
    memory_resident: Optional[int] = None
    time_start_time: Optional[int] = None
    time_user: Optional[int] = None
    time_sys: Optional[int] = None
    time_total: Optional[int] = None


# Host info payloads: {"timestamp": ..., "info": <list of records or one record>}

@dataclass(frozen=True)
class CpuHostInfo:
    timestamp: Optional[int]
    info: List[CpuInfo]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CpuHostInfo":
        return cls(raw.get("timestamp"), [_pick(CpuInfo, item) for item in raw["info"]])


@dataclass(frozen=True)
class MemoryHostInfo:
    timestamp: Optional[int]
    info: MemoryInfo

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MemoryHostInfo":
        return cls(raw.get("timestamp"), _pick(MemoryInfo, raw["info"]))


@dataclass(frozen=True)
class NetworkInterfaceHostInfo:
    timestamp: Optional[int]
    info: List[NetworkInterfaceInfo]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "NetworkInterfaceHostInfo":
        return cls(raw.get("timestamp"), [_pick(NetworkInterfaceInfo, item) for item in raw["info"]])


@dataclass(frozen=True)
class SystemHostInfo:
    timestamp: Optional[int]
    info: SystemInfo

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SystemHostInfo":
        return cls(raw.get("timestamp"), _pick(SystemInfo, raw["info"]))


@dataclass(frozen=True)
class DiskHostInfo:
    timestamp: Optional[int]
    info: List[DiskInfo]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DiskHostInfo":
        return cls(raw.get("timestamp"), [_pick(DiskInfo, item) for item in raw["info"]])


@dataclass(frozen=True)
class FilesystemsHostInfo:
    timestamp: Optional[int]
    info: List[FilesystemInfo]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FilesystemsHostInfo":
        return cls(raw.get("timestamp"), [_pick(FilesystemInfo, item) for item in raw["info"]])


@dataclass(frozen=True)
class ProcessesHostInfo:
    timestamp: Optional[int]
    info: List[ProcessInfo]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ProcessesHostInfo":
        return cls(raw.get("timestamp"), [_pick(ProcessInfo, item) for item in raw["info"]])


class HostInfoType(str, Enum):
    CPUS = "cpus"
    MEMORY = "memory"
    NETWORK_INTERFACES = "network_interfaces"
    SYSTEM = "system"
    DISKS = "disks"
    FILESYSTEMS = "filesystems"
    PROCESSES = "processes"


HOST_INFO_SHAPES: Dict[HostInfoType, Type] = {
    HostInfoType.CPUS: CpuHostInfo,
    HostInfoType.MEMORY: MemoryHostInfo,
    HostInfoType.NETWORK_INTERFACES: NetworkInterfaceHostInfo,
    HostInfoType.SYSTEM: SystemHostInfo,
    HostInfoType.DISKS: DiskHostInfo,
    HostInfoType.FILESYSTEMS: FilesystemsHostInfo,
    HostInfoType.PROCESSES: ProcessesHostInfo,
}


@dataclass(frozen=True)
class AgentTarget:
    type: str
    targets: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AgentTarget":
        return cls(type=raw.get("type", ""), targets=list(raw["targets"]))
