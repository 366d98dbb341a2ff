"""Value objects mirroring next-gen compute JSON resources."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Link:
    href: str
    rel: str

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Link":
        return cls(href=raw["href"], rel=raw.get("rel", ""))


def _links(raw: Dict[str, Any]) -> List[Link]:
    return [Link.from_dict(link) for link in raw.get("links") or []]


@dataclass(frozen=True)
class Flavor:
    id: str
    name: str
    ram: int = 0
    disk: int = 0
    vcpus: int = 0
    swap: Any = ""
    rxtx_factor: float = 1.0
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Flavor":
        return cls(
            id=str(raw["id"]),
            name=raw.get("name", ""),
            ram=raw.get("ram", 0),
            disk=raw.get("disk", 0),
            vcpus=raw.get("vcpus", 0),
            swap=raw.get("swap", ""),
            rxtx_factor=raw.get("rxtx_factor", 1.0),
            links=_links(raw),
        )


@dataclass(frozen=True)
class Image:
    id: str
    name: str
    status: str = ""
    created: Optional[str] = None
    updated: Optional[str] = None
    min_disk: int = 0
    min_ram: int = 0
    progress: int = 0
    metadata: Dict[str, str] = field(default_factory=dict)
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Image":
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            status=raw.get("status", ""),
            created=raw.get("created"),
            updated=raw.get("updated"),
            min_disk=raw.get("minDisk", 0),
            min_ram=raw.get("minRam", 0),
            progress=raw.get("progress", 0),
            metadata=raw.get("metadata") or {},
            links=_links(raw),
        )


@dataclass(frozen=True)
class Server:
    id: str
    name: str
    status: str = ""
    tenant_id: str = ""
    user_id: str = ""
    created: Optional[str] = None
    updated: Optional[str] = None
    host_id: str = ""
    access_ipv4: str = ""
    access_ipv6: str = ""
    progress: int = 0
    addresses: Dict[str, Any] = field(default_factory=dict)
    flavor: Dict[str, Any] = field(default_factory=dict)
    image: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)
    links: List[Link] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Server":
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            status=raw.get("status", ""),
            tenant_id=raw.get("tenant_id", ""),
            user_id=raw.get("user_id", ""),
            created=raw.get("created"),
            updated=raw.get("updated"),
            host_id=raw.get("hostId", ""),
            access_ipv4=raw.get("accessIPv4", ""),
            access_ipv6=raw.get("accessIPv6", ""),
            progress=raw.get("progress", 0),
            addresses=raw.get("addresses") or {},
            flavor=raw.get("flavor") or {},
            image=raw.get("image") or {},
            metadata=raw.get("metadata") or {},
            links=_links(raw),
        )


@dataclass(frozen=True)
class NewServer:
    """Both the create request and the 202 response body.

    When admin_pass is left unset the server generates one and returns it in
    the create response. That response is the only place it ever appears.
    """

    name: str = ""
    image_ref: str = ""
    flavor_ref: str = ""
    metadata: Optional[Dict[str, str]] = None
    personality: Optional[List[Dict[str, str]]] = None
    networks: Optional[List[Dict[str, str]]] = None
    admin_pass: Optional[str] = None
    disk_config: Optional[str] = None
    id: Optional[str] = None
    links: List[Link] = field(default_factory=list)

    _WIRE_NAMES = (
        ("name", "name"),
        ("image_ref", "imageRef"),
        ("flavor_ref", "flavorRef"),
        ("metadata", "metadata"),
        ("personality", "personality"),
        ("networks", "networks"),
        ("admin_pass", "adminPass"),
        ("disk_config", "OS-DCF:diskConfig"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Request body fields; unset ones are omitted."""
        return {
            wire: getattr(self, attr)
            for attr, wire in self._WIRE_NAMES
            if getattr(self, attr) not in (None, "")
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "NewServer":
        values = {attr: raw.get(wire) for attr, wire in cls._WIRE_NAMES}
        values["name"] = values["name"] or ""
        values["image_ref"] = values["image_ref"] or ""
        values["flavor_ref"] = values["flavor_ref"] or ""
        return cls(id=raw["id"], links=_links(raw), **values)
