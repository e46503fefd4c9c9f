# models.py

"""Data models for Proxmox LXC Balancer."""

import json
from typing import Any, Dict, List, NamedTuple, Optional

from .config import DEFAULT_BRIDGE, DEFAULT_TEMPLATE_BUCKET, DEFAULT_VLAN_TAG
from .exceptions import TransportError

class Credential(NamedTuple):
    """Ticket and CSRF token issued by a successful sign in."""
    username: str
    ticket: str
    csrf_token: str

class Node(NamedTuple):
    """A cluster node. ``mem`` is the memory capacity used for placement."""
    id: str
    node: str
    mem: int = 0
    maxmem: int = 0
    maxcpu: int = 0
    status: str = ""

    kind = "node"

class Container(NamedTuple):
    """An LXC container. ``mem`` is its provisioned memory."""
    id: str
    node: str
    vmid: int = 0
    mem: int = 0
    maxmem: int = 0
    name: str = ""
    status: str = ""

    kind = "lxc"

class VM(NamedTuple):
    """A QEMU virtual machine."""
    id: str
    node: str
    vmid: int = 0
    mem: int = 0
    maxmem: int = 0
    name: str = ""
    status: str = ""

    kind = "qemu"

class Storage(NamedTuple):
    """A storage backend attached to a node."""
    id: str
    node: str
    storage: str = ""
    status: str = ""

    kind = "storage"

class Template(NamedTuple):
    """A template entry of the cluster listing."""
    id: str
    node: str = ""

    kind = "template"

RESOURCE_TYPES = {
    cls.kind: cls for cls in (Node, Container, VM, Storage, Template)
}

def resource_from_dict(record: Dict[str, Any]):
    """
    Decode one flat ``/cluster/resources`` entry into its typed record.

    Raises TransportError for unknown kinds or records that cannot be
    addressed by a later API call.
    """
    if not isinstance(record, dict):
        raise TransportError(f"Expected a resource object, got {type(record).__name__}")
    kind = record.get("type")
    resource_cls = RESOURCE_TYPES.get(kind)
    if resource_cls is None:
        raise TransportError(f"Unknown resource type: {kind!r}")
    if not record.get("id"):
        raise TransportError(f"Resource of type {kind!r} has no id")
    if resource_cls is not Template and not record.get("node"):
        raise TransportError(f"Resource {record['id']} has no node")

    values = {
        field: record[field]
        for field in resource_cls._fields
        if record.get(field) is not None
    }
    return resource_cls(**values)

class ParsedTemplate(NamedTuple):
    """Components of a container template file name."""
    os: str
    os_version: str
    name: str
    os_version2: str
    arch: str
    extension: str = ""

    def __str__(self) -> str:
        return (f"{self.os}-{self.os_version}-{self.name}_"
                f"{self.os_version2}_{self.arch}{self.extension}")

class ContainerStatusRequest(NamedTuple):
    """Addresses a container for a status action."""
    node: str
    vmid: int

class ContainerCreateRequest(NamedTuple):
    """Parameters for creating an LXC container."""
    mac: str
    template: ParsedTemplate
    node: str
    vmid: int
    cpu_cores: int
    memory: int
    storage_capacity: int
    storage_id: str
    hostname: str
    password: str
    ssh_public_key: str = ""
    ip_address: str = ""
    template_bucket: str = DEFAULT_TEMPLATE_BUCKET
    bridge: str = DEFAULT_BRIDGE
    vlan_tag: int = DEFAULT_VLAN_TAG

    @property
    def ostemplate(self) -> str:
        return f"{self.template_bucket}:vztmpl/{self.template}"

    @property
    def net0(self) -> str:
        ip = self.ip_address or "dhcp"
        return (f"name=eth0,bridge={self.bridge},hwaddr={self.mac},"
                f"ip={ip},tag={self.vlan_tag},type=veth")

    def description(self) -> str:
        """Serialize the request, minus the password, for the container notes."""
        values = self._asdict()
        values.pop("password")
        values["template"] = str(self.template)
        return json.dumps(values, sort_keys=True)

class ContainerConfig(NamedTuple):
    """Configuration of an existing container."""
    memory: int = 0
    cpulimit: str = ""
    digest: str = ""
    cores: int = 0
    ostype: str = ""
    rootfs: str = ""
    hostname: str = ""
    arch: str = ""
    description: str = ""
    swap: int = 0
    net0: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContainerConfig":
        values = {f: data[f] for f in cls._fields if data.get(f) is not None}
        if "cpulimit" in values:
            values["cpulimit"] = str(values["cpulimit"])
        return cls(**values)

class NodeStatus(NamedTuple):
    """RAM, CPU and storage figures reported by a node."""
    cpu: float
    cpus: int
    cpu_model: str
    memory_total: int
    memory_used: int
    memory_free: int
    rootfs_total: int
    rootfs_used: int
    rootfs_avail: int
    swap_total: int
    swap_used: int
    uptime: int
    loadavg: List[str]
    pveversion: str
    kversion: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeStatus":
        cpuinfo = data.get("cpuinfo") or {}
        memory = data.get("memory") or {}
        rootfs = data.get("rootfs") or {}
        swap = data.get("swap") or {}
        return cls(
            cpu=data.get("cpu", 0),
            cpus=cpuinfo.get("cpus", 0),
            cpu_model=cpuinfo.get("model", ""),
            memory_total=memory.get("total", 0),
            memory_used=memory.get("used", 0),
            memory_free=memory.get("free", 0),
            rootfs_total=rootfs.get("total", 0),
            rootfs_used=rootfs.get("used", 0),
            rootfs_avail=rootfs.get("avail", 0),
            swap_total=swap.get("total", 0),
            swap_used=swap.get("used", 0),
            uptime=data.get("uptime", 0),
            loadavg=list(data.get("loadavg") or []),
            pveversion=data.get("pveversion", ""),
            kversion=data.get("kversion", ""),
        )

class StorageContent(NamedTuple):
    """A volume stored in a node's storage bucket."""
    volid: str
    content: str = ""
    format: str = ""
    size: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StorageContent":
        return cls(**{f: data[f] for f in cls._fields if data.get(f) is not None})
