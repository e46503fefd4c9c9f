# client.py

"""Proxmox client tying the session, inventory and lifecycle together."""

import logging
from typing import List, Optional

import requests

from .config import DEFAULT_ISO_BUCKET, DEFAULT_TEMPLATE_BUCKET, DEFAULT_TIMEOUT
from .exceptions import TransportError
from .inventory import ResourceInventory
from .lifecycle import LifecycleDispatcher
from .models import ContainerConfig, NodeStatus, StorageContent
from .placement import pick_node
from .session import SessionManager, authenticated

logger = logging.getLogger(__name__)

def decode(what: str, build, data):
    """Build a model from response data, reporting malformed data as TransportError."""
    try:
        return build(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise TransportError(f"Could not decode {what}: {e}") from e

class ProxmoxClient:
    """
    Client for one Proxmox VE cluster.

    Reads go through the shared session; container actions are available on
    ``client.containers``. Nothing is cached between calls.
    """

    def __init__(self, host: str, username: str, password: str,
                 timeout: float = DEFAULT_TIMEOUT, verify_ssl: bool = True,
                 http: Optional[requests.Session] = None, sign_in: bool = True):
        self.session = SessionManager(
            host, username, password,
            timeout=timeout, verify_ssl=verify_ssl, http=http
        )
        self.containers = LifecycleDispatcher(self.session)
        if sign_in:
            self.session.sign_in()

    def __enter__(self) -> "ProxmoxClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.session.close()

    @authenticated
    def resource_list(self) -> ResourceInventory:
        """Fetch a fresh snapshot of ``/cluster/resources``."""
        logger.debug("Getting resources from cluster")
        data = self.session.get_data("/cluster/resources", "resource list")
        return ResourceInventory.from_payload(data)

    def pick_node(self) -> str:
        """Fetch the inventory and return the best node for a new container."""
        return pick_node(self.resource_list())

    @authenticated
    def next_id(self) -> int:
        """Return the next free VMID of the cluster."""
        logger.debug("Getting next available ID")
        data = self.session.get_data("/cluster/nextid", "next ID")
        try:
            return int(data)
        except (TypeError, ValueError) as e:
            raise TransportError(f"Invalid next ID {data!r}") from e

    @authenticated
    def container_config(self, node: str, vmid: int) -> ContainerConfig:
        logger.debug(f"Getting config of container {vmid} on {node}")
        data = self.session.get_data(f"/nodes/{node}/lxc/{vmid}/config", "container config")
        return decode("container config", ContainerConfig.from_dict, data or {})

    @authenticated
    def node_status(self, node: str) -> NodeStatus:
        """Return the node's RAM, CPU and storage figures."""
        logger.debug(f"Getting status of node {node}")
        data = self.session.get_data(f"/nodes/{node}/status", "node status")
        return decode("node status", NodeStatus.from_dict, data or {})

    @authenticated
    def template_list(self, node: str,
                      bucket: str = DEFAULT_TEMPLATE_BUCKET) -> List[StorageContent]:
        logger.debug(f"Getting templates from {node}:{bucket}")
        data = self.session.get_data(f"/nodes/{node}/storage/{bucket}/content", "templates")
        return decode(
            "templates",
            lambda items: [StorageContent.from_dict(item) for item in items],
            data or []
        )

    @authenticated
    def iso_list(self, node: str, bucket: str = DEFAULT_ISO_BUCKET) -> List[str]:
        """Return the volume ids of the ISOs stored in ``bucket``."""
        logger.debug(f"Getting ISOs from {node}:{bucket}")
        data = self.session.get_data(f"/nodes/{node}/storage/{bucket}/content", "ISOs")
        return decode(
            "ISOs",
            lambda items: [item["volid"] for item in items if item.get("volid")],
            data or []
        )
