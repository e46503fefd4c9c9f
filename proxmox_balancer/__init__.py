"""Proxmox LXC Balancer: session, inventory, placement and container lifecycle."""

from .client import ProxmoxClient
from .exceptions import (
    AuthError, ConfigurationError, NoNodesError, NotFoundError, ProxmoxError,
    StatusError, TransportError, ValidationError
)
from .inventory import ResourceInventory
from .lifecycle import LifecycleDispatcher
from .models import ContainerCreateRequest, ContainerStatusRequest, ParsedTemplate
from .placement import pick_node
from .session import SessionManager
from .templates import parse_template
from .utils import generate_mac

__version__ = "0.1.0"
