# inventory.py

"""Point-in-time snapshot of the cluster resource listing."""

import logging
from typing import Any, Iterable, Iterator, List

from .exceptions import NotFoundError, TransportError
from .models import (
    RESOURCE_TYPES, VM, Container, Node, Storage, Template, resource_from_dict
)

logger = logging.getLogger(__name__)

class ResourceInventory:
    """
    Ordered, immutable collection of typed cluster resources.

    Records keep the order of the upstream listing; the partition helpers
    filter by kind and preserve that order.
    """

    def __init__(self, resources: Iterable = ()):
        self._resources = tuple(resources)

    @classmethod
    def from_payload(cls, payload: Any) -> "ResourceInventory":
        """
        Decode the ``data`` member of a ``/cluster/resources`` response.

        Entries of other kinds (sdn zones, pools, ...) are skipped.
        """
        if not isinstance(payload, list):
            raise TransportError(
                f"Expected a list of resources, got {type(payload).__name__}"
            )
        resources = []
        for record in payload:
            if isinstance(record, dict) and record.get("type") not in RESOURCE_TYPES:
                logger.debug(f"Skipping {record.get('type')} resource {record.get('id')}")
                continue
            resources.append(resource_from_dict(record))
        return cls(resources)

    def __iter__(self) -> Iterator:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def _of_kind(self, kind: str) -> list:
        return [r for r in self._resources if r.kind == kind]

    def nodes(self) -> List[Node]:
        return self._of_kind(Node.kind)

    def containers(self) -> List[Container]:
        return self._of_kind(Container.kind)

    def vms(self) -> List[VM]:
        return self._of_kind(VM.kind)

    def storages(self) -> List[Storage]:
        return self._of_kind(Storage.kind)

    def templates(self) -> List[Template]:
        return self._of_kind(Template.kind)

    def resolve_node_for_workload(self, vmid: int) -> str:
        """Return the node owning the container or VM with ``vmid``."""
        for resource in self._resources:
            if resource.kind in (Container.kind, VM.kind) and resource.vmid == vmid:
                return resource.node
        raise NotFoundError(f"Could not find node for VMID: {vmid}")
