# placement.py

"""Node selection for new containers."""

import logging
from dataclasses import dataclass
from typing import Dict, List

from .exceptions import NoNodesError
from .inventory import ResourceInventory

logger = logging.getLogger(__name__)

@dataclass
class NodeCapacity:
    """Memory committed to containers on a node."""
    node: str
    memory_total: int
    memory_provisioned: int = 0
    containers: int = 0

    @property
    def available_memory(self) -> int:
        return self.memory_total - self.memory_provisioned

    @property
    def memory_ratio(self) -> float:
        return self.memory_provisioned / self.memory_total if self.memory_total > 0 else 1.0

def node_capacities(inventory: ResourceInventory) -> List[NodeCapacity]:
    """
    Compute provisioned and available memory for every node.

    Provisioned memory is the sum of the configured memory of the containers
    on a node, not the memory they currently use. Containers referencing a
    node missing from the listing are ignored.
    """
    provisioned: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for container in inventory.containers():
        provisioned[container.node] = provisioned.get(container.node, 0) + container.mem
        counts[container.node] = counts.get(container.node, 0) + 1

    return [
        NodeCapacity(
            node=node.node,
            memory_total=node.mem,
            memory_provisioned=provisioned.get(node.node, 0),
            containers=counts.get(node.node, 0)
        )
        for node in inventory.nodes()
    ]

def pick_node(inventory: ResourceInventory) -> str:
    """
    Return the node with the most memory not yet provisioned to containers.

    Ties keep the first node in listing order.
    """
    capacities = node_capacities(inventory)
    if not capacities:
        raise NoNodesError("No nodes found")

    best = capacities[0]
    for capacity in capacities[1:]:
        if capacity.available_memory > best.available_memory:
            best = capacity

    logger.info(f"Picked node {best.node} with {best.available_memory} bytes unprovisioned")
    for capacity in capacities:
        logger.debug(
            f"  {capacity.node}: {capacity.memory_provisioned}/{capacity.memory_total} "
            f"provisioned across {capacity.containers} containers"
        )
    return best.node
