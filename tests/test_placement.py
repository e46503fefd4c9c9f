import pytest

from proxmox_balancer.exceptions import NoNodesError
from proxmox_balancer.inventory import ResourceInventory
from proxmox_balancer.models import VM, Container, Node
from proxmox_balancer.placement import node_capacities, pick_node

def build(*resources):
    return ResourceInventory(resources)

def test_picks_least_provisioned_not_largest_node():
    inventory = build(
        Node("node/a", "A", mem=1000),
        Node("node/b", "B", mem=2000),
        Container("lxc/1", "A", vmid=1, mem=200),
        Container("lxc/2", "B", vmid=2, mem=1900),
    )
    assert pick_node(inventory) == "A"

def test_pick_is_deterministic(resources_payload):
    inventory = ResourceInventory.from_payload(resources_payload)
    assert {pick_node(inventory) for _ in range(5)} == {"pve1"}

def test_ties_keep_first_node():
    inventory = build(
        Node("node/a", "A", mem=1000),
        Node("node/b", "B", mem=1500),
        Container("lxc/1", "B", vmid=1, mem=500),
    )
    assert pick_node(inventory) == "A"

def test_no_nodes():
    with pytest.raises(NoNodesError):
        pick_node(build(Container("lxc/1", "A", vmid=1, mem=100)))

def test_vms_and_unknown_nodes_do_not_count():
    inventory = build(
        Node("node/a", "A", mem=1000),
        Node("node/b", "B", mem=900),
        VM("qemu/5", "A", vmid=5, mem=800),
        Container("lxc/6", "ghost", vmid=6, mem=5000),
    )
    assert pick_node(inventory) == "A"

def test_node_capacities():
    inventory = build(
        Node("node/a", "A", mem=1000),
        Container("lxc/1", "A", vmid=1, mem=250),
        Container("lxc/2", "A", vmid=2, mem=250),
    )
    [capacity] = node_capacities(inventory)

    assert capacity.node == "A"
    assert capacity.memory_provisioned == 500
    assert capacity.available_memory == 500
    assert capacity.containers == 2
    assert capacity.memory_ratio == 0.5
