# cli.py

"""Command-line interface for Proxmox LXC Balancer."""

import argparse
import logging
import sys

from .exceptions import ProxmoxError
from .placement import node_capacities, pick_node
from .utils import get_proxmox_client, setup_logging

logger = logging.getLogger(__name__)

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Pick the Proxmox node with the most unprovisioned memory"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--pick-node",
        action="store_true",
        help="Print the node a new container should be placed on (default)"
    )
    parser.add_argument(
        "--show-resources",
        action="store_true",
        help="Show provisioned memory for all nodes"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per request timeout in seconds (default: $PROXMOX_TIMEOUT or 10)"
    )
    return parser.parse_args(argv)

def print_node_capacity(capacity) -> None:
    logger.info(f"Node: {capacity.node}")
    logger.info(f"  Containers: {capacity.containers}")
    logger.info(f"  Memory provisioned: {capacity.memory_provisioned} / {capacity.memory_total} "
                f"({capacity.memory_ratio*100:.1f}%)")
    logger.info(f"  Memory available: {capacity.available_memory}")

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        with get_proxmox_client(timeout=args.timeout) as client:
            inventory = client.resource_list()

            if args.show_resources:
                logger.info("Current node resources:")
                for capacity in node_capacities(inventory):
                    print_node_capacity(capacity)

            if args.pick_node or not args.show_resources:
                print(pick_node(inventory))
            return 0

    except ProxmoxError as e:
        logger.error(f"Proxmox error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
