# utils.py

"""Utility functions for Proxmox LXC Balancer."""

import logging
import os
import secrets

from .config import (
    DEFAULT_TIMEOUT, REQUIRED_ENV_VARS, TIMEOUT_ENV_VAR, VERIFY_SSL_ENV_VAR,
    LOG_FORMAT, LOG_DATE_FORMAT
)
from .client import ProxmoxClient
from .exceptions import ConfigurationError

def setup_logging(verbose: bool = False) -> None:
    """Configure logging with appropriate level and format."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )

def get_proxmox_client(timeout: float = None) -> ProxmoxClient:
    """
    Establish a signed in Proxmox session using environment variables.
    Raises ConfigurationError if required variables are missing.
    """
    missing_vars = [var for var in REQUIRED_ENV_VARS if not os.environ.get(var)]
    if missing_vars:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing_vars)}"
        )

    if timeout is None:
        try:
            timeout = float(os.environ.get(TIMEOUT_ENV_VAR, DEFAULT_TIMEOUT))
        except ValueError as e:
            raise ConfigurationError(f"Invalid {TIMEOUT_ENV_VAR}: {e}")
    verify_ssl = os.environ.get(VERIFY_SSL_ENV_VAR, "1").lower() not in ("0", "false", "no")

    return ProxmoxClient(
        os.environ['PROXMOX_HOST'],
        os.environ['PROXMOX_USERNAME'],
        os.environ['PROXMOX_PASSWORD'],
        timeout=timeout,
        verify_ssl=verify_ssl
    )

def generate_mac() -> str:
    """Return a random locally administered, unicast MAC address."""
    octets = bytearray(secrets.token_bytes(6))
    octets[0] = (octets[0] & 0xFE) | 0x02
    return ":".join(f"{b:02X}" for b in octets)
