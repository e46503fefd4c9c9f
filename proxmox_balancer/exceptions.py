# exceptions.py

"""Custom exceptions for Proxmox LXC Balancer."""

from typing import Optional

class ProxmoxError(Exception):
    """Base exception for Proxmox-related errors."""
    pass

class TransportError(ProxmoxError):
    """Exception for connectivity, timeout and undecodable responses."""
    pass

class AuthError(ProxmoxError):
    """Exception for rejected credentials."""
    pass

class StatusError(ProxmoxError):
    """Exception for an authenticated call rejected by the API."""

    def __init__(self, action: str, detail: str, body: Optional[str] = None):
        super().__init__(f"Could not {action} container: {detail}")
        self.action = action
        self.detail = detail
        self.body = body

class NotFoundError(ProxmoxError):
    """Exception for lookups that miss the resource inventory."""
    pass

class ValidationError(ProxmoxError):
    """Exception for malformed input to a request builder."""
    pass

class NoNodesError(ProxmoxError):
    """Exception raised when there is no node to place a workload on."""
    pass

class ConfigurationError(ProxmoxError):
    """Exception for configuration-related errors."""
    pass
