# lifecycle.py

"""Lifecycle actions for LXC containers."""

import logging

from .config import DEFAULT_SWAP_MB, STATUS_ACTIONS
from .exceptions import StatusError, ValidationError
from .models import ContainerCreateRequest, ContainerStatusRequest
from .session import SessionManager, authenticated, status_text

logger = logging.getLogger(__name__)

def dump(response) -> str:
    """Log the full response for diagnosis and return its body."""
    body = response.text
    logger.debug(f"{status_text(response)} {response.url}\n{response.headers}\n\n{body}")
    return body

class LifecycleDispatcher:
    """
    Issues state changing calls against containers.

    The dispatcher keeps no workload state; the cluster is authoritative.
    Every call runs the re-authentication policy of the shared session first.
    """

    def __init__(self, session: SessionManager):
        self.session = session

    def set_status(self, node: str, vmid: int, action: str) -> None:
        """POST a status action (start, stop, shutdown, resume, suspend)."""
        if action not in STATUS_ACTIONS:
            raise ValidationError(
                f"Unknown status action {action!r}, expected one of {', '.join(STATUS_ACTIONS)}"
            )
        self._post_status(node, vmid, action)

    @authenticated
    def _post_status(self, node: str, vmid: int, action: str) -> None:
        logger.debug(f"Requesting {action} of container {vmid} on {node}")
        response = self.session.request(
            "POST", f"/nodes/{node}/lxc/{vmid}/status/{action}", mutating=True
        )
        if not response.ok:
            raise StatusError(action, status_text(response))
        logger.info(f"Container {vmid} on {node}: {action} requested")

    def start(self, params: ContainerStatusRequest) -> None:
        self.set_status(params.node, params.vmid, "start")

    def stop(self, params: ContainerStatusRequest) -> None:
        self.set_status(params.node, params.vmid, "stop")

    def shutdown(self, params: ContainerStatusRequest) -> None:
        self.set_status(params.node, params.vmid, "shutdown")

    def resume(self, params: ContainerStatusRequest) -> None:
        self.set_status(params.node, params.vmid, "resume")

    def suspend(self, params: ContainerStatusRequest) -> None:
        self.set_status(params.node, params.vmid, "suspend")

    def create(self, params: ContainerCreateRequest) -> None:
        """
        Create a container from a template.

        Raises ValidationError for incomplete requests and StatusError when
        the cluster rejects the request; the response body is attached to
        the error since the cluster reports the reason there.
        """
        validate_create_request(params)
        self._create(params)

    @authenticated
    def _create(self, params: ContainerCreateRequest) -> None:
        logger.debug(
            f"Creating container {params.vmid} ({params.hostname}) on {params.node} "
            f"from {params.ostemplate}"
        )
        query = {
            "ostemplate": params.ostemplate,
            "vmid": str(params.vmid),
            "storage": params.storage_id,
            "swap": str(DEFAULT_SWAP_MB),
            "cores": str(params.cpu_cores),
            "rootfs": str(params.storage_capacity),
            "cpulimit": str(params.cpu_cores),
            "memory": str(params.memory),
            "hostname": params.hostname,
            "description": params.description(),
            "net0": params.net0,
        }
        if params.password:
            query["password"] = params.password
        if params.ssh_public_key:
            query["ssh-public-keys"] = params.ssh_public_key

        response = self.session.request(
            "POST", f"/nodes/{params.node}/lxc", params=query, mutating=True
        )
        if not response.ok:
            raise StatusError("create", status_text(response), body=dump(response))
        logger.info(f"Created container {params.vmid} on {params.node}")

    @authenticated
    def delete(self, node: str, vmid: int) -> None:
        """Delete a container."""
        logger.debug(f"Deleting container {vmid} on {node}")
        response = self.session.request(
            "DELETE", f"/nodes/{node}/lxc/{vmid}", mutating=True
        )
        if not response.ok:
            raise StatusError("delete", status_text(response), body=dump(response))
        logger.info(f"Deleted container {vmid} on {node}")

def validate_create_request(params: ContainerCreateRequest) -> None:
    """Reject create requests the cluster could not act on."""
    missing = [
        field for field in ("node", "mac", "hostname", "storage_id")
        if not getattr(params, field)
    ]
    if missing:
        raise ValidationError(f"Missing container fields: {', '.join(missing)}")
    if params.template is None:
        raise ValidationError("Missing container template")
    if not params.password and not params.ssh_public_key:
        raise ValidationError("A password or SSH public key is required")
    for field in ("vmid", "cpu_cores", "memory", "storage_capacity"):
        value = getattr(params, field)
        if not isinstance(value, int) or value <= 0:
            raise ValidationError(f"{field} must be a positive integer, got {value!r}")
