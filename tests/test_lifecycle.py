import json

import pytest

from proxmox_balancer.config import CSRF_HEADER_NAME
from proxmox_balancer.exceptions import AuthError, StatusError, ValidationError
from proxmox_balancer.lifecycle import LifecycleDispatcher
from proxmox_balancer.models import ContainerCreateRequest, ContainerStatusRequest
from proxmox_balancer.templates import parse_template

from conftest import make_response, ticket_response

@pytest.fixture
def dispatcher(signed_in):
    return LifecycleDispatcher(signed_in)

@pytest.fixture
def create_request():
    return ContainerCreateRequest(
        mac="02:AB:CD:EF:01:23",
        template=parse_template("ubuntu-18.04-standard_18.04.1-1_amd64.tar.gz"),
        node="pve1",
        vmid=105,
        cpu_cores=2,
        memory=1024,
        storage_capacity=8,
        storage_id="local-lvm",
        hostname="web-105",
        password="hunter2",
    )

@pytest.mark.parametrize("action", ["start", "stop", "shutdown", "resume", "suspend"])
def test_status_actions(dispatcher, http, action):
    getattr(dispatcher, action)(ContainerStatusRequest(node="pve1", vmid=100))

    args, kwargs = http.request.call_args
    assert args == ("POST", f"https://pve.example.com:8006/api2/json/nodes/pve1/lxc/100/status/{action}")
    assert kwargs["headers"] == {CSRF_HEADER_NAME: "csrf-1"}

def test_unknown_action_is_rejected_before_any_call(dispatcher, http):
    with pytest.raises(ValidationError):
        dispatcher.set_status("pve1", 100, "reboot-now")
    http.get.assert_not_called()
    http.request.assert_not_called()

def test_status_failure(dispatcher, http):
    http.request.return_value = make_response(500, None, reason="CT 100 not running")

    with pytest.raises(StatusError) as excinfo:
        dispatcher.set_status("pve1", 100, "shutdown")

    assert excinfo.value.action == "shutdown"
    assert excinfo.value.detail == "500 CT 100 not running"

def test_stale_session_reauthenticates_once_and_uses_new_token(dispatcher, http):
    http.get.return_value = make_response(401, None)
    http.post.return_value = ticket_response("ticket-2", "csrf-2")

    dispatcher.set_status("pve1", 100, "start")

    assert http.post.call_count == 2
    assert http.request.call_count == 1
    assert http.request.call_args[1]["headers"] == {CSRF_HEADER_NAME: "csrf-2"}

def test_failed_reauthentication_aborts_action(dispatcher, http):
    http.get.return_value = make_response(401, None)
    http.post.return_value = make_response(401, None)

    with pytest.raises(AuthError):
        dispatcher.delete("pve1", 100)
    http.request.assert_not_called()

def test_create_builds_query(dispatcher, http, create_request):
    dispatcher.create(create_request)

    args, kwargs = http.request.call_args
    assert args == ("POST", "https://pve.example.com:8006/api2/json/nodes/pve1/lxc")
    assert kwargs["headers"] == {CSRF_HEADER_NAME: "csrf-1"}

    query = kwargs["params"]
    assert query["ostemplate"] == "templates:vztmpl/ubuntu-18.04-standard_18.04.1-1_amd64.tar.gz"
    assert query["vmid"] == "105"
    assert query["storage"] == "local-lvm"
    assert query["swap"] == "512"
    assert query["cores"] == query["cpulimit"] == "2"
    assert query["memory"] == "1024"
    assert query["rootfs"] == "8"
    assert query["hostname"] == "web-105"
    assert query["password"] == "hunter2"
    assert query["net0"] == (
        "name=eth0,bridge=vmbr3,hwaddr=02:AB:CD:EF:01:23,ip=dhcp,tag=10,type=veth"
    )
    assert "ssh-public-keys" not in query

    description = json.loads(query["description"])
    assert description["hostname"] == "web-105"
    assert "password" not in description

def test_create_failure_carries_body(dispatcher, http, create_request):
    http.request.return_value = make_response(
        500, None, reason="Internal Server Error", text='{"errors":{"vmid":"already exists"}}'
    )

    with pytest.raises(StatusError) as excinfo:
        dispatcher.create(create_request)

    assert excinfo.value.action == "create"
    assert "already exists" in excinfo.value.body

@pytest.mark.parametrize("changes", [
    {"mac": ""},
    {"node": ""},
    {"template": None},
    {"memory": 0},
    {"vmid": -1},
    {"password": ""},
])
def test_create_validation(dispatcher, http, create_request, changes):
    with pytest.raises(ValidationError):
        dispatcher.create(create_request._replace(**changes))
    http.request.assert_not_called()

def test_create_with_ssh_key_only(dispatcher, http, create_request):
    dispatcher.create(create_request._replace(password="", ssh_public_key="ssh-ed25519 AAAA"))

    query = http.request.call_args[1]["params"]
    assert query["ssh-public-keys"] == "ssh-ed25519 AAAA"
    assert "password" not in query

def test_delete(dispatcher, http):
    dispatcher.delete("pve2", 101)

    args, kwargs = http.request.call_args
    assert args == ("DELETE", "https://pve.example.com:8006/api2/json/nodes/pve2/lxc/101")
    assert kwargs["headers"] == {CSRF_HEADER_NAME: "csrf-1"}

def test_delete_failure(dispatcher, http):
    http.request.return_value = make_response(403, None, reason="Permission check failed")

    with pytest.raises(StatusError, match="Could not delete container: 403"):
        dispatcher.delete("pve2", 101)

def test_create_with_static_address(dispatcher, http, create_request):
    dispatcher.create(create_request._replace(ip_address="10.0.10.5/24"))

    query = http.request.call_args[1]["params"]
    assert query["net0"] == (
        "name=eth0,bridge=vmbr3,hwaddr=02:AB:CD:EF:01:23,ip=10.0.10.5/24,tag=10,type=veth"
    )

def test_status_error_without_body(dispatcher, http):
    http.request.return_value = make_response(409, None, reason="Conflict")

    with pytest.raises(StatusError) as excinfo:
        dispatcher.set_status("pve1", 100, "resume")
    assert excinfo.value.body is None
