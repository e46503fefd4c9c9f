"""Shared fixtures: a mocked requests.Session standing in for the cluster."""

from unittest.mock import MagicMock

import pytest
from requests.cookies import RequestsCookieJar

from proxmox_balancer.session import SessionManager

HOST = "https://pve.example.com:8006"

def make_response(status_code=200, data=None, reason=None, text=""):
    """Build a fake requests.Response carrying ``{"data": data}``."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason or ("OK" if status_code < 400 else "Error")
    response.ok = status_code < 400
    response.text = text
    response.url = "https://pve.example.com:8006/api2/json"
    response.headers = {}
    response.json.return_value = {"data": data}
    return response

def ticket_response(ticket="ticket-1", csrf="csrf-1", username="root@pam"):
    return make_response(200, {
        "ticket": ticket,
        "CSRFPreventionToken": csrf,
        "username": username,
    })

@pytest.fixture
def http():
    transport = MagicMock()
    transport.cookies = RequestsCookieJar()
    transport.post.return_value = ticket_response()
    transport.get.return_value = make_response(200, {"version": "7.4"})
    transport.request.return_value = make_response(200, None)
    return transport

@pytest.fixture
def session(http):
    return SessionManager(HOST, "root@pam", "secret", http=http)

@pytest.fixture
def signed_in(session):
    session.sign_in()
    return session

@pytest.fixture
def resources_payload():
    return [
        {"id": "node/pve1", "type": "node", "node": "pve1", "mem": 1000, "maxmem": 4000, "status": "online"},
        {"id": "lxc/100", "type": "lxc", "node": "pve1", "vmid": 100, "mem": 200, "name": "web"},
        {"id": "storage/pve1/local", "type": "storage", "node": "pve1", "storage": "local"},
        {"id": "node/pve2", "type": "node", "node": "pve2", "mem": 2000, "maxmem": 4000, "status": "online"},
        {"id": "qemu/200", "type": "qemu", "node": "pve2", "vmid": 200, "mem": 512, "name": "db"},
        {"id": "lxc/101", "type": "lxc", "node": "pve2", "vmid": 101, "mem": 1900, "name": "cache"},
        {"id": "template/ubuntu", "type": "template"},
    ]
