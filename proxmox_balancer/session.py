# session.py

"""Ticket based session handling for the Proxmox API."""

import functools
import logging
import threading
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests

from .config import API_PATH, AUTH_COOKIE_NAME, CSRF_HEADER_NAME, DEFAULT_TIMEOUT
from .exceptions import AuthError, TransportError
from .models import Credential

logger = logging.getLogger(__name__)

def status_text(response: requests.Response) -> str:
    """Return the HTTP status line of a response, e.g. ``401 Unauthorized``."""
    return f"{response.status_code} {response.reason}"

def authenticated(method):
    """
    Run the re-authentication policy before a privileged call.

    The decorated method must belong to an object exposing a ``session``
    attribute holding a SessionManager.
    """
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        self.session.ensure_authenticated()
        return method(self, *args, **kwargs)
    return wrapper

class SessionManager:
    """
    Owns the HTTP transport and the credential of one Proxmox session.

    The ticket travels as the ``PVEAuthCookie`` cookie in the transport's
    cookie jar; the CSRF token is attached to every state changing call.
    """

    def __init__(self, host: str, username: str, password: str,
                 timeout: float = DEFAULT_TIMEOUT, verify_ssl: bool = True,
                 http: Optional[requests.Session] = None):
        self.host = host.rstrip("/")
        self.username = username
        self.password = password
        self.timeout = timeout
        self.http = http if http is not None else requests.Session()
        self.http.verify = verify_ssl
        self.credential: Optional[Credential] = None
        # Held for verify + refresh, released before the API call itself
        self._lock = threading.RLock()

    @property
    def domain(self) -> str:
        return urlparse(self.host).hostname or self.host

    def url(self, path: str) -> str:
        return f"{self.host}{API_PATH}{path}"

    def sign_in(self) -> Credential:
        """
        Exchange username and password for a ticket and CSRF token.

        On failure the previously held credential is left untouched.
        """
        logger.debug(f"Signing into Proxmox as {self.username}")
        try:
            response = self.http.post(
                self.url("/access/ticket"),
                data={"username": self.username, "password": self.password},
                timeout=self.timeout
            )
        except requests.Timeout as e:
            raise TransportError(f"Sign in timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise TransportError(f"Could not POST form to ticket endpoint: {e}") from e

        if not response.ok:
            raise AuthError(f"Could not auth: {status_text(response)}")

        try:
            data = response.json()["data"]
            credential = Credential(
                username=data.get("username") or self.username,
                ticket=data["ticket"],
                csrf_token=data["CSRFPreventionToken"]
            )
        except (ValueError, KeyError, TypeError) as e:
            raise AuthError(f"Malformed ticket response: {e}") from e

        self.http.cookies.set(
            AUTH_COOKIE_NAME, credential.ticket, domain=self.domain, path="/"
        )
        self.credential = credential
        logger.debug("Successfully signed into Proxmox")
        return credential

    def verify_session(self) -> bool:
        """Probe ``/version`` to check that the held ticket is still accepted."""
        if self.credential is None:
            return False

        logger.debug("Checking Proxmox auth")
        try:
            response = self.http.get(self.url("/version"), timeout=self.timeout)
        except requests.Timeout as e:
            raise TransportError(f"Auth check timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise TransportError(f"Could not do auth check: {e}") from e

        if not response.ok:
            logger.debug(f"Auth check rejected: {status_text(response)}")
            return False
        return True

    def ensure_authenticated(self) -> Credential:
        """Verify the session and sign in once more if it has expired."""
        with self._lock:
            if not self.verify_session():
                logger.info("Proxmox session is not valid, signing in")
                self.sign_in()
            return self.credential

    def request(self, method: str, path: str, *,
                params: Optional[Dict[str, Any]] = None,
                mutating: bool = False) -> requests.Response:
        """
        Issue one API call with the fixed timeout.

        State changing calls carry the CSRF token of the current credential.
        """
        headers = {}
        if mutating:
            if self.credential is None:
                raise AuthError("Not signed in")
            headers[CSRF_HEADER_NAME] = self.credential.csrf_token

        logger.debug(f"{method} {path}")
        try:
            return self.http.request(
                method, self.url(path),
                params=params, headers=headers, timeout=self.timeout
            )
        except requests.Timeout as e:
            raise TransportError(f"{method} {path} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise TransportError(f"Could not execute {method} {path}: {e}") from e

    def get_data(self, path: str, what: str) -> Any:
        """GET ``path`` and unwrap the ``data`` member of the JSON envelope."""
        response = self.request("GET", path)
        if not response.ok:
            raise TransportError(f"Could not get {what}: {status_text(response)}")
        try:
            return response.json()["data"]
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(f"Could not decode {what}: {e}") from e

    def close(self) -> None:
        self.http.close()
