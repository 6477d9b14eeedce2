"""Low-level XML-RPC client for the Odoo external API.

Handles authentication, session state, and the HTTP round trip to the
``/xmlrpc/2/common`` and ``/xmlrpc/2/object`` endpoints.
"""
from __future__ import annotations
import logging
import xmlrpc.client
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit
from xml.parsers.expat import ExpatError

import requests

from .exceptions import AuthenticationError, NotConnectedError, OdooRPCError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30

COMMON_ENDPOINT = "common"
OBJECT_ENDPOINT = "object"
ENDPOINTS = (COMMON_ENDPOINT, OBJECT_ENDPOINT)

DEFAULT_BASE_URL = "http://localhost"
DEFAULT_DB = "odoo_db"
DEFAULT_USERNAME = "admin"
DEFAULT_PASSWORD = "admin"


@dataclass(frozen=True)
class Session:
    """Authenticated identity, written once by ``connect()``."""
    db: str
    uid: int
    password: str

    def object_params(self, model: str, method: str) -> List[Any]:
        """Leading positional parameters of every execute_kw call."""
        return [self.db, self.uid, self.password, model, method]


class OdooClient:
    """XML-RPC client for one Odoo database.

    Features:
    - Authentication against the common endpoint
    - execute_kw dispatch against the object endpoint
    - Centralized translation of transport errors and faults

    Usage:
        client = OdooClient("https://erp.example.com", db="prod", username="bot", password="secret")
        client.connect()
        ids = client.execute_kw("res.partner", "search", [[["is_company", "=", True]]])
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        port: Optional[int] = None,
        db: str = DEFAULT_DB,
        username: str = DEFAULT_USERNAME,
        password: str = DEFAULT_PASSWORD,
        basic_auth: Optional[Tuple[str, str]] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize Odoo client.

        Args:
            base_url: Server URL, scheme included (default: http://localhost)
            port: Port override; defaults to the port in base_url, else the scheme default
            db: Database name
            username: Login
            password: Password or API key
            basic_auth: Optional (user, password) for HTTP basic auth in front of Odoo
            timeout: Per-request timeout in seconds
        """
        parts = urlsplit(base_url or DEFAULT_BASE_URL)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError(f"Invalid Odoo base URL '{base_url}': expected http(s)://host[:port]")

        self.host = parts.hostname
        self.secure = parts.scheme == "https"
        self.port = port or parts.port
        self.db = db
        self.username = username
        self.password = password
        self.basic_auth = basic_auth
        self.timeout = timeout
        self._session: Optional[Session] = None

    @classmethod
    def from_config(cls, config) -> "OdooClient":
        """Build a client from an ``OdooConfig``."""
        return cls(
            base_url=config.base_url,
            port=config.port,
            db=config.db,
            username=config.username,
            password=config.password,
            basic_auth=config.basic_auth,
            timeout=config.timeout,
        )

    @property
    def base_url(self) -> str:
        scheme = "https" if self.secure else "http"
        netloc = f"{self.host}:{self.port}" if self.port else self.host
        return f"{scheme}://{netloc}"

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def uid(self) -> int:
        return self._session.uid if self._session else 0

    def endpoint_url(self, endpoint: str) -> str:
        """Return the full URL of the ``common`` or ``object`` endpoint."""
        if endpoint not in ENDPOINTS:
            raise ValueError(f"Unknown XML-RPC endpoint '{endpoint}'")
        return f"{self.base_url}/xmlrpc/2/{endpoint}"

    def connect(self) -> int:
        """Authenticate and keep the session for later calls.

        Returns:
            Odoo user ID

        Raises:
            AuthenticationError: If Odoo rejects the credentials
            OdooRPCError: On transport failure or server fault
        """
        uid = self.call(COMMON_ENDPOINT, "authenticate", [self.db, self.username, self.password, {}])
        if not uid:
            raise AuthenticationError(
                self.endpoint_url(COMMON_ENDPOINT),
                "authenticate",
                "Error connecting to database. This is probably due to invalid credentials.",
            )
        self._session = Session(db=self.db, uid=uid, password=self.password)
        logger.info("Connected to Odoo database '%s' with user ID %s", self.db, uid)
        return uid

    def disconnect(self) -> None:
        """Forget the session. XML-RPC has no server-side logout."""
        self._session = None

    def server_version(self) -> Dict[str, Any]:
        """Return the server version info; needs no authentication."""
        return self.call(COMMON_ENDPOINT, "version", [])

    def execute_kw(self, model: str, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        """Call a model method through the object endpoint.

        Args:
            model: Model name (e.g. 'res.partner')
            method: Model method (e.g. 'search_read')
            params: Positional args list, optionally followed by a kwargs dict

        Returns:
            Decoded server response

        Raises:
            NotConnectedError: If connect() has not succeeded yet
            OdooRPCError: On transport failure or server fault
        """
        if self._session is None:
            raise NotConnectedError(
                self.endpoint_url(OBJECT_ENDPOINT),
                "execute_kw",
                "Not connected - call connect() first",
            )
        full_params = self._session.object_params(model, method) + list(params or [])
        logger.debug("execute_kw %s.%s", model, method)
        return self.call(OBJECT_ENDPOINT, "execute_kw", full_params)

    def call(self, endpoint: str, method: str, params: Sequence[Any]) -> Any:
        """Execute one XML-RPC request.

        Args:
            endpoint: 'common' or 'object'
            method: Remote procedure name
            params: Positional parameters

        Returns:
            First element of the decoded response

        Raises:
            OdooRPCError: On transport failure, HTTP error, or XML-RPC fault
        """
        url = self.endpoint_url(endpoint)
        body = xmlrpc.client.dumps(tuple(params), methodname=method, allow_none=True)
        logger.debug("POST %s %s", url, method)

        try:
            resp = requests.post(
                url,
                data=body.encode("utf-8"),
                headers={"Content-Type": "text/xml"},
                auth=self.basic_auth,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Transport error calling %s on %s: %s", method, url, exc)
            raise OdooRPCError(url, method, str(exc)) from exc

        self._handle_error(resp, url, method)

        try:
            result, _ = xmlrpc.client.loads(resp.content, use_builtin_types=True)
        except xmlrpc.client.Fault as fault:
            logger.warning("Odoo fault calling %s on %s: %s", method, url, fault.faultString)
            raise OdooRPCError(url, method, fault.faultString, fault.faultCode) from fault
        except (xmlrpc.client.ResponseError, ExpatError) as exc:
            raise OdooRPCError(url, method, f"Malformed XML-RPC response: {exc}") from exc

        return result[0] if result else None

    def _handle_error(self, resp: requests.Response, url: str, method: str) -> None:
        """Centralized error handling for HTTP responses.

        Raises:
            OdooRPCError: If response status indicates error
        """
        if resp.status_code >= 400:
            logger.warning("HTTP %s calling %s on %s", resp.status_code, method, url)
            raise OdooRPCError(url, method, resp.text, resp.status_code)
