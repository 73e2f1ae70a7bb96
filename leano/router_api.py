#!/usr/bin/env python3
"""
Leano Router API Wrapper

Command client for routers exposing the Leano HTTP control API
(/authenticate.leano and /api.leano).

Every command is a plain string (a verb and positional arguments) POSTed as
the request body. Replies are flat JSON objects of string fields. Any field
may be missing; "status" == "success" marks a successful remote operation.

Usage:
    from leano.router_api import RouterAPI

    api = RouterAPI.login(
        base_url="http://192.168.0.1",
        username="admin",
        password="admin"
    )

    # Dashboard data
    data = api.get_index_data()
    print(f"IMEI: {data.field('IMEI')}")

    # Enable DMZ for a host
    result = api.set_dmz("192.168.0.98")
    print("OK" if result.succeeded else f"Failed: {result}")

    # Lock to an EARFCN
    api.set_band_lock(42490)
"""

import logging
import re
from typing import Any, Dict, List, Optional, Union

from .config import DEFAULT_DMZ_IP, DEFAULT_URL, Settings, normalize_url
from .errors import NotAuthenticatedError, ProtocolError
from .router_auth import AuthManager, Session, authenticate
from .transport import AUTH_TIMEOUT, COMMAND_TIMEOUT, Transport

log = logging.getLogger("leano.api")

API_ENDPOINT = "/api.leano"
AUTH_HEADER = "Leano_Auth"
COMMAND_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"

INDEX_COMMAND = "get_index_data"
NEIGHBOUR_COMMAND = "get_neighbour_cell"

# Device wire name for the neighbour cell count (sic)
NEIGHBOUR_COUNT_FIELD = "lenghtt"
NEIGHBOUR_FIELD_RE = re.compile(r"^(\D+)(\d+)$")


def field_value(data: Dict[str, Any], name: str) -> Optional[str]:
    """Return a reply field as a string, or None if absent or empty"""
    value = data.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class LeanoResponse(dict):
    """
    A decoded device reply

    Plain dict of the JSON object, with helpers that treat missing keys and
    empty strings alike.
    """

    def field(self, name: str) -> Optional[str]:
        return field_value(self, name)

    @property
    def status(self) -> Optional[str]:
        return self.field('status')

    @property
    def succeeded(self) -> bool:
        """True when the device reported status "success" """
        return self.status == 'success'


def parse_neighbour_cells(response: Dict[str, Any]) -> List[Dict[str, str]]:
    """
    Split a get_neighbour_cell reply into one dict per cell

    The reply carries the cell count in "lenghtt" and numbered fields
    (type1, band1, pcid1, ... typeN, bandN, ...). Only suffixes 1..N are read.
    Empty values are dropped and cells left with no fields are omitted.
    A missing or non-numeric count yields no cells.

    Args:
        response: get_neighbour_cell reply

    Returns:
        List of {field: value} dicts, in cell order
    """
    raw_count = response.get(NEIGHBOUR_COUNT_FIELD)
    try:
        count = int(str(raw_count).strip())
    except (TypeError, ValueError):
        log.warning("Neighbour cell count %r is not a number, no cells read", raw_count)
        return []

    grouped: Dict[int, Dict[str, str]] = {}
    for key in response:
        match = NEIGHBOUR_FIELD_RE.match(key)
        if not match:
            continue
        index = int(match.group(2))
        value = field_value(response, key)
        if 1 <= index <= count and value is not None:
            grouped.setdefault(index, {})[match.group(1)] = value

    return [grouped[index] for index in sorted(grouped)]


class RouterAPI:
    """Session-authenticated command client for a Leano router"""

    def __init__(self, base_url: str = DEFAULT_URL,
                 session: Optional[Session] = None,
                 transport: Optional[Transport] = None,
                 auth_timeout: float = AUTH_TIMEOUT,
                 command_timeout: float = COMMAND_TIMEOUT):
        """
        Initialize Router API

        Args:
            base_url: Router base URL
            session: Session from a previous authenticate() call
            transport: HTTP transport (a new one is created by default)
            auth_timeout: Timeout for the login request
            command_timeout: Timeout for command requests
        """
        self.base_url = normalize_url(session.base_url if session else base_url)
        self.session = session
        self.transport = transport or Transport()
        self.auth_timeout = auth_timeout
        self.command_timeout = command_timeout

    # ========================================================================
    # Convenience Authentication Methods
    # ========================================================================

    @classmethod
    def from_settings(cls, settings: Settings,
                      transport: Optional[Transport] = None) -> 'RouterAPI':
        """Create an unauthenticated API instance from settings"""
        return cls(base_url=settings.base_url, transport=transport,
                   auth_timeout=settings.auth_timeout,
                   command_timeout=settings.command_timeout)

    @classmethod
    def login(cls, base_url: str = DEFAULT_URL,
              username: str = "admin",
              password: str = "",
              transport: Optional[Transport] = None) -> 'RouterAPI':
        """
        Create API instance by logging in with username/password

        Raises:
            AuthRejectedError: If the router refused the credentials
            TransportError: If the router could not be reached

        Example:
            >>> api = RouterAPI.login(
            ...     base_url="http://192.168.0.1",
            ...     username="admin",
            ...     password="admin"
            ... )
        """
        api = cls(base_url=base_url, transport=transport)
        api.authenticate(username, password)
        return api

    @classmethod
    def from_env(cls, environ=None, transport: Optional[Transport] = None) -> 'RouterAPI':
        """
        Create API instance using environment variables

        See leano.config for the variables read.

        Raises:
            ValueError: If LEANO_PASSWORD is not set
        """
        settings = Settings.from_env(environ)
        transport = transport or Transport()
        auth = AuthManager(transport, settings)
        session = auth.login_from_env(environ)

        return cls(session=session, transport=transport,
                   auth_timeout=settings.auth_timeout,
                   command_timeout=settings.command_timeout)

    @classmethod
    def login_interactive(cls, settings: Optional[Settings] = None,
                          transport: Optional[Transport] = None,
                          **prompts) -> 'RouterAPI':
        """
        Create API instance with interactive login prompts

        Raises:
            ValueError: If no password was entered
            AuthRejectedError: If the router refused the credentials
        """
        settings = settings or Settings()
        transport = transport or Transport()
        auth = AuthManager(transport, settings)
        session = auth.login_interactive(**prompts)

        return cls(session=session, transport=transport,
                   auth_timeout=settings.auth_timeout,
                   command_timeout=settings.command_timeout)

    def authenticate(self, username: str, password: str) -> Session:
        """
        Log in and keep the resulting session for subsequent commands

        Returns:
            The new Session
        """
        self.session = authenticate(self.transport, self.base_url, username, password,
                                    timeout=self.auth_timeout)
        return self.session

    @property
    def authenticated(self) -> bool:
        return self.session is not None

    # ========================================================================
    # Command execution
    # ========================================================================

    def execute(self, command: str) -> LeanoResponse:
        """
        Send a command and return the decoded reply

        The reply's "status" is not interpreted here.

        Args:
            command: Command string, e.g. "get_index_data"

        Returns:
            LeanoResponse

        Raises:
            NotAuthenticatedError: If authenticate() has not succeeded
            TransportError: If the request fails
            ProtocolError: If the reply is not a JSON object
        """
        if self.session is None:
            raise NotAuthenticatedError(f"Not authenticated, refusing to send {command!r}")

        log.debug("Executing %r", command)
        data = self.transport.post(
            f"{self.base_url}{API_ENDPOINT}",
            command,
            headers={
                AUTH_HEADER: self.session.token,
                'Content-Type': COMMAND_CONTENT_TYPE
            },
            timeout=self.command_timeout
        )

        if not isinstance(data, dict):
            raise ProtocolError(f"Unexpected reply to {command!r}: {type(data).__name__}")

        return LeanoResponse(data)

    # ========================================================================
    # Commands
    # ========================================================================

    def set_dmz(self, ip: Optional[str] = None) -> LeanoResponse:
        """
        Enable DMZ (TCP and UDP) for a LAN host

        Args:
            ip: Host address (default: 192.168.0.98)
        """
        ip = (ip or "").strip() or DEFAULT_DMZ_IP
        return self.execute(f"set_dmz 1 tcpudp {ip}")

    def set_band_lock(self, earfcn: Union[int, str]) -> LeanoResponse:
        """
        Lock the modem to an EARFCN

        Args:
            earfcn: Channel number, e.g. 42490
        """
        return self.execute(f"set_band_lock {str(earfcn).strip()}")

    def get_index_data(self) -> LeanoResponse:
        """
        Query dashboard data

        Returns a flat mapping with fields such as IMEI, IMSI, CSQ, IPV4,
        INTERNET, SYSUP, WANUP, recieve, sentt, cpu1, cpu2, ram and the
        optional radio, SIM, IP and device fields (see leano.display).
        """
        return self.execute(INDEX_COMMAND)

    def get_neighbour_cell(self) -> LeanoResponse:
        """Query the raw neighbour cell scan"""
        return self.execute(NEIGHBOUR_COMMAND)

    def neighbour_cells(self) -> List[Dict[str, str]]:
        """Query the neighbour cell scan and split it per cell"""
        return parse_neighbour_cells(self.get_neighbour_cell())
