#!/usr/bin/env python3
"""
Authentication and Session Management for the Leano Router API

Handles the login command, the session token and credential prompts.
The token lives only in memory for the lifetime of the process.
"""

import getpass
import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from .config import Settings, normalize_url
from .errors import AuthRejectedError, ProtocolError
from .transport import AUTH_TIMEOUT, Transport

log = logging.getLogger("leano.auth")

AUTH_ENDPOINT = "/authenticate.leano"
AUTH_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class Session:
    """
    An authenticated session

    The token is sent verbatim as the Leano_Auth header of every command.
    It never changes once issued; logging in again creates a new Session.
    """

    base_url: str
    token: str = field(repr=False)

    @property
    def authenticated(self) -> bool:
        return True

    @property
    def degraded(self) -> bool:
        """True when the device accepted the login but returned no token"""
        return self.token == ""


def auth_command(username: str, password: str) -> str:
    """Build the fixed-grammar login command"""
    return f"authenticate {username} {password}"


def authenticate(transport: Transport, base_url: str, username: str, password: str,
                 timeout: float = AUTH_TIMEOUT) -> Session:
    """
    Log in to the router and obtain a session token

    Args:
        transport: Transport used for the request
        base_url: Router base URL (e.g. http://192.168.0.1)
        username: Username (usually 'admin')
        password: Password
        timeout: Request timeout in seconds

    Returns:
        Session carrying the token

    Raises:
        AuthRejectedError: If the device answers with status != "success"
        ProtocolError: If the reply is not a JSON object
        TransportError: If the request fails
    """
    base_url = normalize_url(base_url)
    data = transport.post(
        f"{base_url}{AUTH_ENDPOINT}",
        auth_command(username, password),
        headers={'Content-Type': AUTH_CONTENT_TYPE},
        timeout=timeout
    )

    if not isinstance(data, dict):
        raise ProtocolError(f"Unexpected authentication reply: {type(data).__name__}")

    if data.get('status') != 'success':
        code = data.get('code')
        log.info("Login rejected for %s at %s (code %s)", username, base_url, code)
        raise AuthRejectedError(
            f"Authentication rejected (status={data.get('status')!r}, code={code!r})",
            code=code, response=data
        )

    token = data.get('token')
    token = "" if token is None else str(token)
    if not token:
        log.warning("Device at %s accepted the login but returned an empty token", base_url)
    else:
        log.debug("Login OK for %s at %s", username, base_url)

    return Session(base_url=base_url, token=token)


class AuthManager:
    """High-level authentication manager"""

    def __init__(self, transport: Optional[Transport] = None,
                 settings: Optional[Settings] = None):
        """
        Initialize auth manager

        Args:
            transport: Transport for the login request
            settings: Defaults for URL, username and timeouts
        """
        self.transport = transport or Transport()
        self.settings = settings or Settings()

    def login(self, base_url: str, username: str, password: str) -> Session:
        """Log in with explicit credentials"""
        return authenticate(self.transport, base_url, username, password,
                            timeout=self.settings.auth_timeout)

    def login_from_env(self, environ: Optional[Mapping[str, str]] = None) -> Session:
        """
        Log in using environment variables

        Environment variables:
            LEANO_URL: Router base URL
            LEANO_USERNAME: Username
            LEANO_PASSWORD: Password (required)

        Raises:
            ValueError: If LEANO_PASSWORD is not set
        """
        settings = Settings.from_env(environ)
        if not settings.password:
            raise ValueError("LEANO_PASSWORD is not set")

        self.settings = settings
        return self.login(settings.base_url, settings.username, settings.password)

    def login_interactive(self, input_fn: Callable[[str], str] = input,
                          getpass_fn: Callable[[str], str] = getpass.getpass) -> Session:
        """
        Interactive login with prompts

        Args:
            input_fn: Prompt function for URL and username
            getpass_fn: Prompt function for the password

        Returns:
            Session

        Raises:
            ValueError: If no password was entered
            AuthRejectedError: If the router refused the credentials
        """
        defaults = self.settings

        print("📋 Enter Router Credentials:\n")
        base_url = input_fn(f"Router URL [{defaults.base_url}]: ").strip() or defaults.base_url
        username = input_fn(f"Username [{defaults.username}]: ").strip() or defaults.username
        password = getpass_fn("Password: ").strip()

        if not password:
            print("\n❌ Password is required")
            raise ValueError("Password is required")

        print(f"\n🔄 Logging in as '{username}' to {base_url}...")
        try:
            session = self.login(base_url, username, password)
        except AuthRejectedError:
            print("\n❌ Login failed!")
            print("\n💡 Troubleshooting:")
            print(f"   • Verify router URL is correct: {base_url}")
            print("   • Check username and password")
            raise

        print("   ✅ Login successful!")
        return session
