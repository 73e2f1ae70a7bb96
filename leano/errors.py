#!/usr/bin/env python3
"""
Exceptions raised by the Leano router API client.

    LeanoError
    ├── ApiError
    │   ├── TransportError   (network, timeout, HTTP status, malformed JSON)
    │   └── ProtocolError    (JSON of the wrong shape for the command)
    └── AuthError
        ├── AuthRejectedError      (device answered status != "success")
        └── NotAuthenticatedError  (command attempted without a session)

A command answered with ``status != "success"`` is not an exception; it is
returned to the caller as a normal response.
"""

from typing import Any, Optional


class LeanoError(Exception):
    """Base class for all client errors"""


class ApiError(LeanoError):
    """A command could not be completed"""


class TransportError(ApiError):
    """The HTTP round trip failed or returned something that is not JSON"""


class ProtocolError(ApiError):
    """The device answered with JSON of an unexpected shape"""


class AuthError(LeanoError):
    """Authentication problems"""


class AuthRejectedError(AuthError):
    """The device refused the credentials"""

    def __init__(self, message: str, code: Optional[str] = None,
                 response: Optional[Any] = None):
        super().__init__(message)
        self.code = code
        self.response = response


class NotAuthenticatedError(AuthError):
    """A command was issued before authenticate() succeeded"""
