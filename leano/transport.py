#!/usr/bin/env python3
"""
HTTP transport for the Leano router API

A thin POST wrapper around a requests session. Every call is a single round
trip: there are no retries, a failure is reported to the caller at once.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from .errors import TransportError

log = logging.getLogger("leano.transport")

# Default timeouts (seconds)
AUTH_TIMEOUT = 10
COMMAND_TIMEOUT = 30


class Transport:
    """POSTs opaque string bodies and decodes JSON replies"""

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize transport

        Args:
            session: Optional requests session (a new one is created by default)
        """
        self.session = session or requests.Session()

        # Fail the call instead of retrying
        adapter = HTTPAdapter(max_retries=Retry(total=0, read=False, redirect=False))
        self.session.mount('http://', adapter)
        self.session.mount('https://', adapter)

    def post(self, url: str, body: str, headers: Optional[Dict[str, str]] = None,
             timeout: float = COMMAND_TIMEOUT) -> Any:
        """
        Send one POST request and return the decoded JSON body

        Args:
            url: Absolute URL
            body: Request body, sent UTF-8 encoded
            headers: Extra request headers
            timeout: Request timeout in seconds

        Returns:
            The parsed JSON value

        Raises:
            TransportError: On connection failure, timeout, HTTP error
                status or a body that is not JSON
        """
        log.debug("POST %s (%d bytes, timeout %ss)", url, len(body), timeout)

        try:
            response = self.session.post(
                url,
                data=body.encode('utf-8'),
                headers=headers or {},
                timeout=timeout
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request to {url} timed out after {timeout}s") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Could not connect to {url}: {e}") from e
        except requests.exceptions.HTTPError as e:
            raise TransportError(f"HTTP {e.response.status_code} from {url}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Response from {url} is not valid JSON") from e
