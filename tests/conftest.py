"""Shared test fixtures for the Leano client tests."""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from leano.router_api import RouterAPI
from leano.transport import Transport


def make_response(data=None, status_code=200, json_error=False):
    """Build a mock requests.Response returning ``data`` from json()."""
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    if json_error:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = data
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(response=resp)
    return resp


@pytest.fixture
def http():
    """Mock requests.Session; set ``http.post.return_value`` or ``side_effect``."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def transport(http):
    return Transport(session=http)


@pytest.fixture
def api(transport, http):
    """RouterAPI authenticated with token 'abc'; the login call is reset."""
    http.post.return_value = make_response({"status": "success", "code": "0", "token": "abc"})
    client = RouterAPI(base_url="http://192.168.0.1", transport=transport)
    client.authenticate("admin", "admin")
    http.post.reset_mock()
    return client


def sent_body(http, call_index=-1):
    """Decoded body of a recorded POST."""
    return http.post.call_args_list[call_index].kwargs["data"].decode("utf-8")


def sent_headers(http, call_index=-1):
    return http.post.call_args_list[call_index].kwargs["headers"]


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo cli.setup_logging() between tests."""
    yield
    logger = logging.getLogger("leano")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
