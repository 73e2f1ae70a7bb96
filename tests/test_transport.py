"""Tests for the HTTP transport."""

import pytest
import requests

from leano.errors import TransportError
from leano.transport import COMMAND_TIMEOUT, Transport

from conftest import make_response


class TestPost:
    def test_returns_decoded_json(self, transport, http):
        http.post.return_value = make_response({"status": "success"})
        assert transport.post("http://r/api.leano", "get_index_data") == {"status": "success"}

    def test_sends_utf8_body_headers_and_timeout(self, transport, http):
        http.post.return_value = make_response({})
        transport.post("http://r/api.leano", "set_dmz 1 tcpudp 10.0.0.2",
                       headers={"X": "1"}, timeout=5)

        http.post.assert_called_once_with(
            "http://r/api.leano",
            data=b"set_dmz 1 tcpudp 10.0.0.2",
            headers={"X": "1"},
            timeout=5,
        )

    def test_default_timeout(self, transport, http):
        http.post.return_value = make_response({})
        transport.post("http://r/api.leano", "x")
        assert http.post.call_args.kwargs["timeout"] == COMMAND_TIMEOUT

    def test_non_object_json_is_returned_as_is(self, transport, http):
        http.post.return_value = make_response([1, 2])
        assert transport.post("http://r", "x") == [1, 2]


class TestFailures:
    def test_timeout(self, transport, http):
        http.post.side_effect = requests.exceptions.Timeout("slow")
        with pytest.raises(TransportError, match="timed out"):
            transport.post("http://r", "x", timeout=1)

    def test_connection_error(self, transport, http):
        http.post.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TransportError, match="Could not connect") as exc:
            transport.post("http://r", "x")
        assert isinstance(exc.value.__cause__, requests.exceptions.ConnectionError)

    def test_http_error_status(self, transport, http):
        http.post.return_value = make_response({}, status_code=500)
        with pytest.raises(TransportError, match="HTTP 500"):
            transport.post("http://r", "x")

    def test_other_request_exception(self, transport, http):
        http.post.side_effect = requests.exceptions.TooManyRedirects("loop")
        with pytest.raises(TransportError):
            transport.post("http://r", "x")

    def test_non_json_body(self, transport, http):
        http.post.return_value = make_response(json_error=True)
        with pytest.raises(TransportError, match="not valid JSON"):
            transport.post("http://r", "x")

    def test_single_attempt_only(self, transport, http):
        http.post.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TransportError):
            transport.post("http://r", "x")
        assert http.post.call_count == 1


class TestSession:
    def test_default_session_never_retries(self):
        transport = Transport()
        adapter = transport.session.get_adapter("http://192.168.0.1/api.leano")
        assert adapter.max_retries.total == 0
