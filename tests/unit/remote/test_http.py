"""Unit tests for the HTTP helper."""

from unittest.mock import MagicMock

import pytest
import requests
from modctl.remote.http import HttpClient, RemoteError


def _response(ok: bool = True, status: int = 200, payload: object = None) -> MagicMock:
    response = MagicMock()
    response.ok = ok
    response.status_code = status
    response.json.return_value = payload
    return response


class TestHttpClient:
    """Tests for HttpClient."""

    def test_get_passes_timeout(self) -> None:
        """Requests use the configured timeout."""
        session = MagicMock()
        session.get.return_value = _response()
        client = HttpClient(timeout=7, session=session)

        client.get("https://example.com")

        assert session.get.call_args.kwargs["timeout"] == 7

    def test_connection_error(self) -> None:
        """Transport errors become RemoteError."""
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(RemoteError, match="failed"):
            HttpClient(session=session).get("https://example.com")

    def test_timeout(self) -> None:
        """Timeouts are reported with the limit."""
        session = MagicMock()
        session.get.side_effect = requests.Timeout()

        with pytest.raises(RemoteError, match="timed out after 3s"):
            HttpClient(timeout=3, session=session).get("https://example.com")

    def test_bad_status(self) -> None:
        """Non-2xx responses are closed and raise."""
        session = MagicMock()
        response = _response(ok=False, status=404)
        session.get.return_value = response

        with pytest.raises(RemoteError, match="status 404"):
            HttpClient(session=session).get("https://example.com")
        response.close.assert_called_once()

    def test_get_json(self) -> None:
        """JSON bodies are decoded."""
        session = MagicMock()
        session.get.return_value = _response(payload={"a": 1})

        assert HttpClient(session=session).get_json("https://example.com") == {"a": 1}

    def test_invalid_json(self) -> None:
        """Undecodable bodies raise RemoteError."""
        session = MagicMock()
        response = _response()
        response.json.side_effect = ValueError("bad")
        session.get.return_value = response

        with pytest.raises(RemoteError, match="Invalid JSON"):
            HttpClient(session=session).get_json("https://example.com")
