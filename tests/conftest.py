"""
Pytest configuration and shared fixtures.

Outbound IMLeagues traffic is replaced by a Mock standing in for
requests.Session, so no test touches the network.
"""

import json
from unittest.mock import Mock

import pytest

from iml_proxy.api.imleagues_client import IMLeaguesClient
from iml_proxy.services.forwarder import ProxyForwarder
from iml_proxy.services.session_manager import SessionManager

BASE_URL = "https://iml.test/"


def make_response(status_code: int = 200, json_data=None, text: str = None) -> Mock:
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    if text is None:
        text = json.dumps(json_data) if json_data is not None else ""
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def iml_env(monkeypatch):
    """Set a complete IMLeagues configuration."""
    monkeypatch.setenv("IML_EMAIL", "admin@example.edu")
    monkeypatch.setenv("IML_PASSWORD", "hunter2")
    monkeypatch.setenv("IML_SCHOOL_ID", "school-7")
    monkeypatch.setenv("IML_NETWORK_ID", "net 42")
    monkeypatch.delenv("IML_BASE_URL", raising=False)
    monkeypatch.delenv("IML_REQUEST_TIMEOUT", raising=False)


@pytest.fixture
def http() -> Mock:
    """Fake requests.Session shared by the session manager and the forwarder."""
    return Mock()


@pytest.fixture
def session_manager(http) -> SessionManager:
    return SessionManager(http=http, base_url=BASE_URL)


@pytest.fixture
def forwarder(session_manager, http) -> ProxyForwarder:
    return ProxyForwarder(session_manager, http=http, base_url=BASE_URL)


@pytest.fixture
def api_client(forwarder) -> IMLeaguesClient:
    return IMLeaguesClient(forwarder)


def outbound_calls(http: Mock) -> list:
    """Names of the outbound calls made on the fake session, in order."""
    return [name for name, _, _ in http.mock_calls if name in ("post", "request")]
