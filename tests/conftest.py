# tests/conftest.py
from unittest.mock import MagicMock

import pytest

from recordsync.integrations.remote.client import RemoteRecordsClient

REMOTE = "http://fake-server.test/v1"


def create_mock_response(status_code=200, json_data=None, headers=None):
    """Creates a mock response exposing status_code, headers.get() and json()."""
    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    mock_resp.headers = headers or {}
    mock_resp.json.return_value = json_data
    return mock_resp


@pytest.fixture
def transport():
    """A transport that returns whatever the test configures."""
    mock_transport = MagicMock()
    mock_transport.return_value = create_mock_response(200, {"items": []})
    return mock_transport


@pytest.fixture
def client(transport):
    return RemoteRecordsClient(REMOTE, transport=transport)


@pytest.fixture
def make_response():
    return create_mock_response
