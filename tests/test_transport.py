import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from recordsync.core.exceptions import ChangeFetchError, TransportError
from recordsync.integrations.remote.client import RemoteRecordsClient
from recordsync.integrations.remote.transport import RequestsTransport
from recordsync.version import __version__


def test_transport_sends_json_body(mocker, make_response):
    mock_request = mocker.patch.object(requests.Session, "request", return_value=make_response(200, {}))
    transport = RequestsTransport(timeout=5)

    response = transport("http://server.test/v1/batch", method="POST",
                         headers={"Accept": "application/json"}, body={"requests": []})

    assert response.status_code == 200
    mock_request.assert_called_once_with(
        "POST",
        "http://server.test/v1/batch",
        headers={"Accept": "application/json"},
        json={"requests": []},
        timeout=5
    )


def test_transport_sets_user_agent():
    with RequestsTransport() as transport:
        assert transport.session.headers["User-Agent"] == f"recordsync/{__version__}"


def test_transport_wraps_request_errors(mocker):
    mocker.patch.object(requests.Session, "request", side_effect=requests.exceptions.ConnectionError("down"))
    transport = RequestsTransport()

    with pytest.raises(TransportError) as exc_info:
        transport("http://server.test/v1/collections/a/records")

    assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)


def test_transport_does_not_raise_on_http_errors(mocker, make_response):
    mocker.patch.object(requests.Session, "request", return_value=make_response(500, {}))

    assert RequestsTransport()("http://server.test/v1").status_code == 500


def test_client_uses_requests_transport_end_to_end(mocker, make_response):
    mock_request = mocker.patch.object(
        requests.Session, "request",
        return_value=make_response(200, {"items": [{"id": "1"}]}, headers={"Last-Modified": "5"})
    )

    with RemoteRecordsClient("http://server.test/v1") as client:
        result = client.fetch_changes_since("tasks")

    assert result.changes == [{"id": "1"}]
    assert mock_request.call_args.args == ("GET", "http://server.test/v1/collections/tasks/records?")


def test_transport_errors_propagate_through_client(mocker):
    mocker.patch.object(requests.Session, "request", side_effect=requests.exceptions.Timeout("slow"))
    client = RemoteRecordsClient("http://server.test/v1")

    with pytest.raises(TransportError):
        client.batch("tasks", [{"id": "1"}])


def test_client_closes_owned_transport(mocker):
    client = RemoteRecordsClient("http://server.test/v1")
    close = mocker.patch.object(client.transport, "close")

    client.close()

    close.assert_called_once()


def test_client_leaves_injected_transport_open(transport):
    client = RemoteRecordsClient("http://server.test/v1", transport=transport)

    client.close()

    transport.close.assert_not_called()


# --- Real HTTP round trips against a local server ---

class _StatusHandler(BaseHTTPRequestHandler):
    """Answers every GET with the status configured on the server."""

    def do_GET(self):
        self.server.hits += 1
        body = json.dumps({"error": "boom", "items": []}).encode()
        self.send_response(self.server.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _StatusHandler)
    server.status = 200
    server.hits = 0
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


def _remote(server):
    host, port = server.server_address[:2]
    return f"http://{host}:{port}/v1"


@pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
def test_transport_returns_retryable_statuses(local_server, status):
    local_server.status = status

    with RequestsTransport(timeout=5) as transport:
        response = transport(_remote(local_server) + "/collections/tasks/records")

    assert response.status_code == status
    assert local_server.hits == 1


@pytest.mark.parametrize("status", [429, 500, 503])
def test_default_client_raises_change_fetch_error_on_server_errors(local_server, status):
    local_server.status = status

    with RemoteRecordsClient(_remote(local_server), timeout=5) as client:
        with pytest.raises(ChangeFetchError) as exc_info:
            client.fetch_changes_since("tasks", "10")

    assert exc_info.value.status_code == status
