"""
Integration tests for CurlClient using real libcurl transfers against a local server.

No external network needed. Run with:
  pytest tests/integration -m integration -v
"""
from __future__ import annotations

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from curl_client.client import CurlClient
from curl_client.config.settings import CurlSettings


class _EchoHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def _echo(self) -> None:
        if self.path.startswith("/redirect"):
            self.send_response(302)
            self.send_header("Location", "/echo?from=redirect")
            self.send_header("Content-Length", "0")
            self.end_headers()
            return

        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode() if length else ""
        payload = json.dumps(
            {
                "method": self.command,
                "path": self.path,
                "body": body,
                "headers": {k.lower(): v for k, v in self.headers.items()},
            }
        ).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("X-Echo", "1")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = do_OPTIONS = _echo

    def log_message(self, format, *args):  # noqa: A002
        return


@pytest.fixture(scope="module")
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _EchoHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


@pytest.fixture
def client():
    c = CurlClient(settings=CurlSettings(_env_file=None, timeout_seconds=5))
    yield c
    c.close()


def _closed_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.mark.integration
def test_get_with_query_params(client, server_url):
    client.get([f"{server_url}/echo", {"a": 1, "b": 2}])

    assert client.error_code == 0
    assert client.response_code == 200
    echoed = json.loads(client.response)
    assert echoed["method"] == "GET"
    assert echoed["path"] == "/echo?a=1&b=2"
    assert "X-Echo: 1" in client.response_header
    assert client.response_header[0].startswith("HTTP/1.1 200")
    assert client.request_header[0] == "GET /echo?a=1&b=2 HTTP/1.1"
    assert client.response_info["http_code"] == 200


@pytest.mark.integration
def test_post_form_body_headers_and_cookies(client, server_url):
    client.set_header("X-Token", "first").set_header("X-Token", "second")
    client.set_cookie("k1", "v1").set_cookie("k2", "v2")
    client.post(f"{server_url}/login", {"name": "a b"})

    echoed = json.loads(client.response)
    assert echoed["method"] == "POST"
    assert echoed["body"] == "name=a+b"
    assert echoed["headers"]["x-token"] == "second"
    assert echoed["headers"]["cookie"] == "k1=v1; k2=v2"
    assert echoed["headers"]["content-type"] == "application/x-www-form-urlencoded"
    assert sum(1 for line in client.request_header if line.lower().startswith("x-token:")) == 1


@pytest.mark.integration
@pytest.mark.parametrize("verb", ["put", "patch", "delete"])
def test_custom_methods(client, server_url, verb):
    getattr(client, verb)(f"{server_url}/item", {"k": "v"})
    echoed = json.loads(client.response)
    assert echoed["method"] == verb.upper()
    assert echoed["body"] == "k=v"


@pytest.mark.integration
def test_get_after_put_is_plain_get(client, server_url):
    client.put(f"{server_url}/item", {"k": "v"})
    client.get(f"{server_url}/item")
    echoed = json.loads(client.response)
    assert echoed["method"] == "GET"
    assert echoed["body"] == ""


@pytest.mark.integration
def test_redirect_followed_and_outgoing_headers_from_last_hop(client, server_url):
    client.get(f"{server_url}/redirect")

    assert client.response_code == 200
    assert json.loads(client.response)["path"] == "/echo?from=redirect"
    assert client.response_info["url"].endswith("/echo?from=redirect")
    assert client.response_info["redirect_count"] == 1
    assert client.request_header[0] == "GET /echo?from=redirect HTTP/1.1"
    assert any(line.startswith("Referer:") for line in client.request_header)


@pytest.mark.integration
def test_unreachable_host_sets_error_state(client):
    result = client.get(f"http://127.0.0.1:{_closed_port()}/")

    assert result is client
    assert client.error_code != 0
    assert client.error_message
    assert client.response_code == 0
    assert client.response is None


@pytest.mark.integration
def test_close_twice_real_handle():
    c = CurlClient(settings=CurlSettings(_env_file=None))
    c.close()
    c.close()
    assert c.closed is True
