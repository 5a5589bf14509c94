"""
Live-socket test: run the app on a real werkzeug server and talk to it
over HTTP.

Run with: pytest tests/test_live_server.py --run-integration -v
"""

import threading

import pytest
import requests
from werkzeug.serving import make_server

from echo_api.app import create_app
from echo_api.config import Config

pytestmark = pytest.mark.integration


@pytest.fixture
def base_url(live_host):
    server = make_server(live_host, 0, create_app(Config()), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host = '127.0.0.1' if live_host == '0.0.0.0' else live_host
        yield f"http://{host}:{server.server_port}"
    finally:
        server.shutdown()
        thread.join(timeout=5)


def test_echo_over_http(base_url):
    r = requests.post(f"{base_url}/echo", json={"req": "over the wire"}, timeout=5)

    assert r.status_code == 200
    assert r.headers['Content-Type'] == 'application/json'
    assert r.json() == {"res": "over the wire"}


def test_chunked_request_body(base_url):
    def chunks():
        yield b'{"req": '
        yield b'"chunked"}'

    r = requests.post(f"{base_url}/echo", data=chunks(), timeout=5)

    assert r.status_code == 200
    assert r.json() == {"res": "chunked"}


def test_wrong_method_over_http(base_url):
    r = requests.get(f"{base_url}/echo", timeout=5)

    assert r.status_code == 405
    assert r.json() == {"error": "method not allowed, expected POST"}
