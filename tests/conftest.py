"""
Shared pytest fixtures for echo API tests.

Provides:
- app / client fixtures built from a default Config
- wsgi_environ / run_wsgi helpers for driving middleware directly
"""

import pytest
from werkzeug.test import EnvironBuilder

from echo_api.app import create_app
from echo_api.config import Config


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def app(config):
    """Create test Flask application."""
    app = create_app(config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


class StartResponseRecorder:
    """Stand-in for the server's start_response."""

    def __init__(self):
        self.calls = []
        self.written = []

    def __call__(self, status, headers, exc_info=None):
        self.calls.append((status, list(headers)))
        return self.written.append

    @property
    def status(self):
        return self.calls[0][0] if self.calls else None


def make_environ(path='/echo', method='POST', data=b'', headers=None):
    builder = EnvironBuilder(path=path, method=method, data=data, headers=headers)
    return builder.get_environ()


def run_wsgi(app, environ):
    """Call a WSGI app, drain and close its iterable."""
    start_response = StartResponseRecorder()
    result = app(environ, start_response)
    try:
        chunks = list(result)
    finally:
        if hasattr(result, 'close'):
            result.close()
    return start_response, chunks


@pytest.fixture
def wsgi_environ():
    return make_environ


@pytest.fixture
def wsgi_runner():
    return run_wsgi
