"""
Root pytest configuration.

Live-server tests bind a real socket and are opt-in:

    pytest --run-integration [--live-host 0.0.0.0]

Setting ECHO_API_RUN_INTEGRATION=1 in the environment has the same effect
as the flag.
"""

import os

import pytest

pytest_plugins = ["pytester"]


def pytest_addoption(parser):
    group = parser.getgroup("echo-api")
    group.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run the live-server tests (binds a local HTTP port).",
    )
    group.addoption(
        "--live-host",
        default="127.0.0.1",
        help="Interface the live-server tests bind to.",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: tests that start a live HTTP server"
    )


def _integration_enabled(config) -> bool:
    if config.getoption("--run-integration"):
        return True
    return os.getenv("ECHO_API_RUN_INTEGRATION", "").lower() in ("1", "true", "yes")


def pytest_collection_modifyitems(config, items):
    if _integration_enabled(config):
        return

    skip_live = pytest.mark.skip(
        reason="starts a live server (use --run-integration to run)"
    )
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip_live)


@pytest.fixture(scope="session")
def live_host(pytestconfig):
    return pytestconfig.getoption("--live-host")
