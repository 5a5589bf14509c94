#!/usr/bin/env python3
"""
CLI for the Echo API

Commands:
    serve        - Start the HTTP server
    show-config  - Print the resolved configuration

Usage:
    echo-api serve
    echo-api serve --host 0.0.0.0 --port 9000
    echo-api show-config --json
"""

import dataclasses
import json
import sys

import click
import structlog

from echo_api import __version__
from echo_api.config import ConfigError, load_config
from echo_api.logging_setup import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="echo-api")
def cli():
    """Echo API - JSON echo service with request/response logging."""
    pass


@cli.command("serve")
@click.option("--host", default=None, help="Listen address (overrides config)")
@click.option("--port", type=int, default=None, help="Listen port (overrides config)")
def serve(host, port):
    """Start the HTTP server."""
    try:
        config = load_config()
    except ConfigError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    overrides = {}
    if host is not None:
        overrides['host'] = host
    if port is not None:
        overrides['port'] = port
    config = dataclasses.replace(config, **overrides)

    configure_logging(config)

    from echo_api.app import run_app
    try:
        run_app(config)
    except Exception:
        structlog.get_logger('echo_api').exception("error on startup")
        sys.exit(1)


@cli.command("show-config")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def show_config(output_json):
    """Print the resolved configuration."""
    try:
        config = load_config()
    except ConfigError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(config.to_dict(), indent=2))
        return

    for key, value in config.to_dict().items():
        click.echo(f"{key}: {value}")


if __name__ == "__main__":
    cli()
