"""
Flask Application Factory - Echo API

One endpoint, POST /echo, behind request/response logging middleware:

    request -> RequestLogging -> ResponseLogging -> Flask dispatch -> handle_echo

Every response, including framework errors, is JSON.
"""

from typing import Optional

import structlog
from flask import Flask

from echo_api.api.middleware import (
    ErrorResponder,
    setup_error_handlers,
    setup_logging_middleware,
)
from echo_api.config import Config, load_config
from echo_api.routes import register_routes


def create_app(config: Optional[Config] = None, logger=None) -> Flask:
    """
    Build the WSGI application.

    Args:
        config: resolved configuration (loaded from file/env when omitted)
        logger: structured logger for the middleware and error responder

    Returns:
        Flask app with routes, error handlers and logging middleware installed
    """
    if config is None:
        config = load_config()
    if logger is None:
        logger = structlog.get_logger('echo_api')

    app = Flask(__name__)
    app.config['ECHO_API'] = config

    error_responder = ErrorResponder(logger)

    register_routes(app)
    setup_error_handlers(app, error_responder)
    setup_logging_middleware(app, logger, error_responder)

    return app


def run_app(config: Config) -> None:
    """Start the threaded development server. Blocks until interrupted."""
    logger = structlog.get_logger('echo_api')
    logger.info("Hello! Starting up!")
    logger.debug("logging configuration", **{
        'log-json': config.log_json,
        'log-level': config.log_level,
    })

    app = create_app(config, logger)

    logger.info("Here we go! Serving!", address=config.address)
    app.run(host=config.host, port=config.port, threaded=True)
