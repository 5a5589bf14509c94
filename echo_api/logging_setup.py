"""
Logging setup - level and formatter, applied once at startup.

structlog is routed through the stdlib logging module, so records from
structlog loggers and from plain logging.getLogger() loggers (werkzeug,
config loading) share one handler and one renderer:

- log_json=False: key=value console lines
- log_json=True:  one JSON object per line
"""

import logging
import sys

import structlog

from echo_api.config import Config


HANDLER_NAME = 'echo_api'

_SHARED_PROCESSORS = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt='iso'),
]


def build_formatter(log_json: bool) -> structlog.stdlib.ProcessorFormatter:
    if log_json:
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=False),
        ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=processors,
    )


def configure_logging(config: Config, stream=None) -> None:
    """
    Configure structlog and the root logger from config.

    Args:
        config: resolved service configuration
        stream: handler output (defaults to stderr)
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(build_formatter(config.log_json))

    root = logging.getLogger()
    # Reconfiguring replaces our own handler only
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.log_level_number)
