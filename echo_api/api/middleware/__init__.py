"""
Global middleware for API requests.

Provides:
- Request logging (headers + re-buffered body, before dispatch)
- Response logging (observed status, headers, body, write count)
- Error envelope standardization

Chain: RequestLogging -> ResponseLogging -> router dispatch
"""

from .error_envelope import ErrorResponder, setup_error_handlers
from .request_logging import RequestLoggingMiddleware
from .response_logging import ResponseLoggingMiddleware
from .response_observer import ResponseObserver


def setup_logging_middleware(router, logger, error_responder: ErrorResponder) -> None:
    """
    Wrap the router's WSGI dispatch with the request/response loggers.

    Args:
        router: Flask app (or any object exposing a `wsgi_app` callable)
        logger: structured logger shared by both middlewares
        error_responder: answers requests the request logger cannot read
    """
    router.wsgi_app = RequestLoggingMiddleware(
        ResponseLoggingMiddleware(router.wsgi_app, logger),
        logger,
        error_responder,
    )


__all__ = [
    'ErrorResponder',
    'RequestLoggingMiddleware',
    'ResponseLoggingMiddleware',
    'ResponseObserver',
    'setup_error_handlers',
    'setup_logging_middleware',
]
