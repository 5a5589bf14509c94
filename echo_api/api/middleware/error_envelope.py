"""
Error envelope - Uniform JSON error responses.

Every error leaving the service has the same shape:

    {"error": "<human readable message>"}

ErrorResponder builds these responses. The returned Response is a WSGI
application, so it can be returned from a Flask view or called directly
from WSGI middleware that runs outside the Flask app context.
"""

from flask import Flask, Response
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from echo_api.api.contracts import ErrorEnvelope
from echo_api.api.errors import APIError


JSON_MIMETYPE = 'application/json'


class ErrorResponder:
    """Serialize a status code plus an error into the JSON error envelope."""

    def __init__(self, logger):
        self.logger = logger

    def __call__(self, status_code: int, error) -> Response:
        message = str(error)
        self.logger.debug(
            "error response",
            status=status_code,
            error=message,
        )
        # Serialization faults here are not handled; they surface to the server
        body = ErrorEnvelope(error=message).to_wire()
        return Response(body, status=status_code, mimetype=JSON_MIMETYPE)

    def from_api_error(self, error: APIError) -> Response:
        return self(error.status_code, error)


def setup_error_handlers(app: Flask, responder: ErrorResponder) -> None:
    """
    Set up JSON error handlers on Flask app.

    Handles:
    - APIError raised from views
    - HTTP exceptions raised by Flask itself (404 unknown path, 405 with Allow)
    - Unhandled Python exceptions (500, logged with traceback)

    Args:
        app: Flask application instance
        responder: ErrorResponder shared with the middleware
    """

    @app.errorhandler(APIError)
    def handle_api_error(error):
        return responder.from_api_error(error)

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(error):
        """Name the accepted methods in the message and the Allow header."""
        allowed = sorted(error.valid_methods or [])
        if not allowed:
            return responder(error.code, error.name.lower())

        response = responder(
            error.code,
            f"method not allowed, expected {', '.join(allowed)}",
        )
        response.headers['Allow'] = ', '.join(allowed)
        return response

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        """Handle Flask/Werkzeug HTTP exceptions."""
        # "Not Found" -> "not found"
        return responder(error.code, error.name.lower())

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        """Handle unhandled Python exceptions."""
        responder.logger.exception(
            "unhandled error",
            error_type=type(error).__name__,
        )
        return responder(500, "internal server error")
