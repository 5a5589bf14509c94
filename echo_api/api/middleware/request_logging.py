"""
Request logging middleware - Pre-handling diagnostic record.

Reads the whole request body, puts an identical unread stream back into
the WSGI environ, then logs method, URL, protocol, headers and body at
DEBUG before handing the request to the wrapped application.

Failures to serialize headers or to read the body are answered with a
500 error envelope and the wrapped application is never called.
"""

import io
import json
from typing import Dict, Iterable, List, Tuple

from werkzeug.datastructures import EnvironHeaders
from werkzeug.exceptions import ClientDisconnected
from werkzeug.wsgi import get_current_url, get_input_stream

from echo_api.api.errors import InternalError


def serialize_headers(headers: Iterable[Tuple[str, str]]) -> str:
    """
    Serialize header pairs as a JSON object of name -> list of values.

    Raises:
        TypeError / ValueError if a name or value is not JSON serializable
    """
    grouped: Dict[str, List[str]] = {}
    for name, value in headers:
        grouped.setdefault(name, []).append(value)
    return json.dumps(grouped)


class RequestLoggingMiddleware:
    """WSGI middleware emitting one `request received` record per request."""

    def __init__(self, app, logger, error_responder):
        self.app = app
        self.logger = logger
        self.error_responder = error_responder

    def __call__(self, environ, start_response):
        try:
            headers = serialize_headers(EnvironHeaders(environ))
        except (TypeError, ValueError) as e:
            error = InternalError(f"unable to serialize request headers: {e}")
            return self.error_responder.from_api_error(error)(environ, start_response)

        try:
            body = get_input_stream(environ).read()
        except (OSError, ClientDisconnected) as e:
            # A partial read is treated like any other read failure
            error = InternalError(f"unable to read request body: {e}")
            return self.error_responder.from_api_error(error)(environ, start_response)

        environ['wsgi.input'] = io.BytesIO(body)
        environ['CONTENT_LENGTH'] = str(len(body))

        self.logger.debug(
            "request received",
            method=environ.get('REQUEST_METHOD'),
            url=get_current_url(environ),
            protocol=environ.get('SERVER_PROTOCOL'),
            headers=headers,
            body=body.decode('utf-8', errors='replace'),
        )

        return self.app(environ, start_response)
