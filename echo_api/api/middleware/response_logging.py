"""
Response logging middleware - Post-handling diagnostic record.

Installs a ResponseObserver around the wrapped application and, once the
server has consumed and closed the response, logs the observed status,
headers, last body chunk and write count at DEBUG.

The response is already committed when the record is built, so a header
serialization failure is only logged at ERROR.
"""

from werkzeug.wsgi import ClosingIterator

from .request_logging import serialize_headers
from .response_observer import ResponseObserver


class ResponseLoggingMiddleware:
    """WSGI middleware emitting one `response sent` record per request."""

    def __init__(self, app, logger):
        self.app = app
        self.logger = logger

    def __call__(self, environ, start_response):
        observer = ResponseObserver(start_response)
        app_iter = self.app(environ, observer.start_response)

        def close():
            # The record is emitted even when the inner close fails
            try:
                if hasattr(app_iter, 'close'):
                    app_iter.close()
            finally:
                self._log_response(observer)

        return ClosingIterator(observer.observe(app_iter), close)

    def _log_response(self, observer: ResponseObserver) -> None:
        try:
            headers = serialize_headers(observer.headers)
        except (TypeError, ValueError):
            self.logger.error("unable to serialize headers", exc_info=True)
            headers = ''

        self.logger.debug(
            "response sent",
            status=observer.status,
            headers=headers,
            body=observer.body.decode('utf-8', errors='replace'),
            **{'write-count': observer.write_count},
        )
