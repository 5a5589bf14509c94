"""
Response observer - Record what a WSGI application sends.

Wraps the server's start_response (and the legacy write callable it
returns) plus the response iterable. Everything is forwarded unchanged;
the observer only keeps a per-request record of:

- status: first status passed to start_response (200 if never set)
- headers: header list passed alongside that first status
- body: copy of the most recent chunk written
- write_count: number of chunks written

Body capture is last-write-wins. A multi-chunk response shows only its
final chunk in `body`, while `write_count` still reflects every chunk.
"""

from typing import Iterable, Iterator, List, Tuple


class ResponseObserver:
    """Per-request proxy around start_response and the response body."""

    def __init__(self, start_response):
        self._start_response = start_response
        self._write = None
        self.status: int = 200
        self.headers: List[Tuple[str, str]] = []
        self.wrote_header = False
        self.body: bytes = b''
        self.write_count = 0

    def start_response(self, status: str, headers, exc_info=None):
        # First call wins; later calls still reach the server, which
        # decides whether a second status is legal.
        if not self.wrote_header:
            self.status = _status_code(status)
            self.headers = list(headers)
            self.wrote_header = True
        self._write = self._start_response(status, headers, exc_info)
        return self.write

    def write(self, data: bytes):
        """Legacy WSGI write callable."""
        self.record(data)
        return self._write(data)

    def record(self, chunk: bytes) -> None:
        self.write_count += 1
        self.body = bytes(chunk)

    def observe(self, app_iter: Iterable[bytes]) -> Iterator[bytes]:
        """Yield the application's chunks, recording each one."""
        for chunk in app_iter:
            self.record(chunk)
            yield chunk


def _status_code(status: str) -> int:
    """'404 NOT FOUND' -> 404"""
    code, _, _ = status.partition(' ')
    return int(code)
