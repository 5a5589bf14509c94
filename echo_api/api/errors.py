"""
API error taxonomy.

Every classified failure is an APIError subclass carrying the HTTP status
it maps to. The error responder turns any of them into the JSON error
envelope:

    {"error": "<message>"}
"""


class APIError(Exception):
    """Base class for errors that are reported to the client."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class BadRequestError(APIError):
    """Client input could not be decoded or failed validation."""
    status_code = 400


class MethodNotAllowedError(APIError):
    status_code = 405


class InternalError(APIError):
    """Server-side fault unrelated to client input."""
    status_code = 500

