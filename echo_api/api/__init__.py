"""
API package - request pipeline for the echo service.

This package provides:
- Wire envelopes (pydantic models)
- Error taxonomy (APIError and subclasses)
- Global middleware (request/response logging, error envelope)
"""

from .errors import APIError, BadRequestError, InternalError, MethodNotAllowedError

__all__ = ['APIError', 'BadRequestError', 'InternalError', 'MethodNotAllowedError']
