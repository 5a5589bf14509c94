"""
Wire contracts for the echo API.
"""

from .envelopes import EchoRequest, EchoResponse, ErrorEnvelope

__all__ = [
    'EchoRequest',
    'EchoResponse',
    'ErrorEnvelope',
]
