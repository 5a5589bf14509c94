"""
Wire envelopes for the echo endpoint.

Request:  {"req": "<string>" | null}
Response: {"res": "<string>"}
Error:    {"error": "<string>"}

All models are frozen and ignore undeclared fields, so extra keys in a
request body are accepted and dropped.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictStr


class Envelope(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
    )

    def to_wire(self) -> bytes:
        """Compact JSON followed by a newline."""
        return self.model_dump_json().encode('utf-8') + b'\n'


class EchoRequest(Envelope):
    # None covers both an explicit null and an absent field
    req: Optional[StrictStr] = None


class EchoResponse(Envelope):
    res: str


class ErrorEnvelope(Envelope):
    error: str
