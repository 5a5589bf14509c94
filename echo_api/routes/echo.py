"""
Echo API Route

POST /echo with {"req": "<string>"} returns {"res": "<string>"}.

Decode failures are classified before they reach the client:
- empty body            -> "missing request body"
- wrong JSON type       -> "incorrect json type given, ..."
- malformed JSON        -> "json syntax error in request body, offset=N: ..."
- anything else         -> the decoder's own message
All of them are 400s. A wrong method is a 405.
"""

import json

from flask import Response, request
from pydantic import ValidationError

from echo_api.api.contracts import EchoRequest, EchoResponse
from echo_api.api.errors import BadRequestError, MethodNotAllowedError


# Other methods are refused by the router with a 405 naming these.
ECHO_METHODS = ['POST']


def handle_echo():
    # Routers that do not filter by method still reach the view
    if request.method != 'POST':
        raise MethodNotAllowedError("method not allowed, expected POST")

    echo = decode_echo_request(request.get_data(cache=False))

    if echo.req is None:
        raise BadRequestError("missing field in request, expected field `req`")

    body = EchoResponse(res=echo.req).to_wire()
    return Response(body, status=200, mimetype='application/json')


def decode_echo_request(body: bytes) -> EchoRequest:
    """
    Decode a request body into an EchoRequest.

    Raises:
        BadRequestError with a classified message on any decode failure
    """
    if not body.strip():
        raise BadRequestError("missing request body")

    try:
        text = body.decode('utf-8')
    except UnicodeDecodeError as e:
        raise BadRequestError(str(e))

    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        # JSONDecodeError.pos counts characters, clients see bytes
        offset = len(text[:e.pos].encode('utf-8'))
        raise BadRequestError(
            f"json syntax error in request body, offset={offset}: {e.msg}"
        )
    except RecursionError:
        raise BadRequestError("json nesting too deep in request body")
    except ValueError as e:
        raise BadRequestError(str(e))

    # A bare null decodes like an empty object: the field is missing
    if document is None:
        document = {}

    if not isinstance(document, dict):
        raise BadRequestError(
            f"incorrect json type given, expected object, received {json_kind(document)}"
        )

    try:
        return EchoRequest.model_validate(document)
    except ValidationError as e:
        error = e.errors()[0]
        field = '.'.join(str(part) for part in error['loc'])
        raise BadRequestError(
            f'incorrect json type given for field "{field}", '
            f'expected string, received {json_kind(error["input"])}'
        )


def json_kind(value) -> str:
    """Name of the JSON type a decoded value came from."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    return 'object'


def _reject_constant(name: str):
    # NaN / Infinity / -Infinity are not JSON
    raise ValueError(f"invalid character in request body: {name}")
