from collections import namedtuple

from flask import json
from werkzeug.datastructures import Headers

from .exceptions import ApiError, MalformedResponseError, ValidationError
from .schema import SchemaImpl

envelope_schema = SchemaImpl({
    "type": "object",
    "properties": {
        "data": {
            "type": ["object", "array", "null"],
            "items": {"type": "object"}
        },
        "next_page": {
            "type": ["object", "null"],
            "properties": {
                "offset": {"type": "string"},
                "path": {"type": "string"},
                "uri": {"type": "string"}
            }
        }
    },
    "required": ["data"]
})


class Envelope(namedtuple('Envelope', ('data', 'next_page', 'extra'))):
    """
    A parsed response body.

    .. attribute:: data

        a JSON object, a list of JSON objects or ``None``

    .. attribute:: next_page

        the continuation cursor ``{"offset": ..., "path": ..., "uri": ...}`` or ``None``

    .. attribute:: extra

        any other top-level properties of the body
    """


def _decode(body):
    if isinstance(body, bytes):
        body = body.decode('utf-8')
    return json.loads(body)


def parse_response(request, response):
    """
    Extracts the envelope from a raw response.

    :param routes.Request request: the request the response belongs to
    :param transport.RawResponse response: the raw response
    :raises ApiError: for a non-2xx status
    :raises MalformedResponseError: for a 2xx status with a body that is not a JSON envelope
    """
    status, headers, body = response
    headers = Headers(list(headers.items()) if headers else [])

    if not 200 <= status < 300:
        try:
            error_body = _decode(body)
        except ValueError:
            error_body = body
        error_class = ApiError.for_status(status)
        raise error_class(status, error_body, request.method, request.path, headers)

    if not body:
        return Envelope(None, None, {})

    try:
        payload = _decode(body)
    except ValueError as e:
        raise MalformedResponseError('body is not valid JSON ({})'.format(e),
                                     request.method, request.path, status, body)

    try:
        envelope_schema.convert(payload)
    except ValidationError as e:
        raise MalformedResponseError('unexpected envelope ({})'.format(e),
                                     request.method, request.path, status, payload)

    extra = {key: value for key, value in payload.items() if key not in ('data', 'next_page')}
    return Envelope(payload['data'], payload.get('next_page'), extra)
