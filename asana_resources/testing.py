"""
An in-memory stand-in for the HTTP transport, for tests.

Usage example:

.. code-block:: python

    api = StubAPI()

    @api.on('GET', '/users/me')
    def me(response):
        response.status = 200  # the default
        response.body = {"data": {"gid": "1", "resource_type": "user", "name": "Greg"}}

    client = Client(transport=api)
    client.users.me()
"""
from collections import OrderedDict
import threading
from urllib.parse import urlsplit, parse_qsl

from flask import json
from werkzeug.datastructures import Headers

from .exceptions import UnstubbedRequestError
from .routes import Request
from .transport import DEFAULT_BASE_URI, RawResponse, Transport


class StubResponse(object):
    """
    The response a stub handler customizes. Defaults to status ``200``, no extra headers and no body.

    .. attribute:: request

        The :class:`routes.Request` being answered, with the query parameters in ``request.params``.
    """

    def __init__(self, request):
        self.request = request
        self.status = 200
        self.headers = {}
        self.body = None

    def to_raw(self):
        """
        Returns the :class:`RawResponse` for this response. ``body`` is serialized as JSON unless it is
        ``str`` or ``bytes`` already.
        """
        headers = Headers([('Content-Type', 'application/json')])
        for key, value in dict(self.headers or {}).items():
            headers.set(key, value)

        body = self.body
        if body is None:
            body = b''
        elif isinstance(body, str):
            body = body.encode('utf-8')
        elif not isinstance(body, bytes):
            body = json.dumps(body).encode('utf-8')

        return RawResponse(self.status or 200, headers, body)


class StubAPI(Transport):
    """
    A transport that answers requests with registered handlers instead of the network.

    Handlers are keyed by request method and path; query parameters are not part of the key. Registering a
    handler for a key that already has one replaces it. A request without a handler raises
    :class:`UnstubbedRequestError`.

    :param str base_uri: the API root the client sends requests to
    """

    def __init__(self, base_uri=DEFAULT_BASE_URI):
        super(StubAPI, self).__init__(base_uri)
        self._stubs = {}
        self._lock = threading.Lock()
        self.calls = []

    def on(self, method, path, handler=None):
        """
        Registers a handler for a method and path. Can be used as a decorator.

        The handler is called with a :class:`StubResponse` and sets its ``body``, and optionally its
        ``status`` or ``headers``.

        :param str method: HTTP method
        :param str path: path relative to the base URI, without query string
        :param callable handler: handler function
        """
        def register(handler):
            with self._lock:
                self._stubs[(method.upper(), path)] = handler
            return handler

        if handler is None:
            return register
        return register(handler)

    def reply(self, method, path, body=None, status=200, headers=None):
        """
        Registers a handler that always answers with the same body, status and headers.
        """
        def handler(response):
            response.status = status
            response.headers = dict(headers or {})
            response.body = body

        return self.on(method, path, handler)

    def dispatch(self, request):
        """
        Answers a :class:`routes.Request` with the matching handler.

        :raises UnstubbedRequestError: if no handler is registered for the request method and path
        """
        with self._lock:
            handler = self._stubs.get((request.method, request.path))
            self.calls.append(request)

        if handler is None:
            raise UnstubbedRequestError(request.method, request.path)

        response = StubResponse(request)
        handler(response)
        return response.to_raw()

    def execute(self, method, url, params=None, headers=None, body=None):
        if url.startswith(self.base_uri):
            split = urlsplit(url[len(self.base_uri):])
            path = split.path
        else:
            split = urlsplit(url)
            path = url.split('?', 1)[0]

        query = OrderedDict(parse_qsl(split.query))
        query.update(params or {})
        request = Request(method.upper(), path, query, dict(headers or {}), body)
        return self.dispatch(request)

    def call_count(self, method=None, path=None):
        """
        Returns the number of dispatched requests, optionally only those matching a method and path.
        """
        with self._lock:
            return sum(1 for request in self.calls
                       if (method is None or request.method == method.upper())
                       and (path is None or request.path == path))

    def reset(self):
        """
        Removes all handlers and forgets all dispatched requests.
        """
        with self._lock:
            self._stubs.clear()
            del self.calls[:]
