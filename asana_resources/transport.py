from collections import namedtuple
import logging

from flask import json
import requests

log = logging.getLogger(__name__)

DEFAULT_BASE_URI = 'https://app.asana.com/api/1.0'


RawResponse = namedtuple('RawResponse', ('status', 'headers', 'body'))


def encode_query(params):
    """
    Encodes query parameter values the way the API expects them: booleans as ``true``/``false`` and lists
    as comma-separated strings.
    """
    encoded = []
    for key, value in (params or {}).items():
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        elif isinstance(value, (list, tuple)):
            value = ','.join(str(v) for v in value)
        encoded.append((key, value))
    return encoded


class Transport(object):
    """
    Executes requests. Implementations must be safe to call repeatedly and from several threads.

    :param str base_uri: the API root; request paths are relative to it
    """

    def __init__(self, base_uri=DEFAULT_BASE_URI):
        self.base_uri = base_uri.rstrip('/')

    def url_for(self, path):
        return ''.join((self.base_uri, path))

    def execute(self, method, url, params=None, headers=None, body=None):
        """
        :return: a :class:`RawResponse` with the status code, headers and body bytes
        """
        raise NotImplementedError()


class RequestsTransport(Transport):
    """
    A transport backed by a :class:`requests.Session`.

    :param str base_uri: the API root
    :param str access_token: optional bearer token sent with every request
    :param requests.Session session: optional pre-configured session, e.g. with OAuth2 or retries mounted
    :param timeout: optional timeout passed to :meth:`requests.Session.request`
    :param str user_agent: optional ``User-Agent`` header
    """

    def __init__(self, base_uri=DEFAULT_BASE_URI, access_token=None, session=None, timeout=None, user_agent=None):
        super(RequestsTransport, self).__init__(base_uri)
        self.session = session or requests.Session()
        self.timeout = timeout

        if access_token:
            self.session.headers['Authorization'] = 'Bearer {}'.format(access_token)
        if user_agent:
            self.session.headers['User-Agent'] = user_agent

    def execute(self, method, url, params=None, headers=None, body=None):
        headers = dict(headers or {})
        data = None
        if body is not None:
            data = json.dumps(body)
            headers.setdefault('Content-Type', 'application/json')

        log.debug('%s %s params=%r', method, url, params)
        response = self.session.request(method,
                                        url,
                                        params=encode_query(params),
                                        headers=headers,
                                        data=data,
                                        timeout=self.timeout)
        return RawResponse(response.status_code, response.headers, response.content)
