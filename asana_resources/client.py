from functools import partial
import logging
import os

from flask.config import Config
from werkzeug.utils import cached_property

from . import resources
from .factory import ResourceFactory
from .instances import Collection
from .response import parse_response
from .routes import Route
from .schema import RequestOptions
from .signals import before_request, after_response
from .transport import DEFAULT_BASE_URI, RequestsTransport

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'BASE_URI': DEFAULT_BASE_URI,
    'ACCESS_TOKEN': None,
    'DEFAULT_PER_PAGE': 20,
    'MAX_PER_PAGE': 100,
    'STRICT_RESOURCE_TYPES': False,
    'TIMEOUT': None,
    'USER_AGENT': 'asana-resources',
}


class ResourceProxy(object):
    """
    Binds the operations of a resource module to a client, so that ``client.users.me()`` calls
    ``users.me(client)``.
    """

    def __init__(self, module, client):
        self._module = module
        self._client = client

    def __getattr__(self, name):
        if name not in getattr(self._module, '__all__', ()):
            raise AttributeError("'{}' has no operation '{}'".format(self._module.__name__, name))
        return partial(getattr(self._module, name), self._client)

    def __dir__(self):
        return list(getattr(self._module, '__all__', ()))


class Client(object):
    """
    The entry point to the API.

    Configuration is kept in :attr:`config`, a :class:`flask.Config`:

    =========================  ==============================================================
    Key                        Description
    =========================  ==============================================================
    BASE_URI                   API root; request paths are relative to it
    ACCESS_TOKEN               Bearer token for the default transport
    DEFAULT_PER_PAGE           Page size for collections, default ``20``
    MAX_PER_PAGE               Largest accepted page size, default ``100``
    STRICT_RESOURCE_TYPES      Raise :class:`ResourceTypeMismatchError` instead of building the type a
                               payload names when it contradicts the expected type, default ``False``
    TIMEOUT                    Timeout for the default transport
    USER_AGENT                 ``User-Agent`` header of the default transport
    =========================  ==============================================================

    :param transport: a :class:`transport.Transport`; defaults to a :class:`RequestsTransport` for
        ``BASE_URI``
    :param ResourceRegistry registry: known resource types; defaults to the registry every resource type
        declared in :mod:`asana_resources.resources` is added to
    :param config: configuration overrides; keys are case-insensitive
    """

    def __init__(self, transport=None, registry=None, **config):
        self.config = Config(os.getcwd(), DEFAULT_CONFIG)
        self.config.update((key.upper(), value) for key, value in config.items())

        if transport is None:
            transport = RequestsTransport(self.config['BASE_URI'],
                                          access_token=self.config['ACCESS_TOKEN'],
                                          timeout=self.config['TIMEOUT'],
                                          user_agent=self.config['USER_AGENT'])
        self.transport = transport
        self.registry = registry if registry is not None else resources.registry

        self.users = ResourceProxy(resources.users, self)
        self.workspaces = ResourceProxy(resources.workspaces, self)

    @classmethod
    def from_env(cls, prefix='ASANA', transport=None, **config):
        """
        Creates a client configured from ``{prefix}_*`` environment variables, e.g. ``ASANA_ACCESS_TOKEN``.
        Keyword arguments take precedence over the environment.
        """
        env = Config(os.getcwd())
        env.from_prefixed_env(prefix)
        env.update((key.upper(), value) for key, value in config.items())
        return cls(transport=transport, **env)

    @cached_property
    def factory(self):
        return ResourceFactory(self.registry, strict=self.config['STRICT_RESOURCE_TYPES'], client=self)

    @cached_property
    def request_options(self):
        return RequestOptions(max_per_page=self.config['MAX_PER_PAGE'])

    def dispatch(self, request):
        """
        Executes a :class:`routes.Request` with the transport and returns the parsed :class:`Envelope`.
        """
        before_request.send(self, request=request)
        log.debug('%s %s %r', request.method, request.path, dict(request.params))

        response = self.transport.execute(request.method,
                                          self.transport.url_for(request.path),
                                          params=request.params,
                                          headers=request.headers,
                                          body=request.body)

        after_response.send(self, request=request, response=response)
        return parse_response(request, response)

    def get(self, path, params=None, options=None):
        """
        Issues a ``GET`` request for a literal path and returns the parsed :class:`Envelope`.
        """
        request = Route.GET(path).build(params=params, options=self.request_options.convert(options))
        return self.dispatch(request)

    def get_resource(self, route, type=None, path=None, params=None, options=None, strict=None):
        """
        Fetches a single resource.

        :param routes.Route route: the route to request
        :param type: the expected resource type
        :param dict path: values for the route placeholders
        :param dict params: query parameters
        :param dict options: request options
        :param bool strict: overrides the STRICT_RESOURCE_TYPES setting
        """
        request = route.build(path, params, self.request_options.convert(options))
        envelope = self.dispatch(request)
        return self.factory.build(envelope.data, type, strict)

    def get_collection(self, route, type=None, path=None, params=None, per_page=None, options=None, strict=None):
        """
        Fetches the first page of a collection.

        The page size is ``per_page`` if given, else the ``per_page`` option, else ``DEFAULT_PER_PAGE``.

        :return: a :class:`Collection`
        """
        options = dict(options or {})
        if per_page is not None:
            options['per_page'] = per_page
        options = self.request_options.convert(options)

        params = dict(params or {})
        params['limit'] = options.get('per_page', self.config['DEFAULT_PER_PAGE'])

        request = route.build(path, params, options)
        envelope = self.dispatch(request)
        data = envelope.data
        if isinstance(data, dict):
            data = [data]
        elements = self.factory.build(data or [], type, strict)
        return Collection(elements, next_page=envelope.next_page, type=type, client=self, request=request,
                          strict=strict)

    def __repr__(self):
        return '<Client {}>'.format(self.transport.base_uri)
