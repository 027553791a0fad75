from collections import namedtuple, OrderedDict
import re
from urllib.parse import quote

from .exceptions import InvalidPathError
from .utils import compact

HTTP_METHODS = ('GET', 'PUT', 'POST', 'PATCH', 'DELETE')

PLACEHOLDER_PATTERN = re.compile(r'\{(\w+)\}')

OPTION_PARAMS = (
    ('fields', 'opt_fields'),
    ('expand', 'opt_expand'),
    ('pretty', 'opt_pretty'),
)


class Request(namedtuple('Request', ('method', 'path', 'params', 'headers', 'body'))):
    """
    A request ready to be executed by a transport. ``path`` is relative to the transport's base URI.
    """

    def with_params(self, **params):
        """
        Returns a copy of this request with some query parameters replaced. ``None`` removes a parameter.
        """
        merged = OrderedDict(self.params)
        merged.update(params)
        return self._replace(params=compact(merged))

    def __repr__(self):
        return '<Request {} {}>'.format(self.method, self.path)


class Route(object):
    """
    A request method and a path rule, e.g. ``Route('GET', '/workspaces/{workspace}/users')``.

    Routes can also be created with one of the *METHOD* class methods, e.g. ``Route.GET('/users/me')``.

    :param str method: a HTTP request method name (upper case)
    :param str rule: path relative to the API base URI, with ``{name}`` placeholders
    """

    def __init__(self, method, rule):
        if method not in HTTP_METHODS:
            raise ValueError('Unsupported HTTP method "{}"'.format(method))
        self.method = method
        self.rule = rule

    @property
    def placeholders(self):
        return tuple(PLACEHOLDER_PATTERN.findall(self.rule))

    def path(self, **values):
        """
        Returns the rule with all placeholders substituted. Values are URL-quoted, including ``/``.

        :raises InvalidPathError: if a placeholder has no value
        """
        def substitute(match):
            name = match.group(1)
            value = values.get(name)
            if value is None or value == '':
                raise InvalidPathError(name, self.rule)
            return quote(str(value), safe='')

        return PLACEHOLDER_PATTERN.sub(substitute, self.rule)

    def build(self, path=None, params=None, options=None):
        """
        Composes a :class:`Request`.

        Query parameters and headers with a ``None`` value or an empty collection as value are left out;
        ``False`` and ``0`` are kept.

        :param dict path: values for the rule placeholders
        :param dict params: query parameters
        :param dict options: request options, already validated by :class:`schema.RequestOptions`
        """
        options = options or {}

        query = OrderedDict(params or ())
        query.update(options.get('params') or {})
        for option, param in OPTION_PARAMS:
            if option in options:
                query[param] = options[option]

        return Request(self.method,
                       self.path(**(path or {})),
                       compact(query),
                       compact(options.get('headers') or {}),
                       options.get('body'))

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, repr(self.method), repr(self.rule))


def _route_factory(method):
    @classmethod
    def factory(cls, rule, **kwargs):
        return cls(method, rule, **kwargs)

    factory.__func__.__name__ = method
    return factory


for method in HTTP_METHODS:
    setattr(Route, method, _route_factory(method))
