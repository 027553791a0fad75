from collections import OrderedDict
import inspect
import weakref

from . import fields
from .reference import ResourceBound
from .registry import default_registry
from .routes import Route
from .schema import FieldSet
from .utils import AttributeDict


class ResourceMeta(type):

    def __new__(mcs, name, bases, members):
        class_ = super(ResourceMeta, mcs).__new__(mcs, name, bases, members)
        class_.meta = meta = AttributeDict(getattr(class_, 'meta', {}) or {})

        for base in bases:
            if hasattr(base, 'Meta'):
                meta.update((k, v) for k, v in base.Meta.__dict__.items() if not k.startswith('__'))

        if 'Meta' in members:
            changes = members['Meta'].__dict__
            for k, v in changes.items():
                if not k.startswith('__'):
                    meta[k] = v

            if not changes.get('name', None):
                meta['name'] = name.lower()
        else:
            meta['name'] = name.lower()

        schema = OrderedDict()
        for base in reversed(inspect.getmro(class_)[1:]):
            if 'Schema' in base.__dict__:
                schema.update(base.Schema.__dict__)

        if 'Schema' in members:
            schema.update(members['Schema'].__dict__)

        class_.schema = fs = FieldSet(OrderedDict((k, f) for k, f in schema.items()
                                                  if isinstance(f, fields.Raw)))
        fs.bind(class_)

        for n, m in members.items():
            if isinstance(m, ResourceBound):
                m.bind(class_)

        if any(isinstance(base, ResourceMeta) for base in bases) and meta.get('registry') is not None:
            meta.registry.register(class_)

        return class_


class Resource(object, metaclass=ResourceMeta):
    """
    A read-oriented projection of one server-side entity, and the generic type for payloads whose
    ``resource_type`` is not registered.

    A resource type is configured using the `Schema` and `Meta` attributes.

    :class:`Meta` class attributes:

    =====================  ==============================  ==============================================================================
    Attribute name         Default                         Description
    =====================  ==============================  ==============================================================================
    name                   ---                             The ``resource_type`` discriminator; defaults to the lower-case class name
    plural_name            ``None``                        Path segment of the resource, e.g. ``'users'``; used by :meth:`refresh`
    registry               ``default_registry``            The :class:`ResourceRegistry` the resource type is added to
    =====================  ==============================  ==============================================================================

    Usage example:

    .. code-block:: python

        class Tag(Resource):
            class Schema:
                name = fields.String()
                color = fields.String(nullable=True)

            class Meta:
                name = 'tag'
                plural_name = 'tags'

    Declared fields are available as attributes. A declared field that is missing from the server payload
    is not set at all, and reading it raises :class:`AttributeError`. Every property of the payload,
    declared or not, can be read with ``resource['key']``.

    Resources are created by :class:`ResourceFactory` and are read-only.

    .. attribute:: meta

        A :class:`AttributeDict` of configuration attributes collected from the :class:`Meta` attributes of the base classes.

    .. attribute:: schema

        A :class:`FieldSet` containing fields collected from the :class:`Schema` attributes of the base classes.

    .. attribute:: client

        Weak reference to the :class:`Client` the resource was fetched through, or ``None``.
    """
    meta = None
    schema = None

    def __init__(self, raw, client=None, attributes=None):
        self._set('_raw', raw)
        self._set('_attributes', dict(attributes or {}))
        self._set('client', _weak(client))

    def _set(self, name, value):
        object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError("'{}' resources are read-only".format(self.__class__.__name__))

    def __delattr__(self, name):
        raise AttributeError("'{}' resources are read-only".format(self.__class__.__name__))

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self._attributes[name]
        except KeyError:
            pass
        if any((field.attribute or key) == name for key, field in self.schema.fields.items()):
            raise AttributeError("'{}' resource {} has no value for '{}'".format(
                self.__class__.__name__, self._attributes.get('gid'), name))
        raise AttributeError("'{}' object has no attribute '{}'".format(self.__class__.__name__, name))

    @property
    def raw(self):
        """
        The JSON object this resource was built from.
        """
        return self._raw

    def __getitem__(self, key):
        return self._raw[key]

    def __contains__(self, key):
        return key in self._raw

    def __iter__(self):
        return iter(self._raw)

    def keys(self):
        return self._raw.keys()

    def get(self, key, default=None):
        return self._raw.get(key, default)

    def to_dict(self):
        """
        Returns the decoded values of the declared fields present in the payload.
        """
        return dict(self._attributes)

    def parsed(self, name):
        """
        Returns the value of a declared field converted by the field, e.g. a :class:`datetime.datetime` for a
        :class:`fields.DateTimeString`. The attribute itself keeps the value sent by the server.

        :param str name: attribute name of the field
        :raises AttributeError: if the field is not declared or has no value
        :raises ValueError: if the value does not have the format of the field
        """
        value = getattr(self, name)
        for key, field in self.schema.fields.items():
            if (field.attribute or key) == name:
                return None if value is None else field.parse(value)
        raise AttributeError("'{}' resources have no field '{}'".format(self.__class__.__name__, name))

    def refresh(self, options=None):
        """
        Re-fetches this resource and replaces its fields with the server's current values.

        :param dict options: request options
        :return: this resource
        """
        plural_name = self.meta.get('plural_name')
        if not plural_name:
            raise RuntimeError('{} resources cannot be refreshed; '
                               'the resource type has no plural_name.'.format(self.__class__.__name__))
        if self.client is None:
            raise RuntimeError('{} resource {} is not bound to a client.'.format(self.__class__.__name__, self.gid))

        route = Route.GET('/{}/{{gid}}'.format(plural_name))
        fresh = self.client.get_resource(route, type=self.__class__, path={'gid': self.gid}, options=options)
        self._set('_raw', fresh.raw)
        self._set('_attributes', dict(fresh._attributes))
        return self

    @classmethod
    def described_by(cls):
        """
        Returns a JSON schema for the declared fields of this resource type.
        """
        schema = OrderedDict([
            ("$schema", "http://json-schema.org/draft-04/schema#"),
            ("title", cls.meta.get('title') or cls.__name__),
        ])
        schema.update(cls.schema.response)
        return schema

    def __repr__(self):
        values = ' '.join('{}={!r}'.format(key, self._attributes[key])
                          for key in ('gid', 'name') if key in self._attributes)
        return '<{} {}>'.format(self.__class__.__name__, values) if values else '<{}>'.format(self.__class__.__name__)

    class Schema:
        gid = fields.String()
        resource_type = fields.String()

    class Meta:
        name = None
        title = None
        plural_name = None
        registry = default_registry


def _weak(client):
    if client is None or isinstance(client, weakref.ProxyTypes):
        return client
    return weakref.proxy(client)
