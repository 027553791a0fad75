import aniso8601
from werkzeug.utils import cached_property

from .reference import ResourceReference, ResourceBound
from .schema import Schema


class Raw(Schema):
    """
    This is the base class for all field types, can be given any JSON-schema.

    >>> f = fields.Raw({"type": "string"}, nullable=True)
    >>> f.response
    {'type': ['string', 'null']}

    :param schema: JSON-schema for field, or :class:`callable` resolving to a JSON-schema when called
    :param attribute: attribute name on the resource, optional; defaults to the property name.
    :param nullable: whether the field is nullable.
    :param title: optional title for JSON schema
    :param description: optional description for JSON schema
    """

    def __init__(self, schema, attribute=None, nullable=False, title=None, description=None):
        self._schema = schema
        self.attribute = attribute
        self.nullable = nullable
        self.title = title
        self.description = description

    def _finalize_schema(self, schema):
        """
        :return: new schema updated for field `nullable`, `title` and `description` attributes.
        """
        schema = dict(schema)

        if "null" in schema.get("type", []):
            self.nullable = True
        elif self.nullable:
            if "enum" in schema and None not in schema["enum"]:
                schema["enum"] = list(schema["enum"]) + [None]

            if "type" in schema:
                type_ = schema["type"]
                if isinstance(type_, (str, dict)):
                    schema["type"] = [type_, "null"]
                else:
                    schema["type"] = list(type_) + ["null"]
            elif len(schema) == 1 and "$ref" in schema:
                schema = {"anyOf": [schema, {"type": "null"}]}

        for attr in ("title", "description"):
            value = getattr(self, attr)
            if value is not None:
                schema[attr] = value
        return schema

    def schema(self):
        """
        JSON schema representation
        """
        schema = self._schema
        if callable(schema):
            schema = schema()
        if isinstance(schema, Schema):
            schema = schema.response
        return self._finalize_schema(schema)

    def decode(self, value, factory):
        """
        Convert a JSON value from a server payload to a Python object. ``null`` stays ``None``.

        :param value: JSON value
        :param factory: a :class:`ResourceFactory` for nested resources
        """
        if value is None:
            return None
        return self.converter(value)

    def converter(self, value):
        return value

    def parse(self, value):
        """
        Converts a decoded value to a richer Python type on request. Returns the value unchanged by default.
        """
        return value

    def __repr__(self):
        return '{}(attribute={})'.format(self.__class__.__name__, repr(self.attribute))


class Any(Raw):
    """
    A field type that allows any value.
    """

    def __init__(self, **kwargs):
        super(Any, self).__init__({"type": ["null", "string", "number", "boolean", "object", "array"]}, **kwargs)


def _field_from_object(parent, cls_or_instance):
    if isinstance(cls_or_instance, type):
        container = cls_or_instance()
    else:
        container = cls_or_instance
    if not isinstance(container, Schema):
        raise RuntimeError('{} expected Raw or Schema, but got {}'.format(parent.__class__.__name__,
                                                                         container.__class__.__name__))
    if not isinstance(container, Raw):
        container = Raw(container)
    return container


class Array(Raw, ResourceBound):
    """
    A field for an array of a given field type.

    :param Raw cls_or_instance: field class or instance
    """

    def __init__(self, cls_or_instance, **kwargs):
        self.container = container = _field_from_object(self, cls_or_instance)
        super(Array, self).__init__(lambda: {"type": "array", "items": container.response}, **kwargs)

    def bind(self, resource):
        if isinstance(self.container, ResourceBound):
            self.container = self.container.bind(resource)
        return self

    def decode(self, value, factory):
        if value is None:
            return None
        return [self.container.decode(v, factory) for v in value]

    def parse(self, value):
        if value is None:
            return None
        return [self.container.parse(v) for v in value]


List = Array


class Object(Raw, ResourceBound):
    """
    A field for an object, containing either named properties matching some fields or properties all of a
    single type.

    :param properties: field class, instance, or dictionary of {property: field} pairs
    :param Raw additional_properties: field class or instance
    """

    def __init__(self, properties=None, additional_properties=None, **kwargs):
        self.properties = None
        self.additional_properties = None

        if isinstance(properties, dict):
            self.properties = properties
        elif isinstance(properties, (type, Raw)):
            self.additional_properties = _field_from_object(self, properties)

        if isinstance(additional_properties, (type, Raw)):
            self.additional_properties = _field_from_object(self, additional_properties)
        elif additional_properties is True:
            self.additional_properties = Any()

        def schema():
            schema = {"type": "object"}
            if self.properties:
                schema["properties"] = {key: field.response for key, field in self.properties.items()}
            if self.additional_properties:
                schema["additionalProperties"] = self.additional_properties.response
            return schema

        super(Object, self).__init__(schema, **kwargs)

    def bind(self, resource):
        if self.properties:
            self.properties = {
                key: field.bind(resource) if isinstance(field, ResourceBound) else field
                for key, field in self.properties.items()}
        if isinstance(self.additional_properties, ResourceBound):
            self.additional_properties = self.additional_properties.bind(resource)
        return self

    def decode(self, value, factory):
        if value is None:
            return None

        result = {}
        if self.properties:
            result = {field.attribute or key: field.decode(value[key], factory)
                      for key, field in self.properties.items() if key in value}

        if self.additional_properties:
            field = self.additional_properties
            result.update({key: field.decode(v, factory) for key, v in value.items()
                           if key not in (self.properties or ())})
        return result


class String(Raw):
    """
    :param int min_length: minimum length of string
    :param int max_length: maximum length of string
    :param str pattern: regex pattern that the string must match
    :param list enum: list of strings with enumeration
    """

    def __init__(self, min_length=None, max_length=None, pattern=None, enum=None, format=None, **kwargs):
        schema = {"type": "string"}

        if enum is not None:
            enum = list(enum)

        for v, k in ((min_length, 'minLength'),
                     (max_length, 'maxLength'),
                     (pattern, 'pattern'),
                     (enum, 'enum'),
                     (format, 'format')):
            if v is not None:
                schema[k] = v

        super(String, self).__init__(schema, **kwargs)


class DateString(String):
    """
    A field for ISO8601-formatted date strings. The value is kept as the string sent by the server;
    :meth:`parse` returns it as a :class:`datetime.date`.
    """

    def __init__(self, **kwargs):
        super(DateString, self).__init__(format="date", **kwargs)

    def parse(self, value):
        return aniso8601.parse_date(value)


class DateTimeString(String):
    """
    A field for ISO8601-formatted date-time strings. The value is kept as the string sent by the server;
    :meth:`parse` returns it as a :class:`datetime.datetime`.
    """

    def __init__(self, **kwargs):
        super(DateTimeString, self).__init__(format="date-time", **kwargs)

    def parse(self, value):
        return aniso8601.parse_datetime(value)


class Uri(String):
    def __init__(self, **kwargs):
        super(Uri, self).__init__(format="uri", **kwargs)


class Email(String):
    def __init__(self, **kwargs):
        super(Email, self).__init__(format="email", **kwargs)


class Boolean(Raw):
    def __init__(self, **kwargs):
        super(Boolean, self).__init__({"type": "boolean"}, **kwargs)


class Integer(Raw):
    def __init__(self, minimum=None, maximum=None, **kwargs):
        schema = {"type": "integer"}

        if minimum is not None:
            schema['minimum'] = minimum
        if maximum is not None:
            schema['maximum'] = maximum

        super(Integer, self).__init__(schema, **kwargs)


class Number(Raw):
    def __init__(self, minimum=None, maximum=None, **kwargs):
        schema = {"type": "number"}

        if minimum is not None:
            schema['minimum'] = minimum
        if maximum is not None:
            schema['maximum'] = maximum

        super(Number, self).__init__(schema, **kwargs)


class Inline(Raw, ResourceBound):
    """
    A nested resource, built with the resource factory.

    Resource references can be one of the following:

    - :class:`Resource` class
    - a string with a registered resource type name
    - a string with a module name and class name of a resource
    - ``"self"`` --- which resolves to the resource this field is bound to

    The reference is only a default; a nested payload with a known ``resource_type`` is built as that type.

    :param resource: a resource reference
    """

    def __init__(self, resource, **kwargs):
        self.target_reference = ResourceReference(resource)

        def schema():
            if self.target is self.resource:
                return {"$ref": "#"}
            return self.target.schema.response

        super(Inline, self).__init__(schema, **kwargs)

    def rebind(self, resource):
        if self.target_reference.value == 'self':
            return self.__class__(
                'self',
                attribute=self.attribute,
                nullable=self.nullable,
                title=self.title,
                description=self.description
            ).bind(resource)
        else:
            return self

    @cached_property
    def target(self):
        registry = self.resource.meta.get('registry') if self.resource is not None else None
        return self.target_reference.resolve(self.resource, registry)

    def decode(self, value, factory):
        if value is None:
            return None
        return factory.build(value, self.target_reference.resolve(self.resource, factory.registry))
