from collections import OrderedDict

from jsonschema import Draft4Validator, FormatChecker
from jsonschema import ValidationError as JSONSchemaValidationError
import rfc3987
import strict_rfc3339
from werkzeug.utils import cached_property

from .exceptions import ValidationError
from .reference import ResourceBound
from .utils import compact

format_checker = FormatChecker()


@format_checker.checks('uri', raises=ValueError)
def is_uri(instance):
    if not isinstance(instance, str):
        return True
    return rfc3987.parse(instance, rule='URI')


@format_checker.checks('date-time')
def is_date_time(instance):
    if not isinstance(instance, str):
        return True
    return strict_rfc3339.validate_rfc3339(instance)


class Schema(object):
    """
    The base class for all types with a schema. Has :attr:`response` and :attr:`request` attributes
    for the schema to be used, respectively, for data returned by the server and data sent to it.

    Any class inheriting from schema needs to implement :meth:`schema`.

    ..  attribute:: response

        JSON-schema describing data returned by the server.

    .. attribute:: request

        JSON-schema used for validation of data sent to the server.

    """

    def schema(self):
        """
        Abstract method returning the JSON schema used by both :attr:`response` and :attr:`request`.

        :return: a JSON-schema or a tuple of JSON-schemas in the format ``(response_schema, request_schema)``
        """
        raise NotImplementedError()

    @cached_property
    def response(self):
        schema = self.schema()
        if isinstance(schema, tuple):
            return schema[0]
        return schema

    @cached_property
    def request(self):
        schema = self.schema()
        if isinstance(schema, tuple):
            return schema[1]
        return schema

    @cached_property
    def _validator(self):
        Draft4Validator.check_schema(self.request)
        return Draft4Validator(self.request, format_checker=format_checker)

    def convert(self, instance):
        """
        Validates a JSON value against :attr:`request` and returns it.

        :param instance: JSON value
        :raises ValidationError: if validation failed
        """
        try:
            self._validator.validate(instance)
        except JSONSchemaValidationError:
            raise ValidationError(self._validator.iter_errors(instance))
        return instance


class SchemaImpl(Schema):
    def __init__(self, schema):
        self._schema = schema

    def schema(self):
        return self._schema


class FieldSet(Schema, ResourceBound):
    """
    A schema representation of a dictionary of :class:`fields.Raw` objects.

    :param dict fields: a dictionary of :class:`fields.Raw` objects
    """

    def __init__(self, fields):
        self.fields = fields

    def bind(self, resource):
        if self.resource is None:
            self.resource = resource
            self.fields = OrderedDict(
                (key, field.bind(resource) if isinstance(field, ResourceBound) else field)
                for key, field in self.fields.items())
        elif self.resource != resource:
            return self.rebind(resource)
        return self

    def rebind(self, resource):
        return FieldSet(OrderedDict(self.fields)).bind(resource)

    def schema(self):
        return {
            "type": "object",
            "properties": OrderedDict((key, field.response) for key, field in self.fields.items())
        }

    def decode(self, instance, factory):
        """
        Collects the declared fields present in a JSON object, converted by their field.

        Properties that are not declared are ignored; declared properties missing from ``instance`` are
        missing from the result as well.

        :param dict instance: JSON object
        :param factory: the :class:`ResourceFactory` used to build nested resources
        :return: a dictionary of ``{attribute: value}``
        """
        result = OrderedDict()
        for key, field in self.fields.items():
            if key in instance:
                result[field.attribute or key] = field.decode(instance[key], factory)
        return result


class RequestOptions(Schema):
    """
    The options accepted by every operation.

    =============  ==========================================================
    Option         Description
    =============  ==========================================================
    params         Additional query parameters
    body           JSON body sent with the request
    headers        Additional request headers
    per_page       Number of items per page for collections
    fields         Sent as ``opt_fields``; properties to include in the response
    expand         Sent as ``opt_expand``; properties to expand in the response
    pretty         Sent as ``opt_pretty``
    =============  ==========================================================

    :param int max_per_page: upper limit for ``per_page``
    """

    def __init__(self, max_per_page=100):
        self.max_per_page = max_per_page

    def schema(self):
        return {
            "type": "object",
            "properties": {
                "params": {"type": "object"},
                "body": {},
                "headers": {
                    "type": "object",
                    "additionalProperties": {"type": "string"}
                },
                "per_page": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": self.max_per_page
                },
                "fields": {"type": "array", "items": {"type": "string"}},
                "expand": {"type": "array", "items": {"type": "string"}},
                "pretty": {"type": "boolean"}
            },
            "additionalProperties": False
        }

    def convert(self, instance):
        options = compact(dict(instance or {}))
        for key in ('fields', 'expand'):
            if isinstance(options.get(key), (tuple, set, frozenset)):
                options[key] = list(options[key])
        return super(RequestOptions, self).convert(options)
