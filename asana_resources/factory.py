import logging
import weakref

from .exceptions import ResourceTypeMismatchError
from .reference import ResourceReference
from .registry import default_registry
from .resource import Resource

log = logging.getLogger(__name__)


class ResourceFactory(object):
    """
    Builds :class:`Resource` instances from JSON payloads.

    The ``resource_type`` of a payload selects the resource class from the registry. Payloads with an
    unknown or missing ``resource_type`` are built as the expected type, or as a generic :class:`Resource`.

    :param ResourceRegistry registry: known resource types
    :param bool strict: if ``True``, a ``resource_type`` that contradicts the expected type raises
        :class:`ResourceTypeMismatchError` instead of being built as the type it names, and payloads are
        validated against the JSON schema of their resource type (see :meth:`Resource.described_by`)
    :param client: the client that built resources are bound to
    """

    def __init__(self, registry=None, strict=False, client=None):
        self.registry = default_registry if registry is None else registry
        self.strict = strict
        self.client = client if client is None or isinstance(client, weakref.ProxyTypes) else weakref.proxy(client)

    def resolve(self, resource_type, expected_type=None, strict=None):
        """
        Returns the resource class for a discriminator.

        :param str resource_type: the payload's ``resource_type``, or ``None``
        :param expected_type: a resource reference (class or registered name), or ``None``
        :param bool strict: overrides :attr:`strict`
        """
        if strict is None:
            strict = self.strict
        if expected_type is not None:
            expected_type = ResourceReference(expected_type).resolve(registry=self.registry)

        variant = self.registry.get(resource_type)

        if expected_type is not None and expected_type is not Resource:
            if variant is not None and issubclass(variant, expected_type):
                return variant
            if strict and resource_type is not None:
                raise ResourceTypeMismatchError(expected_type.meta.name, resource_type)
            if variant is not None:
                log.warning('Expected resource_type "%s" but got "%s"; building %s',
                            expected_type.meta.name, resource_type, variant.__name__)

        if variant is not None:
            return variant

        if resource_type is not None:
            log.debug('Unknown resource_type "%s"; building %s', resource_type,
                      (expected_type or Resource).__name__)
        return expected_type or Resource

    def build(self, raw, expected_type=None, strict=None):
        """
        Builds a resource from a JSON object, or a list of resources from a list of JSON objects.

        :param raw: a JSON object, a list of JSON objects, or ``None``
        :param expected_type: a resource reference for the type expected by the caller
        :param bool strict: overrides :attr:`strict`
        :raises ResourceTypeMismatchError: in strict mode, if ``resource_type`` contradicts ``expected_type``
        :raises ValidationError: in strict mode, if the payload does not match the schema of its resource type
        """
        if raw is None:
            return None
        if isinstance(raw, list):
            return [self.build(item, expected_type, strict) for item in raw]
        if not isinstance(raw, dict):
            raise TypeError('Cannot build a resource from {!r}'.format(raw))

        if strict is None:
            strict = self.strict

        resource_class = self.resolve(raw.get('resource_type'), expected_type, strict)
        if strict:
            resource_class.schema.convert(raw)
        attributes = resource_class.schema.decode(raw, self)
        return resource_class(raw, client=self.client, attributes=attributes)
