from .client import Client, DEFAULT_CONFIG
from .exceptions import (AsanaError,
                         MissingParameterError,
                         InvalidPathError,
                         ValidationError,
                         ApiError,
                         MalformedResponseError,
                         ResourceTypeMismatchError,
                         UnstubbedRequestError)
from .factory import ResourceFactory
from .instances import Collection
from .params import required, require
from .registry import ResourceRegistry
from .resource import Resource
from .routes import Route, Request
from .transport import Transport, RequestsTransport

__all__ = (
    'Client',
    'DEFAULT_CONFIG',
    'Collection',
    'Resource',
    'ResourceFactory',
    'ResourceRegistry',
    'Route',
    'Request',
    'Transport',
    'RequestsTransport',
    'required',
    'require',
    'AsanaError',
    'MissingParameterError',
    'InvalidPathError',
    'ValidationError',
    'ApiError',
    'MalformedResponseError',
    'ResourceTypeMismatchError',
    'UnstubbedRequestError',
    'fields',
    'resources',
    'schema',
    'signals',
    'testing',
)
