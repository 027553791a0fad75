from werkzeug.http import HTTP_STATUS_CODES


class AsanaError(Exception):
    """
    Base class for every error raised by this library.
    """


class MissingParameterError(AsanaError, ValueError):
    """
    Raised when a required parameter was not given. Always raised before a request is sent.

    :param str parameter: name of the missing parameter
    :param str operation: optional name of the operation that required it
    """

    def __init__(self, parameter, operation=None):
        self.parameter = parameter
        self.operation = operation

        if operation:
            message = 'Missing required parameter "{}" for {}()'.format(parameter, operation)
        else:
            message = 'Missing required parameter "{}"'.format(parameter)
        super(MissingParameterError, self).__init__(message)


class InvalidPathError(AsanaError, ValueError):
    """
    Raised when a placeholder in a route rule has no value.
    """

    def __init__(self, placeholder, rule):
        self.placeholder = placeholder
        self.rule = rule
        super(InvalidPathError, self).__init__(
            'Unresolved placeholder "{{{}}}" in path "{}"'.format(placeholder, rule))


class ValidationError(AsanaError, ValueError):
    """
    Raised when request options do not match their schema.

    :param errors: an iterable of :class:`jsonschema.ValidationError`
    :param root: optional name prefixed to each error path
    """

    def __init__(self, errors, root=None):
        self.root = root
        self.errors = list(errors)
        super(ValidationError, self).__init__('; '.join(
            '{}: {}'.format('/'.join(str(p) for p in self._complete_path(error)) or '(root)', error.message)
            for error in self.errors))

    def _complete_path(self, error):
        path = tuple(error.absolute_path)
        if self.root is not None:
            return (self.root,) + path
        return path

    def as_dict(self):
        return {
            'errors': [{
                'validationOf': {error.validator: error.validator_value},
                'path': self._complete_path(error),
                'message': error.message
            } for error in self.errors]
        }


class ApiError(AsanaError):
    """
    Raised for any non-2xx response. Subclasses exist for the status codes the API documents.

    .. attribute:: status

        HTTP status code of the response

    .. attribute:: body

        The decoded JSON error body or, if it could not be decoded, the raw body

    .. attribute:: method
    .. attribute:: path

        Method and path of the request that failed
    """
    status_code = None

    def __init__(self, status=None, body=None, method=None, path=None, headers=None):
        self.status = status if status is not None else self.status_code
        self.body = body
        self.method = method
        self.path = path
        self.headers = headers or {}
        super(ApiError, self).__init__(self.message)

    @property
    def errors(self):
        if isinstance(self.body, dict):
            return self.body.get('errors') or []
        return []

    @property
    def message(self):
        message = '{} {} failed with {} {}'.format(self.method,
                                                  self.path,
                                                  self.status,
                                                  HTTP_STATUS_CODES.get(self.status, 'Unknown Error'))
        errors = [error['message'] for error in self.errors if isinstance(error, dict) and 'message' in error]
        if errors:
            message = '{}: {}'.format(message, '; '.join(errors))
        return message

    def as_dict(self):
        return {
            'status': self.status,
            'message': HTTP_STATUS_CODES.get(self.status, ''),
            'method': self.method,
            'path': self.path,
            'errors': self.errors
        }

    @classmethod
    def for_status(cls, status):
        """
        Returns the most specific :class:`ApiError` subclass for a status code.
        """
        for error_class in (InvalidRequest, NotAuthorized, PremiumOnly, Forbidden, NotFound, RateLimitEnforced):
            if error_class.status_code == status:
                return error_class
        if status >= 500:
            return ServerError
        return ApiError


class InvalidRequest(ApiError):
    status_code = 400


class NotAuthorized(ApiError):
    status_code = 401


class PremiumOnly(ApiError):
    status_code = 402


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class RateLimitEnforced(ApiError):
    status_code = 429

    @property
    def retry_after(self):
        """
        Seconds to wait before retrying, from the ``Retry-After`` header, or ``None``.
        """
        value = self.headers.get('Retry-After')
        try:
            return int(value)
        except (TypeError, ValueError):
            return None


class ServerError(ApiError):
    status_code = 500


class MalformedResponseError(AsanaError):
    """
    Raised for a 2xx response whose body is not JSON or does not have the expected envelope shape.
    """

    def __init__(self, reason, method=None, path=None, status=None, body=None):
        self.reason = reason
        self.method = method
        self.path = path
        self.status = status
        self.body = body
        if method is None:
            message = 'Malformed response: {}'.format(reason)
        else:
            message = 'Malformed response to {} {} ({}): {}'.format(method, path, status, reason)
        super(MalformedResponseError, self).__init__(message)


class ResourceTypeMismatchError(AsanaError, TypeError):
    """
    Raised in strict mode when a payload's ``resource_type`` contradicts the expected resource type.
    """

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super(ResourceTypeMismatchError, self).__init__(
            'Expected resource_type "{}" but the payload has "{}"'.format(expected, actual))


class UnstubbedRequestError(AsanaError, AssertionError):
    """
    Raised by :class:`asana_resources.testing.StubAPI` when a request has no registered stub.
    """

    def __init__(self, method, path):
        self.method = method
        self.path = path
        super(UnstubbedRequestError, self).__init__('No stub registered for {} {}'.format(method, path))
