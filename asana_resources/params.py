from .exceptions import MissingParameterError


class _Required(object):
    """
    Default value for keyword parameters that must be given by the caller.
    """

    def __repr__(self):
        return 'required'


required = _Required()


def require(name, value, operation=None):
    """
    Checks a required parameter and returns its value.

    :param str name: parameter name, used in the error message
    :param value: the value passed by the caller
    :param str operation: optional operation name, used in the error message
    :raises MissingParameterError: if ``value`` is ``None`` or :data:`required`
    """
    if value is None or value is required:
        raise MissingParameterError(name, operation)
    return value
