from collections import OrderedDict


def is_empty(value):
    """
    ``True`` for ``None`` and empty collections. ``False``, ``0`` and ``''`` are not empty.
    """
    if value is None:
        return True
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def compact(mapping):
    """
    Returns a copy of ``mapping`` without the entries whose value is empty, keeping the order of the rest.
    """
    return OrderedDict((key, value) for key, value in mapping.items() if not is_empty(value))


class AttributeDict(dict):
    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__
