import threading


class ResourceRegistry(object):
    """
    Maps ``resource_type`` discriminators to :class:`Resource` classes.

    Resource classes are added to :data:`default_registry` when they are declared, unless their ``Meta``
    sets ``registry = None`` or names a different registry.
    """

    def __init__(self, resources=()):
        self._lock = threading.Lock()
        self._resources = {}
        for resource in resources:
            self.register(resource)

    def register(self, resource, name=None):
        """
        Add a :class:`Resource` class. A later registration for the same name replaces the earlier one.

        :param resource: resource class
        :param str name: discriminator; defaults to ``resource.meta.name``
        :return: the resource class, so that this method can be used as a class decorator
        """
        with self._lock:
            self._resources[name or resource.meta.name] = resource
        return resource

    def get(self, name, default=None):
        if name is None:
            return default
        return self._resources.get(name, default)

    def names(self):
        return sorted(self._resources)

    def __getitem__(self, name):
        return self._resources[name]

    def __contains__(self, name):
        return name in self._resources

    def __iter__(self):
        return iter(self._resources.values())

    def __len__(self):
        return len(self._resources)

    def __repr__(self):
        return '<ResourceRegistry {}>'.format(self.names())


default_registry = ResourceRegistry()
