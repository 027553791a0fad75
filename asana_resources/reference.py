from importlib import import_module
import inspect


class ResourceReference(object):
    def __init__(self, value):
        self.value = value

    def resolve(self, binding=None, registry=None):
        """
        Attempt to resolve the reference value and return the matching :class:`Resource` class.

        A reference can be a resource class, a registered resource type name, a string with a module name
        and class name of a resource, or ``"self"`` --- which resolves to the resource this reference is bound to.
        """
        name = self.value

        if name == 'self':
            return binding

        from .resource import Resource
        if inspect.isclass(name) and issubclass(name, Resource):
            return name

        if registry is None:
            from .registry import default_registry as registry

        if name in registry:
            return registry[name]

        try:
            module_name, class_name = name.rsplit('.', 1)
            module = import_module(module_name)
            return getattr(module, class_name)
        except (ValueError, ImportError, AttributeError):
            pass

        raise RuntimeError('Resource type "{}" is not registered.'.format(name))

    def __repr__(self):
        return "<ResourceReference '{}'>".format(self.value)


class ResourceBound(object):
    resource = None

    def _on_bind(self, resource):
        pass

    def bind(self, resource):
        if self.resource is None:
            self.resource = resource
            self._on_bind(resource)
        elif self.resource != resource:
            return self.rebind(resource)
        return self

    def rebind(self, resource):
        raise NotImplementedError('{} is already bound to {}'
                                  ' and does not support rebinding to {}'.format(repr(self), self.resource, resource))
