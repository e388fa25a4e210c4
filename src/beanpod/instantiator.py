"""Constructor injection.

The :class:`Instantiator` builds objects from definitions. Constructor
parameters are resolved one by one through the container, first by parameter
name and then by declared type, and passed to the constructor.
"""

import inspect
import logging
from typing import Any, Callable

from beanpod.errors import DependencyError
from beanpod.introspection import describe_type
from beanpod.registry import Definition

__all__ = ["Instantiator"]

logger = logging.getLogger(__name__)

Resolver = Callable[[Any], Any]


class Instantiator:
    """Create instances from definitions, resolving dependencies through ``resolve``."""

    def __init__(self, resolve: Resolver):
        self._resolve = resolve

    def create_from_definition(self, definition: Definition) -> Any:
        """Realise a definition.

        Args:
            definition: A zero-argument factory, or a class to construct.

        Returns:
            The factory's result, or a new instance of the class.
        """
        if callable(definition) and not inspect.isclass(definition):
            return definition()
        return self.create_from_class(definition)

    def create_from_class(self, cls: type) -> Any:
        """Construct a class, injecting its required constructor parameters.

        Parameters are visited in declaration order and the walk stops at the
        first optional one: nothing declared after it is resolved or supplied,
        even if it is required.

        Args:
            cls: The class to instantiate.

        Returns:
            The new instance.

        Raises:
            DependencyError: If a visited parameter resolves neither by name nor
                by declared type.
        """
        descriptor = describe_type(cls)
        if not descriptor.has_constructor:
            logger.debug("Constructing %s without arguments", descriptor.identifier)
            return cls()

        args = []
        kwargs = {}
        for parameter in descriptor.parameters:
            if parameter.optional:
                break

            actual = self._resolve(parameter.name)
            if actual is None and parameter.declared_type is not None:
                actual = self._resolve(parameter.declared_type)

            if actual is None:
                raise DependencyError(
                    f"create {descriptor.identifier} instance failed: "
                    f"can't find a bean with id [{parameter.name}]"
                )

            if parameter.keyword_only:
                kwargs[parameter.name] = actual
            else:
                args.append(actual)

        logger.debug(
            "Constructing %s with %d injected argument(s)",
            descriptor.identifier,
            len(args) + len(kwargs),
        )
        return cls(*args, **kwargs)
