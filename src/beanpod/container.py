"""
The dependency-injection container.

A :class:`Container` maps identifiers to beans (concrete values) and to
definitions (classes or zero-argument factories realised on first use).
Resolving an identifier returns its bean if there is one; otherwise the
definition, or the class the identifier names, is instantiated, stored as the
bean and returned. Every later resolution of the same identifier returns the
same object.

Classes and structured beans are also indexed under the identifiers of their
supertypes, so a ``PostgresDatabase`` registered on its own satisfies a
dependency on ``Database``. The first registration of a supertype wins.
"""

import inspect
import logging
from typing import Any, Mapping, Optional, Union

from beanpod.config import load_config
from beanpod.domain import Identifier
from beanpod.errors import InvalidArgumentError
from beanpod.instantiator import Instantiator
from beanpod.introspection import is_concrete, type_identifier
from beanpod.registry import Definition, Registry

__all__ = ["Container", "ContainerKey"]

logger = logging.getLogger(__name__)


ContainerKey = Union[Identifier, type]
"""Type alias for keys used to register and look up entries in a Container.

A class used as a key is converted to its identifier, so the two lines below
are equivalent:

Example:
    >>> container.get(Database)
    >>> container.get("myapp.db.Database")
"""


class Container:
    """Registry of beans and definitions with on-demand constructor injection.

    Example:
        >>> container = Container()
        >>> container.set("dsn", "postgres://localhost/app")
        >>> container.register_definition(PostgresDatabase, Database)
        >>> db = container.get(Database)   # PostgresDatabase(dsn="postgres://...")
        >>> db is container.get(PostgresDatabase)
        True
    """

    def __init__(self, registry: Optional[Registry] = None):
        self.registry = registry if registry is not None else Registry()
        self._instantiator = Instantiator(self.get)

    def load_config(self, config: Mapping[str, Any]):
        """Register the ``beans`` and ``definitions`` sections of a config map.

        See :func:`beanpod.config.load_config`.
        """
        load_config(self, config)

    def register_definition(self, definition: Any, id: Optional[ContainerKey] = None):
        """Register a class or factory to be realised on first resolution.

        A class (or the identifier of a known class) is indexed under its own
        identifier and every supertype identifier not yet defined, and then
        under ``id`` if one is given. ``id`` must name a supertype of the class
        if it names a type at all. A factory has no type to index and must be
        given an ``id``.

        Args:
            definition: A class, a class identifier, or a zero-argument callable.
            id: The identifier to register the definition under.

        Raises:
            InvalidArgumentError: If the definition is empty or neither a class
                nor callable, if ``id`` is invalid, or if the class is not a
                subclass of the type ``id`` names.
        """
        if definition is None or (isinstance(definition, str) and not definition):
            raise InvalidArgumentError("definition cannot be empty")

        if inspect.isclass(definition):
            self._register_class(definition, id)
        elif isinstance(definition, str):
            cls = self.registry.known_type(definition)
            if cls is None:
                raise InvalidArgumentError(
                    f"definition {definition!r} is neither callable nor a known type"
                )
            self._register_class(cls, id)
        elif callable(definition):
            self._register_callable(definition, id)
        else:
            raise InvalidArgumentError(
                f"definition {definition!r} is neither callable nor a known type"
            )

    def set(self, id: ContainerKey, value: Any):
        """Store a bean, replacing any previous bean with the same identifier.

        Structured values are also indexed under the identifiers of their type
        hierarchy, without overwriting beans already stored there.

        Raises:
            InvalidArgumentError: If ``id`` is empty or not a string, or if it
                names a type of which ``value`` is not an instance.
        """
        identifier = self._identifier(id)
        if not identifier or not isinstance(identifier, str):
            raise InvalidArgumentError(f"invalid id {id!r}")

        id_type = self.registry.known_type(identifier)
        if id_type is not None and not _is_instance(value, id_type):
            raise InvalidArgumentError(f"bean is not an instance of {identifier}")

        self.registry.auto_register_bean(value)
        self.registry.store_bean(identifier, value)

    def get(self, id: ContainerKey) -> Any:
        """Resolve an identifier to its bean, building and storing it if needed.

        Returns:
            The bean, or None if the identifier has no bean, no definition and
            does not name a known type that can be instantiated. Abstract classes
            and protocols without a bean or definition resolve to None.

        Raises:
            DependencyError: If a constructor dependency cannot be resolved.
        """
        identifier = self._identifier(id)

        bean = self.registry.bean(identifier)
        if bean is not None:
            return bean

        definition = self.registry.definition(identifier)
        if definition is not None:
            logger.debug("Creating %s from its definition", identifier)
            bean = self._instantiator.create_from_definition(definition)
            self.set(identifier, bean)
            return bean

        cls = self.registry.known_type(identifier)
        if cls is not None and is_concrete(cls):
            logger.debug("Creating %s from its class", identifier)
            bean = self._instantiator.create_from_class(cls)
            self.set(identifier, bean)
            return bean

        return None

    def __getitem__(self, key: ContainerKey) -> Any:
        bean = self.get(key)
        if bean is None:
            raise KeyError(key)
        return bean

    def __contains__(self, key: ContainerKey) -> bool:
        identifier = self._identifier(key)
        return (
            self.registry.bean(identifier) is not None
            or self.registry.definition(identifier) is not None
        )

    def _identifier(self, key: Any) -> Any:
        if inspect.isclass(key):
            return self.registry.remember_type(key)
        return key

    def _register_callable(self, factory: Definition, id: Optional[ContainerKey]):
        identifier = self._identifier(id)
        if not identifier or not isinstance(identifier, str):
            raise InvalidArgumentError(f"invalid id {id!r}")

        self.registry.store_definition(identifier, factory)

    def _register_class(self, cls: type, id: Optional[ContainerKey]):
        self.registry.remember_type(cls)

        identifier = self._identifier(id)
        if identifier is not None and identifier != "":
            if not isinstance(identifier, str):
                raise InvalidArgumentError(f"invalid id {id!r}")

            id_type = self.registry.known_type(identifier)
            if id_type is not None and id_type is not cls and not _is_subclass(cls, id_type):
                raise InvalidArgumentError(
                    f"{type_identifier(cls)} is not a subclass of {identifier}"
                )

        self.registry.auto_register_class(cls)

        if identifier:
            self.registry.store_definition(identifier, cls)


def _is_subclass(cls: type, parent: type) -> bool:
    return parent in cls.__mro__ or issubclass(cls, parent)


def _is_instance(value: Any, cls: type) -> bool:
    return cls in type(value).__mro__ or isinstance(value, cls)
