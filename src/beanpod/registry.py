"""Storage for definitions and beans, and automatic indexing by type hierarchy."""

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from beanpod.domain import Identifier
from beanpod.introspection import (
    is_structured,
    locate_type,
    type_hierarchy,
    type_identifier,
)

__all__ = ["Definition", "Registry"]

logger = logging.getLogger(__name__)

Definition = Union[type, Callable[[], Any]]
"""A lazy production recipe: a class to construct, or a zero-argument factory."""


class Registry:
    """Holds the definitions and beans of a container.

    Definitions and beans are keyed by :data:`Identifier`. The registry also
    keeps a catalog of every class it has seen, so that classes which cannot be
    located by name (for instance classes defined inside a function) are still
    known types once they have been registered or indexed.

    Example:
        >>> registry = Registry()
        >>> registry.auto_register_class(PostgresDatabase)
        >>> registry.definitions["myapp.db.Database"]  # PostgresDatabase
    """

    def __init__(self):
        self._definitions: dict[Identifier, Definition] = {}
        self._beans: dict[Identifier, Any] = {}
        self._known_types: dict[Identifier, type] = {}

    @property
    def definitions(self) -> Mapping[Identifier, Definition]:
        return MappingProxyType(self._definitions)

    @property
    def beans(self) -> Mapping[Identifier, Any]:
        return MappingProxyType(self._beans)

    def definition(self, identifier: Identifier) -> Optional[Definition]:
        return self._definitions.get(identifier)

    def bean(self, identifier: Identifier) -> Any:
        return self._beans.get(identifier)

    def store_definition(self, identifier: Identifier, definition: Definition):
        self._definitions[identifier] = definition
        logger.debug("Registered definition %s -> %r", identifier, definition)

    def store_bean(self, identifier: Identifier, value: Any):
        self._beans[identifier] = value
        logger.debug("Stored bean %s", identifier)

    def remember_type(self, cls: type) -> Identifier:
        """Add a class to the known-type catalog and return its identifier."""
        identifier = type_identifier(cls)
        self._known_types.setdefault(identifier, cls)
        return identifier

    def known_type(self, identifier: Identifier) -> Optional[type]:
        """Return the class an identifier names, or None if it names no known type."""
        if identifier in self._known_types:
            return self._known_types[identifier]
        return locate_type(identifier)

    def auto_register_class(self, cls: type):
        """Register a class under its own identifier and those of its supertypes.

        Walks the class's primary base chain and then its remaining MRO entries,
        mapping every identifier that has no definition yet to ``cls``. Existing
        definitions are never overwritten.

        Args:
            cls: The class to index.
        """
        self._index(self._definitions, cls, cls, "definition")

    def auto_register_bean(self, value: Any):
        """Register a bean under the identifiers of its runtime type's hierarchy.

        The bean-side mirror of :meth:`auto_register_class`: first-wins, and a
        no-op for values that are not structured.

        Args:
            value: The bean to index.
        """
        if not is_structured(value):
            return
        self._index(self._beans, type(value), value, "bean")

    def _index(self, target: dict[Identifier, Any], cls: type, entry: Any, kind: str):
        ancestors, interfaces = type_hierarchy(cls)
        for supertype in ancestors + interfaces:
            identifier = self.remember_type(supertype)
            if target.get(identifier) is None:
                target[identifier] = entry
                logger.debug("Auto-registered %s %s -> %s", kind, identifier, cls.__qualname__)
