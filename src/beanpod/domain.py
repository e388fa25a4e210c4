"""Domain models used throughout the container."""

from dataclasses import dataclass
from typing import Optional

__all__ = ["Identifier", "ConstructorParameter", "TypeDescriptor"]


Identifier = str
"""A non-empty string naming a bean, a definition, a type or a constructor parameter.

All four share one namespace: a constructor parameter called ``db`` is injected
with whatever the container resolves for the identifier ``"db"``, and a
parameter annotated with ``Database`` falls back to the identifier of that type.
"""


@dataclass(frozen=True)
class ConstructorParameter:
    """A formal parameter of a constructor, as seen by the instantiator.

    Attributes:
        name: The parameter name, used as the first identifier to resolve.
        declared_type: The annotated class, if it is one the container can resolve.
        optional: True if the parameter has a default or is variadic.
        keyword_only: True if the parameter can only be passed by keyword.
    """

    name: str
    declared_type: Optional[type]
    optional: bool
    keyword_only: bool = False


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Everything the container needs to know about a type.

    Attributes:
        type: The described class.
        identifier: The identifier the class is registered under.
        ancestors: The class followed by its primary base chain, most derived first.
        interfaces: The remaining classes of the MRO (mixins, ABCs).
        parameters: Constructor parameters in declaration order, or None if the
            class does not declare a constructor.
    """

    type: type
    identifier: Identifier
    ancestors: tuple[type, ...]
    interfaces: tuple[type, ...]
    parameters: Optional[tuple[ConstructorParameter, ...]]

    @property
    def has_constructor(self) -> bool:
        return self.parameters is not None
