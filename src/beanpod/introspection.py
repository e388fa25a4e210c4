"""Reflection helpers turning classes into :class:`TypeDescriptor` objects.

The container never imports anything on its own: an identifier only names a type
if it is the dotted path of a class in a module that has already been imported.
"""

import inspect
import sys
from abc import ABC
from typing import (
    Any,
    Annotated,
    Generic,
    Optional,
    Protocol,
    get_args,
    get_origin,
    get_type_hints,
)

from beanpod.domain import ConstructorParameter, Identifier, TypeDescriptor

__all__ = [
    "type_identifier",
    "locate_type",
    "is_structured",
    "is_concrete",
    "type_hierarchy",
    "describe_type",
]

_UNINDEXED_TYPES = (object, ABC, Generic, Protocol)


def type_identifier(cls: type) -> Identifier:
    """Return the identifier a class is known by.

    Example:
        >>> type_identifier(str)              # Returns "str"
        >>> type_identifier(OrderedDict)      # Returns "collections.OrderedDict"
    """
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def locate_type(identifier: Identifier) -> Optional[type]:
    """Find the class named by a dotted ``module.QualName`` identifier.

    Bare names, builtins included, are never located: a parameter called ``set``
    or ``type`` must not resolve to the builtin class.

    Args:
        identifier: The identifier to look up.

    Returns:
        The class, or None if the identifier does not name one.
    """
    if not isinstance(identifier, str) or "." not in identifier:
        return None

    parts = identifier.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module = sys.modules.get(".".join(parts[:split]))
        if module is None:
            continue
        candidate = _lookup_attributes(module, parts[split:])
        if inspect.isclass(candidate) and type_identifier(candidate) == identifier:
            return candidate
    return None


def is_structured(value: Any) -> bool:
    """True if the value is an instance of a non-builtin type.

    Scalars, strings, containers, plain functions and classes are not structured
    and are never indexed under their types.
    """
    return (
        value is not None
        and not inspect.isclass(value)
        and type(value).__module__ != "builtins"
    )


def is_concrete(cls: type) -> bool:
    """True unless the class is abstract or a protocol, and so cannot be built."""
    return not inspect.isabstract(cls) and not getattr(cls, "_is_protocol", False)


def type_hierarchy(cls: type) -> tuple[tuple[type, ...], tuple[type, ...]]:
    """Split the supertypes of a class into ancestors and interfaces.

    The ancestors are the class and its primary base chain (``__bases__[0]``),
    the interfaces are every other class of the MRO. ``object``, ``ABC``,
    ``Generic`` and ``Protocol`` appear in neither.
    """
    ancestors = []
    current = cls
    while current is not None and current not in _UNINDEXED_TYPES:
        ancestors.append(current)
        current = current.__bases__[0] if current.__bases__ else None

    interfaces = tuple(
        t for t in cls.__mro__ if t not in ancestors and t not in _UNINDEXED_TYPES
    )
    return tuple(ancestors), interfaces


def describe_type(cls: type) -> TypeDescriptor:
    """Build the descriptor of a class from its MRO and constructor signature."""
    ancestors, interfaces = type_hierarchy(cls)
    return TypeDescriptor(
        cls,
        type_identifier(cls),
        ancestors,
        interfaces,
        _constructor_parameters(cls),
    )


def _lookup_attributes(target: Any, names: list[str]) -> Any:
    for name in names:
        target = getattr(target, name, None)
        if target is None:
            return None
    return target


def _constructor_parameters(cls: type) -> Optional[tuple[ConstructorParameter, ...]]:
    """Extract the parameters of a class's ``__init__``, excluding ``self``.

    Returns:
        None if the class inherits ``object.__init__`` or its constructor has no
        introspectable signature, otherwise the parameters in declaration order.
    """
    init = cls.__init__
    if init is object.__init__:
        return None

    try:
        sig = inspect.signature(init)
    except (TypeError, ValueError):
        return None

    parameters = list(sig.parameters.values())[1:]
    try:
        hints = get_type_hints(init, include_extras=True)
    except NameError:
        # Unresolvable forward references leave the raw annotations.
        hints = {
            param.name: param.annotation
            for param in parameters
            if param.annotation is not param.empty
        }
    return tuple(_make_parameter(param, hints.get(param.name)) for param in parameters)


def _make_parameter(param: inspect.Parameter, annotation) -> ConstructorParameter:
    optional = param.default is not param.empty or param.kind in (
        inspect.Parameter.VAR_POSITIONAL,
        inspect.Parameter.VAR_KEYWORD,
    )
    return ConstructorParameter(
        param.name,
        _declared_type(annotation),
        optional,
        param.kind is inspect.Parameter.KEYWORD_ONLY,
    )


def _declared_type(annotation) -> Optional[type]:
    if annotation is None:
        return None

    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]

    if inspect.isclass(annotation) and annotation.__module__ != "builtins":
        return annotation
    return None
