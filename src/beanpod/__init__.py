"""Beanpod dependency injection container.

Beanpod maps string identifiers to beans (already-built values) and to
definitions (classes or factories built on first use). Resolving an identifier
builds what is missing by constructor injection: each required constructor
parameter is resolved by its name, then by its annotated type. Built objects are
stored, so every identifier resolves to a single shared instance.

Key Features:
    - Registration from a plain config map or explicit calls
    - Automatic indexing of classes and beans under all their supertypes
    - Constructor injection by parameter name or annotated type
    - Independent containers, plus a process-wide default container

Basic Usage:
    >>> import beanpod
    >>>
    >>> beanpod.load_config({
    ...     "beans": {"dsn": "postgres://localhost/app"},
    ...     "definitions": {"myapp.db.Database": PostgresDatabase},
    ... })
    >>>
    >>> class UserService:
    ...     def __init__(self, db: Database):
    ...         self.db = db
    >>>
    >>> users = beanpod.get(UserService)

The package consists of several modules:
    - container: The Container class (registration and resolution)
    - registry: Bean and definition storage, automatic indexing
    - instantiator: Constructor injection
    - introspection: Type identifiers and type descriptors
    - config: Config map loading
    - builders: Container construction helpers
    - domain: Core domain models (Identifier, TypeDescriptor)
    - errors: Container-specific exceptions
"""

from typing import Any, Mapping, Optional

from beanpod.builders import make_container
from beanpod.container import Container, ContainerKey
from beanpod.errors import (
    ContainerError,
    DependencyError,
    InvalidArgumentError,
    InvalidConfigError,
)

__all__ = [
    "Container",
    "ContainerKey",
    "ContainerError",
    "DependencyError",
    "InvalidArgumentError",
    "InvalidConfigError",
    "make_container",
    "default_container",
    "reset_default_container",
    "load_config",
    "register_definition",
    "set",
    "get",
]

_default: Optional[Container] = None


def default_container() -> Container:
    """Return the process-wide container, creating it on first use."""
    global _default
    if _default is None:
        _default = Container()
    return _default


def reset_default_container():
    """Discard the process-wide container; the next call creates a fresh one."""
    global _default
    _default = None


def load_config(config: Mapping[str, Any]):
    """Load a config map into the default container."""
    default_container().load_config(config)


def register_definition(definition: Any, id: Optional[ContainerKey] = None):
    """Register a class or factory with the default container."""
    default_container().register_definition(definition, id)


def set(id: ContainerKey, value: Any):
    """Store a bean in the default container."""
    default_container().set(id, value)


def get(id: ContainerKey) -> Any:
    """Resolve an identifier with the default container."""
    return default_container().get(id)
