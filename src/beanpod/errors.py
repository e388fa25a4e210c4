__all__ = [
    "ContainerError",
    "InvalidArgumentError",
    "DependencyError",
    "InvalidConfigError",
]


class ContainerError(Exception):
    """Base class for errors raised by the container."""

    pass


class InvalidArgumentError(ContainerError, ValueError):
    """Raised when an identifier, definition or bean is rejected at registration."""

    pass


class DependencyError(InvalidArgumentError):
    """Raised when a constructor's dependency cannot be resolved by name or by type."""

    pass


class InvalidConfigError(ContainerError, ValueError):
    """Raised when a config map uses a key the loader cannot accept."""

    pass
