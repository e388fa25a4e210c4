"""High level entry points for constructing containers."""

from typing import Any, Mapping, Optional

from beanpod.container import Container

__all__ = ["make_container"]


def make_container(config: Optional[Mapping[str, Any]] = None) -> Container:
    """
    Construct a new, independent container.

    Args:
        config: An optional config map with ``beans`` and ``definitions``
            sections, loaded into the container before it is returned.

    Returns:
        The container.

    Raises:
        InvalidConfigError: If a bean in the config is keyed by a number.
        InvalidArgumentError: If an entry in the config is rejected.
    """
    container = Container()
    if config is not None:
        container.load_config(config)
    return container
