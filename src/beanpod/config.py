"""Loading beans and definitions from an already-parsed config map.

A config map has two optional sections::

    {
        "beans": {
            "config.name": "acme",
        },
        "definitions": {
            "db": make_database,                 # factory under an explicit id
            "myapp.services.Mailer": SmtpMailer, # class under an explicit id
            0: AuditLog,                         # numeric key: indexed only
        },
    }

Either section may also be a list, whose entries then have implicit numeric keys.
"""

import logging
import re
from typing import Any, Iterable, Mapping

from beanpod.errors import InvalidConfigError

__all__ = ["load_config"]

logger = logging.getLogger(__name__)

_NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def load_config(container, config: Mapping[str, Any]):
    """Register every bean and definition declared in ``config`` with ``container``.

    Beans are stored first, so definitions registered afterwards can rely on them.

    Args:
        container: The container to populate.
        config: A mapping with optional ``beans`` and ``definitions`` sections.

    Raises:
        InvalidConfigError: If a bean is keyed by a number.
        InvalidArgumentError: If the container rejects an entry.
    """
    bean_count = definition_count = 0

    beans = config.get("beans")
    if beans is not None:
        for key, value in _entries(beans):
            if _is_numeric(key):
                raise InvalidConfigError(f"invalid key for bean: {key!r}")
            container.set(key, value)
            bean_count += 1

    definitions = config.get("definitions")
    if definitions is not None:
        for key, definition in _entries(definitions):
            container.register_definition(definition, None if _is_numeric(key) else key)
            definition_count += 1

    logger.debug(
        "Loaded config with %d bean(s) and %d definition(s)",
        bean_count,
        definition_count,
    )


def _entries(section) -> Iterable[tuple[Any, Any]]:
    if isinstance(section, Mapping):
        return section.items()
    return enumerate(section)


def _is_numeric(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, (int, float)):
        return True
    return isinstance(key, str) and _NUMERIC_STRING.match(key) is not None
