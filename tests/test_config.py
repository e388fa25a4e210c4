import pytest

from beanpod.config import load_config
from beanpod.container import Container
from beanpod.errors import InvalidArgumentError, InvalidConfigError
from beanpod.introspection import type_identifier
from example import Database, PostgresDatabase, SqliteDatabase, UserRepository


@pytest.fixture
def container():
    return Container()


def test_beans_are_loaded(container):
    load_config(container, {"beans": {"config.name": "acme"}})

    assert container.get("config.name") == "acme"


@pytest.mark.parametrize("key", [0, 1.5, "12", " -3.5e2 "])
def test_numeric_bean_keys_are_rejected(container, key):
    with pytest.raises(InvalidConfigError, match="invalid key for bean"):
        load_config(container, {"beans": {key: "x"}})


def test_invalid_config_error_is_a_value_error(container):
    with pytest.raises(ValueError):
        load_config(container, {"beans": ["x"]})


def test_definitions_with_explicit_ids(container):
    load_config(
        container,
        {
            "definitions": {
                "db": SqliteDatabase,
                "dsn": lambda: "postgres://localhost/app",
                "pg": type_identifier(PostgresDatabase),
            }
        },
    )

    assert isinstance(container.get("db"), SqliteDatabase)
    assert container.get("dsn") == "postgres://localhost/app"
    assert container.get("pg").dsn == "postgres://localhost/app"


def test_numeric_definition_keys_only_index_the_class(container):
    load_config(container, {"definitions": {0: SqliteDatabase}})

    assert "0" not in container
    assert 0 not in container.registry.definitions
    assert container.registry.definitions[type_identifier(Database)] is SqliteDatabase


def test_definitions_can_be_listed(container):
    load_config(container, {"definitions": [PostgresDatabase, SqliteDatabase]})

    assert container.registry.definitions[type_identifier(Database)] is PostgresDatabase
    assert (
        container.registry.definitions[type_identifier(SqliteDatabase)]
        is SqliteDatabase
    )


def test_beans_are_loaded_before_definitions(container):
    load_config(
        container,
        {
            "definitions": {"repository": UserRepository},
            "beans": {"db": SqliteDatabase()},
        },
    )

    assert isinstance(container.get("repository").db, SqliteDatabase)


def test_missing_sections_are_ignored(container):
    load_config(container, {})

    assert dict(container.registry.beans) == {}
    assert dict(container.registry.definitions) == {}


def test_rejected_entries_propagate(container):
    with pytest.raises(InvalidArgumentError, match="is not a subclass of"):
        load_config(container, {"definitions": {type_identifier(Database): UserRepository}})


def test_container_loads_config(container):
    container.load_config({"beans": {"greeting": "Hello"}})

    assert container.get("greeting") == "Hello"


def test_definition_section_can_be_a_generator(container):
    load_config(
        container,
        {
            "beans": {"config.name": "acme"},
            "definitions": (d for d in [SqliteDatabase]),
        },
    )

    assert isinstance(container.get(Database), SqliteDatabase)
    assert container.get("config.name") == "acme"
