import pytest

from beanpod.container import Container
from beanpod.errors import DependencyError, InvalidArgumentError
from beanpod.instantiator import Instantiator
from example import (
    AnnotatedDependency,
    Chicken,
    Database,
    KeywordOnly,
    NeedsTypeCheckingImport,
    NeedsUnknown,
    OptionalOnly,
    PartiallyOptional,
    PostgresDatabase,
    SqliteDatabase,
    UserRepository,
    UserService,
)


@pytest.fixture
def container():
    return Container()


def test_factory_is_called_without_arguments():
    instantiator = Instantiator(lambda _id: pytest.fail("nothing to resolve"))

    assert instantiator.create_from_definition(lambda: "built") == "built"


def test_class_without_constructor_is_built_without_arguments():
    instantiator = Instantiator(lambda _id: pytest.fail("nothing to resolve"))

    assert isinstance(instantiator.create_from_definition(SqliteDatabase), SqliteDatabase)


def test_parameters_are_resolved_in_declaration_order():
    requested = []

    def resolve(identifier):
        requested.append(identifier)
        return f"<{identifier}>"

    service = Instantiator(resolve).create_from_class(UserService)

    assert requested == ["users", "greeting"]
    assert service.users == "<users>"
    assert service.greeting == "<greeting>"


def test_dependency_is_resolved_by_parameter_name_first(container):
    db = PostgresDatabase("postgres://localhost/app")
    container.set("db", db)
    container.register_definition(SqliteDatabase)

    assert container.get(UserRepository).db is db


def test_dependency_falls_back_to_declared_type(container):
    container.register_definition(SqliteDatabase)

    repository = container.get(UserRepository)

    assert isinstance(repository.db, SqliteDatabase)
    assert container.get(Database) is repository.db


def test_annotated_parameter_falls_back_to_its_base_type(container):
    db = SqliteDatabase()
    container.set(Database, db)

    assert container.get(AnnotatedDependency).storage is db


def test_dependencies_are_resolved_recursively(container):
    container.set("greeting", "Hello")
    container.register_definition(SqliteDatabase)

    service = container.get(UserService)

    assert service.greeting == "Hello"
    assert service.users is container.get(UserRepository)
    assert isinstance(service.users.db, SqliteDatabase)


def test_builtin_annotations_do_not_resolve_by_type(container):
    container.set("str", "not a dsn")

    with pytest.raises(DependencyError, match=r"can't find a bean with id \[dsn\]"):
        container.get(PostgresDatabase)


def test_missing_dependency_names_the_parameter(container):
    with pytest.raises(DependencyError, match=r"can't find a bean with id \[unknown_thing\]"):
        container.get(NeedsUnknown)


def test_dependency_error_is_an_argument_error(container):
    with pytest.raises(InvalidArgumentError, match="NeedsUnknown instance failed"):
        container.get(NeedsUnknown)


def test_optional_parameters_keep_their_defaults(container):
    container.set("a", "A")
    container.set("b", "injected")

    built = container.get(OptionalOnly)

    assert built.a == "A"
    assert built.b == "default"


def test_parameters_after_first_optional_one_are_never_resolved(container):
    resolved = []

    def make_c():
        resolved.append("c")
        return "C"

    container.set("a", "A")
    container.register_definition(make_c, "c")

    with pytest.raises(TypeError, match="keyword-only argument: 'c'"):
        container.get(PartiallyOptional)

    assert resolved == []


def test_keyword_only_parameters_are_passed_by_keyword(container):
    container.set("name", "acme")

    assert container.get(KeywordOnly).name == "acme"


def test_circular_dependencies_exhaust_the_stack(container):
    with pytest.raises(RecursionError):
        container.get(Chicken)


def test_unresolvable_annotation_still_resolves_by_name(container):
    container.set("ledger", "entries")

    assert container.get(NeedsTypeCheckingImport).ledger == "entries"
