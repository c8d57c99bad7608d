import pytest

from crego.recipe.errors import ValidationError
from crego.recipe.schema import DatabaseConfig, ProjectConfig, Recipe, ServerConfig
from crego.recipe.validate import (
    compatible_database_frameworks,
    compatible_database_migrations,
    is_safe_project_name,
    looks_like_go_module_path,
    validate,
)


def _web_recipe(**database) -> Recipe:
    return Recipe(
        version="v1",
        project=ProjectConfig(name="orders-web", module="github.com/example/orders-web", type="web"),
        database=DatabaseConfig(**database),
    )


def _problems(recipe) -> list[str]:
    with pytest.raises(ValidationError) as info:
        validate(recipe)
    return info.value.problems


def test_validate_none():
    assert _problems(None) == ["recipe is required"]


def test_validate_leaves_recipe_untouched():
    r = _web_recipe(driver="Postgres")
    assert validate(r) is None
    assert r.database.driver == "Postgres"
    assert r.database.framework == ""
    assert r.server.port == 0


def test_missing_project_fields_reported_in_order():
    assert _problems(Recipe()) == [
        "project.name is required",
        "project.module is required",
        "project.type is required",
    ]


def test_invalid_server_framework():
    r = _web_recipe()
    r.server = ServerConfig(framework="martini")
    message = str(pytest.raises(ValidationError, validate, r).value)
    assert "server.framework=martini is invalid" in message
    assert "allowed values: nethttp, chi, gin, echo, fiber" in message


def test_invalid_task_scheduler():
    r = _web_recipe()
    r.task_scheduler = "quartz"
    assert _problems(r) == ["task_scheduler=quartz is invalid; allowed values: none, gocron"]


def test_migrations_without_database():
    problems = _problems(_web_recipe(driver="none", migrations="goose"))
    assert "database.migrations=goose requires database.driver to be postgres, mysql, or sqlite" in problems


def test_framework_compatibility():
    problems = _problems(_web_recipe(driver="mysql", framework="pgx"))
    assert problems == ["database.framework=pgx is only supported with database.driver=postgres"]


def test_nosql_framework_and_migrations():
    problems = _problems(_web_recipe(driver="redis", framework="gorm", migrations="migrate"))
    assert "database.framework=gorm is only supported with SQL database drivers" in problems
    assert "database.migrations=migrate is only supported with SQL database drivers" in problems


def test_multiple_sql_drivers():
    problems = _problems(_web_recipe(drivers=["postgres", "mysql"]))
    assert problems == ["database.sql supports only one SQL database driver"]


def test_category_mixups():
    problems = _problems(_web_recipe(sql="redis", nosql=["postgres"]))
    assert any(p.startswith("database.sql=redis is invalid") for p in problems)
    assert any(p.startswith("database.nosql=postgres is invalid") for p in problems)


def test_none_combined_with_other_drivers():
    problems = _problems(_web_recipe(drivers=["none", "redis"]))
    assert "database.driver=none cannot be combined with other database drivers" in problems


def test_bad_project_name_and_module():
    r = _web_recipe()
    r.project.name = "../escape"
    r.project.module = "orders"
    assert _problems(r) == [
        "project.name must be a safe single path segment",
        "project.module must look like a Go module path",
    ]


def test_compatible_tables():
    assert compatible_database_frameworks("postgres") == ("pgx", "sql", "gorm")
    assert compatible_database_frameworks("sqlite") == ("sql", "gorm")
    assert compatible_database_frameworks("redis") == ("none",)
    assert compatible_database_migrations("mysql") == ("none", "goose", "migrate")
    assert compatible_database_migrations("mongodb") == ("none",)


@pytest.mark.parametrize(
    "name, expected",
    [("orders-api", True), ("a.b_c", True), ("..", False), ("a/b", False), ("-x", False), ("", False)],
)
def test_is_safe_project_name(name, expected):
    assert is_safe_project_name(name) is expected


@pytest.mark.parametrize(
    "module, expected",
    [
        ("github.com/example/orders-web", True),
        ("example.com/example", True),
        ("example", False),
        ("localhost/app", False),
        ("https://example.com/app", False),
        ("example.com:8080/app", False),
        ("example.com/a b", False),
        ("example.com//app", False),
        ("example.com/../app", False),
    ],
)
def test_looks_like_go_module_path(module, expected):
    assert looks_like_go_module_path(module) is expected