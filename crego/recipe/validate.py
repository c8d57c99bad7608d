"""Validation of recipes against the supported values and combinations."""

from __future__ import annotations

import re

from crego.recipe.errors import ValidationError
from crego.recipe.normalize import apply_defaults, normalize
from crego.recipe.schema import (
    CONFIGURATION_FORMAT_ENV,
    CONFIGURATION_FORMAT_JSON,
    CONFIGURATION_FORMAT_TOML,
    CONFIGURATION_FORMAT_YAML,
    DATABASE_DRIVER_MONGODB,
    DATABASE_DRIVER_MYSQL,
    DATABASE_DRIVER_NONE,
    DATABASE_DRIVER_POSTGRES,
    DATABASE_DRIVER_REDIS,
    DATABASE_DRIVER_SQLITE,
    DATABASE_FRAMEWORK_GORM,
    DATABASE_FRAMEWORK_NONE,
    DATABASE_FRAMEWORK_PGX,
    DATABASE_FRAMEWORK_SQL,
    DATABASE_MIGRATIONS_GOOSE,
    DATABASE_MIGRATIONS_MIGRATE,
    DATABASE_MIGRATIONS_NONE,
    LAYOUT_STYLE_DOMAIN,
    LAYOUT_STYLE_LAYERED,
    LAYOUT_STYLE_MINIMAL,
    LOGGING_FORMAT_JSON,
    LOGGING_FORMAT_TEXT,
    LOGGING_FRAMEWORK_LOGRUS,
    LOGGING_FRAMEWORK_SLOG,
    LOGGING_FRAMEWORK_ZAP,
    LOGGING_FRAMEWORK_ZEROLOG,
    PROJECT_TYPE_CLI,
    PROJECT_TYPE_LIBRARY,
    PROJECT_TYPE_WEB,
    PROJECT_TYPE_WORKER,
    SERVER_FRAMEWORK_CHI,
    SERVER_FRAMEWORK_ECHO,
    SERVER_FRAMEWORK_FIBER,
    SERVER_FRAMEWORK_GIN,
    SERVER_FRAMEWORK_NETHTTP,
    SQL_DATABASE_DRIVERS,
    TASK_SCHEDULER_GOCRON,
    TASK_SCHEDULER_NONE,
    VERSION_V1,
    DatabaseConfig,
    Recipe,
    database_drivers,
    sql_database_drivers,
)

PROJECT_TYPES = (PROJECT_TYPE_WEB, PROJECT_TYPE_CLI, PROJECT_TYPE_WORKER, PROJECT_TYPE_LIBRARY)
LAYOUT_STYLES = (LAYOUT_STYLE_MINIMAL, LAYOUT_STYLE_LAYERED, LAYOUT_STYLE_DOMAIN)
SERVER_FRAMEWORKS = (
    SERVER_FRAMEWORK_NETHTTP,
    SERVER_FRAMEWORK_CHI,
    SERVER_FRAMEWORK_GIN,
    SERVER_FRAMEWORK_ECHO,
    SERVER_FRAMEWORK_FIBER,
)
CONFIGURATION_FORMATS = (
    CONFIGURATION_FORMAT_ENV,
    CONFIGURATION_FORMAT_YAML,
    CONFIGURATION_FORMAT_JSON,
    CONFIGURATION_FORMAT_TOML,
)
DATABASE_DRIVERS = (
    DATABASE_DRIVER_NONE,
    DATABASE_DRIVER_POSTGRES,
    DATABASE_DRIVER_MYSQL,
    DATABASE_DRIVER_SQLITE,
    DATABASE_DRIVER_REDIS,
    DATABASE_DRIVER_MONGODB,
)
DATABASE_SQL_DRIVERS = (
    DATABASE_DRIVER_NONE,
    DATABASE_DRIVER_POSTGRES,
    DATABASE_DRIVER_MYSQL,
    DATABASE_DRIVER_SQLITE,
)
DATABASE_NOSQL_DRIVERS = (DATABASE_DRIVER_REDIS, DATABASE_DRIVER_MONGODB)
DATABASE_FRAMEWORKS = (
    DATABASE_FRAMEWORK_NONE,
    DATABASE_FRAMEWORK_PGX,
    DATABASE_FRAMEWORK_SQL,
    DATABASE_FRAMEWORK_GORM,
)
DATABASE_MIGRATIONS = (DATABASE_MIGRATIONS_NONE, DATABASE_MIGRATIONS_GOOSE, DATABASE_MIGRATIONS_MIGRATE)
TASK_SCHEDULERS = (TASK_SCHEDULER_NONE, TASK_SCHEDULER_GOCRON)
LOGGING_FRAMEWORKS = (
    LOGGING_FRAMEWORK_SLOG,
    LOGGING_FRAMEWORK_ZAP,
    LOGGING_FRAMEWORK_ZEROLOG,
    LOGGING_FRAMEWORK_LOGRUS,
)
LOGGING_FORMATS = (LOGGING_FORMAT_TEXT, LOGGING_FORMAT_JSON)

_SQL_MIGRATIONS = (DATABASE_MIGRATIONS_GOOSE, DATABASE_MIGRATIONS_MIGRATE)

_MODULE_FIRST_ELEMENT = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9.-]*[.][a-zA-Z0-9.-]+")
_MODULE_PATH_SEGMENT = re.compile(r"[A-Za-z0-9._~!$&'()*+,;=:@/-]+")
_PROJECT_NAME = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]*")
_URL_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*:")


def validate(recipe: Recipe | None) -> None:
    """Raise ValidationError listing every problem with the recipe.

    The recipe itself is left untouched; a normalised copy with defaults is checked.
    """
    if recipe is None:
        raise ValidationError(["recipe is required"])

    r = recipe.copy()
    normalize(r)
    apply_defaults(r)

    problems: list[str] = []
    if r.version != VERSION_V1:
        problems.append("version must be v1")
    if not r.project.name:
        problems.append("project.name is required")
    elif not is_safe_project_name(r.project.name):
        problems.append("project.name must be a safe single path segment")
    if not r.project.module:
        problems.append("project.module is required")
    elif not looks_like_go_module_path(r.project.module):
        problems.append("project.module must look like a Go module path")
    if not r.project.type:
        problems.append("project.type is required")
    else:
        _check_enum(problems, "project.type", r.project.type, PROJECT_TYPES)

    drivers = database_drivers(r.database)
    valid_drivers = all(driver in DATABASE_DRIVERS for driver in drivers)
    valid_framework = r.database.framework in DATABASE_FRAMEWORKS

    _check_enum(problems, "layout.style", r.layout.style, LAYOUT_STYLES)
    if r.server.framework:
        _check_enum(problems, "server.framework", r.server.framework, SERVER_FRAMEWORKS)
    _check_enum(problems, "configuration.format", r.configuration.format, CONFIGURATION_FORMATS)
    _check_enum(problems, "task_scheduler", r.task_scheduler, TASK_SCHEDULERS)
    for driver in drivers:
        _check_enum(problems, "database.driver", driver, DATABASE_DRIVERS)
    if r.database.sql:
        _check_enum(problems, "database.sql", r.database.sql, DATABASE_SQL_DRIVERS)
    for driver in r.database.nosql:
        _check_enum(problems, "database.nosql", driver, DATABASE_NOSQL_DRIVERS)
    _check_enum(problems, "database.framework", r.database.framework, DATABASE_FRAMEWORKS)
    _check_enum(problems, "database.migrations", r.database.migrations, DATABASE_MIGRATIONS)
    _check_enum(problems, "logging.framework", r.logging.framework, LOGGING_FRAMEWORKS)
    _check_enum(problems, "logging.format", r.logging.format, LOGGING_FORMATS)

    if valid_drivers and valid_framework:
        problems.extend(_database_compatibility_problems(r.database))

    if problems:
        raise ValidationError(problems)


def _database_compatibility_problems(database: DatabaseConfig) -> list[str]:
    problems: list[str] = []
    drivers = database_drivers(database) or [DATABASE_DRIVER_NONE]
    framework = database.framework
    migrations = database.migrations
    uses_framework = bool(framework) and framework != DATABASE_FRAMEWORK_NONE

    if len(drivers) > 1 and DATABASE_DRIVER_NONE in drivers:
        problems.append("database.driver=none cannot be combined with other database drivers")
    sql_drivers = sql_database_drivers(drivers)
    if len(sql_drivers) > 1:
        problems.append("database.sql supports only one SQL database driver")
    if not sql_drivers and uses_framework:
        problems.append(f"database.framework={framework} is only supported with SQL database drivers")
    if not sql_drivers and migrations in _SQL_MIGRATIONS:
        problems.append(f"database.migrations={migrations} is only supported with SQL database drivers")

    if drivers == [DATABASE_DRIVER_NONE]:
        if uses_framework:
            problems.append("database.framework must be none when database.driver=none")
        if migrations in _SQL_MIGRATIONS:
            problems.append(
                f"database.migrations={migrations} requires database.driver to be postgres, mysql, or sqlite"
            )
        return problems

    for sql_driver in sql_drivers:
        if migrations not in compatible_database_migrations(sql_driver):
            problems.append(
                f"database.migrations={migrations} is not supported with database.driver={sql_driver}"
            )
        if framework in compatible_database_frameworks(sql_driver):
            continue
        if framework == DATABASE_FRAMEWORK_PGX:
            problems.append("database.framework=pgx is only supported with database.driver=postgres")
        elif framework == DATABASE_FRAMEWORK_NONE:
            problems.append("database.framework=none is only supported with database.driver=none")
        else:
            problems.append(
                f"database.framework={framework} is not supported with database.driver={sql_driver}"
            )
    return problems


def compatible_database_frameworks(driver: str) -> tuple[str, ...]:
    """Return the database frameworks that work with a driver."""
    if driver == DATABASE_DRIVER_POSTGRES:
        return (DATABASE_FRAMEWORK_PGX, DATABASE_FRAMEWORK_SQL, DATABASE_FRAMEWORK_GORM)
    if driver in (DATABASE_DRIVER_MYSQL, DATABASE_DRIVER_SQLITE):
        return (DATABASE_FRAMEWORK_SQL, DATABASE_FRAMEWORK_GORM)
    return (DATABASE_FRAMEWORK_NONE,)


def compatible_database_migrations(driver: str) -> tuple[str, ...]:
    """Return the migration tools that work with a driver."""
    if driver in SQL_DATABASE_DRIVERS:
        return DATABASE_MIGRATIONS
    return (DATABASE_MIGRATIONS_NONE,)


def _check_enum(problems: list[str], field: str, value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        problems.append(f"{field}={value} is invalid; allowed values: {', '.join(allowed)}")


def is_safe_project_name(name: str) -> bool:
    """Whether the name is usable as a single path segment."""
    if not _PROJECT_NAME.fullmatch(name):
        return False
    return name not in (".", "..") and "/" not in name and "\\" not in name


def looks_like_go_module_path(module: str) -> bool:
    """Whether the value has the shape of a Go module path."""
    if any(ch in module for ch in " \t\r\n"):
        return False
    if _URL_SCHEME.match(module):
        return False
    parts = module.split("/")
    if len(parts) < 2:
        return False
    if not _MODULE_FIRST_ELEMENT.fullmatch(parts[0]):
        return False
    return all(
        part not in ("", ".", "..") and _MODULE_PATH_SEGMENT.fullmatch(part) for part in parts
    )