"""Normalisation and default values for recipes."""

from __future__ import annotations

from crego.recipe.schema import (
    CONFIGURATION_FORMAT_ENV,
    DATABASE_DRIVER_MYSQL,
    DATABASE_DRIVER_NONE,
    DATABASE_DRIVER_POSTGRES,
    DATABASE_DRIVER_SQLITE,
    DATABASE_FRAMEWORK_NONE,
    DATABASE_FRAMEWORK_PGX,
    DATABASE_FRAMEWORK_SQL,
    DATABASE_MIGRATIONS_NONE,
    LAYOUT_STYLE_MINIMAL,
    LOGGING_FORMAT_TEXT,
    LOGGING_FRAMEWORK_SLOG,
    PROJECT_TYPE_WEB,
    SERVER_FRAMEWORK_NETHTTP,
    TASK_SCHEDULER_NONE,
    VERSION_V1,
    Recipe,
    nosql_database_drivers,
    primary_database_driver,
    primary_sql_database_driver,
    sql_database_drivers,
)

DEFAULT_GO_VERSION = "1.25"
DEFAULT_LAYOUT_STYLE = LAYOUT_STYLE_MINIMAL
DEFAULT_SERVER_FRAMEWORK = SERVER_FRAMEWORK_NETHTTP
DEFAULT_SERVER_PORT = 8080
DEFAULT_CONFIG_FORMAT = CONFIGURATION_FORMAT_ENV
DEFAULT_TASK_SCHEDULER = TASK_SCHEDULER_NONE
DEFAULT_LOGGING_FRAMEWORK = LOGGING_FRAMEWORK_SLOG
DEFAULT_LOGGING_FORMAT = LOGGING_FORMAT_TEXT


def normalize_enum(value: str) -> str:
    return value.strip().lower()


def normalize(recipe: Recipe | None) -> Recipe | None:
    """Trim and lower-case recipe values and merge legacy database fields, in place."""
    if recipe is None:
        return None

    r = recipe
    r.version = normalize_enum(r.version)
    r.project.name = r.project.name.strip()
    r.project.module = r.project.module.strip()
    r.project.type = normalize_enum(r.project.type)
    r.go.version = r.go.version.strip()
    r.layout.style = normalize_enum(r.layout.style)
    r.server.framework = normalize_enum(r.server.framework)
    r.configuration.format = normalize_enum(r.configuration.format)
    r.task_scheduler = normalize_enum(r.task_scheduler)
    r.sql_database = normalize_enum(r.sql_database)
    r.orm_framework = normalize_enum(r.orm_framework)
    r.nosql_database = [normalize_enum(d) for d in r.nosql_database]
    r.migrations = normalize_enum(r.migrations)
    _merge_top_level_database_config(r)

    db = r.database
    db.sql = normalize_enum(db.sql)
    db.orm_framework = normalize_enum(db.orm_framework)
    db.nosql = [normalize_enum(d) for d in db.nosql]
    _merge_nested_database_config(r)
    db.driver = normalize_enum(db.driver)
    db.drivers = [normalize_enum(d) for d in db.drivers]
    db.framework = normalize_enum(db.framework)
    if db.framework == "database/sql":
        db.framework = DATABASE_FRAMEWORK_SQL
    db.migrations = normalize_enum(db.migrations)

    r.logging.framework = normalize_enum(r.logging.framework)
    r.logging.format = normalize_enum(r.logging.format)
    return r


def _merge_top_level_database_config(r: Recipe) -> None:
    db = r.database
    if r.sql_database and not db.drivers:
        db.driver = r.sql_database
    if r.nosql_database and not db.drivers:
        drivers: list[str] = []
        if r.sql_database and r.sql_database != DATABASE_DRIVER_NONE:
            drivers.append(r.sql_database)
        elif db.driver and db.driver != DATABASE_DRIVER_NONE:
            drivers.append(db.driver)
        drivers.extend(r.nosql_database)
        db.drivers = drivers
    if r.orm_framework:
        db.framework = r.orm_framework
    if r.migrations:
        db.migrations = r.migrations


def _merge_nested_database_config(r: Recipe) -> None:
    db = r.database
    if not db.drivers and (db.sql or db.nosql):
        drivers: list[str] = []
        if db.sql and db.sql != DATABASE_DRIVER_NONE:
            drivers.append(db.sql)
        drivers.extend(db.nosql)
        if not drivers:
            drivers.append(DATABASE_DRIVER_NONE)
        db.drivers = drivers
        db.driver = primary_database_driver(drivers)
    if db.orm_framework:
        db.framework = db.orm_framework


def apply_defaults(recipe: Recipe | None) -> Recipe | None:
    """Fill in every unset recipe value with its default, in place."""
    if recipe is None:
        return None

    r = recipe
    if not r.version:
        r.version = VERSION_V1
    if not r.go.version:
        r.go.version = DEFAULT_GO_VERSION
    if not r.layout.style:
        r.layout.style = DEFAULT_LAYOUT_STYLE

    if r.project.type == PROJECT_TYPE_WEB:
        if not r.server.framework:
            r.server.framework = DEFAULT_SERVER_FRAMEWORK
        if r.server.port == 0:
            r.server.port = DEFAULT_SERVER_PORT
        if not r.server.graceful_shutdown_set:
            r.server.graceful_shutdown = True

    if not r.configuration.format:
        r.configuration.format = DEFAULT_CONFIG_FORMAT
    if not r.task_scheduler:
        r.task_scheduler = DEFAULT_TASK_SCHEDULER

    db = r.database
    if not db.driver:
        db.driver = primary_database_driver(db.drivers) if db.drivers else DATABASE_DRIVER_NONE
    if not db.drivers:
        db.drivers = [db.driver]
    db.driver = primary_database_driver(db.drivers)
    if not db.framework:
        db.framework = default_database_framework(db.drivers)
    if not db.migrations:
        db.migrations = DATABASE_MIGRATIONS_NONE
    r.sql_database = primary_sql_database_driver(db.drivers)
    r.orm_framework = db.framework
    r.nosql_database = nosql_database_drivers(db.drivers)
    r.migrations = db.migrations
    if not db.sql:
        db.sql = r.sql_database
    if not db.orm_framework:
        db.orm_framework = db.framework
    if not db.nosql:
        db.nosql = list(r.nosql_database)

    if not r.logging.framework:
        r.logging.framework = DEFAULT_LOGGING_FRAMEWORK
    if not r.logging.format:
        r.logging.format = DEFAULT_LOGGING_FORMAT
    return r


def default_database_framework(drivers: list[str]) -> str:
    """Pick the database framework that suits the SQL drivers in use."""
    sql_drivers = sql_database_drivers(drivers)
    if len(sql_drivers) > 1:
        return DATABASE_FRAMEWORK_SQL
    if not sql_drivers:
        return DATABASE_FRAMEWORK_NONE
    if sql_drivers[0] == DATABASE_DRIVER_POSTGRES:
        return DATABASE_FRAMEWORK_PGX
    if sql_drivers[0] in (DATABASE_DRIVER_MYSQL, DATABASE_DRIVER_SQLITE):
        return DATABASE_FRAMEWORK_SQL
    return DATABASE_FRAMEWORK_NONE