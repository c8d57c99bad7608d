"""Helper functions made available to project templates."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any

from crego.recipe.schema import (
    CONFIGURATION_FORMAT_JSON,
    CONFIGURATION_FORMAT_TOML,
    CONFIGURATION_FORMAT_YAML,
    DATABASE_DRIVER_NONE,
    DATABASE_FRAMEWORK_GORM,
    DATABASE_MIGRATIONS_GOOSE,
    DATABASE_MIGRATIONS_MIGRATE,
    SQL_DATABASE_DRIVERS,
    TASK_SCHEDULER_GOCRON,
    Recipe,
    database_drivers,
)

_TAGGED_FORMATS = (CONFIGURATION_FORMAT_JSON, CONFIGURATION_FORMAT_TOML, CONFIGURATION_FORMAT_YAML)


def template_funcs(component_ids: Iterable[str], recipe: Recipe | None) -> dict[str, Callable[..., Any]]:
    """Return the named functions templates may call for this recipe and component set."""
    selected = frozenset(component_ids)
    drivers = frozenset(database_drivers(recipe.database)) if recipe is not None else frozenset()
    has_sql = any(sql_database(driver) for driver in drivers)

    def scheduler_enabled() -> bool:
        return recipe is not None and recipe.task_scheduler == TASK_SCHEDULER_GOCRON

    def gorm_distributed_lock() -> bool:
        return (
            scheduler_enabled()
            and recipe is not None
            and recipe.database.framework == DATABASE_FRAMEWORK_GORM
            and has_sql
        )

    return {
        "hasComponent": lambda component_id: component_id in selected,
        "hasDatabase": lambda driver: driver in drivers,
        "anyDatabaseEnabled": lambda: any(d != DATABASE_DRIVER_NONE for d in drivers),
        "anySQLDatabaseEnabled": lambda: has_sql,
        "databaseEnabled": database_enabled,
        "configTag": config_tag(recipe),
        "sqlDatabase": sql_database,
        "sqlMigrations": sql_migrations,
        "schedulerEnabled": scheduler_enabled,
        "gormDistributedLock": gorm_distributed_lock,
        "lower": str.lower,
        "title": title,
    }


def config_tag(recipe: Recipe | None) -> Callable[[str], str]:
    """Return a function producing the struct tag for a config field name."""

    def tag(name: str) -> str:
        if recipe is None:
            return ""
        fmt = recipe.configuration.format
        if fmt not in _TAGGED_FORMATS:
            return ""
        return f"`{fmt}:{json.dumps(name, ensure_ascii=False)}`"

    return tag


def database_enabled(driver: str) -> bool:
    return bool(driver) and driver != DATABASE_DRIVER_NONE


def sql_database(driver: str) -> bool:
    return driver in SQL_DATABASE_DRIVERS


def sql_migrations(migrations: str) -> bool:
    return migrations in (DATABASE_MIGRATIONS_GOOSE, DATABASE_MIGRATIONS_MIGRATE)


def title(value: str) -> str:
    """Capitalise the first letter of each whitespace-separated word."""
    return " ".join(_title_word(word) for word in value.split())


def _title_word(word: str) -> str:
    first = word[0]
    titled = first.title()
    if len(titled) != 1:
        titled = first
    return titled + word[1:]