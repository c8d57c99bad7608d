"""Reading and writing recipes as YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from crego.recipe.normalize import apply_defaults, normalize, normalize_enum
from crego.recipe.schema import (
    DATABASE_DRIVER_NONE,
    DATABASE_FRAMEWORK_NONE,
    CIConfig,
    ConfigurationConfig,
    DatabaseConfig,
    DeploymentConfig,
    GoConfig,
    LayoutConfig,
    LoggingConfig,
    ObservabilityConfig,
    ProjectConfig,
    Recipe,
    ServerConfig,
    database_drivers,
    nosql_database_drivers,
    primary_sql_database_driver,
)
from crego.recipe.validate import validate

_DROPPED_TAGS = {"tag:yaml.org,2002:float", "tag:yaml.org,2002:timestamp"}
_STR_TAG = "tag:yaml.org,2002:str"


class _RecipeLoader(yaml.SafeLoader):
    """Safe loader that keeps float- and date-looking scalars as text."""


_RecipeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _DROPPED_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _RecipeDumper(yaml.SafeDumper):
    """Dumper that indents block sequences under their key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    style = None
    if dumper.resolve(yaml.ScalarNode, data, (True, False)) != _STR_TAG:
        style = '"'
    return dumper.represent_scalar(_STR_TAG, data, style=style)


_RecipeDumper.add_representer(str, _represent_str)

_RECIPE_FIELDS = frozenset(
    {
        "version", "project", "go", "layout", "server", "configuration", "sql_database",
        "orm_framework", "nosql_database", "migrations", "database", "task_scheduler",
        "logging", "observability", "deployment", "ci",
    }
)


def _kind(value: Any) -> str:
    if isinstance(value, dict):
        return "!!map"
    if isinstance(value, list):
        return "!!seq"
    if isinstance(value, bool):
        return "!!bool"
    if isinstance(value, int):
        return "!!int"
    if isinstance(value, str):
        return "!!str"
    return "!!" + type(value).__name__


def _mapping(value: Any, type_name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"cannot unmarshal {_kind(value)} into {type_name}")
    return value


def _section(value: Any, type_name: str, allowed: tuple[str, ...]) -> dict:
    fields = _mapping(value, type_name)
    for key in fields:
        if key not in allowed:
            raise ValueError(f"field {key} not found in type {type_name}")
    return fields


def _string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int)):
        return str(value)
    raise ValueError(f"cannot unmarshal {_kind(value)} into string")


def _bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise ValueError(f"cannot unmarshal {_kind(value)} `{value}` into bool")


def _int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ValueError(f"cannot unmarshal {_kind(value)} `{value}` into int")


def _strings(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"cannot unmarshal {_kind(value)} into []string")
    return [_string(item) for item in value]


def _nosql(value: Any) -> list[str]:
    """Accept either a single driver name or a list of them."""
    if value is None:
        return []
    if isinstance(value, list):
        return _strings(value)
    driver = normalize_enum(_string(value))
    if not driver or driver == DATABASE_DRIVER_NONE:
        return []
    return [driver]


def _server(value: Any) -> ServerConfig:
    fields = _mapping(value, "recipe.ServerConfig")
    for key in fields:
        if key not in ("framework", "port", "graceful_shutdown"):
            raise ValueError(f'unknown server field "{key}"')
    return ServerConfig(
        framework=_string(fields.get("framework")),
        port=_int(fields.get("port")),
        graceful_shutdown=_bool(fields.get("graceful_shutdown")),
        graceful_shutdown_set="graceful_shutdown" in fields,
    )


def _logging(value: Any) -> LoggingConfig:
    fields = _mapping(value, "recipe.LoggingConfig")
    for key in fields:
        if key not in ("framework", "format", "request_logging"):
            raise ValueError(f'unknown logging field "{key}"')
    return LoggingConfig(
        framework=_string(fields.get("framework")),
        format=_string(fields.get("format")),
        request_logging=_bool(fields.get("request_logging")),
    )


def _database(value: Any) -> DatabaseConfig:
    fields = _section(
        value,
        "recipe.DatabaseConfig",
        ("sql", "orm_framework", "nosql", "driver", "drivers", "framework", "migrations"),
    )
    return DatabaseConfig(
        sql=_string(fields.get("sql")),
        orm_framework=_string(fields.get("orm_framework")),
        nosql=_nosql(fields.get("nosql")),
        driver=_string(fields.get("driver")),
        drivers=_strings(fields.get("drivers")),
        framework=_string(fields.get("framework")),
        migrations=_string(fields.get("migrations")),
    )


def recipe_from_mapping(data: Any) -> Recipe:
    """Build a recipe from decoded YAML data, rejecting unknown fields."""
    top = _section(data, "recipe.Recipe", tuple(_RECIPE_FIELDS))
    project = _section(top.get("project"), "recipe.ProjectConfig", ("name", "module", "type"))
    go = _section(top.get("go"), "recipe.GoConfig", ("version",))
    layout = _section(top.get("layout"), "recipe.LayoutConfig", ("style",))
    configuration = _section(top.get("configuration"), "recipe.ConfigurationConfig", ("format",))
    observability = _section(
        top.get("observability"),
        "recipe.ObservabilityConfig",
        ("health", "readiness", "metrics", "tracing"),
    )
    deployment = _section(top.get("deployment"), "recipe.DeploymentConfig", ("docker", "compose"))
    ci = _section(top.get("ci"), "recipe.CIConfig", ("github_actions", "gitlab_ci", "azure_pipelines"))

    return Recipe(
        version=_string(top.get("version")),
        project=ProjectConfig(
            name=_string(project.get("name")),
            module=_string(project.get("module")),
            type=_string(project.get("type")),
        ),
        go=GoConfig(version=_string(go.get("version"))),
        layout=LayoutConfig(style=_string(layout.get("style"))),
        server=_server(top.get("server")),
        configuration=ConfigurationConfig(format=_string(configuration.get("format"))),
        sql_database=_string(top.get("sql_database")),
        orm_framework=_string(top.get("orm_framework")),
        nosql_database=_nosql(top.get("nosql_database")),
        migrations=_string(top.get("migrations")),
        database=_database(top.get("database")),
        task_scheduler=_string(top.get("task_scheduler")),
        logging=_logging(top.get("logging")),
        observability=ObservabilityConfig(
            health=_bool(observability.get("health")),
            readiness=_bool(observability.get("readiness")),
            metrics=_bool(observability.get("metrics")),
            tracing=_bool(observability.get("tracing")),
        ),
        deployment=DeploymentConfig(
            docker=_bool(deployment.get("docker")),
            compose=_bool(deployment.get("compose")),
        ),
        ci=CIConfig(
            github_actions=_bool(ci.get("github_actions")),
            gitlab_ci=_bool(ci.get("gitlab_ci")),
            azure_pipelines=_bool(ci.get("azure_pipelines")),
        ),
    )


def _database_mapping(database: DatabaseConfig) -> dict[str, Any]:
    drivers = database_drivers(database)
    nosql = nosql_database_drivers(drivers)
    sql = primary_sql_database_driver(drivers)
    out: dict[str, Any] = {"sql": sql}
    if sql != DATABASE_DRIVER_NONE and database.framework not in ("", DATABASE_FRAMEWORK_NONE):
        out["orm_framework"] = database.framework
    if sql != DATABASE_DRIVER_NONE and database.migrations:
        out["migrations"] = database.migrations
    if len(nosql) == 1:
        out["nosql"] = nosql[0]
    elif nosql:
        out["nosql"] = nosql
    else:
        out["nosql"] = DATABASE_DRIVER_NONE
    return out


def recipe_to_mapping(recipe: Recipe) -> dict[str, Any]:
    """Return the canonical serialisable form of a recipe, with defaults applied."""
    r = recipe.copy()
    normalize(r)
    apply_defaults(r)

    out: dict[str, Any] = {
        "version": r.version,
        "project": {"name": r.project.name, "module": r.project.module, "type": r.project.type},
        "go": {"version": r.go.version},
        "layout": {"style": r.layout.style},
    }
    if r.server.framework or r.server.port or r.server.graceful_shutdown:
        out["server"] = {
            "framework": r.server.framework,
            "port": r.server.port,
            "graceful_shutdown": r.server.graceful_shutdown,
        }
    out["configuration"] = {"format": r.configuration.format}
    out["database"] = _database_mapping(r.database)
    out["task_scheduler"] = r.task_scheduler
    out["logging"] = {
        "framework": r.logging.framework,
        "format": r.logging.format,
        "request_logging": r.logging.request_logging,
    }
    out["observability"] = {
        "health": r.observability.health,
        "readiness": r.observability.readiness,
        "metrics": r.observability.metrics,
        "tracing": r.observability.tracing,
    }
    out["deployment"] = {"docker": r.deployment.docker, "compose": r.deployment.compose}
    out["ci"] = {
        "github_actions": r.ci.github_actions,
        "gitlab_ci": r.ci.gitlab_ci,
        "azure_pipelines": r.ci.azure_pipelines,
    }
    return out


def _is_top_level_key(line: str) -> bool:
    return bool(line) and line[0] not in " \t" and line not in ("---", "...") and ":" in line


def _space_top_level(data: str) -> str:
    data = data.rstrip("\n")
    if not data:
        return "\n"
    first, *rest = data.split("\n")
    lines = [first]
    for line in rest:
        if _is_top_level_key(line):
            lines.append("")
        lines.append(line)
    return "\n".join(lines) + "\n"


def marshal_yaml(recipe: Recipe) -> str:
    """Render a recipe as YAML with a blank line between top-level sections."""
    text = yaml.dump(
        recipe_to_mapping(recipe),
        Dumper=_RecipeDumper,
        indent=2,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )
    return _space_top_level(text)


def load(path: str | os.PathLike[str]) -> Recipe:
    """Read, normalise, default and validate a recipe file."""
    shown = os.fspath(path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as err:
        raise OSError(err.errno, f'load recipe "{shown}": {err.strerror}') from err
    except UnicodeDecodeError as err:
        raise ValueError(f'load recipe "{shown}": {err}') from err

    try:
        data = yaml.load(text, Loader=_RecipeLoader)
        if data is None:
            raise ValueError("EOF")
        recipe = recipe_from_mapping(data)
    except (yaml.YAMLError, ValueError) as err:
        raise ValueError(f'load recipe "{shown}": {err}') from err

    normalize(recipe)
    apply_defaults(recipe)
    validate(recipe)
    return recipe


def save(path: str | os.PathLike[str], recipe: Recipe | None) -> None:
    """Normalise and validate the recipe in place, then write it as YAML."""
    normalize(recipe)
    apply_defaults(recipe)
    validate(recipe)

    text = marshal_yaml(recipe)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as err:
        raise OSError(err.errno, f'save recipe "{os.fspath(path)}": {err.strerror}') from err