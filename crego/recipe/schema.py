"""Recipe data model, its constants and database driver helpers."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field

VERSION_V1 = "v1"

PROJECT_TYPE_WEB = "web"
PROJECT_TYPE_CLI = "cli"
PROJECT_TYPE_WORKER = "worker"
PROJECT_TYPE_LIBRARY = "library"

LAYOUT_STYLE_MINIMAL = "minimal"
LAYOUT_STYLE_LAYERED = "layered"
LAYOUT_STYLE_DOMAIN = "domain"

SERVER_FRAMEWORK_NETHTTP = "nethttp"
SERVER_FRAMEWORK_CHI = "chi"
SERVER_FRAMEWORK_GIN = "gin"
SERVER_FRAMEWORK_ECHO = "echo"
SERVER_FRAMEWORK_FIBER = "fiber"

CONFIGURATION_FORMAT_ENV = "env"
CONFIGURATION_FORMAT_YAML = "yaml"
CONFIGURATION_FORMAT_JSON = "json"
CONFIGURATION_FORMAT_TOML = "toml"

DATABASE_DRIVER_NONE = "none"
DATABASE_DRIVER_POSTGRES = "postgres"
DATABASE_DRIVER_MYSQL = "mysql"
DATABASE_DRIVER_SQLITE = "sqlite"
DATABASE_DRIVER_REDIS = "redis"
DATABASE_DRIVER_MONGODB = "mongodb"

DATABASE_FRAMEWORK_NONE = "none"
DATABASE_FRAMEWORK_PGX = "pgx"
DATABASE_FRAMEWORK_SQL = "sql"
DATABASE_FRAMEWORK_GORM = "gorm"

DATABASE_MIGRATIONS_NONE = "none"
DATABASE_MIGRATIONS_GOOSE = "goose"
DATABASE_MIGRATIONS_MIGRATE = "migrate"

TASK_SCHEDULER_NONE = "none"
TASK_SCHEDULER_GOCRON = "gocron"

LOGGING_FRAMEWORK_SLOG = "slog"
LOGGING_FRAMEWORK_ZAP = "zap"
LOGGING_FRAMEWORK_ZEROLOG = "zerolog"
LOGGING_FRAMEWORK_LOGRUS = "logrus"

LOGGING_FORMAT_TEXT = "text"
LOGGING_FORMAT_JSON = "json"

PRESET_WEB_BASIC = "web-basic"
PRESET_WEB_POSTGRES = "web-postgres"
PRESET_WEB_MYSQL = "web-mysql"
PRESET_WEB_SQLITE = "web-sqlite"
PRESET_WEB_REDIS = "web-redis"
PRESET_WEB_MONGODB = "web-mongodb"
PRESET_CLI_BASIC = "cli-basic"

SQL_DATABASE_DRIVERS = (DATABASE_DRIVER_POSTGRES, DATABASE_DRIVER_MYSQL, DATABASE_DRIVER_SQLITE)
NOSQL_DATABASE_DRIVERS = (DATABASE_DRIVER_REDIS, DATABASE_DRIVER_MONGODB)


@dataclass
class ProjectConfig:
    name: str = ""
    module: str = ""
    type: str = ""


@dataclass
class GoConfig:
    version: str = ""


@dataclass
class LayoutConfig:
    style: str = ""


@dataclass
class ServerConfig:
    framework: str = ""
    port: int = 0
    graceful_shutdown: bool = False
    # True when graceful_shutdown was given explicitly rather than left to defaults.
    graceful_shutdown_set: bool = field(default=False, compare=False, repr=False)


@dataclass
class ConfigurationConfig:
    format: str = ""


@dataclass
class DatabaseConfig:
    sql: str = ""
    orm_framework: str = ""
    nosql: list[str] = field(default_factory=list)
    driver: str = ""
    drivers: list[str] = field(default_factory=list)
    framework: str = ""
    migrations: str = ""


@dataclass
class LoggingConfig:
    framework: str = ""
    format: str = ""
    request_logging: bool = False


@dataclass
class ObservabilityConfig:
    health: bool = False
    readiness: bool = False
    metrics: bool = False
    tracing: bool = False


@dataclass
class DeploymentConfig:
    docker: bool = False
    compose: bool = False


@dataclass
class CIConfig:
    github_actions: bool = False
    gitlab_ci: bool = False
    azure_pipelines: bool = False


@dataclass
class Recipe:
    version: str = ""
    project: ProjectConfig = field(default_factory=ProjectConfig)
    go: GoConfig = field(default_factory=GoConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    configuration: ConfigurationConfig = field(default_factory=ConfigurationConfig)
    sql_database: str = ""
    orm_framework: str = ""
    nosql_database: list[str] = field(default_factory=list)
    migrations: str = ""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    task_scheduler: str = ""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)
    deployment: DeploymentConfig = field(default_factory=DeploymentConfig)
    ci: CIConfig = field(default_factory=CIConfig)

    def copy(self) -> Recipe:
        """Return an independent deep copy of this recipe."""
        return _copy.deepcopy(self)


def database_drivers(database: DatabaseConfig) -> list[str]:
    """Return the effective, de-duplicated list of database drivers."""
    raw = list(database.drivers)
    if not raw and (database.sql or database.nosql):
        if database.sql and database.sql != DATABASE_DRIVER_NONE:
            raw.append(database.sql)
        raw.extend(database.nosql)
    if not raw and database.driver:
        raw = [database.driver]
    drivers = list(dict.fromkeys(driver for driver in raw if driver))
    return drivers or [DATABASE_DRIVER_NONE]


def is_sql_database_driver(driver: str) -> bool:
    return driver in SQL_DATABASE_DRIVERS


def is_nosql_database_driver(driver: str) -> bool:
    return driver in NOSQL_DATABASE_DRIVERS


def sql_database_drivers(drivers: list[str]) -> list[str]:
    return [driver for driver in drivers if is_sql_database_driver(driver)]


def nosql_database_drivers(drivers: list[str]) -> list[str]:
    return [driver for driver in drivers if is_nosql_database_driver(driver)]


def primary_sql_database_driver(drivers: list[str]) -> str:
    """Return the first SQL driver, or "none"."""
    return next((d for d in drivers if is_sql_database_driver(d)), DATABASE_DRIVER_NONE)


def primary_database_driver(drivers: list[str]) -> str:
    """Return the first SQL driver, falling back to the first driver."""
    return next((d for d in drivers if is_sql_database_driver(d)), first_database_driver(drivers))


def first_database_driver(drivers: list[str]) -> str:
    if not drivers or not drivers[0]:
        return DATABASE_DRIVER_NONE
    return drivers[0]