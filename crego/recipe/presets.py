"""Built-in starting recipes."""

from __future__ import annotations

from crego.recipe.normalize import apply_defaults, normalize
from crego.recipe.schema import (
    CONFIGURATION_FORMAT_ENV,
    DATABASE_DRIVER_MONGODB,
    DATABASE_DRIVER_MYSQL,
    DATABASE_DRIVER_POSTGRES,
    DATABASE_DRIVER_REDIS,
    DATABASE_DRIVER_SQLITE,
    DATABASE_MIGRATIONS_MIGRATE,
    PRESET_CLI_BASIC,
    PRESET_WEB_BASIC,
    PRESET_WEB_MONGODB,
    PRESET_WEB_MYSQL,
    PRESET_WEB_POSTGRES,
    PRESET_WEB_REDIS,
    PRESET_WEB_SQLITE,
    PROJECT_TYPE_CLI,
    PROJECT_TYPE_WEB,
    VERSION_V1,
    ConfigurationConfig,
    ProjectConfig,
    Recipe,
)
from crego.recipe.validate import validate

# Database driver and migration tool for each web preset.
_WEB_PRESETS: dict[str, tuple[str, str]] = {
    PRESET_WEB_BASIC: ("", ""),
    PRESET_WEB_POSTGRES: (DATABASE_DRIVER_POSTGRES, DATABASE_MIGRATIONS_MIGRATE),
    PRESET_WEB_MYSQL: (DATABASE_DRIVER_MYSQL, DATABASE_MIGRATIONS_MIGRATE),
    PRESET_WEB_SQLITE: (DATABASE_DRIVER_SQLITE, DATABASE_MIGRATIONS_MIGRATE),
    PRESET_WEB_REDIS: (DATABASE_DRIVER_REDIS, ""),
    PRESET_WEB_MONGODB: (DATABASE_DRIVER_MONGODB, ""),
}


def _preset_base(name: str, module: str, project_type: str) -> Recipe:
    recipe = Recipe(
        version=VERSION_V1,
        project=ProjectConfig(name=name, module=module, type=project_type),
        configuration=ConfigurationConfig(format=CONFIGURATION_FORMAT_ENV),
    )
    if project_type == PROJECT_TYPE_WEB:
        recipe.ci.github_actions = True
    return recipe


def new_preset(name: str) -> Recipe:
    """Return a fully defaulted, validated recipe for a named preset."""
    if name == PRESET_CLI_BASIC:
        recipe = _preset_base("example-cli", "example.com/example-cli", PROJECT_TYPE_CLI)
    elif name in _WEB_PRESETS:
        recipe = _preset_base("example-web", "example.com/example-web", PROJECT_TYPE_WEB)
        recipe.database.driver, recipe.database.migrations = _WEB_PRESETS[name]
    else:
        raise ValueError(f'unknown recipe preset "{name}"')

    normalize(recipe)
    apply_defaults(recipe)
    validate(recipe)
    return recipe