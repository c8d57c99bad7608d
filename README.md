# crego

crego holds the building blocks of a project scaffolder for Go services:
a recipe model that describes the project to create, rules that normalise
and validate it, YAML loading and saving, ready-made preset recipes, the
helper functions offered to project templates, and a safe writer that
places rendered files under an output directory.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Recipes

A recipe is a YAML document describing the project:

```yaml
version: v1

project:
  name: orders-web
  module: github.com/example/orders-web
  type: web

server:
  framework: chi
  port: 8080

configuration:
  format: yaml

database:
  sql: postgres
  orm_framework: pgx
  migrations: goose
  nosql: none

task_scheduler: gocron

logging:
  framework: slog
  format: json
```

Load one, with defaults filled in and validation applied:

```python
from crego.recipe.io import load, save

recipe = load("crego.yaml")
print(recipe.server.framework, recipe.database.driver)
save("copy.yaml", recipe)
```

`load` raises `OSError` when the file cannot be read and `ValueError` when
the YAML is malformed or holds unknown fields or values of the wrong kind.
Validation problems are raised together as a single
`crego.recipe.errors.ValidationError`, whose `problems` attribute lists
each one. `save` normalises, fills in defaults and validates the recipe in
place before writing it, with a blank line between top-level sections.

Older layouts are accepted on loading: `database.driver`,
`database.drivers` and `database.framework` (where `database/sql` means
`sql`), as well as the top-level `sql_database`, `orm_framework`,
`nosql_database` and `migrations` fields. Saved recipes always use the
`database.sql` / `orm_framework` / `migrations` / `nosql` form.

For recipes held in memory, `crego.recipe.io` also offers
`recipe_from_mapping`, `recipe_to_mapping` and `marshal_yaml`.

Ready-made recipes are available by name:

```python
from crego.recipe.presets import new_preset

recipe = new_preset("web-postgres")
```

Preset names: `web-basic`, `web-postgres`, `web-mysql`, `web-sqlite`,
`web-redis`, `web-mongodb`, `cli-basic`. Any other name raises
`ValueError`.

Other helpers live next to them: `crego.recipe.normalize` (`normalize`,
`apply_defaults`, `default_database_framework`), `crego.recipe.validate`
(`validate`, `is_safe_project_name`, `looks_like_go_module_path`) and
`crego.recipe.schema` (the `Recipe` dataclass and its sections,
`database_drivers` and the other driver helpers).

## Writing files

`crego.generator.writer` turns rendered files into files on disk:

```python
from crego.generator.writer import RenderedFile, write_files

files = [RenderedFile(source="readme.tmpl", target="docs/README.md", content=b"# hi\n")]
written = write_files("out", files, force=False)
```

Targets must be relative and stay inside the output directory; anything
else raises `UnsafeTargetPathError`. Without `force`, an existing target
(`TargetExistsError`) or a non-empty output directory
(`OutputDirectoryNotEmptyError`) is refused. Written files get mode 0644.
`plan_files` returns the cleaned targets and full paths without touching
the disk. All of these errors derive from
`crego.generator.errors.GeneratorError`.

## Template helpers

`crego.generator.funcs.template_funcs(component_ids, recipe)` returns a
dictionary of the named functions project templates may call:
`hasComponent`, `hasDatabase`, `anyDatabaseEnabled`,
`anySQLDatabaseEnabled`, `databaseEnabled`, `configTag`, `sqlDatabase`,
`sqlMigrations`, `schedulerEnabled`, `gormDistributedLock`, `lower` and
`title`.

## What this package does not do

There is no command-line tool. The package does not choose components for
a recipe, ships no project templates and has no template engine: turning
templates into `RenderedFile` contents, and formatting generated Go code,
is left to the caller.