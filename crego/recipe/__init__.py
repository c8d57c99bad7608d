"""Project recipes: schema, normalisation, defaults, validation, presets and YAML I/O."""