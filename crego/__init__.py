"""Recipe model, validation, YAML I/O and safe file writing for scaffolding Go service projects."""

__version__ = "0.1.0"