[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crego"
version = "0.1.0"
description = "Recipe model, validation, YAML I/O and safe file writing for scaffolding Go service projects"
requires-python = ">=3.10"
keywords = ["scaffolding", "code-generation", "recipe", "yaml", "go", "project-generator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["crego"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
