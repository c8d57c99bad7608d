"""Errors raised while generating a project."""

from __future__ import annotations

import json


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


class GeneratorError(Exception):
    """Base class for every project generation failure."""


class OutDirRequiredError(GeneratorError):
    """No output directory was given."""

    def __init__(self) -> None:
        super().__init__("generator output directory is required")


class UnsafeTargetPathError(GeneratorError):
    """A generated file would land outside the output directory."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"unsafe generated file target {_quote(target)}")


class OutputDirectoryError(GeneratorError):
    """The output directory could not be prepared."""

    def __init__(self, path: str, err: BaseException) -> None:
        self.path = path
        self.err = err
        super().__init__(f"prepare output directory {_quote(path)}: {err}")


class OutputDirectoryNotEmptyError(GeneratorError):
    """The output directory holds files and overwriting was not allowed."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"output directory {_quote(path)} is not empty; use force to overwrite")


class TargetExistsError(GeneratorError):
    """A target file already exists and overwriting was not allowed."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"target file {_quote(path)} already exists; use force to overwrite")


class TemplateRenderError(GeneratorError):
    """A template could not be read, parsed or executed."""

    def __init__(self, source: str, err: BaseException) -> None:
        self.source = source
        self.err = err
        super().__init__(f"render template {_quote(source)}: {err}")


class FileWriteError(GeneratorError):
    """A generated file could not be written."""

    def __init__(self, path: str, err: BaseException) -> None:
        self.path = path
        self.err = err
        super().__init__(f"write target file {_quote(path)}: {err}")