"""Placing rendered files safely inside an output directory."""

from __future__ import annotations

import os
import posixpath
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from crego.generator.errors import (
    FileWriteError,
    OutputDirectoryError,
    OutputDirectoryNotEmptyError,
    TargetExistsError,
    UnsafeTargetPathError,
)

REGULAR_FILE_MODE = 0o644
DIRECTORY_MODE = 0o755


@dataclass(frozen=True)
class RenderedFile:
    """A template rendered to its final content and relative target path."""

    source: str
    target: str
    content: bytes


def plan_files(
    out_dir: str | os.PathLike[str], files: Iterable[RenderedFile]
) -> tuple[list[str], list[str]]:
    """Return the cleaned targets and full paths of the files, without touching disk."""
    targets: list[str] = []
    paths: list[str] = []
    for file in files:
        target, full_path = resolve_target_path(out_dir, file.target)
        targets.append(target)
        paths.append(full_path)
    return targets, paths


def write_files(
    out_dir: str | os.PathLike[str], files: Sequence[RenderedFile], force: bool
) -> list[str]:
    """Write the files under out_dir and return their cleaned targets."""
    targets, paths = plan_files(out_dir, files)
    prepare_output_directory(out_dir, paths, force)

    for file, full_path in zip(files, paths):
        try:
            os.makedirs(os.path.dirname(full_path), mode=DIRECTORY_MODE, exist_ok=True)
            Path(full_path).write_bytes(file.content)
            os.chmod(full_path, REGULAR_FILE_MODE)
        except OSError as err:
            raise FileWriteError(full_path, err) from err
    return targets


def prepare_output_directory(
    out_dir: str | os.PathLike[str], target_paths: Iterable[str], force: bool
) -> None:
    """Make sure out_dir exists and, unless forced, that nothing would be overwritten."""
    shown = os.fspath(out_dir)
    try:
        info = os.stat(out_dir)
    except FileNotFoundError:
        try:
            os.makedirs(out_dir, mode=DIRECTORY_MODE, exist_ok=True)
        except OSError as err:
            raise OutputDirectoryError(shown, err) from err
        return
    except OSError as err:
        raise OutputDirectoryError(shown, err) from err

    if not os.path.isdir(out_dir) or not _is_dir_mode(info.st_mode):
        raise OutputDirectoryError(shown, NotADirectoryError("path exists and is not a directory"))
    if force:
        return

    for target_path in target_paths:
        try:
            os.stat(target_path)
        except FileNotFoundError:
            continue
        except OSError as err:
            raise FileWriteError(target_path, err) from err
        raise TargetExistsError(target_path)

    try:
        entries = os.listdir(out_dir)
    except OSError as err:
        raise OutputDirectoryError(shown, err) from err
    if entries:
        raise OutputDirectoryNotEmptyError(shown)


def _is_dir_mode(mode: int) -> bool:
    import stat

    return stat.S_ISDIR(mode)


def resolve_target_path(out_dir: str | os.PathLike[str], target: str) -> tuple[str, str]:
    """Return the cleaned target and its absolute path inside out_dir."""
    clean_target = clean_target_path(target)
    try:
        output_root = os.path.abspath(out_dir)
    except OSError as err:
        raise OutputDirectoryError(os.fspath(out_dir), err) from err

    full_path = os.path.normpath(os.path.join(output_root, clean_target.replace("/", os.sep)))
    try:
        relative = os.path.relpath(full_path, output_root)
    except ValueError as err:
        raise UnsafeTargetPathError(target) from err
    if relative == ".." or relative.startswith(".." + os.sep):
        raise UnsafeTargetPathError(target)
    return clean_target, full_path


def clean_target_path(target: str) -> str:
    """Normalise a relative slash-separated target, rejecting anything unsafe."""
    trimmed = target.strip()
    normalized = trimmed.replace("\\", "/")
    if normalized in ("", "."):
        raise UnsafeTargetPathError(target)
    if normalized.startswith("/") or os.path.isabs(trimmed) or _has_windows_volume_name(normalized):
        raise UnsafeTargetPathError(target)

    cleaned = posixpath.normpath(normalized)
    if cleaned in (".", "..") or cleaned.startswith("../"):
        raise UnsafeTargetPathError(target)
    return cleaned


def _has_windows_volume_name(value: str) -> bool:
    return len(value) >= 2 and value[1] == ":"