"""Errors raised while checking recipes."""

from __future__ import annotations

from collections.abc import Iterable


class ValidationError(Exception):
    """A recipe failed validation; carries every problem found."""

    def __init__(self, problems: Iterable[str] = ()) -> None:
        self.problems = list(problems)
        super().__init__(*self.problems)

    def __str__(self) -> str:
        if not self.problems:
            return "recipe validation failed"
        return "recipe validation failed:" + "".join(f"\n- {problem}" for problem in self.problems)