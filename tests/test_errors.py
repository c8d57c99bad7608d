import pytest

from crego.recipe.errors import ValidationError


def test_message_without_problems():
    assert str(ValidationError([])) == "recipe validation failed"


def test_message_lists_problems():
    error = ValidationError(["project.module is required", "version must be v1"])
    assert str(error) == "recipe validation failed:\n- project.module is required\n- version must be v1"
    assert error.problems == ["project.module is required", "version must be v1"]


def test_problems_from_iterator_are_kept():
    error = ValidationError(iter(["recipe is required"]))
    assert error.problems == ["recipe is required"]
    assert str(error) == "recipe validation failed:\n- recipe is required"


@pytest.mark.parametrize(
    ("problems", "expected"),
    [
        (["recipe is required"], "recipe validation failed:\n- recipe is required"),
        (
            ["task_scheduler=quartz is invalid; allowed values: none, gocron"],
            "recipe validation failed:\n- task_scheduler=quartz is invalid; allowed values: none, gocron",
        ),
    ],
)
def test_single_problem_message(problems, expected):
    error = ValidationError(problems)
    assert error.problems == problems
    assert str(error) == expected