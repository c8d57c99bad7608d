import pytest

from crego.generator.errors import (
    FileWriteError,
    GeneratorError,
    OutDirRequiredError,
    OutputDirectoryError,
    OutputDirectoryNotEmptyError,
    TargetExistsError,
    TemplateRenderError,
    UnsafeTargetPathError,
)


def test_out_dir_required_message():
    assert str(OutDirRequiredError()) == "generator output directory is required"


def test_unsafe_target_path_keeps_target():
    err = UnsafeTargetPathError("../escape")
    assert err.target == "../escape"
    assert str(err).startswith("unsafe generated file target")
    assert '"../escape"' in str(err)


def test_output_directory_error_wraps_cause():
    cause = PermissionError("denied")
    err = OutputDirectoryError("/out", cause)
    assert err.err is cause
    assert err.path == "/out"
    assert str(err).startswith("prepare output directory")
    assert str(err).endswith(": denied")


def test_not_empty_message_mentions_force():
    err = OutputDirectoryNotEmptyError("out")
    assert err.path == "out"
    assert '"out"' in str(err)
    assert "use force to overwrite" in str(err)


def test_target_exists_message_mentions_force():
    err = TargetExistsError("out/README.md")
    assert err.path == "out/README.md"
    assert '"out/README.md"' in str(err)
    assert "already exists; use force to overwrite" in str(err)


def test_template_render_error_includes_source():
    cause = KeyError("MissingField")
    err = TemplateRenderError("bad.tmpl", cause)
    assert err.source == "bad.tmpl"
    assert err.err is cause
    assert "bad.tmpl" in str(err)
    assert str(err).startswith("render template")


def test_file_write_error_wraps_cause():
    cause = OSError("disk full")
    err = FileWriteError("out/a.txt", cause)
    assert err.err is cause
    assert str(err).startswith("write target file")
    assert "disk full" in str(err)


@pytest.mark.parametrize(
    ("err", "prefix"),
    [
        (OutDirRequiredError(), "generator output directory is required"),
        (UnsafeTargetPathError("x"), "unsafe generated file target"),
        (OutputDirectoryError("x", OSError("e")), "prepare output directory"),
        (OutputDirectoryNotEmptyError("x"), "output directory"),
        (TargetExistsError("x"), "target file"),
        (TemplateRenderError("x", ValueError("e")), "render template"),
        (FileWriteError("x", OSError("e")), "write target file"),
    ],
)
def test_all_errors_catchable_as_generator_error(err, prefix):
    with pytest.raises(GeneratorError) as info:
        raise err
    assert info.value is err
    assert str(info.value).startswith(prefix)