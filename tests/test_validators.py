import pytest

from errors import ValidationError
from validators import (
    is_valid_dimension, is_valid_folder_id, is_valid_folder_name, is_valid_text, is_valid_url,
    require_dimension, require_text, sanitize,
)


def test_folder_id_rules() -> None:
    assert is_valid_folder_id("week-1")
    assert is_valid_folder_id("a" * 50)
    assert not is_valid_folder_id("a" * 51)
    assert not is_valid_folder_id("")
    assert not is_valid_folder_id("Week1")
    assert not is_valid_folder_id("week 1")
    assert not is_valid_folder_id(None)
    # trailing newline
    assert not is_valid_folder_id("week1\n")


def test_folder_name_rules() -> None:
    assert is_valid_folder_name("Week 1 - Introduction")
    assert not is_valid_folder_name("   ")
    assert not is_valid_folder_name("x" * 101)
    assert not is_valid_folder_name("tab\there")
    assert not is_valid_folder_name("del\x7f")


def test_text_rules() -> None:
    assert is_valid_text("Frog", 200)
    assert not is_valid_text("", 200)
    assert is_valid_text("", 500, allow_empty=True)
    assert not is_valid_text("x" * 101, 100)
    assert not is_valid_text("line\nbreak", 500, allow_empty=True)
    assert not is_valid_text(42, 100)


def test_url_rules() -> None:
    assert is_valid_url("https://editor.p5js.org/u/full/x")
    assert is_valid_url("http://openprocessing.org/sketch/1")
    assert not is_valid_url("ftp://example.com/file")
    assert not is_valid_url("javascript:alert(1)")
    assert not is_valid_url("/relative/path")
    assert not is_valid_url("https://[broken")


@pytest.mark.parametrize("value", [1, 600, 10000, "600", 600.0, " 42 "])
def test_valid_dimensions(value) -> None:
    assert is_valid_dimension(value)


@pytest.mark.parametrize("value", [0, -5, 10001, 1.5, "abc", "", None, True, [600], 10 ** 400, "1e400", "9" * 400])
def test_invalid_dimensions(value) -> None:
    assert not is_valid_dimension(value)


def test_require_dimension_coerces_to_int() -> None:
    assert require_dimension("width", "600") == 600
    with pytest.raises(ValidationError) as exc:
        require_dimension("width", 0)
    assert exc.value.field == "width"
    assert exc.value.to_dict()["error"] == "validation_error"


def test_sanitize_strips_script_blocks_and_nul() -> None:
    assert sanitize("Frog<script>alert(1)</script>\0!") == "Frog!"
    assert sanitize("<SCRIPT src=x></SCRIPT>ok") == "ok"
    assert sanitize(600) == 600


def test_require_text_sanitizes_before_checking() -> None:
    with pytest.raises(ValidationError):
        require_text("title", "<script>x</script>", 200)
    assert require_text("description", None, 500, allow_empty=True) == ""
