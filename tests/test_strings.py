import pytest

from wbless.strings import WHITESPACE, capitalize, ltrim, rtrim, trim


def test_ltrim_keeps_trailing_whitespace():
    assert ltrim("  \t a b \n") == "a b \n"


def test_rtrim_keeps_leading_whitespace():
    assert rtrim("  a b \r\n\v") == "  a b"


@pytest.mark.parametrize("text", ["", " ", WHITESPACE, "\f\v\t"])
def test_all_whitespace_becomes_empty(text):
    assert ltrim(text) == ""
    assert rtrim(text) == ""
    assert trim(text) == ""


def test_trim_is_ltrim_of_rtrim():
    text = "\n\t value with spaces \f"
    assert trim(text) == rtrim(ltrim(text))
    assert trim(text) == "value with spaces"


def test_capitalize_ascii():
    assert capitalize("special-centered") == "SPECIAL-CENTERED"


def test_capitalize_leaves_non_ascii_untouched():
    assert capitalize("é-name") == "é-NAME"


def test_capitalize_is_idempotent():
    text = "MiXeD 123 text"
    assert capitalize(capitalize(text)) == capitalize(text)