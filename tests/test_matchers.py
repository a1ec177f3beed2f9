import pytest

from knot.knot_cursor import Cursor
from knot.knot_errors import ParseError
from knot.knot_matchers import (
    is_alphabetic,
    is_alphabetic_or_in,
    is_char,
    is_identifier_char,
    is_numeric,
    is_one_of,
    match_keyword,
    skip_keyword,
)


def test_is_char() -> None:
    pred = is_char("{")
    assert pred("{")
    assert not pred("}")
    assert pred.description == "{"


@pytest.mark.parametrize("char", ["a", "Z", "é", "ж"])  # type: ignore[misc]
def test_is_alphabetic_accepts(char: str) -> None:
    assert is_alphabetic()(char)


@pytest.mark.parametrize("char", ["1", "_", "-", " ", '"'])  # type: ignore[misc]
def test_is_alphabetic_rejects(char: str) -> None:
    assert not is_alphabetic()(char)


def test_is_numeric() -> None:
    pred = is_numeric()
    assert pred("0") and pred("9")
    assert not pred("a")
    assert not pred("-")
    assert pred.description == "numerical character"


@pytest.mark.parametrize("char", ["\u0661", "\u00b2", "\uff13", ""])  # type: ignore[misc]
def test_is_numeric_rejects_non_ascii_digits(char: str) -> None:
    assert not is_numeric()(char)


def test_is_alphabetic_or_in_identifier_symbols() -> None:
    pred = is_alphabetic_or_in()
    assert pred("a") and pred("_") and pred("-")
    assert not pred("1")
    assert pred.description == "alphabetical character or one of ['_', '-']"


def test_is_one_of_description() -> None:
    assert is_one_of(" \n", "whitespace").description == "whitespace"
    assert is_one_of("ba").description == "one of ['a', 'b']"


def test_is_identifier_char() -> None:
    assert is_identifier_char("x")
    assert is_identifier_char("_")
    assert not is_identifier_char(" ")
    assert not is_identifier_char("=")


@pytest.mark.parametrize(
    "source,boundary,expected",
    [
        ("let x", True, True),
        ("let", True, True),
        ("let=", True, True),
        ("letter", True, False),
        ("let_value", True, False),
        ("letter", False, True),
        ("let_value", False, True),
        ("le", True, False),
        ("Let x", True, False),
    ],
)  # type: ignore[misc]
def test_match_keyword(source: str, boundary: bool, expected: bool) -> None:
    cursor = Cursor(source)
    assert match_keyword(cursor, "let", boundary) is expected
    assert cursor.position == 0


def test_skip_keyword_consumes_word() -> None:
    cursor = Cursor("let x")
    first = skip_keyword(cursor, "let")
    assert (first.char, first.line, first.column) == ("l", 1, 1)
    assert cursor.position == 3


def test_skip_keyword_failure_does_not_consume() -> None:
    cursor = Cursor("lex")
    with pytest.raises(ParseError) as exc:
        skip_keyword(cursor, "let")
    assert cursor.position == 0
    assert str(exc.value) == "Expected: 'keyword let' at line: 1, column: 1, but found 'l'"


def test_skip_keyword_at_end() -> None:
    cursor = Cursor("")
    with pytest.raises(ParseError) as exc:
        skip_keyword(cursor, "let")
    assert str(exc.value) == "Expected: 'keyword let', but found end of parse text"
