import pytest
from hypothesis import given
from hypothesis import strategies as st

from knot.knot_cursor import Cursor, DecodedChar, Location, decode
from knot.knot_errors import UnexpectedCharError, UnexpectedEndError
from knot.knot_matchers import is_char, is_one_of


def test_decode_tracks_lines_and_columns() -> None:
    chars = decode("ab\nc")
    assert chars == [
        DecodedChar("a", 1, 1),
        DecodedChar("b", 1, 2),
        DecodedChar("\n", 1, 3),
        DecodedChar("c", 2, 1),
    ]


def test_decode_non_ascii_is_one_column_per_character() -> None:
    chars = decode("é😉x")
    assert [(c.char, c.column) for c in chars] == [("é", 1), ("😉", 2), ("x", 3)]


@given(st.text())  # type: ignore[misc]
def test_decode_line_matches_newlines_before(text: str) -> None:
    chars = decode(text)
    assert len(chars) == len(text)
    for index, decoded in enumerate(chars):
        assert decoded.line == text[:index].count("\n") + 1


def test_decoded_char_is_immutable() -> None:
    c = DecodedChar("a", 1, 1)
    with pytest.raises(AttributeError):
        c.char = "b"  # type: ignore[misc]


def test_decoded_char_hash_and_location() -> None:
    assert hash(DecodedChar("a", 2, 3)) == hash(DecodedChar("a", 2, 3))
    assert DecodedChar("a", 2, 3).location == Location(2, 3)
    assert DecodedChar("a", 2, 3) != "a"


def test_peek_does_not_move() -> None:
    cursor = Cursor("xy")
    assert cursor.peek() == DecodedChar("x", 1, 1)
    assert cursor.peek() == DecodedChar("x", 1, 1)
    assert cursor.position == 0


def test_peek_at_end_is_none() -> None:
    cursor = Cursor("")
    assert cursor.peek() is None
    assert cursor.at_end()


def test_advance_if_consumes_on_success() -> None:
    cursor = Cursor("ab")
    assert cursor.advance_if(is_char("a")) == DecodedChar("a", 1, 1)
    assert cursor.position == 1


def test_advance_if_failure_does_not_move() -> None:
    cursor = Cursor("b")
    with pytest.raises(UnexpectedCharError) as exc:
        cursor.advance_if(is_char("a"))
    assert cursor.position == 0
    assert str(exc.value) == "Expected: 'a' at line: 1, column: 1, but found 'b'"


def test_advance_if_at_end() -> None:
    cursor = Cursor("")
    with pytest.raises(UnexpectedEndError) as exc:
        cursor.advance_if(is_char("a"))
    assert str(exc.value) == "Expected: 'a', but found end of parse text"
    assert (exc.value.line, exc.value.column) == (1, 1)
    assert exc.value.at_end


def test_advance_if_accepts_plain_callable() -> None:
    cursor = Cursor("?")
    with pytest.raises(UnexpectedCharError) as exc:
        cursor.advance_if(str.isalpha)
    assert exc.value.expected == "character"


def test_advance_unconditional() -> None:
    cursor = Cursor("}")
    assert cursor.advance().char == "}"
    with pytest.raises(UnexpectedEndError):
        cursor.advance()


@pytest.mark.parametrize(
    "source,consumed,expected",
    [
        ("", 0, Location(1, 1)),
        ("ab", 2, Location(1, 3)),
        ("ab", 1, Location(1, 2)),
        ("a\n", 2, Location(2, 1)),
        ("a\nbc", 4, Location(2, 3)),
    ],
)  # type: ignore[misc]
def test_location(source: str, consumed: int, expected: Location) -> None:
    cursor = Cursor(source)
    cursor.position = consumed
    assert cursor.location() == expected


def test_save_and_restore() -> None:
    cursor = Cursor("abc")
    mark = cursor.save()
    cursor.advance()
    cursor.advance()
    cursor.restore(mark)
    assert cursor.position == 0
    assert cursor.peek() == DecodedChar("a", 1, 1)


def test_save_point_belongs_to_its_cursor() -> None:
    first = Cursor("abc")
    second = Cursor("abc")
    mark = first.save()
    with pytest.raises(ValueError):
        second.restore(mark)


def test_skip_while_never_fails() -> None:
    cursor = Cursor("  \n\rx")
    whitespace = is_one_of(" \n\r", "whitespace")
    assert cursor.skip_while(whitespace) == 4
    assert cursor.peek() == DecodedChar("x", 2, 2)
    assert cursor.skip_while(whitespace) == 0
    cursor.advance()
    assert cursor.skip_while(whitespace) == 0


def test_take_until_stops_before_char() -> None:
    cursor = Cursor('abc"d')
    assert cursor.take_until('"') == "abc"
    assert cursor.peek() == DecodedChar('"', 1, 4)


def test_take_until_runs_to_end() -> None:
    cursor = Cursor("abc")
    assert cursor.take_until('"') == "abc"
    assert cursor.at_end()


def test_window_and_remaining() -> None:
    cursor = Cursor("let x")
    assert cursor.window(3) == "let"
    assert cursor.window(6) is None
    cursor.position = 4
    assert cursor.remaining() == "x"
