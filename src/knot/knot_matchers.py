"""
Reusable character conditions built on the KNOT cursor.

Each factory returns a `Predicate`: a callable over a single character with a
`description` that ends up in error messages (the `<X>` of
`Expected: '<X>' ...`).

Functions:
    is_char(c): exact character.
    is_alphabetic(): Unicode alphabetic character.
    is_numeric(): ASCII digit `0`-`9`.
    is_alphabetic_or_in(symbols): identifier tail character.
    is_one_of(chars, description): membership in a set (whitespace).
    is_identifier_char(c): whether `c` can continue an identifier.
    match_keyword(cursor, word, boundary): lookahead for a keyword.
    skip_keyword(cursor, word, boundary): conditional multi-character advance.
"""

from collections.abc import Callable, Iterable

from knot.knot_constants import IDENTIFIER_SYMBOLS
from knot.knot_cursor import Cursor, DecodedChar


class Predicate:
    """A described single-character test.

    Attributes:
        test (Callable[[str], bool]): The condition.
        description (str): What the condition expects, for error messages.
    """

    def __init__(self, test: Callable[[str], bool], description: str) -> None:
        self.test = test
        self.description = description

    def __call__(self, char: str) -> bool:
        return self.test(char)

    def __repr__(self) -> str:
        return f"Predicate({self.description!r})"


def is_char(expected: str) -> Predicate:
    return Predicate(lambda c: c == expected, expected)


def is_alphabetic() -> Predicate:
    return Predicate(str.isalpha, "alphabetical character")


def is_numeric() -> Predicate:
    return Predicate(_is_ascii_digit, "numerical character")


def _is_ascii_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


def is_alphabetic_or_in(symbols: Iterable[str] = IDENTIFIER_SYMBOLS) -> Predicate:
    accepted = tuple(symbols)
    return Predicate(
        lambda c: c.isalpha() or c in accepted,
        f"alphabetical character or one of {list(accepted)}",
    )


def is_one_of(chars: Iterable[str], description: str | None = None) -> Predicate:
    accepted = frozenset(chars)
    if description is None:
        description = f"one of {sorted(accepted)}"
    return Predicate(lambda c: c in accepted, description)


def is_identifier_char(char: str) -> bool:
    return char.isalpha() or char in IDENTIFIER_SYMBOLS


def match_keyword(cursor: Cursor, word: str, boundary: bool = True) -> bool:
    """Checks whether the upcoming characters spell `word`. Never consumes.

    The comparison is case-sensitive. With `boundary` False this is a plain
    prefix match, so `letter` matches `let`.
    """
    if cursor.window(len(word)) != word:
        return False
    if not boundary:
        return True
    following = cursor.position + len(word)
    if following < len(cursor.chars):
        return not is_identifier_char(cursor.chars[following].char)
    return True


def skip_keyword(cursor: Cursor, word: str, boundary: bool = True) -> DecodedChar:
    """Consumes `word` if it comes next, otherwise fails without consuming.

    Returns:
        DecodedChar: The first character of the keyword, for node locations.

    Raises:
        ParseError: If the keyword does not match at the cursor.
    """
    if not match_keyword(cursor, word, boundary):
        raise cursor.fail(f"keyword {word}")
    first = cursor.chars[cursor.position]
    cursor.position += len(word)
    return first


__all__ = [
    "Predicate",
    "is_alphabetic",
    "is_alphabetic_or_in",
    "is_char",
    "is_identifier_char",
    "is_numeric",
    "is_one_of",
    "match_keyword",
    "skip_keyword",
]
