"""
Position-tracking input cursor for the KNOT parser.

The whole source text is decoded once into a buffer of `DecodedChar` values,
each annotated with its 1-based line and column. Parsing then moves a single
integer position over that buffer. Backtracking saves and restores that
position; nothing else is mutable.

Classes:
    Location: A (line, column) pair.
    DecodedChar: One character of source with its location.
    SavePoint: Opaque snapshot of a cursor position, valid only for its cursor.
    CharPredicate: Protocol for described character tests (see knot_matchers).
    Cursor: The indexed view over the decoded buffer.

Example:
    >>> cursor = Cursor("ab")
    >>> cursor.peek()
    DecodedChar('a', 1, 1)
    >>> mark = cursor.save()
    >>> cursor.advance()
    DecodedChar('a', 1, 1)
    >>> cursor.restore(mark)
    >>> cursor.position
    0
"""

from collections.abc import Callable
from typing import Any, NamedTuple, Protocol

from knot.knot_errors import UnexpectedCharError, UnexpectedEndError


class Location(NamedTuple):
    line: int
    column: int


class DecodedChar:
    """A single source character and where it appears.

    Attributes:
        char (str): The character itself.
        line (int): The 1-based line number.
        column (int): The 1-based column number.
    """

    __slots__ = ("char", "line", "column")

    def __init__(self, char: str, line: int, column: int) -> None:
        object.__setattr__(self, "char", char)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "column", column)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("DecodedChar is immutable")

    @property
    def location(self) -> Location:
        return Location(self.line, self.column)

    def __repr__(self) -> str:
        return f"DecodedChar({self.char!r}, {self.line}, {self.column})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, DecodedChar)
            and self.char == other.char
            and self.line == other.line
            and self.column == other.column
        )

    def __hash__(self) -> int:
        return hash((self.char, self.line, self.column))


class SavePoint:
    """Snapshot of a cursor position.

    Only the cursor that produced a save point may restore it.
    """

    __slots__ = ("_owner", "position")

    def __init__(self, owner: "Cursor", position: int) -> None:
        self._owner = owner
        self.position = position

    def belongs_to(self, cursor: "Cursor") -> bool:
        return self._owner is cursor

    def __repr__(self) -> str:
        return f"SavePoint({self.position})"


class CharPredicate(Protocol):
    """A character test with a description used in error messages."""

    description: str

    def __call__(self, char: str) -> bool: ...  # pragma: no cover


def decode(source: str) -> list[DecodedChar]:
    """Annotates every character of `source` with its line and column."""
    chars: list[DecodedChar] = []
    line, column = 1, 1
    for char in source:
        chars.append(DecodedChar(char, line, column))
        if char == "\n":
            line += 1
            column = 1
        else:
            column += 1
    return chars


class Cursor:
    """
    An indexed view over decoded source characters.

    Attributes:
        source (str): The original text.
        chars (list[DecodedChar]): The decoded buffer, built once.
        position (int): Index of the next unconsumed character.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.chars: list[DecodedChar] = decode(source)
        self.position = 0

    def __repr__(self) -> str:
        return f"Cursor(position={self.position}, length={len(self.chars)})"

    def peek(self) -> DecodedChar | None:
        """Returns the next character without consuming it, or None at end of input."""
        if self.position < len(self.chars):
            return self.chars[self.position]
        return None

    def at_end(self) -> bool:
        return self.position >= len(self.chars)

    def location(self) -> Location:
        """Returns the location of the next character.

        At end of input this is the location just past the last character, so
        errors raised there still point somewhere useful.
        """
        current = self.peek()
        if current is not None:
            return current.location
        if not self.chars:
            return Location(1, 1)
        last = self.chars[-1]
        if last.char == "\n":
            return Location(last.line + 1, 1)
        return Location(last.line, last.column + 1)

    def save(self) -> SavePoint:
        return SavePoint(self, self.position)

    def restore(self, save_point: SavePoint) -> None:
        """Moves the cursor back (or forward) to a saved position.

        Raises:
            ValueError: If the save point was produced by another cursor.
        """
        if not save_point.belongs_to(self):
            raise ValueError("SavePoint belongs to a different cursor")
        self.position = save_point.position

    def fail(self, expected: str) -> UnexpectedCharError | UnexpectedEndError:
        """Builds the error for `expected` not being found at the current position."""
        current = self.peek()
        if current is None:
            line, column = self.location()
            return UnexpectedEndError(expected, line, column, self.position)
        return UnexpectedCharError(
            expected, current.char, current.line, current.column, self.position
        )

    def advance_if(
        self, predicate: CharPredicate | Callable[[str], bool]
    ) -> DecodedChar:
        """Consumes the next character if it satisfies `predicate`.

        The position moves by exactly one character on success and not at all
        on failure.

        Raises:
            UnexpectedCharError: If the next character fails the predicate.
            UnexpectedEndError: If the input is exhausted.
        """
        current = self.peek()
        if current is None or not predicate(current.char):
            raise self.fail(getattr(predicate, "description", "character"))
        self.position += 1
        return current

    def advance(self) -> DecodedChar:
        """Consumes one character unconditionally; fails only at end of input."""
        return self.advance_if(_any_char)

    def skip_while(self, predicate: CharPredicate | Callable[[str], bool]) -> int:
        """Advances past every character satisfying `predicate`. Never fails.

        Returns:
            int: The number of characters skipped.
        """
        start = self.position
        while self.position < len(self.chars) and predicate(
            self.chars[self.position].char
        ):
            self.position += 1
        return self.position - start

    def take_until(self, stop: str) -> str:
        """Consumes characters up to, but not including, `stop` or the end of input."""
        start = self.position
        while self.position < len(self.chars) and self.chars[self.position].char != stop:
            self.position += 1
        return "".join(c.char for c in self.chars[start : self.position])

    def window(self, size: int) -> str | None:
        """Returns the next `size` characters as text, or None if fewer remain."""
        end = self.position + size
        if end > len(self.chars):
            return None
        return "".join(c.char for c in self.chars[self.position : end])

    def remaining(self) -> str:
        return "".join(c.char for c in self.chars[self.position :])


def _any_char(char: str) -> bool:
    return True


_any_char.description = "character"  # type: ignore[attr-defined]


__all__ = ["CharPredicate", "Cursor", "DecodedChar", "Location", "SavePoint", "decode"]
