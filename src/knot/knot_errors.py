"""
Exception types raised by the KNOT parsing engine.

Every rule failure is a `ParseError`. Rules raise it, alternations catch it and
backtrack, and the top-level driver is the only place it becomes terminal.

Classes:
    ParseError: Base failure carrying the expected description, the character
        found (None at end of input) and the failure location.
    UnexpectedCharError: The next character failed a predicate or literal.
    UnexpectedEndError: A character was required but the input is exhausted.
    IntegerOverflowError: Integer text does not fit the configured width.
    NestingTooDeepError: Input nests deeper than the parser can recurse.
    GrammarDefinitionError: The grammar was misused during or after assembly.

Message format:
    Expected: '<X>' at line: <L>, column: <C>, but found '<Y>'
    Expected: '<X>', but found end of parse text
"""


class ParseError(SyntaxError):
    """A recoverable failure of a grammar rule.

    Attributes:
        expected (str): Description of what the rule required.
        found (str | None): The offending text, or None at end of input.
        line (int): 1-based line of the failure.
        column (int): 1-based column of the failure.
        index (int): Buffer index of the failure, used to rank competing errors.
    """

    def __init__(
        self,
        expected: str,
        found: str | None,
        line: int,
        column: int,
        index: int,
    ) -> None:
        self.expected = expected
        self.found = found
        self.line = line
        self.column = column
        self.index = index
        super().__init__(self.format_message())

    def format_message(self) -> str:
        if self.found is None:
            return f"Expected: '{self.expected}', but found end of parse text"
        return (
            f"Expected: '{self.expected}' at line: {self.line}, "
            f"column: {self.column}, but found '{self.found}'"
        )

    @property
    def at_end(self) -> bool:
        return self.found is None

    def __str__(self) -> str:
        return self.format_message()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(expected={self.expected!r}, found={self.found!r}, "
            f"line={self.line}, column={self.column})"
        )


class UnexpectedCharError(ParseError):
    """Raised when the next character does not satisfy what a rule requires."""


class UnexpectedEndError(ParseError):
    """Raised when a rule needs a character but the cursor is exhausted.

    The location still points at the end of input so callers can report where
    the text stopped.
    """

    def __init__(self, expected: str, line: int, column: int, index: int) -> None:
        super().__init__(expected, None, line, column, index)


class IntegerOverflowError(ParseError):
    """Raised when integer text is outside the configured signed range."""


class NestingTooDeepError(ParseError):
    """Raised when groups nest deeper than the interpreter stack allows.

    Located where the parser was when the stack ran out.
    """


class GrammarDefinitionError(Exception):
    """Raised when a grammar is modified after freezing or used before it."""


__all__ = [
    "GrammarDefinitionError",
    "IntegerOverflowError",
    "NestingTooDeepError",
    "ParseError",
    "UnexpectedCharError",
    "UnexpectedEndError",
]
