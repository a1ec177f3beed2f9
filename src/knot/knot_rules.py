"""
KNOT grammar rules and the backtracking alternation that combines them.

A rule is any callable taking a `Cursor` and returning an `ASTNode`. A rule that
cannot match raises `ParseError`; the cursor may have moved, and it is the
caller's job to restore it. `try_rules` is that caller: it tries candidates
from a single save point and keeps the side effects of exactly one success.

Leaf rules
----------
- `parse_integer`: optional `-`, one or more digits, checked against the
  configured signed width.
- `parse_float`: decimal literal with a `.` and/or an exponent.
- `parse_string_literal`: `"..."` without escape processing.
- `parse_variable_ref`: identifier `[alpha][alpha _ -]*`.

Composite rule factories
------------------------
Each takes a grammar handle (see `knot_grammar.Grammar`) and returns a rule
that calls `grammar.parse(cursor)` for its sub-expressions. The handle is only
dereferenced when the rule runs, so the composites can be built before the
grammar holds them.

- `assignment_rule`: `[let] name = expr`
- `scope_rule`: `{ expr* }`
- `parentheses_rule`: `( expr* )`
- `function_rule`: `|p1 p2 ...| expr`, desugared into nested one-parameter
  functions.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from knot.knot_ast import (
    ASSIGNMENT,
    FLOAT,
    FUNCTION,
    INITIALIZATION,
    INTEGER,
    PARENTHESES,
    SCOPE,
    STRING,
    VARIABLE_REF,
    ASTNode,
)
from knot.knot_constants import (
    ASSIGN,
    DECIMAL_POINT,
    DEFAULT_INTEGER_BITS,
    ERROR_POLICY_FURTHEST,
    ERROR_POLICY_LAST,
    EXPONENT_MARKERS,
    EXPONENT_SIGNS,
    FUNCTION_BAR,
    IDENTIFIER_SYMBOLS,
    KEYWORD_LET,
    MINUS,
    PAREN_CLOSE,
    PAREN_OPEN,
    QUOTE,
    SCOPE_CLOSE,
    SCOPE_OPEN,
)
from knot.knot_cursor import CharPredicate, Cursor
from knot.knot_errors import IntegerOverflowError, ParseError
from knot.knot_matchers import (
    is_alphabetic,
    is_alphabetic_or_in,
    is_char,
    is_numeric,
    match_keyword,
    skip_keyword,
)

if TYPE_CHECKING:
    from knot.knot_grammar import Grammar

Rule = Callable[[Cursor], ASTNode]

ALPHABETIC = is_alphabetic()
NUMERIC = is_numeric()
IDENTIFIER_TAIL = is_alphabetic_or_in(IDENTIFIER_SYMBOLS)


def try_rules(
    cursor: Cursor,
    rules: Sequence[Rule],
    *,
    skip: CharPredicate | None = None,
    error_policy: str = ERROR_POLICY_LAST,
) -> ASTNode:
    """Returns the result of the first rule that succeeds.

    Every candidate starts from the same save point. When `skip` is given, the
    characters it accepts are skipped before each attempt.

    Args:
        cursor: The input cursor.
        rules: Candidates in priority order.
        skip: Predicate for insignificant characters (whitespace).
        error_policy: "last" raises the last candidate's error, "furthest" the
            error raised furthest into the input (later candidates win ties).

    Raises:
        ParseError: If every candidate fails. The cursor is back at the save point.
    """
    save_point = cursor.save()
    chosen: ParseError | None = None
    for rule in rules:
        cursor.restore(save_point)
        if skip is not None:
            cursor.skip_while(skip)
        try:
            return rule(cursor)
        except ParseError as err:
            if error_policy == ERROR_POLICY_FURTHEST:
                if chosen is None or err.index >= chosen.index:
                    chosen = err
            else:
                chosen = err
    cursor.restore(save_point)
    if chosen is None:
        raise cursor.fail("any expression")
    raise chosen


def _digits(cursor: Cursor) -> str:
    """Consumes one or more digits."""
    text = cursor.advance_if(NUMERIC).char
    while NUMERIC(_peek_char(cursor)):
        text += cursor.advance().char
    return text


def _optional_digits(cursor: Cursor) -> str:
    text = ""
    while NUMERIC(_peek_char(cursor)):
        text += cursor.advance().char
    return text


def _peek_char(cursor: Cursor) -> str:
    current = cursor.peek()
    return current.char if current is not None else ""


def _next_is(cursor: Cursor, char: str) -> bool:
    return _peek_char(cursor) == char


def parse_integer(cursor: Cursor, bits: int = DEFAULT_INTEGER_BITS) -> ASTNode:
    """Parses `-?[0-9]+` into an integer node.

    Raises:
        IntegerOverflowError: If the value does not fit a signed `bits`-bit integer.
    """
    if _next_is(cursor, MINUS):
        first = cursor.advance()
        text = first.char + _digits(cursor)
    else:
        first = cursor.advance_if(NUMERIC)
        text = first.char + _optional_digits(cursor)
    value = int(text)
    limit = 1 << (bits - 1)
    if not -limit <= value <= limit - 1:
        raise IntegerOverflowError(
            f"integer between {-limit} and {limit - 1}",
            text,
            first.line,
            first.column,
            cursor.position,
        )
    return ASTNode(INTEGER, value, line=first.line, col=first.column)


def parse_float(cursor: Cursor) -> ASTNode:
    """Parses a decimal literal such as `1.5`, `-.75`, `42.` or `1e-3`.

    Plain integers are rejected so that the integer rule handles them. After a
    decimal point the exponent is optional: `1.5e` reads `1.5` and leaves `e`.
    """
    start = cursor.location()
    text = cursor.advance().char if _next_is(cursor, MINUS) else ""
    whole = _optional_digits(cursor)
    fraction = ""
    has_point = _next_is(cursor, DECIMAL_POINT)
    if has_point:
        text += whole + cursor.advance().char
        fraction = _optional_digits(cursor) if whole else _digits(cursor)
        text += fraction
    elif not whole:
        # Let the digit predicate produce the error.
        _digits(cursor)
    else:
        text += whole
    if _peek_char(cursor) in EXPONENT_MARKERS:
        before_exponent = cursor.save()
        try:
            text += _exponent(cursor)
        except ParseError:
            if not has_point:
                raise
            cursor.restore(before_exponent)
    elif not has_point:
        raise cursor.fail(DECIMAL_POINT)
    return ASTNode(FLOAT, float(text), line=start.line, col=start.column)


def _exponent(cursor: Cursor) -> str:
    """Consumes `e`, an optional sign and one or more digits."""
    text = cursor.advance().char
    if _peek_char(cursor) in EXPONENT_SIGNS:
        text += cursor.advance().char
    return text + _digits(cursor)


def parse_string_literal(cursor: Cursor) -> ASTNode:
    """Parses `"..."`. The content is everything up to the next quote, verbatim.

    Without a closing quote the content scan runs to the end of input and the
    closing quote then fails there.
    """
    first = cursor.advance_if(is_char(QUOTE))
    content = cursor.take_until(QUOTE)
    cursor.advance_if(is_char(QUOTE))
    return ASTNode(STRING, content, line=first.line, col=first.column)


def parse_variable_ref(cursor: Cursor) -> ASTNode:
    """Parses an identifier. Permissive: keep it after stricter rules."""
    first = cursor.advance_if(ALPHABETIC)
    name = first.char
    while IDENTIFIER_TAIL(_peek_char(cursor)):
        name += cursor.advance().char
    return ASTNode(VARIABLE_REF, name, line=first.line, col=first.column)


def assignment_rule(grammar: Grammar) -> Rule:
    """Builds the `[let] name = expr` rule.

    With `let` the node is an initialization located at the keyword; without it
    an assignment located at the name.
    """
    config = grammar.config

    def parse_assignment(cursor: Cursor) -> ASTNode:
        start = None
        if match_keyword(cursor, KEYWORD_LET, config.keyword_boundary):
            start = skip_keyword(cursor, KEYWORD_LET, config.keyword_boundary)
            grammar.skip_whitespace(cursor)
        name = parse_variable_ref(cursor)
        grammar.skip_whitespace(cursor)
        cursor.advance_if(is_char(ASSIGN))
        grammar.skip_whitespace(cursor)
        value = grammar.parse(cursor)
        if start is None:
            return ASTNode(ASSIGNMENT, name.value, [value], line=name.line, col=name.col)
        return ASTNode(
            INITIALIZATION, name.value, [value], line=start.line, col=start.column
        )

    return parse_assignment


def _delimited_rule(grammar: Grammar, opener: str, closer: str, kind: str) -> Rule:
    open_char = is_char(opener)

    def parse_delimited(cursor: Cursor) -> ASTNode:
        start = cursor.advance_if(open_char)
        children: list[ASTNode] = []
        while True:
            grammar.skip_whitespace(cursor)
            try:
                children.append(grammar.parse(cursor))
            except ParseError:
                # A failed child is only fatal if the group is not closed here.
                if not _next_is(cursor, closer):
                    raise
                cursor.advance()
                return ASTNode(kind, children=children, line=start.line, col=start.column)

    parse_delimited.__name__ = f"parse_{kind}"
    return parse_delimited


def scope_rule(grammar: Grammar) -> Rule:
    return _delimited_rule(grammar, SCOPE_OPEN, SCOPE_CLOSE, SCOPE)


def parentheses_rule(grammar: Grammar) -> Rule:
    return _delimited_rule(grammar, PAREN_OPEN, PAREN_CLOSE, PARENTHESES)


def function_rule(grammar: Grammar) -> Rule:
    """Builds the function literal rule.

    `|x y| body` becomes `function(x, function(y, body))`. The outer function is
    located at the opening bar, each inner one at its parameter.
    """
    bar = is_char(FUNCTION_BAR)

    def parse_function(cursor: Cursor) -> ASTNode:
        start = cursor.advance_if(bar)
        parameters = [parse_variable_ref(cursor)]
        while True:
            grammar.skip_whitespace(cursor)
            if _next_is(cursor, FUNCTION_BAR):
                break
            parameters.append(parse_variable_ref(cursor))
        cursor.advance_if(bar)
        cursor.advance_if(grammar.whitespace)
        body = grammar.parse(cursor)
        for parameter in reversed(parameters[1:]):
            body = ASTNode(
                FUNCTION, children=[parameter, body], line=parameter.line, col=parameter.col
            )
        return ASTNode(
            FUNCTION, children=[parameters[0], body], line=start.line, col=start.column
        )

    return parse_function


__all__ = [
    "Rule",
    "assignment_rule",
    "function_rule",
    "parentheses_rule",
    "parse_float",
    "parse_integer",
    "parse_string_literal",
    "parse_variable_ref",
    "scope_rule",
    "try_rules",
]
