"""
Assembly of the self-referential KNOT grammar and the top-level driver.

Composite rules (scope, parentheses, assignment, function) need to parse "any
expression", and "any expression" includes those same composite rules. The
`Grammar` object breaks the cycle with a two-phase assembly:

1. The grammar is created holding only the leaf rules. It is a stable handle.
2. Composite rules are built against the handle. They call `grammar.parse`
   when they run, so they see whatever rule list the grammar holds then.
3. The composites are inserted (most specific first, all before the
   permissive identifier rule) and the grammar is frozen. After `freeze()` the
   rule list is an immutable tuple that any number of cursors can share.

Entry Points
------------
- `build_grammar(config)`: assemble (and cache) the frozen grammar.
- `parse_program(cursor, grammar)`: run the grammar until end of input.
- `parse_source(source, config)`: convenience wrapper on a fresh cursor.

Returns
-------
ParseResult
    The top-level nodes parsed so far and, if parsing stopped early, the error
    that stopped it.
"""

import logging
from collections.abc import Iterable, Iterator
from functools import lru_cache, partial

from knot.knot_ast import ASTNode
from knot.knot_config import GrammarConfig
from knot.knot_cursor import Cursor, SavePoint
from knot.knot_errors import GrammarDefinitionError, NestingTooDeepError, ParseError
from knot.knot_matchers import Predicate, is_one_of
from knot.knot_rules import (
    Rule,
    assignment_rule,
    function_rule,
    parentheses_rule,
    parse_float,
    parse_integer,
    parse_string_literal,
    parse_variable_ref,
    scope_rule,
    try_rules,
)

logger = logging.getLogger(__name__)


class Grammar:
    """
    The dispatcher: an ordered set of alternative rules behind a stable handle.

    Attributes
    ----------
    config : GrammarConfig
        Options the rules read while parsing.
    whitespace : Predicate
        Insignificant characters skipped before every alternative.
    """

    def __init__(self, rules: Iterable[Rule] = (), config: GrammarConfig | None = None):
        self.config = config or GrammarConfig.default()
        self.whitespace: Predicate = is_one_of(self.config.whitespace, "whitespace")
        self._rules: list[Rule] | tuple[Rule, ...] = list(rules)

    @property
    def frozen(self) -> bool:
        return isinstance(self._rules, tuple)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def add_rule(self, rule: Rule, index: int | None = None) -> None:
        """Adds an alternative, at the end or before position `index`.

        Raises:
            GrammarDefinitionError: If the grammar is already frozen.
        """
        if isinstance(self._rules, tuple):
            raise GrammarDefinitionError(
                f"Cannot add rule {_rule_name(rule)!r} to a frozen grammar"
            )
        if index is None:
            self._rules.append(rule)
        else:
            self._rules.insert(index, rule)

    def freeze(self) -> "Grammar":
        """Fixes the rule order for the rest of the grammar's life."""
        if not self._rules:
            raise GrammarDefinitionError("Cannot freeze a grammar without rules")
        self._rules = tuple(self._rules)
        logger.debug(
            "Grammar frozen with rules: %s", ", ".join(_rule_name(r) for r in self._rules)
        )
        return self

    def skip_whitespace(self, cursor: Cursor) -> int:
        return cursor.skip_while(self.whitespace)

    def parse(self, cursor: Cursor) -> ASTNode:
        """Parses one expression with the first alternative that matches.

        Raises:
            GrammarDefinitionError: If called before `freeze()`.
            ParseError: If no alternative matches.
        """
        if not isinstance(self._rules, tuple):
            raise GrammarDefinitionError("Grammar must be frozen before parsing")
        return try_rules(
            cursor,
            self._rules,
            skip=self.whitespace,
            error_policy=self.config.error_policy,
        )

    __call__ = parse

    def __repr__(self) -> str:
        state = "frozen" if self.frozen else "open"
        return f"Grammar({state}, rules=[{', '.join(_rule_name(r) for r in self._rules)}])"


def _rule_name(rule: Rule) -> str:
    if isinstance(rule, partial):
        return _rule_name(rule.func)
    return getattr(rule, "__name__", repr(rule))


@lru_cache(maxsize=None)
def build_grammar(config: GrammarConfig | None = None) -> Grammar:
    """Assembles the frozen KNOT grammar for `config`.

    Final order: function, assignment, string, float, integer, scope,
    parentheses, identifier. Grammars are cached per configuration.
    """
    config = config or GrammarConfig.default()
    grammar = Grammar(
        [
            parse_string_literal,
            parse_float,
            partial(parse_integer, bits=config.integer_bits),
            parse_variable_ref,
        ],
        config,
    )

    function = function_rule(grammar)
    assignment = assignment_rule(grammar)
    scope = scope_rule(grammar)
    parentheses = parentheses_rule(grammar)

    grammar.add_rule(function, 0)
    grammar.add_rule(assignment, 1)
    # The identifier rule accepts the most input, so it stays last.
    grammar.add_rule(scope, len(grammar.rules) - 1)
    grammar.add_rule(parentheses, len(grammar.rules) - 1)
    return grammar.freeze()


class ParseResult:
    """Outcome of a top-level parse.

    Attributes:
        nodes (list[ASTNode]): Top-level nodes parsed before input ran out or a
            rule failed.
        error (ParseError | None): The failure that stopped parsing, if any.
    """

    def __init__(self, nodes: list[ASTNode], error: ParseError | None = None) -> None:
        self.nodes = nodes
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> list[ASTNode]:
        """Returns the nodes, or raises the error that stopped parsing."""
        if self.error is not None:
            raise self.error
        return self.nodes

    def __iter__(self) -> Iterator[ASTNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"ParseResult(nodes={self.nodes!r}, error={self.error!r})"


def parse_program(cursor: Cursor, grammar: Grammar | None = None) -> ParseResult:
    """Parses top-level expressions until the input is exhausted or one fails.

    Trailing whitespace does not count as another expression.
    """
    grammar = grammar or build_grammar()
    nodes: list[ASTNode] = []
    while True:
        grammar.skip_whitespace(cursor)
        if cursor.at_end():
            return ParseResult(nodes)
        start = cursor.save()
        try:
            nodes.append(grammar.parse(cursor))
        except ParseError as err:
            logger.debug("Parsing stopped after %d node(s): %s", len(nodes), err)
            return ParseResult(nodes, err)
        except RecursionError:
            too_deep = _nesting_error(cursor, start)
            logger.debug("Parsing stopped after %d node(s): %s", len(nodes), too_deep)
            return ParseResult(nodes, too_deep)


def _nesting_error(cursor: Cursor, start: SavePoint) -> NestingTooDeepError:
    """Builds the error for a blown stack at the cursor, then rewinds to `start`."""
    current = cursor.peek()
    line, column = cursor.location()
    err = NestingTooDeepError(
        "shallower nesting",
        current.char if current is not None else None,
        line,
        column,
        cursor.position,
    )
    cursor.restore(start)
    return err


def parse_source(source: str, config: GrammarConfig | None = None) -> ParseResult:
    return parse_program(Cursor(source), build_grammar(config))


def parse_expression(source: str, config: GrammarConfig | None = None) -> ASTNode:
    """Parses a single expression from the start of `source`.

    Raises:
        ParseError: If no expression matches.
    """
    cursor = Cursor(source)
    start = cursor.save()
    try:
        return build_grammar(config).parse(cursor)
    except RecursionError:
        raise _nesting_error(cursor, start) from None


__all__ = [
    "Grammar",
    "ParseResult",
    "build_grammar",
    "parse_expression",
    "parse_program",
    "parse_source",
]
