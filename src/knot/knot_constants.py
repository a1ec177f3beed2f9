"""
Lexical constants shared by the KNOT cursor, matchers and grammar rules.

Exports:
    WHITESPACE: Characters skipped between expressions (no tab).
    WHITESPACE_WITH_TABS: Whitespace set used when tabs are opted in.
    IDENTIFIER_SYMBOLS: Non-alphabetic characters allowed after the first identifier character.
    KEYWORD_LET: Keyword introducing an initialization.
    Delimiters and operators used by the composite rules.
    ERROR_POLICIES: Accepted alternation error policies.
    SOURCE_SUFFIX: File extension accepted by the CLI.
"""

WHITESPACE = " \n\r"
WHITESPACE_WITH_TABS = " \t\n\r"

IDENTIFIER_SYMBOLS = ("_", "-")

KEYWORD_LET = "let"

ASSIGN = "="
QUOTE = '"'
MINUS = "-"
DECIMAL_POINT = "."
EXPONENT_MARKERS = ("e", "E")
EXPONENT_SIGNS = ("+", "-")

SCOPE_OPEN = "{"
SCOPE_CLOSE = "}"
PAREN_OPEN = "("
PAREN_CLOSE = ")"
FUNCTION_BAR = "|"

# Openers and their closers, used by the REPL to detect unfinished input.
BRACKET_PAIRS = {SCOPE_OPEN: SCOPE_CLOSE, PAREN_OPEN: PAREN_CLOSE}

ERROR_POLICY_LAST = "last"
ERROR_POLICY_FURTHEST = "furthest"
ERROR_POLICIES = (ERROR_POLICY_LAST, ERROR_POLICY_FURTHEST)

DEFAULT_INTEGER_BITS = 64

SOURCE_SUFFIX = ".knot"
