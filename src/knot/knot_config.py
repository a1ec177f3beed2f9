"""
Grammar configuration for the KNOT parser.

By default space, newline and carriage
return are whitespace, `let` must end at an identifier boundary, a failed
alternation reports the error that got furthest into the input, and integers
are signed 64-bit.
"""

from dataclasses import dataclass

from knot.knot_constants import (
    DEFAULT_INTEGER_BITS,
    ERROR_POLICIES,
    ERROR_POLICY_FURTHEST,
    WHITESPACE,
)


@dataclass(frozen=True)
class GrammarConfig:
    """
    Options that change how the grammar is assembled.

    Attributes:
        whitespace:         Characters skipped before every expression. Tab is
                            not included unless listed here.
        keyword_boundary:   If True, `let` only counts as a keyword when the next
                            character cannot continue an identifier. If False,
                            any text starting with `let` is treated as the keyword.
        error_policy:       "last" reports the last failing alternative,
                            "furthest" the one that got furthest into the input.
        integer_bits:       Width of the signed integer type literals must fit.
    """

    whitespace: str = WHITESPACE
    keyword_boundary: bool = True
    error_policy: str = ERROR_POLICY_FURTHEST
    integer_bits: int = DEFAULT_INTEGER_BITS

    def __post_init__(self) -> None:
        if not self.whitespace:
            raise ValueError("whitespace must contain at least one character")
        if self.error_policy not in ERROR_POLICIES:
            raise ValueError(
                f"Unknown error policy: {self.error_policy!r} "
                f"(expected one of {ERROR_POLICIES})"
            )
        if self.integer_bits <= 0:
            raise ValueError(f"integer_bits must be positive, got {self.integer_bits}")

    @property
    def integer_range(self) -> tuple[int, int]:
        """Inclusive bounds of the signed integer type."""
        limit = 1 << (self.integer_bits - 1)
        return -limit, limit - 1

    @staticmethod
    def default() -> "GrammarConfig":
        return GrammarConfig()
