"""
KNOT CLI Entrypoint.

This module provides the command-line interface for parsing KNOT source code
and printing the resulting syntax tree.

Features:
    - Read source from `.knot` files or inline strings.
    - Parse with a configurable grammar (tabs, keyword boundaries, error policy).
    - Print the tree as indented text or JSON, to stdout or a file.
    - Report the first parse error on stderr and exit with status 1.
    - Launch an interactive REPL.

Example usage:
    knot hello.knot
    knot -s "let x = 5" -f json
    knot program.knot -o program.tree
    knot --repl --verbose

Functions:
    run_knot(source: str, is_string: bool = False, fmt: str = "tree", out: str | None = None,
             config: GrammarConfig | None = None) -> ParseResult:
        Executes the full pipeline (read → parse → print).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import logging
import sys

from knot.knot_config import GrammarConfig
from knot.knot_constants import (
    ERROR_POLICIES,
    ERROR_POLICY_FURTHEST,
    SOURCE_SUFFIX,
    WHITESPACE,
    WHITESPACE_WITH_TABS,
)
from knot.knot_grammar import ParseResult, parse_source
from knot.knot_printer import FORMATS, TreePrinter

logger = logging.getLogger(__name__)


def run_knot(
    source: str,
    is_string: bool = False,
    fmt: str = "tree",
    out: str | None = None,
    config: GrammarConfig | None = None,
) -> ParseResult:
    """
    Run the KNOT toolchain: read, parse, and print or write the tree.

    Args:
        source (str): KNOT source code or path to a `.knot` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        fmt (str): Output format, 'tree' or 'json'. Defaults to 'tree'.
        out (str | None): Optional path to write the rendered tree. If None, prints to stdout.
        config (GrammarConfig | None): Grammar options. Defaults to the standard grammar.

    Returns:
        ParseResult: The parsed nodes and the terminating error, if any.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.knot'.

    Side Effects:
        - Prints the tree (or writes it to `out`).
        - Prints the parse error, if any, to stderr.
    """
    if not is_string and not source.endswith(SOURCE_SUFFIX):
        raise ValueError(f"Only {SOURCE_SUFFIX} files are supported.")
    if not is_string:
        logger.info("Reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    result = parse_source(source, config)
    text = TreePrinter(fmt).render(result.nodes)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n" if text else text)
        logger.info("Wrote %d node(s) to %s", len(result.nodes), out)
    elif text:
        print(text)

    if result.error is not None:
        print(result.error, file=sys.stderr)
    return result


def config_from_args(args: argparse.Namespace) -> GrammarConfig:
    return GrammarConfig(
        whitespace=WHITESPACE_WITH_TABS if args.tabs else WHITESPACE,
        keyword_boundary=not args.prefix_keywords,
        error_policy=args.error_policy,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="knot")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="tree",
        help="Output format (default: tree)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--tabs", action="store_true", help="Treat tab characters as whitespace"
    )
    parser.add_argument(
        "--prefix-keywords",
        action="store_true",
        help="Match 'let' as a prefix without an identifier boundary",
    )
    parser.add_argument(
        "--error-policy",
        choices=ERROR_POLICIES,
        default=ERROR_POLICY_FURTHEST,
        help="Which failed alternative to report (default: furthest)",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a source",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main() -> None:
    """
    Entry point for the KNOT CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified,
    otherwise parses the given source and prints its tree. Exits with status 1
    when parsing stops on an error.
    """
    if len(sys.argv) == 1:
        from knot.knot_repl import start_repl

        start_repl()
        return

    args = build_arg_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = config_from_args(args)

    if args.repl or args.source is None:
        from knot.knot_repl import start_repl

        start_repl(config=config, fmt=args.fmt)
        return

    try:
        result = run_knot(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            config=config,
        )
    except (OSError, ValueError) as e:
        print(f"knot: {e}", file=sys.stderr)
        sys.exit(2)
    if not result.ok:
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
