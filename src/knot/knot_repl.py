import io
import traceback

from knot.knot_config import GrammarConfig
from knot.knot_constants import BRACKET_PAIRS, QUOTE
from knot.knot_cursor import Cursor
from knot.knot_grammar import build_grammar, parse_program
from knot.knot_printer import TreePrinter


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def open_brackets(src: str) -> int:
    """Counts openers not yet closed, ignoring text inside string literals."""
    depth = 0
    in_string = False
    for ch in src:
        if ch == QUOTE:
            in_string = not in_string
        elif in_string:
            continue
        elif ch in BRACKET_PAIRS:
            depth += 1
        elif ch in BRACKET_PAIRS.values():
            depth -= 1
    return depth


def is_complete(src: str) -> bool:
    return open_brackets(src) <= 0 and src.count(QUOTE) % 2 == 0


def start_repl(config: GrammarConfig | None = None, fmt: str = "tree") -> None:
    print(f"Knot REPL [format={fmt}]. Type 'exit' or 'quit' to leave.")
    grammar = build_grammar(config)
    printer = TreePrinter(fmt)

    while True:
        try:
            src_lines: list[str] = []
            while True:
                prompt = ">>> " if not src_lines else "... "
                line = input(prompt)
                if line.strip() in ("exit", "quit") and not src_lines:
                    print("Exiting Knot REPL.")
                    return
                src_lines.append(line)
                if is_complete("\n".join(src_lines)):
                    break
            src = "\n".join(src_lines).strip()
            if not src:
                continue

            result = parse_program(Cursor(src), grammar)
            try:
                text = printer.render(result.nodes)
            except Exception:
                print_traceback()
                continue
            if text:
                print(text)
            if result.error is not None:
                print(f"[error] >>> {result.error}")

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Knot REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
