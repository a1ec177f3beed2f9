"""
Renders parsed KNOT trees as text.

Formats:
    - "tree": one node per line, indented two spaces per depth level,
      `Kind value @line:col`.
    - "json": the `to_dict()` form of every top-level node as a JSON array.

The tree format dispatches each node to an `emit_<kind>` method, so every node
kind the grammar can produce needs a matching method here.

Example:
    >>> TreePrinter("tree").render([ASTNode("integer", 5, line=1, col=1)])
    'Integer 5 @1:1'

Raises:
    ValueError: If the format is not supported.
    TypeError: If the input contains something other than ASTNode instances.
    NotImplementedError: If a node kind has no `emit_*` method.
"""

import json

from knot.knot_ast import ASTNode

FORMATS = ("tree", "json")


class TreePrinter:
    """Turns a list of ASTNode objects into printable text.

    Attributes:
        fmt (str): Output format, one of FORMATS.
        indent (str): Indentation unit for the tree format.
        lines (list[str]): Accumulated output lines for the tree format.
    """

    def __init__(self, fmt: str = "tree", indent: str = "  ") -> None:
        fmt = fmt.lower()
        if fmt not in FORMATS:
            raise ValueError(f"Unknown output format: {fmt!r}")
        self.fmt = fmt
        self.indent = indent
        self.lines: list[str] = []

    def render(self, nodes: list[ASTNode]) -> str:
        if not all(isinstance(node, ASTNode) for node in nodes):
            raise TypeError("All items in AST must be ASTNode instances.")
        if self.fmt == "json":
            return json.dumps([node.to_dict() for node in nodes], indent=2, ensure_ascii=False)
        self.lines = []
        for node in nodes:
            self._visit(node, 0)
        return "\n".join(self.lines)

    def _visit(self, node: ASTNode, depth: int) -> None:
        method_name = f"emit_{node.kind}"
        if hasattr(self, method_name):
            getattr(self, method_name)(node, depth)
        else:
            raise NotImplementedError(
                f"No printer method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )

    def _line(self, depth: int, label: str, node: ASTNode) -> None:
        self.lines.append(f"{self.indent * depth}{label} @{node.line}:{node.col}")

    def _children(self, node: ASTNode, depth: int) -> None:
        for child in node.children:
            self._visit(child, depth + 1)

    def emit_variable_ref(self, node: ASTNode, depth: int) -> None:
        self._line(depth, f"VariableRef {node.value}", node)

    def emit_integer(self, node: ASTNode, depth: int) -> None:
        self._line(depth, f"Integer {node.value}", node)

    def emit_float(self, node: ASTNode, depth: int) -> None:
        self._line(depth, f"Float {node.value!r}", node)

    def emit_string(self, node: ASTNode, depth: int) -> None:
        # repr keeps embedded newlines on one output line
        self._line(depth, f"String {node.value!r}", node)

    def emit_assignment(self, node: ASTNode, depth: int) -> None:
        self._line(depth, f"Assignment {node.value}", node)
        self._children(node, depth)

    def emit_initialization(self, node: ASTNode, depth: int) -> None:
        self._line(depth, f"Initialization {node.value}", node)
        self._children(node, depth)

    def emit_scope(self, node: ASTNode, depth: int) -> None:
        self._line(depth, f"Scope [{len(node.children)}]", node)
        self._children(node, depth)

    def emit_parentheses(self, node: ASTNode, depth: int) -> None:
        self._line(depth, f"Parentheses [{len(node.children)}]", node)
        self._children(node, depth)

    def emit_function(self, node: ASTNode, depth: int) -> None:
        self._line(depth, f"Function {node.parameter.value}", node)
        self._visit(node.body, depth + 1)

    def emit_unit(self, node: ASTNode, depth: int) -> None:
        self._line(depth, "Unit", node)


def render(nodes: list[ASTNode], fmt: str = "tree") -> str:
    return TreePrinter(fmt).render(nodes)
