"""
Defines the abstract syntax tree (AST) node structure for the KNOT language.

Classes:
    ASTNode:
        A node in the syntax tree produced by the grammar rules. One class covers
        every variant; the variant is named by `kind`.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Node kinds:
    variable_ref    value = name
    integer         value = int
    float           value = float
    string          value = str (no escape processing)
    assignment      value = name, children = [value node]
    initialization  value = name, children = [value node]   (`let name = ...`)
    scope           children = expressions inside `{ }`
    parentheses     children = expressions inside `( )`
    function        children = [parameter variable_ref, body]
    unit            no payload

Each node records the line and column of the first character it consumed.

Example:
    node = ASTNode("assignment", value="x", children=[ASTNode("integer", 5, line=1, col=5)], line=1, col=1)
"""

from typing import Any, TypedDict

VARIABLE_REF = "variable_ref"
INTEGER = "integer"
FLOAT = "float"
STRING = "string"
ASSIGNMENT = "assignment"
INITIALIZATION = "initialization"
SCOPE = "scope"
PARENTHESES = "parentheses"
FUNCTION = "function"
UNIT = "unit"

NODE_KINDS = frozenset(
    {
        VARIABLE_REF,
        INTEGER,
        FLOAT,
        STRING,
        ASSIGNMENT,
        INITIALIZATION,
        SCOPE,
        PARENTHESES,
        FUNCTION,
        UNIT,
    }
)


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The node variant (e.g., "scope", "function").
        value (Any): Name or literal value, None for structural nodes.
        line (int): Line number of the node's first character.
        col (int): Column number of the node's first character.
        children (List[ASTDict]): Child nodes in source order.
    """

    kind: str
    value: Any
    line: int
    col: int
    children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the abstract syntax tree (AST) for the KNOT language.

    Args:
        kind (str): One of NODE_KINDS.
        value (str | int | float, optional): Name or literal value.
        children (list[ASTNode], optional): Child nodes, owned by this node.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).

    Raises:
        ValueError: If `kind` is not a known node kind.
    """

    def __init__(
        self,
        kind: str,
        value: str | int | float | None = None,
        children: list["ASTNode"] | None = None,
        line: int = 0,
        col: int = 0,
    ):
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown AST node kind: {kind!r}")
        self.kind = kind
        self.value = value
        self.children: list["ASTNode"] = children or []
        self.line = line
        self.col = col

    @property
    def name(self) -> str | None:
        """The bound or referenced name for variable_ref, assignment and initialization."""
        if self.kind in (VARIABLE_REF, ASSIGNMENT, INITIALIZATION):
            return str(self.value)
        return None

    @property
    def parameter(self) -> "ASTNode":
        if self.kind != FUNCTION:
            raise AttributeError(f"{self.kind} node has no parameter")
        return self.children[0]

    @property
    def body(self) -> "ASTNode":
        if self.kind == FUNCTION:
            return self.children[1]
        if self.kind in (ASSIGNMENT, INITIALIZATION):
            return self.children[0]
        raise AttributeError(f"{self.kind} node has no body")

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={repr(self.value)}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and type(self.value) is type(other.value)
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "value": self.value,
            "line": self.line,
            "col": self.col,
            "children": [c.to_dict() for c in self.children],
        }

    def shape(self) -> dict[str, Any]:
        """Returns the node as nested dicts without locations, for structural comparison."""
        return {
            "kind": self.kind,
            "value": self.value,
            "children": [c.shape() for c in self.children],
        }

    def walk(self) -> list["ASTNode"]:
        """Returns this node and all descendants in pre-order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


def variable_ref(name: str, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(VARIABLE_REF, name, line=line, col=col)


def integer(value: int, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(INTEGER, value, line=line, col=col)


def float_(value: float, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(FLOAT, value, line=line, col=col)


def string(value: str, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(STRING, value, line=line, col=col)


def assignment(name: str, value: ASTNode, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(ASSIGNMENT, name, [value], line=line, col=col)


def initialization(name: str, value: ASTNode, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(INITIALIZATION, name, [value], line=line, col=col)


def scope(children: list[ASTNode], line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(SCOPE, children=children, line=line, col=col)


def parentheses(children: list[ASTNode], line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(PARENTHESES, children=children, line=line, col=col)


def function(parameter: ASTNode, body: ASTNode, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(FUNCTION, children=[parameter, body], line=line, col=col)


def unit(line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode(UNIT, line=line, col=col)
