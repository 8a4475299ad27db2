"""
Defines the abstract syntax tree (AST) produced by the Monkey parser.

Node variants form two closed sets:

    Statement:  LetStatement | ReturnStatement | ExpressionStatement
    Expression: Identifier | IntegerLiteral | Boolean | PrefixExpression
                | InfixExpression | CallExpression

Every node keeps the token that introduced it, so `token_literal()` always
returns that token's source text. `str(node)` gives the canonical rendering:
infix expressions as `(<left> <op> <right>)`, prefix expressions as
`(<op><right>)`. The rendering is fully parenthesized, which makes precedence
and associativity observable and lets the output be parsed again.

`to_dict()` converts a node (and all descendants) into plain Python data,
suitable for JSON output or debugging. A child that failed to parse is `None`
in the tree, renders as the empty string, and serializes as `None`.

Example:
    program = Parser(Lexer(CharacterStream("-a * b;"))).parse_program()
    str(program)  # "((-a) * b)"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypedDict, Union

from monkey.monkey_lexer import Token


class NodeDict(TypedDict, total=False):
    """
    Serialized form of an AST node.

    Fields:
        node (str): The node variant name (e.g., "LetStatement", "InfixExpression").
        token (str): Literal of the token that introduced the node.
        name (NodeDict): Bound identifier of a let statement.
        value (Any): Literal value, or the bound expression of a let statement.
        return_value (NodeDict | None): Value of a return statement.
        expression (NodeDict | None): Wrapped expression of an expression statement.
        operator (str): Operator of a prefix or infix expression.
        left (NodeDict): Left operand of an infix expression.
        right (NodeDict | None): Right operand of a prefix or infix expression.
        function (NodeDict): Callee of a call expression.
        arguments (list[NodeDict]): Arguments of a call expression.
    """

    node: str
    token: str
    name: "NodeDict"
    value: Any
    return_value: "NodeDict | None"
    expression: "NodeDict | None"
    operator: str
    left: "NodeDict"
    right: "NodeDict | None"
    function: "NodeDict"
    arguments: list["NodeDict"]


def _render(node: Node | None) -> str:
    return "" if node is None else str(node)


def _dump(node: Node | None) -> NodeDict | None:
    return None if node is None else node.to_dict()


@dataclass
class Node:
    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def to_dict(self) -> NodeDict:
        return {"node": type(self).__name__, "token": self.token.literal}


# Expressions


@dataclass
class Identifier(Node):
    value: str

    def __str__(self) -> str:
        return self.value

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["value"] = self.value
        return d


@dataclass
class IntegerLiteral(Node):
    value: int

    def __str__(self) -> str:
        return self.token.literal

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["value"] = self.value
        return d


@dataclass
class Boolean(Node):
    value: bool

    def __str__(self) -> str:
        return self.token.literal

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["value"] = self.value
        return d


@dataclass
class PrefixExpression(Node):
    operator: str
    right: Expression | None = None

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.right)})"

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["operator"] = self.operator
        d["right"] = _dump(self.right)
        return d


@dataclass
class InfixExpression(Node):
    left: Expression
    operator: str
    right: Expression | None = None

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {_render(self.right)})"

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["left"] = self.left.to_dict()
        d["operator"] = self.operator
        d["right"] = _dump(self.right)
        return d


@dataclass
class CallExpression(Node):
    function: Expression
    arguments: list[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["function"] = self.function.to_dict()
        d["arguments"] = [a.to_dict() for a in self.arguments]
        return d


# Statements


@dataclass
class LetStatement(Node):
    name: Identifier
    value: Expression | None = None

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {_render(self.value)};"

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["name"] = self.name.to_dict()
        d["value"] = _dump(self.value)
        return d


@dataclass
class ReturnStatement(Node):
    return_value: Expression | None = None

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.return_value)};"

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["return_value"] = _dump(self.return_value)
        return d


@dataclass
class ExpressionStatement(Node):
    expression: Expression | None = None

    def __str__(self) -> str:
        return _render(self.expression)

    def to_dict(self) -> NodeDict:
        d = super().to_dict()
        d["expression"] = _dump(self.expression)
        return d


Expression = Union[
    Identifier,
    IntegerLiteral,
    Boolean,
    PrefixExpression,
    InfixExpression,
    CallExpression,
]

Statement = Union[LetStatement, ReturnStatement, ExpressionStatement]


@dataclass
class Program:
    """Root of the AST: the parsed statements in source order."""

    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        return self.statements[0].token_literal() if self.statements else ""

    def __str__(self) -> str:
        # No separator: consecutive expression statements such as
        # "(3 + 4)((-5) * 5)" read back as a call, so only single expressions
        # and let/return statements re-parse to the same rendering.
        return "".join(str(s) for s in self.statements)

    def to_dict(self) -> dict[str, Any]:
        return {
            "node": "Program",
            "statements": [s.to_dict() for s in self.statements],
        }
