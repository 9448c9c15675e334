"""
Defines the abstract syntax tree (AST) node types for the Kite programming language.

Every node is a frozen dataclass deriving from `ASTNode`. The class attribute
`kind` is the node's discriminant and always equals the class name. Child
sequences are stored as tuples, so a tree cannot be changed once the parser has
built it.

Families:
    Program:
        The single root, holding the top-level statements in source order.

    Statements:
        ExpressionStatement, BlockStatement, EmptyStatement, VariableStatement,
        VariableDeclaration, IfStatement, WhileStatement, DoWhileStatement,
        ForStatement, FunctionDeclaration, ClassDeclaration, ReturnStatement.

    Expressions:
        AssignmentExpression, LogicalExpression, BinaryExpression,
        UnaryExpression, CallExpression, MemberExpression, NewExpression,
        Identifier, ThisExpression, Super, and the literals NumericLiteral,
        StringLiteral, BooleanLiteral, NullLiteral.

Serialization:
    `ASTNode.to_dict()` returns the JSON-ready shape downstream consumers rely on:
    a "kind" key plus one key per field. `to_json()` dumps that shape.

Example:
    node = AssignmentExpression("=", Identifier("x"), NumericLiteral("1"))
    node.to_dict()["left"] == {"kind": "Identifier", "name": "x"}
"""

import json
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Union

ASTDict = dict[str, Any]

# Python attribute names that differ from the serialized field names.
_SERIALIZED_NAMES = {"super_class": "superClass"}


def _serialize(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


@dataclass(frozen=True)
class ASTNode:
    """Base class of every Kite AST node."""

    kind: ClassVar[str] = "ASTNode"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.kind = cls.__name__

    def to_dict(self) -> ASTDict:
        """Converts the node and all descendants into plain dicts and lists."""
        result: ASTDict = {"kind": self.kind}
        for f in fields(self):
            result[_SERIALIZED_NAMES.get(f.name, f.name)] = _serialize(
                getattr(self, f.name)
            )
        return result


# Expressions


@dataclass(frozen=True)
class Identifier(ASTNode):
    name: str


@dataclass(frozen=True)
class ThisExpression(ASTNode):
    pass


@dataclass(frozen=True)
class Super(ASTNode):
    pass


@dataclass(frozen=True)
class NumericLiteral(ASTNode):
    """Integer literal. `value` keeps the source digits as written."""

    value: str


@dataclass(frozen=True)
class StringLiteral(ASTNode):
    """String literal. `value` has the surrounding quotes stripped."""

    value: str


@dataclass(frozen=True)
class BooleanLiteral(ASTNode):
    value: bool


@dataclass(frozen=True)
class NullLiteral(ASTNode):
    value: None = None


@dataclass(frozen=True)
class AssignmentExpression(ASTNode):
    """`left operator right`, where `left` is an Identifier or MemberExpression."""

    operator: str
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class LogicalExpression(ASTNode):
    operator: str
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class BinaryExpression(ASTNode):
    operator: str
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class UnaryExpression(ASTNode):
    operator: str
    argument: "Expression"


@dataclass(frozen=True)
class MemberExpression(ASTNode):
    """Property access: `object.property` or, when `computed`, `object[property]`."""

    object: "Expression"
    property: "Expression"
    computed: bool


@dataclass(frozen=True)
class CallExpression(ASTNode):
    callee: "Expression"
    arguments: tuple["Expression", ...] = ()


@dataclass(frozen=True)
class NewExpression(ASTNode):
    callee: "Expression"
    arguments: tuple["Expression", ...] = ()


Literal = Union[NumericLiteral, StringLiteral, BooleanLiteral, NullLiteral]

Expression = Union[
    AssignmentExpression,
    LogicalExpression,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
    MemberExpression,
    NewExpression,
    Identifier,
    ThisExpression,
    Super,
    Literal,
]


# Statements


@dataclass(frozen=True)
class ExpressionStatement(ASTNode):
    expression: Expression


@dataclass(frozen=True)
class EmptyStatement(ASTNode):
    pass


@dataclass(frozen=True)
class BlockStatement(ASTNode):
    body: tuple["Statement", ...] = ()


@dataclass(frozen=True)
class VariableDeclaration(ASTNode):
    id: Identifier
    init: Expression | None = None


@dataclass(frozen=True)
class VariableStatement(ASTNode):
    declarations: tuple[VariableDeclaration, ...]


@dataclass(frozen=True)
class IfStatement(ASTNode):
    test: Expression
    consequent: "Statement"
    alternate: "Statement | None" = None


@dataclass(frozen=True)
class WhileStatement(ASTNode):
    test: Expression
    body: "Statement"


@dataclass(frozen=True)
class DoWhileStatement(ASTNode):
    body: BlockStatement
    test: Expression


@dataclass(frozen=True)
class ForStatement(ASTNode):
    """`for (init; test; update) body`. Any of init, test and update may be None."""

    init: VariableStatement | Expression | None
    test: Expression | None
    update: Expression | None
    body: "Statement"


@dataclass(frozen=True)
class FunctionDeclaration(ASTNode):
    name: Identifier
    params: tuple[Identifier, ...]
    body: BlockStatement


@dataclass(frozen=True)
class ClassDeclaration(ASTNode):
    """`class id extends super_class { ... }`. The body block is the member list."""

    id: Identifier
    super_class: Identifier | None
    body: BlockStatement


@dataclass(frozen=True)
class ReturnStatement(ASTNode):
    argument: Expression | None = None


Statement = Union[
    ExpressionStatement,
    EmptyStatement,
    BlockStatement,
    VariableStatement,
    IfStatement,
    WhileStatement,
    DoWhileStatement,
    ForStatement,
    FunctionDeclaration,
    ClassDeclaration,
    ReturnStatement,
]


@dataclass(frozen=True)
class Program(ASTNode):
    body: tuple[Statement, ...] = ()


def to_json(node: ASTNode, indent: int | None = 2) -> str:
    """Serializes `node` to a JSON string using the `to_dict` shape."""
    return json.dumps(node.to_dict(), indent=indent)


__all__ = [
    "ASTDict",
    "ASTNode",
    "AssignmentExpression",
    "BinaryExpression",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "ClassDeclaration",
    "DoWhileStatement",
    "EmptyStatement",
    "Expression",
    "ExpressionStatement",
    "ForStatement",
    "FunctionDeclaration",
    "Identifier",
    "IfStatement",
    "Literal",
    "LogicalExpression",
    "MemberExpression",
    "NewExpression",
    "NullLiteral",
    "NumericLiteral",
    "Program",
    "ReturnStatement",
    "Statement",
    "StringLiteral",
    "Super",
    "ThisExpression",
    "UnaryExpression",
    "VariableDeclaration",
    "VariableStatement",
    "WhileStatement",
    "to_json",
]
