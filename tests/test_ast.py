import dataclasses
import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kite.kite_ast import (
    AssignmentExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ClassDeclaration,
    EmptyStatement,
    ExpressionStatement,
    ForStatement,
    Identifier,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    Program,
    ReturnStatement,
    to_json,
)
from kite.kite_parser import parse


def test_kind_matches_class_name() -> None:
    assert Identifier.kind == "Identifier"
    assert Identifier("x").kind == "Identifier"
    assert Program().kind == "Program"


def test_nodes_are_immutable() -> None:
    node = Identifier("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "y"  # type: ignore[misc]


def test_structural_equality() -> None:
    assert Identifier("x") == Identifier("x")
    assert Identifier("x") != Identifier("y")
    assert EmptyStatement() == EmptyStatement()
    assert EmptyStatement() != BlockStatement()


def test_nodes_are_hashable() -> None:
    tree = parse("a.b = c(1, 2);")
    assert hash(tree) == hash(parse("a.b = c(1, 2);"))
    assert len({tree, parse("a.b = c(1, 2);")}) == 1


def test_to_dict_member_expression() -> None:
    node = MemberExpression(Identifier("a"), NumericLiteral("0"), computed=True)
    assert node.to_dict() == {
        "kind": "MemberExpression",
        "object": {"kind": "Identifier", "name": "a"},
        "property": {"kind": "NumericLiteral", "value": "0"},
        "computed": True,
    }


def test_to_dict_uses_camel_case_super_class() -> None:
    node = ClassDeclaration(Identifier("B"), Identifier("A"), BlockStatement())
    d = node.to_dict()
    assert d["superClass"] == {"kind": "Identifier", "name": "A"}
    assert "super_class" not in d
    assert d["body"] == {"kind": "BlockStatement", "body": []}


def test_to_dict_optional_children_are_none() -> None:
    node = ForStatement(None, None, None, EmptyStatement())
    assert node.to_dict() == {
        "kind": "ForStatement",
        "init": None,
        "test": None,
        "update": None,
        "body": {"kind": "EmptyStatement"},
    }
    assert ReturnStatement().to_dict() == {"kind": "ReturnStatement", "argument": None}


def test_to_dict_literals() -> None:
    assert BooleanLiteral(False).to_dict() == {"kind": "BooleanLiteral", "value": False}
    assert NullLiteral().to_dict() == {"kind": "NullLiteral", "value": None}


def test_to_dict_sequences_become_lists() -> None:
    node = CallExpression(Identifier("f"), (NumericLiteral("1"), NumericLiteral("2")))
    assert node.to_dict()["arguments"] == [
        {"kind": "NumericLiteral", "value": "1"},
        {"kind": "NumericLiteral", "value": "2"},
    ]


def test_to_json_round_trips_through_json() -> None:
    program = Program(
        body=(
            ExpressionStatement(
                AssignmentExpression("=", Identifier("x"), NumericLiteral("1"))
            ),
        )
    )
    assert json.loads(to_json(program)) == program.to_dict()
    assert "\n" not in to_json(program, indent=None)


def test_parsed_class_serializes() -> None:
    source = "class A extends B { def m() { return super(this); } }"
    data = json.loads(to_json(parse(source)))
    cls = data["body"][0]
    assert cls["kind"] == "ClassDeclaration"
    assert cls["superClass"]["name"] == "B"
    ret = cls["body"]["body"][0]["body"]["body"][0]
    assert ret == {
        "kind": "ReturnStatement",
        "argument": {
            "kind": "CallExpression",
            "callee": {"kind": "Super"},
            "arguments": [{"kind": "ThisExpression"}],
        },
    }


@given(st.text(min_size=1))  # type: ignore[misc]
def test_identifier_equality(name: str) -> None:
    assert Identifier(name) == Identifier(name)
    assert Identifier(name) != Identifier(name + "x")
    assert Identifier(name).to_dict() == {"kind": "Identifier", "name": name}
