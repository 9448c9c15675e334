"""
Kite Language Parser

Parses Kite source text into an immutable abstract syntax tree (AST).

The parser is a hand-written recursive-descent parser with exactly one token of
lookahead. It owns a `Lexer` and pulls tokens from it one at a time; nothing is
read ahead beyond the current lookahead and nothing is ever re-read.

Supported Constructs
--------------------
- Statements:
    * Expression statements: `x = 1;`, `f(a, b);`
    * Blocks and empty statements: `{ ... }`, `;`
    * Variables: `let a, b = 2;`
    * Control flow: `if`/`else`, `while`, `do ... while`, `for (init; test; update)`
    * Functions: `def name(a, b) { ... }`
    * Classes: `class Point extends Base { ... }`
    * `return` with an optional value

- Expressions, lowest to highest precedence:
    * Assignment `= += -= *= /=` (right-associative)
    * Logical `||`, then `&&`
    * Equality `== !=`, relational `< <= > >=`
    * Additive `+ -`, multiplicative `* /`
    * Unary prefix `+ - !`
    * Member access `a.b`, `a[b]`, calls `f()()`, `super(...)`, `new C(...)`
    * Literals, identifiers, `this`, parenthesized expressions

Parser Behavior
---------------
- Fail-fast: the first violation raises `ParseError` (or `LexError` from the
  lexer) and no partial tree is returned.
- `eat()` is the only place the lookahead advances.

Entry Points
------------
- `Parser.parse(source)`: Parse a full program on a (reusable) parser instance.
- `parse(source)`: Parse with a fresh parser.

Raises
------
ParseError
    When the token stream violates the grammar.
LexError
    When the source contains text no lexical rule accepts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from kite.kite_ast import (
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ClassDeclaration,
    DoWhileStatement,
    EmptyStatement,
    Expression,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    Literal,
    LogicalExpression,
    MemberExpression,
    NewExpression,
    NullLiteral,
    NumericLiteral,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
    Super,
    ThisExpression,
    UnaryExpression,
    VariableDeclaration,
    VariableStatement,
    WhileStatement,
)
from kite.kite_constants import ASSIGNMENT_OPERATORS, EOF, LITERAL_KINDS
from kite.kite_errors import ParseError
from kite.kite_lexer import Lexer, Token

logger = logging.getLogger(__name__)

BinaryNode = type[BinaryExpression] | type[LogicalExpression]


class Parser:
    """
    Kite Parser Class

    Turns the token stream of one `Lexer` into a `Program` tree. Each grammar
    production is a method named after the node it builds.

    Attributes
    ----------
    lexer : Lexer
        The token source. Owned by this parser.
    lookahead : Token
        The next token, fetched but not yet consumed.

    Methods
    -------
    parse(source: str) -> Program
        Parse a complete program.
    eat(kind: str) -> Token
        Consume the lookahead if it has the expected kind.

    Raises
    ------
    ParseError
        When an invalid construct or malformed syntax is encountered.
    """

    def __init__(self, lexer: Lexer | None = None) -> None:
        self.lexer: Lexer = lexer if lexer is not None else Lexer()
        self.lookahead: Token = Token(EOF, "")

        self.statement_table: dict[str, Callable[[], Statement]] = {
            ";": self.empty_statement,
            "if": self.if_statement,
            "{": self.block_statement,
            "let": self.variable_statement,
            "def": self.function_declaration,
            "class": self.class_declaration,
            "return": self.return_statement,
            "while": self.iteration_statement,
            "do": self.iteration_statement,
            "for": self.iteration_statement,
        }

        self.literal_table: dict[str, Callable[[], Literal]] = {
            "NUMBER": self.numeric_literal,
            "STRING": self.string_literal,
            "true": self.boolean_literal,
            "false": self.boolean_literal,
            "null": self.null_literal,
        }

    def parse(self, source: str) -> Program:
        """Parse `source` into a Program, resetting any state from a previous parse.

        Args:
            source (str): Kite source text.

        Returns:
            Program: The root of the syntax tree.

        Raises:
            ParseError: On a grammar violation, or when the input nests deeper
                than the interpreter's recursion limit allows.
            LexError: On text no lexical rule accepts.
        """
        logger.debug("Parsing %d characters of source", len(source))
        self.lexer.load(source)
        self.lookahead = self.lexer.next_token()

        try:
            program = self.program()
        except RecursionError as err:
            raise ParseError(
                "Maximum nesting depth exceeded",
                found=self.lookahead.lexeme,
                line=self.lookahead.line,
                col=self.lookahead.col,
            ) from err
        logger.debug("Parsed %d top-level statements", len(program.body))
        return program

    def eat(self, kind: str) -> Token:
        """Consume and return the lookahead, which must be of the given kind."""
        token = self.lookahead

        if token.kind != kind:
            if token.is_eof():
                raise ParseError(
                    f'Unexpected end of input, expected: "{kind}"',
                    expected=kind,
                    found="end of input",
                )
            raise ParseError(
                f'Unexpected token: "{token.lexeme}", expected: "{kind}"',
                expected=kind,
                found=token.lexeme,
                line=token.line,
                col=token.col,
            )

        self.lookahead = self.lexer.next_token()
        return token

    def check(self, *kinds: str) -> bool:
        """Returns True if the lookahead is of any of the given kinds, without consuming it."""
        return self.lookahead.kind in kinds

    # Statements

    def program(self) -> Program:
        """Program : StatementList? ;"""
        return Program(body=self.statement_list())

    def statement_list(self, stop: str = EOF) -> tuple[Statement, ...]:
        """StatementList : Statement | StatementList Statement ;"""
        statements: list[Statement] = []
        while not self.check(stop, EOF):
            statements.append(self.statement())
        return tuple(statements)

    def statement(self) -> Statement:
        """
        Statement
            : ExpressionStatement | BlockStatement | EmptyStatement
            | VariableStatement | IfStatement | IterationStatement
            | FunctionDeclaration | ClassDeclaration | ReturnStatement ;
        """
        production = self.statement_table.get(
            self.lookahead.kind, self.expression_statement
        )
        return production()

    def empty_statement(self) -> EmptyStatement:
        """EmptyStatement : ';' ;"""
        self.eat(";")
        return EmptyStatement()

    def block_statement(self) -> BlockStatement:
        """BlockStatement : '{' StatementList? '}' ;"""
        self.eat("{")
        body = self.statement_list("}")
        self.eat("}")
        return BlockStatement(body=body)

    def expression_statement(self) -> ExpressionStatement:
        """ExpressionStatement : Expression ';' ;"""
        expression = self.expression()
        self.eat(";")
        return ExpressionStatement(expression=expression)

    def variable_statement_init(self) -> VariableStatement:
        """VariableStatementInit : 'let' VariableDeclarationList ;"""
        self.eat("let")
        declarations = [self.variable_declaration()]
        while self.check(","):
            self.eat(",")
            declarations.append(self.variable_declaration())
        return VariableStatement(declarations=tuple(declarations))

    def variable_statement(self) -> VariableStatement:
        """VariableStatement : VariableStatementInit ';' ;"""
        statement = self.variable_statement_init()
        self.eat(";")
        return statement

    def variable_declaration(self) -> VariableDeclaration:
        """VariableDeclaration : Identifier ('=' AssignmentExpression)? ;"""
        id_ = self.identifier()
        init: Expression | None = None
        if not self.check(",", ";"):
            self.eat("SIMPLE_ASSIGN")
            init = self.assignment_expression()
        return VariableDeclaration(id=id_, init=init)

    def if_statement(self) -> IfStatement:
        """IfStatement : 'if' '(' Expression ')' Statement ('else' Statement)? ;"""
        self.eat("if")
        self.eat("(")
        test = self.expression()
        self.eat(")")

        consequent = self.statement()
        alternate: Statement | None = None
        if self.check("else"):
            self.eat("else")
            alternate = self.statement()

        return IfStatement(test=test, consequent=consequent, alternate=alternate)

    def iteration_statement(self) -> Statement:
        """IterationStatement : WhileStatement | DoWhileStatement | ForStatement ;"""
        if self.check("while"):
            return self.while_statement()
        if self.check("do"):
            return self.do_while_statement()
        return self.for_statement()

    def while_statement(self) -> WhileStatement:
        """WhileStatement : 'while' '(' Expression ')' Statement ;"""
        self.eat("while")
        self.eat("(")
        test = self.expression()
        self.eat(")")
        return WhileStatement(test=test, body=self.statement())

    def do_while_statement(self) -> DoWhileStatement:
        """DoWhileStatement : 'do' BlockStatement 'while' '(' Expression ')' ';' ;"""
        self.eat("do")
        body = self.block_statement()
        self.eat("while")
        self.eat("(")
        test = self.expression()
        self.eat(")")
        self.eat(";")
        return DoWhileStatement(body=body, test=test)

    def for_statement(self) -> ForStatement:
        """
        ForStatement
            : 'for' '(' ForInit? ';' Expression? ';' Expression? ')' Statement ;
        """
        self.eat("for")
        self.eat("(")

        init = None if self.check(";") else self.for_statement_init()
        self.eat(";")

        test = None if self.check(";") else self.expression()
        self.eat(";")

        update = None if self.check(")") else self.expression()
        self.eat(")")

        return ForStatement(init=init, test=test, update=update, body=self.statement())

    def for_statement_init(self) -> VariableStatement | Expression:
        """ForStatementInit : VariableStatementInit | Expression ;"""
        if self.check("let"):
            return self.variable_statement_init()
        return self.expression()

    def function_declaration(self) -> FunctionDeclaration:
        """FunctionDeclaration : 'def' Identifier '(' ParameterList? ')' BlockStatement ;"""
        self.eat("def")
        name = self.identifier()

        self.eat("(")
        params: list[Identifier] = []
        if not self.check(")"):
            params.append(self.identifier())
            while self.check(","):
                self.eat(",")
                params.append(self.identifier())
        self.eat(")")

        return FunctionDeclaration(
            name=name, params=tuple(params), body=self.block_statement()
        )

    def class_declaration(self) -> ClassDeclaration:
        """ClassDeclaration : 'class' Identifier ('extends' Identifier)? BlockStatement ;"""
        self.eat("class")
        id_ = self.identifier()

        super_class: Identifier | None = None
        if self.check("extends"):
            self.eat("extends")
            super_class = self.identifier()

        return ClassDeclaration(
            id=id_, super_class=super_class, body=self.block_statement()
        )

    def return_statement(self) -> ReturnStatement:
        """ReturnStatement : 'return' Expression? ';' ;"""
        self.eat("return")
        argument = None if self.check(";") else self.expression()
        self.eat(";")
        return ReturnStatement(argument=argument)

    # Expressions

    def expression(self) -> Expression:
        """Expression : AssignmentExpression ;"""
        return self.assignment_expression()

    def assignment_expression(self) -> Expression:
        """
        AssignmentExpression
            : LogicalORExpression
            | LeftHandSideExpression AssignmentOperator AssignmentExpression ;
        """
        left = self.logical_or_expression()
        if self.lookahead.kind not in ASSIGNMENT_OPERATORS:
            return left

        operator = self.eat(self.lookahead.kind)
        if not isinstance(left, (Identifier, MemberExpression)):
            raise ParseError(
                "Invalid left-hand side in assignment expression",
                found=operator.lexeme,
                line=operator.line,
                col=operator.col,
            )

        return AssignmentExpression(
            operator=operator.lexeme, left=left, right=self.assignment_expression()
        )

    def binary_level(
        self,
        next_production: Callable[[], Expression],
        operator_kind: str,
        node_class: BinaryNode,
    ) -> Expression:
        """Parse one left-associative precedence level.

        Args:
            next_production: Parser for the next-higher precedence level.
            operator_kind: Token kind of the operators at this level.
            node_class: BinaryExpression or LogicalExpression.
        """
        left = next_production()
        while self.check(operator_kind):
            operator = self.eat(operator_kind).lexeme
            right = next_production()
            left = node_class(operator=operator, left=left, right=right)
        return left

    def logical_or_expression(self) -> Expression:
        """LogicalORExpression : LogicalANDExpression (LOGICAL_OR LogicalANDExpression)* ;"""
        return self.binary_level(
            self.logical_and_expression, "LOGICAL_OR", LogicalExpression
        )

    def logical_and_expression(self) -> Expression:
        """LogicalANDExpression : EqualityExpression (LOGICAL_AND EqualityExpression)* ;"""
        return self.binary_level(
            self.equality_expression, "LOGICAL_AND", LogicalExpression
        )

    def equality_expression(self) -> Expression:
        """EqualityExpression : RelationalExpression (EQUALITY_OPERATOR RelationalExpression)* ;"""
        return self.binary_level(
            self.relational_expression, "EQUALITY_OPERATOR", BinaryExpression
        )

    def relational_expression(self) -> Expression:
        """RelationalExpression : AdditiveExpression (RELATIONAL_OPERATOR AdditiveExpression)* ;"""
        return self.binary_level(
            self.additive_expression, "RELATIONAL_OPERATOR", BinaryExpression
        )

    def additive_expression(self) -> Expression:
        """
        AdditiveExpression
            : MultiplicativeExpression (ADDITIVE_OPERATOR MultiplicativeExpression)* ;
        """
        return self.binary_level(
            self.multiplicative_expression, "ADDITIVE_OPERATOR", BinaryExpression
        )

    def multiplicative_expression(self) -> Expression:
        """
        MultiplicativeExpression
            : UnaryExpression (MULTIPLICATIVE_OPERATOR UnaryExpression)* ;
        """
        return self.binary_level(
            self.unary_expression, "MULTIPLICATIVE_OPERATOR", BinaryExpression
        )

    def unary_expression(self) -> Expression:
        """
        UnaryExpression
            : LeftHandSideExpression
            | ADDITIVE_OPERATOR UnaryExpression
            | LOGICAL_NOT UnaryExpression ;
        """
        if self.check("ADDITIVE_OPERATOR", "LOGICAL_NOT"):
            operator = self.eat(self.lookahead.kind).lexeme
            return UnaryExpression(operator=operator, argument=self.unary_expression())
        return self.left_hand_side_expression()

    def left_hand_side_expression(self) -> Expression:
        """LeftHandSideExpression : Super Arguments | MemberExpression | CallExpression ;"""
        if self.check("super"):
            return self.call_expression(self.super_())

        member = self.member_expression()
        if self.check("("):
            return self.call_expression(member)
        return member

    def call_expression(self, callee: Expression) -> CallExpression:
        """CallExpression : Callee Arguments | CallExpression Arguments ;"""
        call = CallExpression(callee=callee, arguments=self.arguments())
        while self.check("("):
            call = CallExpression(callee=call, arguments=self.arguments())
        return call

    def arguments(self) -> tuple[Expression, ...]:
        """Arguments : '(' (AssignmentExpression (',' AssignmentExpression)*)? ')' ;"""
        self.eat("(")
        args: list[Expression] = []
        if not self.check(")"):
            args.append(self.assignment_expression())
            while self.check(","):
                self.eat(",")
                args.append(self.assignment_expression())
        self.eat(")")
        return tuple(args)

    def member_expression(self) -> Expression:
        """
        MemberExpression
            : PrimaryExpression
            | MemberExpression '.' Identifier
            | MemberExpression '[' Expression ']' ;
        """
        obj = self.primary_expression()

        while self.check(".", "["):
            if self.check("."):
                self.eat(".")
                obj = MemberExpression(
                    object=obj, property=self.identifier(), computed=False
                )
            else:
                self.eat("[")
                prop = self.expression()
                self.eat("]")
                obj = MemberExpression(object=obj, property=prop, computed=True)

        return obj

    def primary_expression(self) -> Expression:
        """
        PrimaryExpression
            : Literal | ParenthesizedExpression | Identifier
            | ThisExpression | NewExpression ;
        """
        kind = self.lookahead.kind
        if kind in LITERAL_KINDS:
            return self.literal()
        if kind == "(":
            return self.parenthesized_expression()
        if kind == "IDENTIFIER":
            return self.identifier()
        if kind == "this":
            self.eat("this")
            return ThisExpression()
        if kind == "new":
            return self.new_expression()

        if self.lookahead.is_eof():
            raise ParseError(
                "Unexpected primary expression: end of input", found="end of input"
            )
        raise ParseError(
            f'Unexpected primary expression: "{self.lookahead.lexeme}"',
            found=self.lookahead.lexeme,
            line=self.lookahead.line,
            col=self.lookahead.col,
        )

    def parenthesized_expression(self) -> Expression:
        """ParenthesizedExpression : '(' Expression ')' ; returns the inner expression."""
        self.eat("(")
        expression = self.expression()
        self.eat(")")
        return expression

    def new_expression(self) -> NewExpression:
        """NewExpression : 'new' MemberExpression Arguments ;"""
        self.eat("new")
        callee = self.member_expression()
        return NewExpression(callee=callee, arguments=self.arguments())

    def super_(self) -> Super:
        """Super : 'super' ;"""
        self.eat("super")
        return Super()

    def identifier(self) -> Identifier:
        """Identifier : IDENTIFIER ;"""
        return Identifier(name=self.eat("IDENTIFIER").lexeme)

    # Literals

    def literal(self) -> Literal:
        """Literal : NumericLiteral | StringLiteral | BooleanLiteral | NullLiteral ;"""
        return self.literal_table[self.lookahead.kind]()

    def numeric_literal(self) -> NumericLiteral:
        """NumericLiteral : NUMBER ;"""
        return NumericLiteral(value=self.eat("NUMBER").lexeme)

    def string_literal(self) -> StringLiteral:
        """StringLiteral : STRING ; the surrounding quotes are stripped."""
        return StringLiteral(value=self.eat("STRING").lexeme[1:-1])

    def boolean_literal(self) -> BooleanLiteral:
        """BooleanLiteral : 'true' | 'false' ;"""
        value = self.check("true")
        self.eat("true" if value else "false")
        return BooleanLiteral(value=value)

    def null_literal(self) -> NullLiteral:
        """NullLiteral : 'null' ;"""
        self.eat("null")
        return NullLiteral()


def parse(source: str) -> Program:
    """Parse `source` with a fresh Parser and return the Program node."""
    return Parser().parse(source)


__all__ = ["Parser", "parse"]
