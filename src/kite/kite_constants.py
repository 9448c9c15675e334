"""
Lexical constants for the Kite language.

Defines the closed set of token kinds and the ordered rule table the lexer walks.

The order of ``LEXICAL_RULES`` is a contract: the first rule that matches at the
cursor wins, so multi-character operators must come before their one-character
prefixes (``==`` before ``=``, ``+=`` before ``+``) and keywords before the
generic identifier rule.

Exports:
    - KEYWORDS
    - PUNCTUATION
    - OPERATOR_KINDS
    - TOKEN_KINDS
    - LEXICAL_RULES
    - ASSIGNMENT_OPERATORS
    - LITERAL_KINDS
"""

import re

EOF = "EOF"

PUNCTUATION: tuple[str, ...] = (";", "{", "}", "(", ")", ",", ".", "[", "]")

KEYWORDS: tuple[str, ...] = (
    "let",
    "if",
    "else",
    "true",
    "false",
    "null",
    "while",
    "do",
    "for",
    "def",
    "return",
    "class",
    "extends",
    "super",
    "this",
    "new",
)

OPERATOR_KINDS: tuple[str, ...] = (
    "EQUALITY_OPERATOR",
    "LOGICAL_AND",
    "LOGICAL_OR",
    "LOGICAL_NOT",
    "SIMPLE_ASSIGN",
    "COMPLEX_ASSIGN",
    "RELATIONAL_OPERATOR",
    "ADDITIVE_OPERATOR",
    "MULTIPLICATIVE_OPERATOR",
)

TOKEN_KINDS: frozenset[str] = frozenset(
    PUNCTUATION + KEYWORDS + OPERATOR_KINDS + ("NUMBER", "IDENTIFIER", "STRING", EOF)
)

ASSIGNMENT_OPERATORS: frozenset[str] = frozenset({"SIMPLE_ASSIGN", "COMPLEX_ASSIGN"})

LITERAL_KINDS: frozenset[str] = frozenset({"NUMBER", "STRING", "true", "false", "null"})


def _rule(pattern: str, kind: str | None) -> tuple[re.Pattern[str], str | None]:
    return re.compile(pattern, re.ASCII), kind


# A kind of None marks text that is consumed without producing a token.
LEXICAL_RULES: tuple[tuple[re.Pattern[str], str | None], ...] = (
    # Whitespace
    _rule(r"\s+", None),
    # Comments
    _rule(r"//[^\n\r\u2028\u2029]*", None),
    _rule(r"/\*[\s\S]*?\*/", None),
    # Symbols, delimiters
    *(_rule(re.escape(symbol), symbol) for symbol in PUNCTUATION),
    # Keywords
    *(_rule(rf"{keyword}\b", keyword) for keyword in KEYWORDS),
    # Numbers
    _rule(r"\d+", "NUMBER"),
    # Identifiers
    _rule(r"\w+", "IDENTIFIER"),
    # Equality: ==, !=
    _rule(r"[=!]=", "EQUALITY_OPERATOR"),
    # Logical: &&, ||, !
    _rule(r"&&", "LOGICAL_AND"),
    _rule(r"\|\|", "LOGICAL_OR"),
    _rule(r"!", "LOGICAL_NOT"),
    # Assignment: =, +=, -=, *=, /=
    _rule(r"=", "SIMPLE_ASSIGN"),
    _rule(r"[*/+\-]=", "COMPLEX_ASSIGN"),
    # Relational: >, >=, <, <=
    _rule(r"[<>]=?", "RELATIONAL_OPERATOR"),
    # Math: +, -, *, /
    _rule(r"[+\-]", "ADDITIVE_OPERATOR"),
    _rule(r"[*/]", "MULTIPLICATIVE_OPERATOR"),
    # Strings
    _rule(r'"[^"]*"', "STRING"),
    _rule(r"'[^']*'", "STRING"),
)

__all__ = [
    "ASSIGNMENT_OPERATORS",
    "EOF",
    "KEYWORDS",
    "LEXICAL_RULES",
    "LITERAL_KINDS",
    "OPERATOR_KINDS",
    "PUNCTUATION",
    "TOKEN_KINDS",
]
