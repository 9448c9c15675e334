"""
Lexical analyzer for the Kite programming language.

This module turns raw source text into a lazy, forward-only stream of tokens:

Classes:
    Token: Immutable token with kind, lexeme and source position.
    Lexer: Pulls tokens one at a time from a loaded source string.

Features:
    - Skips whitespace, `//` line comments and `/* */` block comments
    - Matches rules in a fixed priority order (see `kite_constants.LEXICAL_RULES`),
      so `+=` is one COMPLEX_ASSIGN token and `while` is a keyword, not an IDENTIFIER
    - Recognizes:
        * Keywords and identifiers
        * Integer numbers
        * Double- and single-quoted strings (quotes kept in the lexeme)
        * Operators and punctuation

Raises:
    LexError: If the remaining input starts with a character no rule accepts.

Example:
    >>> lexer = Lexer()
    >>> lexer.load("x += 1;")
    >>> lexer.next_token()
    Token(IDENTIFIER, x)

Exports:
    - Token
    - Lexer
    - tokenize
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from kite.kite_constants import EOF, LEXICAL_RULES
from kite.kite_errors import LexError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """A single lexical token of the Kite language.

    Attributes:
        kind (str): Token kind from `kite_constants.TOKEN_KINDS` (e.g. 'NUMBER', 'let', ';').
        lexeme (str): The exact matched source text, quotes included for strings.
        line (int): 1-based line of the first character.
        col (int): 1-based column of the first character.
    """

    kind: str
    lexeme: str
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme})"

    def is_eof(self) -> bool:
        """Returns True for the end-of-input token."""
        return self.kind == EOF


class Lexer:
    """Lexical analyzer for Kite.

    A Lexer owns a source buffer and a cursor into it. `load` may be called any
    number of times; each call starts over on the new source.

    Attributes:
        source (str): The loaded source text.
        cursor (int): Index of the first unconsumed character.
        line (int): Line number at the cursor (1-indexed).
        col (int): Column number at the cursor (1-indexed).
    """

    def __init__(self, source: str = "") -> None:
        self.source = ""
        self.cursor = 0
        self.line = 1
        self.col = 1
        self.load(source)

    def load(self, source: str) -> None:
        """Resets the lexer to the start of `source`."""
        logger.debug("Loading %d characters of source", len(source))
        self.source = source
        self.cursor = 0
        self.line = 1
        self.col = 1

    def has_more(self) -> bool:
        """Returns True while the cursor has not reached the end of the buffer."""
        return self.cursor < len(self.source)

    def is_eof(self) -> bool:
        """Returns True when the cursor sits exactly at the end of the buffer."""
        return self.cursor == len(self.source)

    def advance(self, text: str) -> None:
        """Moves the cursor past `text`, keeping line and column in step.

        Args:
            text (str): The source slice starting at the cursor that was just matched.
        """
        self.cursor += len(text)
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.col = len(text) - text.rfind("\n")
        else:
            self.col += len(text)

    def next_token(self) -> Token:
        """Consumes and returns the next Token.

        Skippable text (whitespace and comments) is consumed silently. Once the
        buffer is exhausted an EOF token with an empty lexeme is returned, and
        keeps being returned on every further call.

        Returns:
            Token: The next token, or the EOF token.

        Raises:
            LexError: If no lexical rule matches at the cursor.
        """
        while self.has_more():
            line, col = self.line, self.col
            for pattern, kind in LEXICAL_RULES:
                match = pattern.match(self.source, self.cursor)
                if match is None:
                    continue
                lexeme = match.group(0)
                self.advance(lexeme)
                if kind is None:
                    break
                return Token(kind, lexeme, line, col)
            else:
                raise LexError(self.source[self.cursor], line, col)

        return Token(EOF, "", self.line, self.col)

    def __iter__(self) -> Iterator[Token]:
        """Yields the remaining tokens, stopping before EOF."""
        while True:
            token = self.next_token()
            if token.is_eof():
                return
            yield token


def tokenize(source: str) -> list[Token]:
    """Returns every token of `source` in order, without the trailing EOF token."""
    return list(Lexer(source))


__all__ = ["Lexer", "Token", "tokenize"]
