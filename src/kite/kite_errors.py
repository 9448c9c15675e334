"""
Error types raised by the Kite lexer and parser.

Both stages fail fast: the first problem found aborts the whole run and is raised
to the caller unchanged. The errors derive from the builtin ``SyntaxError`` so
callers that only care about "the source is malformed" can catch that.

Classes:
    KiteSyntaxError: Common base carrying the source position.
    LexError: No lexical rule matches the remaining input.
    ParseError: The token stream violates the grammar.
"""


class KiteSyntaxError(SyntaxError):
    """Base class for all Kite front-end errors.

    Attributes:
        line (int): 1-based line of the offending input, 0 when unknown.
        col (int): 1-based column of the offending input, 0 when unknown.
    """

    def __init__(self, message: str, line: int = 0, col: int = 0) -> None:
        if line:
            message = f"{message} at line {line}, col {col}"
        super().__init__(message)
        self.line = line
        self.col = col


class LexError(KiteSyntaxError):
    """Raised when the input at the cursor matches no lexical rule."""

    def __init__(self, char: str, line: int = 0, col: int = 0) -> None:
        super().__init__(f'Unexpected token: "{char}"', line, col)
        self.char = char


class ParseError(KiteSyntaxError):
    """Raised when the lookahead does not fit the production being parsed.

    Attributes:
        expected (str | None): Token kind the production required, if any.
        found (str): Lexeme of the offending token, or ``"end of input"``.
    """

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        found: str = "",
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(message, line, col)
        self.expected = expected
        self.found = found


__all__ = ["KiteSyntaxError", "LexError", "ParseError"]
