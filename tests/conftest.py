import pytest

from kite.kite_lexer import Lexer
from kite.kite_parser import Parser


@pytest.fixture
def lexer() -> Lexer:
    return Lexer()


@pytest.fixture
def parser() -> Parser:
    return Parser()
