from pcoslint.parser.declarations import ParsedFile, parse_source
from pcoslint.parser.errors import ParseError
from pcoslint.parser.lexer import Token, TokenKind, tokenize
from pcoslint.parser.structure import ParseTree, parse_tree

__all__ = [
    "ParseError",
    "ParseTree",
    "ParsedFile",
    "Token",
    "TokenKind",
    "parse_source",
    "parse_tree",
    "tokenize",
]
