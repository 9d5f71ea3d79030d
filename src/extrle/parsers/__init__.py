from .lexer import Lexer, Token, TokenKind, tokenize
from .rle import Parser, dump, parse

__all__ = ['Lexer', 'Parser', 'Token', 'TokenKind', 'dump', 'parse', 'tokenize']
