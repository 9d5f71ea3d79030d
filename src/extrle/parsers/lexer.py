"""
Tokenizer for RLE text.

The lexer is line-aware: `#` starts a note running to the end of the line,
and a line whose first non-blank characters are `x =` is scanned as the
header. Everywhere else it produces content tokens. Blanks and newlines
between tokens are dropped.

Lexer instances are single-use; create one per source string.
"""

from dataclasses import dataclass
from enum import Enum, auto
import logging
import re

from ..errors import InvalidHeaderFieldError, InvalidStateSymbolError, LexError
from ..state import PAIR_PREFIXES, match_state


logger = logging.getLogger(__name__)

_BLANK = ' \t\r'
_HEADER_START = re.compile(r'x[ \t]*=')
_HEADER_INT = re.compile(r'0|-?[1-9][0-9]*')
_HEADER_VALUE = re.compile(r'[^\s,=]+')
_TOKEN = re.compile(r'[^\s=]+')
_WORD = re.compile(r'[A-Za-z_]\w*')
_COUNT = re.compile(r'[1-9][0-9]*')
_CXRLE_ENTRY = re.compile(r'[ \t]*([^\s=]+)[ \t]*=[ \t]*([^\s=]+)')
_HEADER_KEYS = ('x', 'y', 'rule')


class TokenKind(Enum):
    COMMENT = auto()
    CXRLE = auto()
    KEYWORD = auto()
    EQUALS = auto()
    COMMA = auto()
    INTEGER = auto()
    RULE = auto()
    COUNT = auto()
    END_ROW = auto()
    END_FILE = auto()
    STATE = auto()
    TRAILING = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int
    line: int
    column: int
    # COUNT and INTEGER: int; STATE: cell state; CXRLE: ((key, value), ...)
    value: object = None

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"


def _parse_cxrle_entries(rest):
    """
    Parse what follows `#CXRLE` on a line, or return None if it is malformed.
    """
    if rest and rest[0] not in _BLANK:
        return None
    entries = []
    i = 0
    while True:
        m = _CXRLE_ENTRY.match(rest, i)
        if m is None:
            break
        entries.append((m.group(1), m.group(2)))
        i = m.end()
        if i < len(rest) and rest[i] not in _BLANK:
            return None
    if rest[i:].strip():
        return None
    return tuple(entries)


class Lexer:
    __slots__ = ('_source', '_pos', '_line', '_line_offset', '_at_line_start', '_finished')

    def __init__(self, source):
        self._source = source
        self._pos = 0
        self._line = 1
        self._line_offset = 0
        self._at_line_start = True
        self._finished = False

    def tokenize(self):
        source = self._source
        while self._pos < len(source):
            c = source[self._pos]
            if c == '\n':
                self._pos += 1
                self._line += 1
                self._line_offset = self._pos
                self._at_line_start = True
            elif c in _BLANK:
                self._pos += 1
            elif c == '#':
                yield self._scan_note()
            elif self._at_line_start and _HEADER_START.match(source, self._pos):
                self._at_line_start = False
                yield from self._scan_header()
            elif self._finished:
                yield self._scan_trailing()
            else:
                self._at_line_start = False
                yield self._scan_content()

    def _location(self, pos):
        return dict(offset=pos, line=self._line, column=pos - self._line_offset + 1)

    def _token(self, kind, start, value=None):
        return Token(kind, self._source[start:self._pos], value=value, **self._location(start))

    def _end_of_line(self):
        end = self._source.find('\n', self._pos)
        return len(self._source) if end == -1 else end

    def _lex_error(self, pos):
        context = self._source[pos:pos + 10].split('\n', 1)[0]
        return LexError(context=context, **self._location(pos))

    def _scan_note(self):
        start = self._pos
        self._pos = self._end_of_line()
        text = self._source[start:self._pos].rstrip('\r')
        if text.startswith('#CXRLE'):
            entries = _parse_cxrle_entries(text[len('#CXRLE'):])
            if entries is not None:
                return self._token(TokenKind.CXRLE, start, entries)
            logger.debug('Malformed #CXRLE line %d treated as a comment', self._line)
        return self._token(TokenKind.COMMENT, start)

    def _scan_header(self):
        source = self._source
        key = None
        end = self._end_of_line()
        while self._pos < end:
            c = source[self._pos]
            start = self._pos
            if c in _BLANK:
                self._pos += 1
            elif c == ',':
                self._pos += 1
                yield self._token(TokenKind.COMMA, start)
            elif c == '=':
                self._pos += 1
                yield self._token(TokenKind.EQUALS, start)
                while self._pos < end and source[self._pos] in _BLANK:
                    self._pos += 1
                yield self._scan_header_value(key)
                key = None
            else:
                m = _WORD.match(source, self._pos)
                if m is None:
                    raise self._lex_error(self._pos)
                if m.group() not in _HEADER_KEYS:
                    raise InvalidHeaderFieldError(
                        f'Unknown header field {m.group()!r}', **self._location(start))
                key = m.group()
                self._pos = m.end()
                yield self._token(TokenKind.KEYWORD, start)

    def _scan_header_value(self, key):
        start = self._pos
        if key is None:
            raise InvalidHeaderFieldError("'=' without a field name", **self._location(start))
        if key == 'rule':
            m = _TOKEN.match(self._source, start)
            if m is None:
                raise InvalidHeaderFieldError('Missing rule', **self._location(start))
            self._pos = m.end()
            return self._token(TokenKind.RULE, start, m.group())
        m = _HEADER_VALUE.match(self._source, start)
        if m is None:
            raise InvalidHeaderFieldError(f'Missing value for {key}', **self._location(start))
        if not _HEADER_INT.fullmatch(m.group()):
            raise InvalidHeaderFieldError(
                f'Invalid integer {m.group()!r} for {key}', **self._location(start))
        self._pos = m.end()
        return self._token(TokenKind.INTEGER, start, int(m.group()))

    def _scan_content(self):
        source = self._source
        start = self._pos
        c = source[start]
        if c == '$':
            self._pos += 1
            return self._token(TokenKind.END_ROW, start)
        if c == '!':
            self._pos += 1
            self._finished = True
            return self._token(TokenKind.END_FILE, start)
        m = _COUNT.match(source, start)
        if m is not None:
            self._pos = m.end()
            return self._token(TokenKind.COUNT, start, int(m.group()))
        match = match_state(source, start)
        if match is not None:
            value, length = match
            self._pos += length
            return self._token(TokenKind.STATE, start, value)
        if c.isalpha():
            second = source[start + 1:start + 2]
            pair = c in PAIR_PREFIXES and len(second) == 1 and 'A' <= second <= 'X'
            text = source[start:start + 2] if pair else c
            raise InvalidStateSymbolError(text, **self._location(start))
        raise self._lex_error(start)

    def _scan_trailing(self):
        start = self._pos
        self._pos = self._end_of_line()
        return self._token(TokenKind.TRAILING, start)


def tokenize(source):
    return Lexer(source).tokenize()
