"""
Parser for the Golly Extended RLE (.rle) format.

http://golly.sourceforge.net/Help/formats.html#rle
"""

import logging

from ..config import DEFAULT_CONFIG
from ..document import Document, EndRow, Header, MetadataLine, Run, interpret_metadata
from ..errors import (
    DuplicateHeaderError,
    InvalidHeaderFieldError,
    InvalidMetadataError,
    MissingHeaderError,
    ParseError,
    StateOutOfRangeError,
    TrailingInputError,
)
from ..state import encode_state
from .lexer import TokenKind, tokenize


logger = logging.getLogger(__name__)

_NOTES = (TokenKind.COMMENT, TokenKind.CXRLE)
_HEADER_KINDS = (TokenKind.KEYWORD, TokenKind.EQUALS, TokenKind.COMMA, TokenKind.INTEGER, TokenKind.RULE)


def _location(token):
    return dict(offset=token.offset, line=token.line, column=token.column)


class Parser:
    """
    Recursive-descent parser over the token stream, with one token of
    lookahead:

        notes* header notes* (item notes*)* ['!'] notes*
    """

    def __init__(self, source, config=None):
        self._source = source
        self._config = config or DEFAULT_CONFIG
        self._tokens = tokenize(source)
        self._next = None
        self._metadata = []
        self._comments = []
        self._advance()

    def _advance(self):
        token = self._next
        self._next = next(self._tokens, None)
        return token

    def _here(self):
        if self._next is not None:
            return _location(self._next)
        source = self._source
        line_start = source.rfind('\n') + 1
        return dict(offset=len(source), line=source.count('\n') + 1, column=len(source) - line_start + 1)

    def parse(self):
        self._skip_notes()
        if self._next is None or self._next.kind != TokenKind.KEYWORD:
            raise MissingHeaderError('Missing RLE header', **self._here())
        header = self._parse_header()

        body = []
        terminated = False
        while True:
            self._skip_notes()
            token = self._next
            if token is None:
                break
            if token.kind == TokenKind.KEYWORD:
                raise DuplicateHeaderError('Multiple RLE headers', **_location(token))
            if token.kind == TokenKind.END_FILE:
                self._advance()
                terminated = True
                break
            body.append(self._parse_content_item())

        self._skip_notes()
        token = self._next
        if token is not None:
            if token.kind == TokenKind.KEYWORD:
                raise DuplicateHeaderError('Multiple RLE headers', **_location(token))
            raise TrailingInputError(f'Unexpected {token.text!r} after end of pattern', **_location(token))

        logger.debug('Parsed RLE pattern (%s) with %d content items and %d CXRLE lines',
                     header, len(body), len(self._metadata))
        return Document(
            header=header,
            metadata=tuple(self._metadata),
            body=tuple(body),
            terminated=terminated,
            comments=tuple(self._comments),
        )

    def _skip_notes(self):
        while self._next is not None and self._next.kind in _NOTES:
            token = self._advance()
            if token.kind == TokenKind.CXRLE:
                line = MetadataLine(token.value)
                if self._config.strict_cxrle:
                    self._check_cxrle(line, token)
                self._metadata.append(line)
            elif self._config.keep_comments:
                self._comments.append(token.text.rstrip('\r'))

    def _check_cxrle(self, line, token):
        if self._metadata:
            raise InvalidMetadataError('Multiple CXRLE lines', **_location(token))
        try:
            interpret_metadata((line,), strict=True)
        except InvalidMetadataError as e:
            raise InvalidMetadataError(e.message, **_location(token)) from None

    def _expect(self, kind, what, text=None):
        token = self._next
        if token is None or token.kind != kind or (text is not None and token.text != text):
            raise InvalidHeaderFieldError(f'Expected {what} in RLE header', **self._here())
        return self._advance()

    def _parse_header(self):
        first = self._expect(TokenKind.KEYWORD, "'x'", 'x')
        self._expect(TokenKind.EQUALS, "'='")
        x = self._expect(TokenKind.INTEGER, 'an integer').value
        self._expect(TokenKind.COMMA, "','")
        self._expect(TokenKind.KEYWORD, "'y'", 'y')
        self._expect(TokenKind.EQUALS, "'='")
        y = self._expect(TokenKind.INTEGER, 'an integer').value
        rule = None
        if self._next is not None and self._next.kind == TokenKind.COMMA:
            self._advance()
            self._expect(TokenKind.KEYWORD, "'rule'", 'rule')
            self._expect(TokenKind.EQUALS, "'='")
            rule = self._expect(TokenKind.RULE, 'a rule').value
        token = self._next
        if token is not None and token.line == first.line and token.kind in _HEADER_KINDS:
            raise InvalidHeaderFieldError(f'Unexpected {token.text!r} in RLE header', **_location(token))
        return Header(x, y, rule)

    def _parse_content_item(self):
        token = self._advance()
        count = 1
        if token.kind == TokenKind.COUNT:
            count_token = token
            count = token.value
            token = self._next
            if token is None or token.kind not in (TokenKind.END_ROW, TokenKind.STATE):
                raise ParseError(
                    f'Run count {count_token.text} is not followed by a cell state or $',
                    **_location(count_token))
            self._advance()
        if token.kind == TokenKind.END_ROW:
            return EndRow(count)
        if token.kind == TokenKind.STATE:
            max_state = self._config.max_state
            if token.value > max_state:
                raise StateOutOfRangeError(
                    token.text, message=f'Cell state {token.text!r} is out of range 0..{max_state}',
                    **_location(token))
            return Run(token.value, count)
        raise ParseError(f'Unexpected {token.text!r} in pattern', **_location(token))


def parse(s, config=None):
    return Parser(s, config).parse()


def _format_item(item, two_state):
    prefix = str(item.count) if item.count != 1 else ''
    if isinstance(item, EndRow):
        return prefix + '$'
    return prefix + encode_state(item.state, two_state)


def dump(document, line_width=70):
    """
    Write a document as RLE text.

    #CXRLE lines and comments come first (comment lines missing the leading
    `#` get one), then the header, then the body wrapped at `line_width`
    columns without splitting any run. Patterns using
    only states 0 and 1 are written with `b` and `o`.
    """
    lines = [str(line) for line in document.metadata]
    for comment in document.comments:
        for line in comment.splitlines() or ['']:
            lines.append(line if line.startswith('#') else '#' + line)
    lines.append(str(document.header))

    two_state = all(item.state <= 1 for item in document.body if isinstance(item, Run))
    pieces = [_format_item(item, two_state) for item in document.body]
    if document.terminated:
        pieces.append('!')
    line = ''
    for piece in pieces:
        if line and len(line) + len(piece) > line_width:
            lines.append(line)
            line = ''
        line += piece
    if line:
        lines.append(line)
    return '\n'.join(lines) + '\n'
