"""
Exceptions raised while parsing RLE text.

Every error is terminal for the parse call that raised it.
"""


class RleError(Exception):
    """
    Base exception for all extrle errors.
    """


class ParseError(RleError):
    """
    An error at a known position in the input text.

    `offset` is 0-based; `line` and `column` are 1-based.
    """

    def __init__(self, message, offset=None, line=None, column=None):
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        location = ''
        if line is not None:
            location = f'{line}:{column}: ' if column is not None else f'{line}: '
        super().__init__(f'{location}{message}')


class LexError(ParseError):
    def __init__(self, offset, context, line=None, column=None):
        self.context = context
        super().__init__(f'Unexpected input {context!r}', offset, line, column)


class MissingHeaderError(ParseError):
    pass


class DuplicateHeaderError(ParseError):
    pass


class InvalidHeaderFieldError(ParseError):
    pass


class InvalidStateSymbolError(ParseError):
    def __init__(self, text, offset=None, line=None, column=None, message=None):
        self.text = text
        super().__init__(message or f'Invalid cell state {text!r}', offset, line, column)


class StateOutOfRangeError(InvalidStateSymbolError):
    """
    A valid state symbol whose value exceeds the configured maximum.
    """


class TrailingInputError(ParseError):
    pass


class InvalidMetadataError(ParseError):
    """
    A #CXRLE entry that cannot be interpreted.
    """
