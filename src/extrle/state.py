from enum import IntEnum

from .errors import InvalidStateSymbolError


MAX_STATE = 255

# Two-letter symbols start with one of these; the second letter picks one of
# 24 states within the block.
PAIR_PREFIXES = 'pqrstuvwxy'
_SINGLE = {'b': 0, '.': 0, 'o': 1}
_SINGLE.update({chr(ord('A') + i): i + 1 for i in range(24)})


class State(IntEnum):
    """
    The two states of a boolean automaton, as written in RLE.
    """

    DEAD = 0
    ALIVE = 1

    def __str__(self):
        return 'bo'[self]

    def __repr__(self):
        return f"{self.__class__.__name__}({self})"

    @classmethod
    def from_str(cls, s):
        if s not in ('b', 'o'):
            raise InvalidStateSymbolError(s, message=f'{s!r} is not a two-state symbol')
        return cls('bo'.index(s))


def _pair_value(first, second):
    if len(second) != 1 or not 'A' <= second <= 'X':
        return None
    value = 25 + (ord(first) - ord('p')) * 24 + (ord(second) - ord('A'))
    return value if value <= MAX_STATE else None


def match_state(text, pos=0):
    """
    Match the longest state symbol starting at `text[pos]`.

    Returns `(value, length)`, or None if no symbol starts there. A defined
    two-letter pair always wins over reading its first letter alone.
    """
    first = text[pos:pos + 1]
    if first and first in PAIR_PREFIXES:
        value = _pair_value(first, text[pos + 1:pos + 2])
        if value is not None:
            return value, 2
    if first in _SINGLE:
        return _SINGLE[first], 1
    return None


def decode_state(symbol):
    match = match_state(symbol)
    if match is None or match[1] != len(symbol):
        raise InvalidStateSymbolError(symbol)
    return match[0]


def encode_state(value, two_state=False):
    """
    Return the canonical RLE symbol for a cell state.

    With `two_state`, only 0 and 1 are accepted and they are written as `b`
    and `o`; otherwise 0 is written as `.`.
    """
    if two_state:
        if value not in (0, 1):
            raise ValueError(f'State {value} is not a two-state value')
        return str(State(value))
    if not 0 <= value <= MAX_STATE:
        raise ValueError(f'State {value} out of range 0..{MAX_STATE}')
    if value == 0:
        return '.'
    if value <= 24:
        return chr(ord('A') + value - 1)
    block, index = divmod(value - 25, 24)
    return PAIR_PREFIXES[block] + chr(ord('A') + index)


STATE_SYMBOLS = tuple(encode_state(n) for n in range(MAX_STATE + 1))
