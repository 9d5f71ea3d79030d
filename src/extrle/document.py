"""
The parsed form of an RLE document.
"""

from dataclasses import dataclass, field
import re

from .errors import InvalidMetadataError
from .extent import Point2D, RectangleExtent


@dataclass(frozen=True)
class Header:
    """
    The `x = ..., y = ..., rule = ...` line.
    """
    x: int
    y: int
    rule: str | None = None

    def __str__(self):
        s = f'x = {self.x}, y = {self.y}'
        if self.rule is not None:
            s += f', rule = {self.rule}'
        return s


@dataclass(frozen=True)
class MetadataLine:
    """
    The key/value pairs of one #CXRLE line, in source order.
    """
    entries: tuple = ()

    def __str__(self):
        return ' '.join(['#CXRLE'] + [f'{key}={value}' for key, value in self.entries])


@dataclass(frozen=True)
class Run:
    state: int
    count: int = 1


@dataclass(frozen=True)
class EndRow:
    count: int = 1


@dataclass(frozen=True)
class CxrleHeader:
    """
    Interpreted #CXRLE metadata: pattern position and generation count.
    """
    pos: Point2D = Point2D(0, 0)
    gen: int = 0


_CXRLE_INT = re.compile(r'[+-]?[0-9]+')


def _parse_cxrle_int(key, value):
    if not _CXRLE_INT.fullmatch(value):
        raise InvalidMetadataError(f'Invalid CXRLE {key} {value!r}')
    return int(value)


def interpret_metadata(metadata, strict=False):
    """
    Fold #CXRLE lines into a `CxrleHeader`; later values override earlier ones.

    With `strict`, more than one #CXRLE line or any key other than Pos and Gen
    raises `InvalidMetadataError`. Malformed Pos/Gen values always raise.
    """
    if strict and len(metadata) > 1:
        raise InvalidMetadataError('Multiple CXRLE lines')
    pos = Point2D(0, 0)
    gen = 0
    for line in metadata:
        for key, value in line.entries:
            if key == 'Pos':
                parts = value.split(',')
                if len(parts) != 2:
                    raise InvalidMetadataError(f'Invalid CXRLE Pos {value!r}')
                pos = Point2D(*(_parse_cxrle_int(key, part) for part in parts))
            elif key == 'Gen':
                gen = _parse_cxrle_int(key, value)
            elif strict:
                raise InvalidMetadataError(f'Unknown CXRLE key {key!r}')
    return CxrleHeader(pos, gen)


@dataclass(frozen=True)
class Document:
    header: Header
    metadata: tuple = ()
    body: tuple = ()
    terminated: bool = False
    comments: tuple = field(default=(), compare=False)

    @property
    def cxrle(self):
        return interpret_metadata(self.metadata)

    def rows(self):
        """
        Expand the body into rows of cell states.

        Each `EndRow` of count n starts n new rows, so skipped rows are empty
        lists. Trailing empty rows are kept.
        """
        rows = [[]]
        for item in self.body:
            if isinstance(item, Run):
                rows[-1].extend([item.state] * item.count)
            else:
                rows.extend([] for _ in range(item.count))
        return rows

    def size(self):
        """
        Return (width, height) covering both the header and the decoded cells.

        Negative header dimensions count as 0. Cells outside the declared
        size are not an error; they enlarge the result.
        """
        x = y = 0
        width = height = 0
        for item in self.body:
            if isinstance(item, Run):
                x += item.count
                width = max(width, x)
                height = y + 1
            else:
                y += item.count
                x = 0
        width = max(width, self.header.x, 0)
        height = max(height, self.header.y, 0)
        return width, height

    def extent(self):
        width, height = self.size()
        return RectangleExtent.at(self.cxrle.pos, width, height)
