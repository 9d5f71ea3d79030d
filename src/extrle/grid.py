from itertools import groupby

import numpy as np

from .document import Document, EndRow, Header, Run
from .extent import Point2D, RectangleExtent
from .state import STATE_SYMBOLS, State, match_state


def _row_runs(row):
    runs = [Run(int(state), len(list(group))) for state, group in groupby(row)]
    if runs and runs[-1].state == 0:
        runs.pop()
    return runs


class Grid(np.ndarray):
    """
    A 2D array of cell states indexed as grid[y, x].
    """

    @classmethod
    def from_list(cls, l):
        return np.asarray(l, dtype=np.uint8).view(cls)

    def __repr__(self):
        return f"{self.__class__.__name__}(shape={self.shape})"

    def __str__(self):
        if self.ndim != 2:
            return super().__str__()
        two_state = bool(np.all(self <= 1))
        symbols = [str(State(n)) for n in (0, 1)] if two_state else STATE_SYMBOLS
        return '\n'.join(''.join(symbols[state] for state in row) for row in self)

    @classmethod
    def from_str(cls, s):
        """
        Build a grid from lines of state symbols, one line per row.
        """
        rows = []
        for line in s.strip().splitlines():
            line = line.strip()
            row = []
            pos = 0
            while pos < len(line):
                match = match_state(line, pos)
                if match is None:
                    raise ValueError(f'Invalid character: {line[pos]}')
                row.append(match[0])
                pos += match[1]
            rows.append(row)
        width = max((len(row) for row in rows), default=0)
        grid = cls.dead(width, len(rows))
        for y, row in enumerate(rows):
            grid[y, :len(row)] = row
        return grid

    @classmethod
    def dead(cls, width, height):
        return np.zeros((height, width), dtype=np.uint8).view(cls)

    @classmethod
    def from_document(cls, document: Document):
        """
        Materialise a parsed document. Cells beyond the declared header size
        enlarge the grid rather than being rejected.
        """
        width, height = document.size()
        grid = cls.dead(width, height)
        x = y = 0
        for item in document.body:
            if isinstance(item, Run):
                grid[y, x:x+item.count] = item.state
                x += item.count
            else:
                y += item.count
                x = 0
        return grid

    def to_document(self, rule=None):
        """
        Run-length encode this grid. Trailing dead cells of each row and
        trailing empty rows are omitted; consecutive row ends are merged.
        """
        assert self.ndim == 2
        rows = [_row_runs(row) for row in self]
        while rows and not rows[-1]:
            rows.pop()
        body = []
        for y, runs in enumerate(rows):
            if y > 0:
                if body and isinstance(body[-1], EndRow):
                    body[-1] = EndRow(body[-1].count + 1)
                else:
                    body.append(EndRow())
            body.extend(runs)
        (height, width) = self.shape
        return Document(Header(width, height, rule), body=tuple(body), terminated=True)


class LazyGrid:
    """
    Several grids placed on the infinite plane, looked up by point.
    Where grids overlap, the most recently added non-zero cell wins.
    """

    def __init__(self, default=0):
        self.default = default
        self._grids = []

    def add_grid(self, offset: Point2D, grid: Grid):
        assert isinstance(grid, Grid)
        assert isinstance(offset, Point2D)
        extent = RectangleExtent.at(offset, grid.shape[1], grid.shape[0])
        self._grids.append((extent, grid))

    def add_document(self, document: Document):
        """
        Place a parsed document at its #CXRLE position.
        """
        self.add_grid(document.cxrle.pos, Grid.from_document(document))

    def extents(self):
        return [extent for extent, _ in self._grids]

    def __getitem__(self, point: Point2D):
        for extent, grid in reversed(self._grids):
            if point in extent:
                state = grid[point.y - extent.y_range.start, point.x - extent.x_range.start]
                if state:
                    return int(state)
        return self.default
