import numpy as np

from extrle.document import Document, EndRow, Header, MetadataLine, Run
from extrle.extent import Point2D
from extrle.grid import Grid, LazyGrid


blinker_str = """
bbbb
bobb
bobb
bobb
""".strip()


def test_grid_string_handling():
    grid = Grid.from_str(blinker_str)
    assert grid.shape == (4, 4)
    assert grid.dtype == np.uint8
    assert str(grid) == blinker_str
    assert repr(grid) == 'Grid(shape=(4, 4))'


def test_multi_state_string():
    grid = Grid.from_str('.AyO\npAX')
    assert grid.tolist() == [[0, 1, 255], [25, 24, 0]]
    assert str(grid) == '.AyO\npAX.'


def test_from_document_pads_rows():
    document = Document(Header(4, 3), body=(Run(2), EndRow(2), Run(0, 2), Run(3)))
    assert Grid.from_document(document).tolist() == [
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 3, 0],
    ]


def test_from_document_grows_past_header():
    document = Document(Header(1, 1), body=(Run(1, 3), EndRow(), Run(1)))
    assert Grid.from_document(document).shape == (2, 3)


def test_to_document():
    grid = Grid.from_str('bbb\nbob\nbbb\nbbb\noob\nbbb')
    document = grid.to_document('B3/S23')
    assert document.header == Header(3, 6, 'B3/S23')
    assert document.body == (EndRow(), Run(0), Run(1), EndRow(3), Run(1, 2))
    assert document.terminated
    assert Grid.from_document(document)[:5].tolist() == grid[:5].tolist()


def test_lazy_grid():
    document = Document(
        Header(3, 3),
        metadata=(MetadataLine((('Pos', '10,-15'),)),),
        body=(Run(0), Run(1), EndRow(), Run(0, 2), Run(1), EndRow(), Run(1, 3)),
    )
    lazy_grid = LazyGrid()
    lazy_grid.add_document(document)
    assert lazy_grid[Point2D(11, -15)] == 1
    assert lazy_grid[Point2D(12, -14)] == 1
    assert lazy_grid[Point2D(10, -13)] == 1
    assert lazy_grid[Point2D(10, -15)] == 0
    assert lazy_grid[Point2D(0, 0)] == 0

    lazy_grid.add_grid(Point2D(10, -15), Grid.from_list([[7]]))
    assert lazy_grid[Point2D(10, -15)] == 7
    assert lazy_grid[Point2D(11, -15)] == 1
    first, second = lazy_grid.extents()
    assert first.intersects(second)
    assert second in first


def test_from_document_with_large_row_skip():
    document = Document(Header(0, 0), body=(Run(1, 3), EndRow(10 ** 9)))
    assert Grid.from_document(document).tolist() == [[1, 1, 1]]
