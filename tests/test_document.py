from pytest import raises
from ranges import Range

from extrle.document import CxrleHeader, Document, EndRow, Header, MetadataLine, Run, interpret_metadata
from extrle.errors import InvalidMetadataError
from extrle.extent import Point2D, RectangleExtent


def make_document(*body, header=Header(3, 3), metadata=()):
    return Document(header, metadata=metadata, body=body, terminated=True)


def test_header_str():
    assert str(Header(3, -2, 'B3/S23')) == 'x = 3, y = -2, rule = B3/S23'
    assert str(Header(0, 0)) == 'x = 0, y = 0'


def test_metadata_line_str():
    assert str(MetadataLine((('Pos', '1,2'), ('Gen', '3')))) == '#CXRLE Pos=1,2 Gen=3'


def test_rows():
    document = make_document(Run(1, 3), EndRow(), Run(0, 2), Run(1), EndRow(2), Run(5))
    assert document.rows() == [[1, 1, 1], [0, 0, 1], [], [5]]
    assert make_document().rows() == [[]]
    assert make_document(Run(1), EndRow()).rows() == [[1], []]


def test_size_ignores_trailing_empty_rows():
    assert make_document(Run(1), EndRow(4)).size() == (3, 3)
    assert make_document(Run(1, 5), EndRow(4), Run(1), header=Header(-1, -1)).size() == (5, 5)
    assert make_document(header=Header(-2, -7)).size() == (0, 0)


def test_interpret_metadata():
    metadata = (
        MetadataLine((('Pos', '-3,4'),)),
        MetadataLine((('Gen', '12'), ('Pos', '5,6'), ('Comment', 'x'))),
    )
    assert interpret_metadata(metadata) == CxrleHeader(Point2D(5, 6), 12)
    assert interpret_metadata(()) == CxrleHeader()
    with raises(InvalidMetadataError):
        interpret_metadata(metadata, strict=True)
    with raises(InvalidMetadataError):
        interpret_metadata((MetadataLine((('Comment', 'x'),)),), strict=True)
    for bad in ('1', '1,2,3', 'a,b', ''):
        with raises(InvalidMetadataError):
            interpret_metadata((MetadataLine((('Pos', bad),)),))
    with raises(InvalidMetadataError):
        interpret_metadata((MetadataLine((('Gen', 'soon'),)),))


def test_extent():
    document = make_document(Run(1, 4), metadata=(MetadataLine((('Pos', '10,-15'),)),))
    assert document.extent() == RectangleExtent(Range(10, 14), Range(-15, -12))
    assert make_document(Run(1)).extent().origin == Point2D(0, 0)


def test_size_does_not_expand_runs():
    assert make_document(EndRow(5_000_000), header=Header(0, 0)).size() == (0, 0)
    assert make_document(EndRow(5_000_000), Run(1), header=Header(0, 0)).size() == (1, 5_000_001)
    assert make_document(Run(0, 10 ** 12), header=Header(0, 0)).size() == (10 ** 12, 1)


def test_cxrle_integers_are_plain_ascii():
    assert interpret_metadata((MetadataLine((('Pos', '+3,-04'), ('Gen', '+5'))),)) == CxrleHeader(Point2D(3, -4), 5)
    for bad in ('1_0,2', '٢,1', ' 1,2', '1,2 ', '0x1,2'):
        with raises(InvalidMetadataError):
            interpret_metadata((MetadataLine((('Pos', bad),)),))
    for bad in ('1_000', '٥', '5\n'):
        with raises(InvalidMetadataError):
            interpret_metadata((MetadataLine((('Gen', bad),)),))
