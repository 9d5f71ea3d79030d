from dataclasses import dataclass

from ranges import Range


@dataclass(frozen=True)
class Point2D:
    """
    A cell position. As in RLE, y increases downwards.
    """
    x: int
    y: int


@dataclass
class RectangleExtent:
    """
    A rectangle region of the infinite plane.
    """
    x_range: Range
    y_range: Range

    @classmethod
    def at(cls, origin: Point2D, width, height):
        assert width >= 0 and height >= 0
        return cls(Range(origin.x, origin.x + width), Range(origin.y, origin.y + height))

    @property
    def width(self):
        return self.x_range.end - self.x_range.start

    @property
    def height(self):
        return self.y_range.end - self.y_range.start

    @property
    def origin(self):
        return Point2D(self.x_range.start, self.y_range.start)

    def __contains__(self, other):
        if isinstance(other, Point2D):
            return other.x in self.x_range and other.y in self.y_range
        return other.x_range in self.x_range and other.y_range in self.y_range

    def intersects(self, other):
        return bool(self.x_range.intersection(other.x_range) and self.y_range.intersection(other.y_range))
