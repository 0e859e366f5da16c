"""Well-Known Text reader and writer.

Output is always ``KEYWORD (...)`` with an uppercase keyword, one space before
the outer group and ``,`` between coordinates. The reader tokenizes the body,
so whitespace around parentheses and commas is not significant.
"""

from geoformats.core.constants import MIN_POINTS, WKT_KEYWORDS
from geoformats.core.errors import (
    FormatMismatchError, InvalidDimensionError, ParseFailureError, TooFewPointsError, UnrecognizedTypeError,
)
from geoformats.core.models import Geometry, LinearRing, LineString, MultiPolygon, Point, Polygon
from geoformats.enums.geometry_type import GeometryType
from loguru import logger
import re

_HEADER_PATTERN = re.compile(r'^\s*(?P<keyword>[A-Za-z]+)\s*(?P<body>\(.*\))\s*$', re.DOTALL)
_TOKEN_PATTERN = re.compile(r'[(),]|[^\s(),]+')
_NUMBER_PATTERN = re.compile(r'[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?|[-+]?(?:inf|nan)', re.IGNORECASE)

_KEYWORD_TYPES = {keyword: geometry_type for geometry_type, keyword in WKT_KEYWORDS.items()}


# ---------------------------
# Writer
# ---------------------------

def _polygon_body(polygon: Polygon) -> str:
    return '(' + ','.join(ring.to_text() for ring in polygon.rings) + ')'

def _multi_polygon_body(multi_polygon: MultiPolygon) -> str:
    return '(' + ','.join(_polygon_body(polygon) for polygon in multi_polygon.polygons) + ')'

_WRITERS = {
    GeometryType.POINT: lambda point: f'({point.to_text()})',
    GeometryType.LINESTRING: lambda line_string: line_string.to_text(),
    GeometryType.POLYGON: _polygon_body,
    GeometryType.MULTIPOLYGON: _multi_polygon_body,
}

def dumps(geometry: Geometry) -> str:
    geometry_type = geometry.geometry_type
    return f'{WKT_KEYWORDS[geometry_type]} {_WRITERS[geometry_type](geometry)}'


# ---------------------------
# Reader
# ---------------------------

class _Parser:
    """Turns a parenthesized body into nested lists.

    Groups become lists, coordinates become tuples of their number tokens:
    ``((1 2,3 4))`` parses to ``[[('1', '2'), ('3', '4')]]``.
    """

    def __init__(self, text: str):
        self.text = text
        self.tokens = _TOKEN_PATTERN.findall(text)
        self.position = 0

    def parse(self) -> list:
        group = self._group()
        if self.position != len(self.tokens):
            raise ParseFailureError('unexpected text after the closing parenthesis', raw=self.text)
        return group

    def _peek(self) -> str | None:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _expect(self, token: str):
        if self._peek() != token:
            raise ParseFailureError(f'expected {token!r} at token {self.position}', raw=self.text)
        self.position += 1

    def _group(self) -> list:
        self._expect('(')
        items = [self._item()]
        while self._peek() == ',':
            self.position += 1
            items.append(self._item())
        self._expect(')')
        return items

    def _item(self) -> list | tuple:
        if self._peek() == '(':
            return self._group()
        values = []
        while self._peek() not in (None, '(', ')', ','):
            values.append(self.tokens[self.position])
            self.position += 1
        if not values:
            raise ParseFailureError(f'expected a coordinate at token {self.position}', raw=self.text)
        return tuple(values)


def _read_point(item, text: str) -> Point:
    if not isinstance(item, tuple):
        raise ParseFailureError('expected a coordinate, found a nested group', raw=text)
    if len(item) != 2:
        raise InvalidDimensionError(f'a coordinate needs exactly 2 values, got {len(item)}', raw=' '.join(item))
    for value in item:
        if not _NUMBER_PATTERN.fullmatch(value):
            raise ParseFailureError(f'invalid number {value!r}', raw=text)
    return Point(float(item[0]), float(item[1]))

def _read_points(group, text: str) -> list[Point]:
    if not isinstance(group, list):
        raise ParseFailureError('expected a parenthesized point list', raw=text)
    return [_read_point(item, text) for item in group]

def _read_ring(group, text: str) -> LinearRing:
    return LinearRing.from_closed(_read_points(group, text))

def _read_polygon_body(group, text: str) -> Polygon:
    if not isinstance(group, list):
        raise ParseFailureError('expected a parenthesized ring list', raw=text)
    return Polygon([_read_ring(ring, text) for ring in group])

def _read_point_body(group: list, text: str) -> Point:
    if len(group) != 1:
        raise ParseFailureError('a POINT holds exactly one coordinate', raw=text)
    return _read_point(group[0], text)

def _read_line_string_body(group: list, text: str) -> LineString:
    points = _read_points(group, text)
    if len(points) < MIN_POINTS:
        raise TooFewPointsError(f'a LineString needs at least {MIN_POINTS} points, got {len(points)}', raw=text)
    return LineString(points)

def _read_multi_polygon_body(group: list, text: str) -> MultiPolygon:
    return MultiPolygon([_read_polygon_body(polygon, text) for polygon in group])

_READERS = {
    GeometryType.POINT: _read_point_body,
    GeometryType.LINESTRING: _read_line_string_body,
    GeometryType.POLYGON: _read_polygon_body,
    GeometryType.MULTIPOLYGON: _read_multi_polygon_body,
}

def loads(text: str, expected: type | None = None) -> Geometry:
    """Decode a WKT string into a geometry.

    When ``expected`` is a geometry class, a different keyword raises
    :class:`FormatMismatchError` before the body is read.
    """
    if not isinstance(text, str):
        raise TypeError(f'WKT must be a str, got {type(text).__name__}')

    match = _HEADER_PATTERN.match(text)
    if match is None:
        raise ParseFailureError('not a WKT geometry', raw=text)

    keyword = match.group('keyword').upper()
    geometry_type = _KEYWORD_TYPES.get(keyword)
    if geometry_type is None:
        raise UnrecognizedTypeError(f'unsupported WKT geometry {keyword}', raw=text)
    if expected is not None and expected.geometry_type != geometry_type:
        raise FormatMismatchError(f'expected {WKT_KEYWORDS[expected.geometry_type]}, found {keyword}', raw=text)

    body = _Parser(match.group('body')).parse()
    geometry = _READERS[geometry_type](body, text)
    logger.debug('Decoded WKT {}', type(geometry).__name__)
    return geometry
