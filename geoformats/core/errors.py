"""Errors raised while building or decoding geometries.

Every error keeps the offending raw input (or the fragment of it that failed)
on ``raw`` so callers can report it.
"""

from typing import Any


class GeometryError(ValueError):
    def __init__(self, message: str, raw: Any = None):
        self.raw = raw
        if raw is not None:
            message = f'{message}: {_shorten(raw)}'
        super().__init__(message)


class FormatMismatchError(GeometryError):
    """The encoded type code or tag is not the requested geometry."""


class UnrecognizedTypeError(FormatMismatchError):
    """The encoded type code or tag is not any geometry this package knows."""


class TooFewPointsError(GeometryError):
    pass


class InvalidDimensionError(GeometryError):
    pass


class ParseFailureError(GeometryError):
    pass


class TruncatedInputError(GeometryError):
    pass


class UnsupportedFeatureGeometryError(GeometryError):
    pass


class RingNotClosedError(GeometryError):
    pass


class EmptyGeometryError(GeometryError):
    pass


def _shorten(raw: Any, limit: int = 200) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        text = bytes(raw).hex()
    else:
        text = str(raw)
    if len(text) > limit:
        return text[:limit] + '...'
    return text
