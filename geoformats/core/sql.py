from geoformats.core.errors import FormatMismatchError
from geoformats.core.models import Geometry
from geoformats.enums.byte_order import ByteOrder
from geoformats.formats import wkb
from sqlalchemy import LargeBinary
from sqlalchemy.types import TypeDecorator


class WKBGeometry(TypeDecorator):
    """Stores a geometry as WKB in a binary column.

    ``geometry_class`` restricts the column to one kind, e.g.
    ``mapped_column(WKBGeometry(Polygon))``; ``byte_order`` defaults to the
    configured order at write time.
    """

    impl = LargeBinary
    cache_ok = True

    def __init__(self, geometry_class: type | None = None, byte_order: ByteOrder | None = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.geometry_class = geometry_class
        self.byte_order = byte_order

    def process_bind_param(self, value: Geometry | None, dialect) -> bytes | None:
        if value is None:
            return None
        if self.geometry_class is not None and not isinstance(value, self.geometry_class):
            raise FormatMismatchError(
                f'column holds {self.geometry_class.__name__}, got {type(value).__name__}', raw=value,
            )
        return wkb.dumps(value, self.byte_order)

    def process_result_value(self, value: bytes | None, dialect) -> Geometry | None:
        if value is None:
            return None
        return wkb.loads(value, expected=self.geometry_class)
