"""Byte-order resolution and number formatting shared by the three codecs."""

from geoformats.core.constants import MAX_SAFE_INTEGER
from geoformats.core.settings import get_settings
from geoformats.enums.byte_order import ByteOrder
import numpy as np
import struct


def resolve_byte_order(byte_order: ByteOrder | int | None) -> ByteOrder:
    if byte_order is None:
        return get_settings().byte_order
    return ByteOrder(byte_order)

def format_number(value: float) -> str:
    # Shortest representation that reads back to the same double
    text = repr(float(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text

def json_number(value: float) -> int | float:
    value = float(value)
    if value.is_integer() and abs(value) <= MAX_SAFE_INTEGER:
        return int(value)
    return value

def pack_header(byte_order: ByteOrder, type_code: int) -> bytes:
    return struct.pack(f'{byte_order.prefix}BI', byte_order.value, type_code)

def pack_count(count: int, byte_order: ByteOrder) -> bytes:
    return struct.pack(f'{byte_order.prefix}I', count)

def pack_coordinates(coordinates: list[tuple[float, float]], byte_order: ByteOrder) -> bytes:
    array = np.asarray(coordinates, dtype=f'{byte_order.prefix}f8').reshape(-1, 2)
    return array.tobytes()

def unpack_coordinates(data: bytes, byte_order: ByteOrder) -> list[tuple[float, float]]:
    array = np.frombuffer(data, dtype=f'{byte_order.prefix}f8').reshape(-1, 2)
    return [(x, y) for x, y in array.tolist()]
