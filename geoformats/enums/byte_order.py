import enum


class ByteOrder(enum.IntEnum):
    BIG_ENDIAN = 0
    LITTLE_ENDIAN = 1

    @property
    def prefix(self) -> str:
        return '>' if self is ByteOrder.BIG_ENDIAN else '<'
