"""Package configuration loaded from ``GEOFORMATS_*`` environment variables."""

from geoformats.enums.byte_order import ByteOrder
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='GEOFORMATS_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Order used for WKB output when the caller does not pick one
    byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN

    # Reject closed rings whose last point differs from the first
    strict_ring_closure: bool = True

    @field_validator('byte_order', mode='before')
    @classmethod
    def _parse_byte_order(cls, value):
        # Accepts 0/1 as well as names such as "big_endian"
        if isinstance(value, str):
            value = value.strip()
            if value.isdigit():
                return int(value)
            try:
                return ByteOrder[value.upper()]
            except KeyError:
                raise ValueError(f'unknown byte order: {value}') from None
        return value


settings = Settings()


def get_settings() -> Settings:
    return settings
