import os
from typing import Optional

from meshwire.text_utils import to_snake

ENV = os.environ


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:

    # Prefix used for the first, "official" candidates during package lookup
    PACKAGE_SCOPE = ENV.get("MESHWIRE_PACKAGE_SCOPE", "meshwire")
    LOG_LEVEL = ENV.get("MESHWIRE_LOG_LEVEL", "INFO")

    # Unbounded when unset
    PUBSUB_MAX_SUBSCRIBERS = _optional_int(ENV.get("MESHWIRE_PUBSUB_MAX_SUBSCRIBERS"))
    CACHE_MAX_SIZE = _optional_int(ENV.get("MESHWIRE_CACHE_MAX_SIZE")) or 1024

    @staticmethod
    def package_name_mapper(name: str) -> str:
        """RedisCache -> redis_cache"""
        return to_snake(name)
