"""Domain entities for adrecord."""

from adrecord.core.entities.cache_config import CacheConfig
from adrecord.core.entities.cache_entry import CacheEntry
from adrecord.core.entities.filter import NIL_FILTER, Filter
from adrecord.core.entities.raw_entry import RawEntry
from adrecord.core.entities.settings import DirectorySettings, ServerSettings

__all__ = [
    "CacheEntry",
    "CacheConfig",
    "DirectorySettings",
    "ServerSettings",
    "Filter",
    "NIL_FILTER",
    "RawEntry",
]
