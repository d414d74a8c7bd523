"""Core domain layer for adrecord."""

from adrecord.core.entities import (
    NIL_FILTER,
    CacheConfig,
    CacheEntry,
    DirectorySettings,
    Filter,
    RawEntry,
    ServerSettings,
)
from adrecord.core.interfaces import ICacheBackend, IDirectoryConnection, IFieldCodec
from adrecord.core.services import FieldCodecRegistry, FilterCompiler, Finder, Query

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "DirectorySettings",
    "Filter",
    "NIL_FILTER",
    "RawEntry",
    "ServerSettings",
    # Interfaces
    "ICacheBackend",
    "IDirectoryConnection",
    "IFieldCodec",
    # Services
    "FieldCodecRegistry",
    "FilterCompiler",
    "Finder",
    "Query",
]
