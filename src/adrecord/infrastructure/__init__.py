"""Infrastructure layer implementations for adrecord."""

from adrecord.infrastructure.backends import TTLCacheBackend
from adrecord.infrastructure.codecs import (
    BinaryCodec,
    DateCodec,
    DnArrayCodec,
    PasswordCodec,
    TimestampCodec,
)
from adrecord.infrastructure.connections import InMemoryDirectory, Ldap3Connection

__all__ = [
    "TTLCacheBackend",
    "BinaryCodec",
    "DateCodec",
    "DnArrayCodec",
    "PasswordCodec",
    "TimestampCodec",
    "InMemoryDirectory",
    "Ldap3Connection",
]
