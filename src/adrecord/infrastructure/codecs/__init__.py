"""Attribute codec implementations."""

from adrecord.infrastructure.codecs.binary import BinaryCodec
from adrecord.infrastructure.codecs.date import DateCodec
from adrecord.infrastructure.codecs.dn_array import DnArrayCodec, Resolver
from adrecord.infrastructure.codecs.password import PasswordCodec
from adrecord.infrastructure.codecs.timestamp import TimestampCodec

__all__ = [
    "BinaryCodec",
    "DateCodec",
    "DnArrayCodec",
    "PasswordCodec",
    "Resolver",
    "TimestampCodec",
]
