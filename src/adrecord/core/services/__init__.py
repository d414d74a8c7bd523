"""Domain services for adrecord."""

from adrecord.core.services.codec_registry import (
    DEFAULT_FIELD_TYPES,
    FieldCodecRegistry,
    FieldType,
)
from adrecord.core.services.filter_compiler import FilterCompiler
from adrecord.core.services.finder import ALL, FIRST, Finder
from adrecord.core.services.query import Query

__all__ = [
    "DEFAULT_FIELD_TYPES",
    "FieldCodecRegistry",
    "FieldType",
    "FilterCompiler",
    "Finder",
    "Query",
    "FIRST",
    "ALL",
]
