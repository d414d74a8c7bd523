"""Core interfaces (Protocol classes) for adrecord."""

from adrecord.core.interfaces.cache_backend import ICacheBackend
from adrecord.core.interfaces.codec import IFieldCodec
from adrecord.core.interfaces.connection import (
    MODIFY_ADD,
    MODIFY_DELETE,
    MODIFY_REPLACE,
    IDirectoryConnection,
    ModifyOperation,
)

__all__ = [
    "ICacheBackend",
    "IDirectoryConnection",
    "IFieldCodec",
    "ModifyOperation",
    "MODIFY_ADD",
    "MODIFY_DELETE",
    "MODIFY_REPLACE",
]
