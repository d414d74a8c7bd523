"""adrecord - typed, cached access to directory service entries.

Presents entries from a hierarchical directory (such as Active
Directory) as typed records. Attribute values are encoded and decoded
through per-type codecs, lookups by distinguished name are served from
a per-type TTL cache, and declarative attribute matches are compiled
into directory filters.

Example:
    from adrecord import Directory

    directory = Directory.from_settings({
        "server": {
            "host": "ad.example.org",
            "base": "dc=example,dc=org",
            "auth": {"username": "bind@example.org", "password": "secret"},
        },
        "cache": {"timeout": 300, "check_interval": 900},
    })
    directory.users.enable_cache()

    jo = directory.users.find("first", {"sAMAccountName": "jo"})
    for group in jo.groups():
        print(group.cn)

    admins = (
        directory.users.query()
        .where({"department": ["IT", "Security"]})
        .includes("title")
        .all()
        .call()
    )
"""

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
from adrecord.core.services import (
    DEFAULT_FIELD_TYPES,
    FieldCodecRegistry,
    FieldType,
    FilterCompiler,
    Finder,
    Query,
)
from adrecord.directory import Directory
from adrecord.exceptions import (
    AdRecordError,
    CodecError,
    DirectoryError,
    UnknownAttributeError,
    ValidationError,
)
from adrecord.infrastructure import (
    BinaryCodec,
    DateCodec,
    DnArrayCodec,
    InMemoryDirectory,
    Ldap3Connection,
    PasswordCodec,
    TimestampCodec,
    TTLCacheBackend,
)
from adrecord.records import Computer, Container, Group, Record, RecordManager, User

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Entry point
    "Directory",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "DirectorySettings",
    "ServerSettings",
    "Filter",
    "NIL_FILTER",
    "RawEntry",
    # Core interfaces
    "ICacheBackend",
    "IDirectoryConnection",
    "IFieldCodec",
    # Core services
    "DEFAULT_FIELD_TYPES",
    "FieldCodecRegistry",
    "FieldType",
    "FilterCompiler",
    "Finder",
    "Query",
    # Records
    "Record",
    "User",
    "Group",
    "Computer",
    "Container",
    "RecordManager",
    # Infrastructure implementations
    "TTLCacheBackend",
    "BinaryCodec",
    "DateCodec",
    "DnArrayCodec",
    "PasswordCodec",
    "TimestampCodec",
    "InMemoryDirectory",
    "Ldap3Connection",
    # Errors
    "AdRecordError",
    "CodecError",
    "DirectoryError",
    "UnknownAttributeError",
    "ValidationError",
]
