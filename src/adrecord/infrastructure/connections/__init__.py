"""Directory connection implementations."""

from adrecord.infrastructure.connections.ldap3_connection import Ldap3Connection
from adrecord.infrastructure.connections.memory import InMemoryDirectory, SearchCall

__all__ = [
    "InMemoryDirectory",
    "Ldap3Connection",
    "SearchCall",
]
