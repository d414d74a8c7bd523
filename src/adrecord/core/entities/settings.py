"""Directory settings entities."""

from dataclasses import dataclass, field
from typing import Any

from adrecord.core.entities.cache_config import CacheConfig


@dataclass(frozen=True)
class ServerSettings:
    """Connection settings for the directory server."""

    host: str
    port: int = 389
    use_ssl: bool = False
    username: str | None = None
    password: str | None = None
    connect_timeout: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerSettings":
        """Build server settings from a ``server`` config block.

        Credentials may be given flat or nested under ``auth``.
        """
        auth = data.get("auth") or {}
        return cls(
            host=data["host"],
            port=int(data.get("port", 389)),
            use_ssl=bool(data.get("use_ssl", False)),
            username=auth.get("username", data.get("username")),
            password=auth.get("password", data.get("password")),
            connect_timeout=data.get("connect_timeout"),
        )


@dataclass
class DirectorySettings:
    """Settings consumed by a Directory at setup.

    Example config:
        {
            "server": {
                "host": "ad-server.example.org",
                "port": 389,
                "base": "dc=example,dc=org",
                "auth": {"username": "bind@example.org", "password": "..."},
            },
            "attributes": {"user": ["department", "title"]},
            "cache": {"timeout": 300, "check_interval": 900},
        }
    """

    server: ServerSettings | None = None
    base: str | None = None
    attributes: dict[str, list[str]] = field(default_factory=dict)
    cache: CacheConfig = field(default_factory=CacheConfig)

    def attributes_for(self, type_tag: str) -> list[str]:
        """Return the extra attributes configured for a record type.

        Args:
            type_tag: The record type tag (case-insensitive).

        Returns:
            The configured attribute names, or an empty list.
        """
        attrs = self.attributes.get(type_tag.lower(), [])
        return list(attrs) if isinstance(attrs, (list, tuple)) else []

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "DirectorySettings":
        """Build settings from a plain configuration mapping.

        Attribute entries that are not lists are ignored.
        """
        data = data or {}
        server_data = data.get("server") or {}

        attributes: dict[str, list[str]] = {}
        for type_tag, attrs in (data.get("attributes") or {}).items():
            if isinstance(attrs, (list, tuple)):
                attributes[str(type_tag).lower()] = [str(a) for a in attrs]

        return cls(
            server=ServerSettings.from_dict(server_data) if "host" in server_data else None,
            base=data.get("base", server_data.get("base")),
            attributes=attributes,
            cache=CacheConfig.from_dict(data.get("cache")),
        )
