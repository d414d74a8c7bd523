"""Cache configuration entity."""

from dataclasses import dataclass, replace
from typing import Any

DEFAULT_TIMEOUT = 300
DEFAULT_CHECK_INTERVAL = 900


@dataclass(frozen=True)
class CacheConfig:
    """Cache configuration.

    timeout:
        Seconds before a cached record is considered stale.
    check_interval:
        Minimum number of seconds between two full sweeps of stale
        entries. Sweeps only ever run as a side effect of lookups.
    max_size:
        Optional bound on the number of stored records.
    """

    timeout: int = DEFAULT_TIMEOUT
    check_interval: int = DEFAULT_CHECK_INTERVAL
    max_size: int | None = None

    def merged(
        self,
        timeout: int | None = None,
        check_interval: int | None = None,
    ) -> "CacheConfig":
        """Return a copy with the given options overridden."""
        changes: dict[str, Any] = {}
        if timeout is not None:
            changes["timeout"] = int(timeout)
        if check_interval is not None:
            changes["check_interval"] = int(check_interval)
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "CacheConfig":
        """Build a config from a ``{timeout, check_interval}`` mapping."""
        data = data or {}
        return cls(
            timeout=int(data.get("timeout", DEFAULT_TIMEOUT)),
            check_interval=int(data.get("check_interval", DEFAULT_CHECK_INTERVAL)),
            max_size=data.get("max_size"),
        )
