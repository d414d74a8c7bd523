"""Cache entry entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Holds a cached record together with the time (whole seconds)
    at which it was stored.
    """

    stored_at: int
    value: Any

    def age(self, now: int) -> int:
        """Return the number of seconds since the entry was stored."""
        return now - self.stored_at

    def is_expired(self, now: int, timeout: int) -> bool:
        """Check if the entry outlived the timeout.

        An entry is still valid at exactly ``timeout`` seconds of age;
        it expires once its age exceeds the timeout.

        Args:
            now: The current time in whole seconds.
            timeout: Time-to-live in seconds.

        Returns:
            True if the entry has expired, False otherwise.
        """
        return self.age(now) > timeout
