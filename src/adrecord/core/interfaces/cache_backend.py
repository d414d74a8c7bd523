"""Cache backend interface."""

from collections.abc import Callable
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class ICacheBackend(Protocol):
    """Contract for record caches.

    Caches are synchronous and assume a single logical owner; callers
    sharing a cache between threads must serialize access themselves.
    """

    def get(self, key: str, callback: Callable[[Any], Any] | None = None) -> Any | None:
        """Retrieve a cached value by key.

        Args:
            key: The cache key to retrieve.
            callback: Optional callable invoked with the value (or None
                on a miss). When given, ``get`` returns None.

        Returns:
            The cached value, or None if not found or expired.
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value, unless writes are paused.

        Args:
            key: The cache key.
            value: The value to store.
        """
        ...

    def remove(self, key: str) -> None:
        """Delete a cached value if present."""
        ...

    def clear(self) -> None:
        """Clear all cached values."""
        ...

    def pause_for(self, body: Callable[[], T]) -> T:
        """Run ``body`` with cache writes suppressed.

        Args:
            body: The callable to run.

        Returns:
            Whatever ``body`` returns.
        """
        ...
