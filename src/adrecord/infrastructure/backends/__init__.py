"""Cache backend implementations."""

from adrecord.infrastructure.backends.memory import TTLCacheBackend

__all__ = ["TTLCacheBackend"]
