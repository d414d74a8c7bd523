"""Codecs for attributes holding references to other entries."""

from collections.abc import Callable, Sequence
from typing import Any

# Resolves distinguished names into records of the given type tags
Resolver = Callable[[Sequence[str], list[str]], list[Any]]


class DnArrayCodec:
    """Codec for DN-valued attributes such as memberOf and member.

    Encoding maps records (or plain DN strings) to their DNs. Decoding
    looks the DNs up through ``resolver``, restricted to ``type_tags``;
    DNs that do not resolve to an entry of those types are dropped.
    """

    binary = False

    def __init__(self, resolver: Resolver, type_tags: Sequence[str]) -> None:
        """Initialize the codec.

        Args:
            resolver: Callable looking up ``(type_tags, dns)``.
            type_tags: Record types the referenced entries may have.
        """
        self._resolver = resolver
        self._type_tags = tuple(type_tags)

    @property
    def type_tags(self) -> tuple[str, ...]:
        """Return the record types this codec resolves to."""
        return self._type_tags

    def encode(self, value: Any) -> list[str]:
        """Map records or DN strings to a list of DNs."""
        return [_dn_of(item) for item in _as_list(value)]

    def decode(self, value: Any) -> list[Any]:
        """Resolve a list of DNs into records."""
        dns = [_text(item) for item in _as_list(value)]
        dns = [dn for dn in dns if dn]
        if not dns:
            return []
        return self._resolver(self._type_tags, dns)


def _as_list(value: Any) -> list[Any]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _dn_of(item: Any) -> str:
    dn = getattr(item, "dn", item)
    return _text(dn)


def _text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)
