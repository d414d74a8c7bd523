"""In-memory directory connection implementation."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from adrecord.core.entities.filter import Filter
from adrecord.core.entities.raw_entry import RawEntry
from adrecord.core.interfaces.connection import (
    MODIFY_ADD,
    MODIFY_DELETE,
    MODIFY_REPLACE,
    ModifyOperation,
)
from adrecord.exceptions import DirectoryError

logger = logging.getLogger(__name__)

PASSWORD_ATTRIBUTE = "unicodepwd"


@dataclass(frozen=True)
class SearchCall:
    """A search recorded by InMemoryDirectory."""

    base: str | None
    search_filter: Filter
    attributes: tuple[str, ...]


class InMemoryDirectory:
    """Directory connection keeping entries in process memory.

    Suitable for tests and demos. Filters are evaluated locally with
    ``Filter.matches``; every search is recorded in ``searches``.
    Passwords live in the ``unicodePwd`` attribute, which searches
    never return.
    """

    def __init__(self, connected: bool = True) -> None:
        """Initialize an empty directory.

        Args:
            connected: Whether ``is_connected`` reports a bound session.
        """
        self.connected = connected
        self.fail_searches = False
        self.searches: list[SearchCall] = []
        self._entries: dict[str, tuple[str, dict[str, list[bytes]]]] = {}

    def load(self, dn: str, attributes: Mapping[str, Any], password: str | None = None) -> None:
        """Seed an entry, replacing any existing one with the same DN.

        Args:
            dn: The entry's distinguished name.
            attributes: Attribute values; scalars, lists, text or bytes.
            password: Optional plaintext password for ``bind_as``.
        """
        values = {name.lower(): _to_wire(value) for name, value in attributes.items()}
        values["distinguishedname"] = [dn.encode("utf-8")]
        if password is not None:
            values[PASSWORD_ATTRIBUTE] = [f'"{password}"'.encode("utf-16-le")]
        self._entries[dn.lower()] = (dn, values)

    def __contains__(self, dn: object) -> bool:
        return isinstance(dn, str) and dn.lower() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def attributes_of(self, dn: str) -> dict[str, list[bytes]]:
        """Return a copy of an entry's stored attributes."""
        _, values = self._entries[dn.lower()]
        return {name: list(v) for name, v in values.items()}

    def is_connected(self) -> bool:
        """Return the configured connection state."""
        return self.connected

    def search(
        self,
        base: str | None,
        search_filter: Filter,
        attributes: Sequence[str],
    ) -> list[RawEntry]:
        """Return the entries under ``base`` matching ``search_filter``.

        Raises:
            DirectoryError: If ``fail_searches`` is set.
        """
        self.searches.append(SearchCall(base, search_filter, tuple(attributes)))
        if self.fail_searches:
            raise DirectoryError("Search failed")

        wanted = {name.lower() for name in attributes}
        results = []
        for dn, values in self._entries.values():
            if base and not dn.lower().endswith(base.lower()):
                continue
            if not search_filter.matches(values):
                continue
            selected = {
                name: list(v)
                for name, v in values.items()
                if name != PASSWORD_ATTRIBUTE and (not wanted or name in wanted)
            }
            results.append(RawEntry(dn=dn, attributes=selected))
        return results

    def add(self, dn: str, attributes: dict[str, Any]) -> bool:
        """Create an entry; fails if the DN is taken."""
        if dn.lower() in self._entries:
            return False
        self.load(dn, attributes)
        return True

    def modify(self, dn: str, operations: Sequence[ModifyOperation]) -> bool:
        """Apply ``(kind, attribute, values)`` operations to an entry."""
        if dn.lower() not in self._entries:
            return False

        _, values = self._entries[dn.lower()]
        for kind, attribute, new_values in operations:
            name = attribute.lower()
            wire = _to_wire(new_values)
            if kind == MODIFY_REPLACE:
                values[name] = wire
            elif kind == MODIFY_ADD:
                values.setdefault(name, []).extend(wire)
            elif kind == MODIFY_DELETE:
                if not wire:
                    values.pop(name, None)
                else:
                    values[name] = [v for v in values.get(name, []) if v not in wire]
            else:
                logger.warning("Unknown modify operation %r", kind)
                return False
        return True

    def delete(self, dn: str) -> bool:
        """Delete an entry."""
        return self._entries.pop(dn.lower(), None) is not None

    def bind_as(self, search_filter: Filter, password: str) -> RawEntry | None:
        """Authenticate as the first entry matching ``search_filter``."""
        encoded = f'"{password}"'.encode("utf-16-le")
        for dn, values in self._entries.values():
            if not search_filter.matches(values):
                continue
            if encoded not in values.get(PASSWORD_ATTRIBUTE, []):
                return None
            visible = {name: list(v) for name, v in values.items() if name != PASSWORD_ATTRIBUTE}
            return RawEntry(dn=dn, attributes=visible)
        return None


def _to_wire(value: Any) -> list[bytes]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [item for v in value for item in _to_wire(v)]
    if isinstance(value, bytes):
        return [value]
    if isinstance(value, bool):
        return [str(value).upper().encode("utf-8")]
    return [str(value).encode("utf-8")]
