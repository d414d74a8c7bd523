"""Finder - runs a single lookup against the cache and the directory."""

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from adrecord.core.entities.filter import Filter
from adrecord.core.entities.raw_entry import RawEntry
from adrecord.core.interfaces.cache_backend import ICacheBackend
from adrecord.exceptions import DirectoryError, ValidationError

if TYPE_CHECKING:
    from adrecord.records.manager import RecordManager

logger = logging.getLogger(__name__)

FIRST = "first"
ALL = "all"
SPECIFIERS = (FIRST, ALL)

IDENTIFIER = "distinguishedname"


class Finder:
    """Orchestrates one search for a record type.

    A lookup first tries the type's cache, which is only eligible when
    the filter mapping has the identifier attribute as its only key.
    On a miss the filter is compiled, the directory is searched, and
    every record built from the results is added to the cache.

    Read failures never raise: an unreachable directory or a failed
    search yields no results.
    """

    def __init__(
        self,
        manager: "RecordManager",
        base: str | None = None,
        filters: Mapping[str, Any] | None = None,
        attributes: Sequence[str] | None = None,
        exact_attributes: bool = False,
    ) -> None:
        """Initialize the finder.

        Args:
            manager: The manager of the record type being searched.
            base: The search root.
            filters: Mapping of attribute name to value or list of values.
            attributes: Extra attributes to request.
            exact_attributes: Request exactly ``attributes``, skipping the
                type defaults and configured attributes.

        Raises:
            ValidationError: If ``filters`` is not a mapping.
        """
        if filters is not None and not isinstance(filters, Mapping):
            raise ValidationError("filters must be a mapping of attribute to value(s)")

        self._manager = manager
        self._base = base
        self._filters: Mapping[str, Any] = filters or {}
        self._attributes = list(attributes or [])
        self._exact_attributes = exact_attributes

    @classmethod
    def first(
        cls,
        manager: "RecordManager",
        base: str | None = None,
        filters: Mapping[str, Any] | None = None,
        attributes: Sequence[str] | None = None,
    ) -> Any | None:
        """Return the first matching record, or None."""
        return cls(manager, base, filters, attributes).perform(FIRST)

    @classmethod
    def all(
        cls,
        manager: "RecordManager",
        base: str | None = None,
        filters: Mapping[str, Any] | None = None,
        attributes: Sequence[str] | None = None,
    ) -> list[Any]:
        """Return every matching record."""
        return cls(manager, base, filters, attributes).perform(ALL)

    @property
    def base(self) -> str | None:
        """Return the search root."""
        return self._base

    @property
    def filters(self) -> Mapping[str, Any]:
        """Return the caller's filter mapping."""
        return self._filters

    def perform(self, specifier: str = FIRST) -> Any:
        """Run the lookup.

        Args:
            specifier: ``"first"`` for a single record (or None),
                ``"all"`` for a list.

        Returns:
            A record or None for ``"first"``; a list for ``"all"``.

        Raises:
            ValidationError: If the specifier is unknown.
        """
        if specifier not in SPECIFIERS:
            raise ValidationError("specifier must be either 'first' or 'all'")

        cached = self.find_cached()
        if cached is not None:
            logger.debug("Cache hit for %s lookup", self._manager.type_tag)
            return self._shape(cached, specifier)

        if self._matches_nothing():
            return self._shape([], specifier)

        search_filter = self.compile_filter()
        attributes = self.compile_attributes()
        logger.debug("Searching %s with %s", self._base, search_filter)

        entries = self.search(search_filter, attributes)
        if specifier == FIRST:
            entries = entries[:1]

        records = [
            self._manager.add_to_cache(self._manager.build(entry)) for entry in entries
        ]
        return self._shape(records, specifier)

    def find_cached(self) -> list[Any] | None:
        """Look the filter mapping up in the type's cache.

        Only a mapping whose single key is the identifier attribute is
        eligible. A list of identifiers short-circuits only when every
        one of them is cached with the expected type.

        Returns:
            The cached records, or None when the cache cannot answer.
        """
        cache: ICacheBackend | None = self._manager.cache
        if cache is None:
            return None

        keys = list(self._filters)
        if len(keys) != 1 or str(keys[0]).lower() != IDENTIFIER:
            return None

        value = self._filters[keys[0]]
        identifiers = list(value) if isinstance(value, (list, tuple)) else [value]
        if not identifiers:
            return None

        records = []
        for identifier in identifiers:
            record = cache.get(self._manager.cache_key(str(identifier)))
            if not isinstance(record, self._manager.record_type):
                return None
            records.append(record)
        return records

    def compile_filter(self) -> Filter:
        """Compile the caller's mapping and AND the type's own filter."""
        compiler = self._manager.compiler
        search_filter = compiler.compile(self._manager.type_tag, self._filters)
        return compiler.finalize(self._manager.record_type.filter, search_filter)

    def compile_attributes(self) -> list[str]:
        """Union the type's default, configured and requested attributes.

        Names are de-duplicated case-insensitively. An empty list asks
        the directory for every attribute.
        """
        if self._exact_attributes:
            candidates = list(self._attributes)
        else:
            candidates = (
                list(self._manager.record_type.default_attributes)
                + self._manager.configured_attributes()
                + self._attributes
            )

        seen: set[str] = set()
        attributes = []
        for name in candidates:
            if name.lower() in seen:
                continue
            seen.add(name.lower())
            attributes.append(name)
        return attributes

    def search(self, search_filter: Filter, attributes: list[str]) -> list[RawEntry]:
        """Search the directory, returning no entries on failure."""
        connection = self._manager.connection
        try:
            if not connection.is_connected():
                logger.warning("Directory not connected, skipping search")
                return []
            return list(connection.search(self._base, search_filter, attributes) or [])
        except DirectoryError as e:
            logger.warning("Search for %s failed: %s", search_filter, e)
            return []

    def _matches_nothing(self) -> bool:
        return any(
            isinstance(value, (list, tuple, set)) and not value
            for value in self._filters.values()
        )

    @staticmethod
    def _shape(records: list[Any], specifier: str) -> Any:
        if specifier == FIRST:
            return records[0] if records else None
        return records
