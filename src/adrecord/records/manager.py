"""Per-type record manager."""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from adrecord.core.entities.filter import Filter
from adrecord.core.entities.raw_entry import RawEntry
from adrecord.core.entities.settings import DirectorySettings
from adrecord.core.interfaces.connection import IDirectoryConnection
from adrecord.core.services.codec_registry import FieldCodecRegistry
from adrecord.core.services.filter_compiler import FilterCompiler
from adrecord.core.services.finder import ALL, FIRST, IDENTIFIER, Finder
from adrecord.core.services.query import Query
from adrecord.infrastructure.backends.memory import TTLCacheBackend
from adrecord.records.base import Record

if TYPE_CHECKING:
    from adrecord.directory import Directory

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)
T = TypeVar("T")


class RecordManager(Generic[R]):
    """Finds, builds, creates and caches records of one type.

    Each manager owns the cache for its record type. Caching is off
    until ``enable_cache`` is called.
    """

    def __init__(self, record_type: type[R], directory: "Directory") -> None:
        """Initialize the manager.

        Args:
            record_type: The record class managed.
            directory: The directory supplying connection, settings and codecs.
        """
        self._record_type = record_type
        self._directory = directory
        self._cache: TTLCacheBackend | None = None

    @property
    def record_type(self) -> type[R]:
        """Return the managed record class."""
        return self._record_type

    @property
    def type_tag(self) -> str:
        """Return the managed record type tag."""
        return self._record_type.type_tag

    @property
    def directory(self) -> "Directory":
        """Return the owning directory."""
        return self._directory

    @property
    def settings(self) -> DirectorySettings:
        """Return the directory settings."""
        return self._directory.settings

    @property
    def connection(self) -> IDirectoryConnection:
        """Return the directory connection."""
        return self._directory.connection

    @property
    def codecs(self) -> FieldCodecRegistry:
        """Return the field codec registry."""
        return self._directory.codecs

    @property
    def compiler(self) -> FilterCompiler:
        """Return the filter compiler."""
        return self._directory.compiler

    def configured_attributes(self) -> list[str]:
        """Return the attributes configured for this type."""
        return self.settings.attributes_for(self.type_tag)

    # Lookups

    def query(self) -> Query:
        """Start a chainable query for this type."""
        return Query(self)

    def find(
        self,
        specifier: str = FIRST,
        filters: Mapping[str, Any] | None = None,
        attributes: Sequence[str] | None = None,
    ) -> Any:
        """Search for records of this type.

        Args:
            specifier: ``"first"`` or ``"all"``.
            filters: Mapping of attribute name to value or list of values.
            attributes: Extra attributes to request.

        Returns:
            A record or None for ``"first"``; a list for ``"all"``.

        Raises:
            ValidationError: If an argument is malformed.
        """
        return (
            self.query()
            .for_(specifier)
            .where(filters if filters is not None else {})
            .includes(list(attributes or []))
            .call()
        )

    def find_first(
        self,
        filters: Mapping[str, Any] | None = None,
        attributes: Sequence[str] | None = None,
    ) -> R | None:
        """Return the first matching record, or None."""
        return self.find(FIRST, filters, attributes)

    def find_all(
        self,
        filters: Mapping[str, Any] | None = None,
        attributes: Sequence[str] | None = None,
    ) -> list[R]:
        """Return every matching record."""
        return self.find(ALL, filters, attributes)

    def find_by_dn(self, dns: str | Sequence[str]) -> list[R]:
        """Return the records of this type with the given DNs."""
        return self.find_all({IDENTIFIER: dns})

    def fetch(self, dn: str, attributes: Sequence[str] | None = None) -> RawEntry | None:
        """Read one entry straight from the directory, bypassing the cache.

        Args:
            dn: The entry's distinguished name.
            attributes: Attributes to request on top of the type's defaults.
        """
        finder = Finder(self, base=self.settings.base, attributes=attributes)
        entries = finder.search(Filter.eq("distinguishedName", dn), finder.compile_attributes())
        return entries[0] if entries else None

    # Record construction

    def build(self, entry: RawEntry) -> R:
        """Wrap a raw entry in a record of this type."""
        return self._record_type(self, entry=entry)

    def new(self, dn: Any, attributes: Mapping[str, Any] | None = None) -> R:
        """Build an unsaved record.

        Args:
            dn: The distinguished name, as a string or Container.
            attributes: Initial attributes.
        """
        return self._record_type(self, dn=str(dn), attributes=attributes)

    def create(self, dn: Any, attributes: Mapping[str, Any] | None = None) -> R | None:
        """Create an entry remotely, adding the type's required attributes.

        Returns:
            The created record, or None if the directory refused it.
        """
        if dn is None or attributes is None:
            return None
        record = self.new(dn, attributes)
        return record if record.save() else None

    # Caching

    @property
    def cache(self) -> TTLCacheBackend | None:
        """Return the cache, or None when caching is disabled."""
        return self._cache

    @property
    def caching(self) -> bool:
        """Return True if caching is enabled."""
        return self._cache is not None

    def enable_cache(
        self,
        timeout: int | None = None,
        check_interval: int | None = None,
    ) -> TTLCacheBackend:
        """Enable caching for lookups by distinguished name.

        Options default to the directory's cache settings. Enabling an
        already enabled cache keeps the existing one.
        """
        if self._cache is None:
            config = self.settings.cache.merged(timeout=timeout, check_interval=check_interval)
            self._cache = TTLCacheBackend(config, timer=self._directory.timer)
            logger.debug("Enabled %s cache (timeout=%ss)", self.type_tag, config.timeout)
        return self._cache

    def disable_cache(self) -> None:
        """Clear and drop the cache."""
        if self._cache is not None:
            self._cache.clear()
        self._cache = None

    def clear_cache(self) -> None:
        """Clear the cache, if any."""
        if self._cache is not None:
            self._cache.clear()

    def uncached(self, body: Callable[[], T]) -> T:
        """Run ``body`` without writing its results to the cache.

        Cache reads still happen. Not reentrant; see
        ``TTLCacheBackend.pause_for``.
        """
        if self._cache is None:
            return body()
        return self._cache.pause_for(body)

    def cache_key(self, dn: str) -> str:
        """Return the cache key for a distinguished name."""
        return dn.lower()

    def add_to_cache(self, record: R) -> R:
        """Cache a record unless caching is off or the type is abstract.

        Returns:
            The record, cached or not.
        """
        if self._cache is not None and not record.abstract and record.dn:
            self._cache.set(self.cache_key(record.dn), record)
        return record

    def forget(self, record: Record) -> None:
        """Drop a record from the cache."""
        if self._cache is not None and record.dn:
            self._cache.remove(self.cache_key(record.dn))

    def find_cached_results(self, filters: Mapping[str, Any]) -> list[R] | None:
        """Answer a DN-only lookup from the cache.

        Returns:
            The cached records, or None when the cache cannot answer.
        """
        return Finder(self, filters=filters).find_cached()

    def __repr__(self) -> str:
        return f"<RecordManager {self.type_tag} caching={self.caching}>"
