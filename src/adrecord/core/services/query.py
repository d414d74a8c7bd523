"""Chainable query builder."""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from adrecord.core.services.finder import ALL, FIRST, SPECIFIERS, Finder
from adrecord.exceptions import ValidationError

if TYPE_CHECKING:
    from adrecord.records.manager import RecordManager


class Query:
    """Builds a lookup step by step before running it.

    Example:
        users = (
            directory.users.query()
            .where({"department": ["Sales", "Marketing"]})
            .includes("title")
            .all()
            .call()
        )
    """

    def __init__(self, manager: "RecordManager") -> None:
        """Initialize a query for one record type.

        The search root defaults to the directory's configured base.
        """
        self._manager = manager
        self._specifier = FIRST
        self._base = manager.settings.base
        self._filters: Mapping[str, Any] | None = None
        self._attributes: list[str] | None = None
        self._exact = False

    @property
    def record_type(self) -> type:
        """Return the record class being queried."""
        return self._manager.record_type

    @property
    def specifier(self) -> str:
        """Return ``"first"`` or ``"all"``."""
        return self._specifier

    @property
    def base(self) -> str | None:
        """Return the search root."""
        return self._base

    @property
    def filters(self) -> Mapping[str, Any] | None:
        """Return the filter mapping."""
        return self._filters

    @property
    def attributes(self) -> list[str] | None:
        """Return the requested attributes."""
        return self._attributes

    def in_(self, base: str) -> "Query":
        """Restrict the search to a subtree.

        Raises:
            ValidationError: If ``base`` is not a non-empty string.
        """
        if not isinstance(base, str) or not base:
            raise ValidationError("base needs to be a non-empty DN string")
        self._base = base
        return self

    def for_(self, specifier: str) -> "Query":
        """Choose between a single record and all records.

        Raises:
            ValidationError: If the specifier is not ``"first"`` or ``"all"``.
        """
        if specifier not in SPECIFIERS:
            raise ValidationError("specifier needs to be either 'first' or 'all'")
        self._specifier = specifier
        return self

    def first(self) -> "Query":
        """Shortcut for ``for_("first")``."""
        return self.for_(FIRST)

    def all(self) -> "Query":
        """Shortcut for ``for_("all")``."""
        return self.for_(ALL)

    def where(self, filters: Mapping[str, Any]) -> "Query":
        """Set the attribute-match mapping.

        Raises:
            ValidationError: If ``filters`` is not a mapping.
        """
        if not isinstance(filters, Mapping):
            raise ValidationError("where argument needs to be a mapping")
        self._filters = filters
        return self

    def includes(self, *attributes: Any) -> "Query":
        """Request attributes on top of the type's defaults.

        Accepts names as arguments or as a single list.

        Raises:
            ValidationError: If any name is not a string.
        """
        self._attributes = _attribute_list(attributes)
        self._exact = False
        return self

    def only(self, *attributes: Any) -> "Query":
        """Request exactly these attributes, ignoring the defaults.

        Raises:
            ValidationError: If any name is not a string.
        """
        self._attributes = _attribute_list(attributes)
        self._exact = True
        return self

    def call(self, callback: Callable[[Any], Any] | None = None) -> Any:
        """Run the query.

        Args:
            callback: Optional callable receiving the results; when
                given, None is returned.

        Returns:
            A record or None for ``"first"``; a list for ``"all"``.
        """
        finder = Finder(
            self._manager,
            base=self._base,
            filters=self._filters,
            attributes=self._attributes,
            exact_attributes=self._exact,
        )
        results = finder.perform(self._specifier)

        if callback is None:
            return results

        callback(results)
        return None

    def __str__(self) -> str:
        return "%s [%s] filters: %d attributes: %d (%s)" % (
            self._manager.type_tag,
            self._specifier,
            len(self._filters or {}),
            len(self._attributes or []),
            self._base,
        )

    def __repr__(self) -> str:
        return f"<Query {self}>"


def _attribute_list(attributes: tuple[Any, ...]) -> list[str]:
    if len(attributes) == 1 and isinstance(attributes[0], (list, tuple)):
        attributes = tuple(attributes[0])
    for name in attributes:
        if not isinstance(name, str):
            raise ValidationError(f"attribute names must be strings, got {name!r}")
    return list(attributes)
