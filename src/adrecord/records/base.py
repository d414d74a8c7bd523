"""Record base type shared by all directory entry types."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from adrecord.core.entities.filter import NIL_FILTER, Filter
from adrecord.core.entities.raw_entry import RawEntry
from adrecord.core.interfaces.connection import (
    MODIFY_ADD,
    MODIFY_DELETE,
    MODIFY_REPLACE,
    ModifyOperation,
)
from adrecord.core.services.codec_registry import DEFAULT_FIELD_TYPES
from adrecord.exceptions import DirectoryError, UnknownAttributeError, ValidationError

if TYPE_CHECKING:
    from adrecord.records.manager import RecordManager

logger = logging.getLogger(__name__)

# Accessors every record type gets
COMMON_ATTRIBUTES = ("cn", "name", "description", "objectclass", "distinguishedname")


class Record:
    """A typed directory entry.

    A record is either persisted, backed by the raw entry from a
    search plus any pending local changes, or new, backed only by
    pending attributes until ``save`` creates it remotely.

    Attribute values go through the record type's codecs: ``get``
    decodes wire values, ``set`` encodes local values and queues them
    as pending changes. Names are case-insensitive.

    Two records are equal when their distinguished names match
    case-insensitively.

    Subclasses describe their directory schema through the class
    attributes below. ``Record`` itself stands for any entry and is
    never cached.
    """

    type_tag: ClassVar[str] = "Base"
    abstract: ClassVar[bool] = True
    filter: ClassVar[Filter] = NIL_FILTER
    required_attributes: ClassVar[dict[str, list[str]]] = {}
    default_attributes: ClassVar[tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        install_accessors(cls)

    def __init__(
        self,
        manager: "RecordManager",
        entry: RawEntry | None = None,
        dn: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize a record.

        Args:
            manager: The manager of this record's type.
            entry: Raw entry for a persisted record.
            dn: Distinguished name for a new record.
            attributes: Initial pending attributes, encoded on the way in.
        """
        self._manager = manager
        self._entry = entry
        self._dn = dn
        self._pending: dict[str, Any] = {}

        for name, value in (attributes or {}).items():
            self.set(name, value)

    @property
    def dn(self) -> str | None:
        """Return the distinguished name."""
        if self._entry is not None:
            return self._entry.dn
        return self._dn

    @property
    def entry(self) -> RawEntry | None:
        """Return the raw entry backing a persisted record."""
        return self._entry

    @property
    def is_new(self) -> bool:
        """Return True if the entry does not exist in the directory yet."""
        return self._entry is None

    @property
    def changed(self) -> bool:
        """Return True if there are pending changes not yet saved."""
        return bool(self._pending)

    @property
    def pending(self) -> dict[str, Any]:
        """Return a copy of the pending, encoded changes."""
        return dict(self._pending)

    def has(self, name: str) -> bool:
        """Return True if the attribute is pending or on the entry."""
        name = _field_name(name)
        if name in self._pending:
            return True
        return self._entry is not None and self._entry.has(name)

    def get(self, name: str) -> Any:
        """Return the decoded value of an attribute.

        Pending values take precedence over the entry. A single wire
        value is returned as a scalar, several as a list.

        Returns:
            The decoded value, or None if the attribute is absent.

        Raises:
            ValidationError: If the name is not a string.
            CodecError: If the wire value cannot be decoded.
        """
        name = _field_name(name)
        codecs = self._manager.codecs

        if name in self._pending:
            return codecs.decode(self.type_tag, name, self._pending[name])

        if self._entry is None:
            return None

        values = self._entry.values(name)
        if values is None:
            return None

        if not codecs.is_binary(self.type_tag, name):
            values = [_text(v) for v in values]

        if not values:
            return None
        value = values[0] if len(values) == 1 else values
        return codecs.decode(self.type_tag, name, value)

    def raw(self, name: str) -> list[Any]:
        """Return an attribute's wire values as text, skipping codecs."""
        values = self._entry.values(name) if self._entry is not None else None
        return [_text(v) for v in values or []]

    def set(self, name: str, value: Any) -> None:
        """Encode a value and queue it as a pending change."""
        name = _field_name(name)
        self._pending[name] = self._manager.codecs.encode(self.type_tag, name, value)

    def __getitem__(self, name: str) -> Any:
        if not self.has(name):
            raise UnknownAttributeError(name)
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def reload(self, attributes: Iterable[str] | None = None) -> bool:
        """Refresh the entry from the directory.

        The attributes the entry already carries are requested again.

        Args:
            attributes: Further attributes to request.

        Returns:
            True if the entry was found again.
        """
        if self.is_new or self.dn is None:
            return False

        names = self._entry.attribute_names if self._entry is not None else []
        entry = self._manager.fetch(self.dn, names + list(attributes or []))
        if entry is None:
            return False

        self._entry = entry
        return True

    def update_attribute(self, name: str, value: Any) -> bool:
        """Immediately update one attribute remotely."""
        return self.update_attributes({name: value})

    def update_attributes(self, changes: Mapping[str, Any]) -> bool:
        """Immediately update several attributes remotely.

        Values are encoded first. The record is reloaded afterwards.

        Returns:
            True if the update and the reload succeeded.
        """
        encoded = {
            _field_name(name): self._manager.codecs.encode(self.type_tag, name, value)
            for name, value in changes.items()
        }
        return self._write(encoded)

    def save(self) -> bool:
        """Send the pending changes to the directory.

        A new record is created; a persisted one is modified. Pending
        changes are kept when the write fails.

        Returns:
            True on success.
        """
        if self.is_new:
            return self._create()

        if not self._write(self._pending):
            return False

        self._pending = {}
        return True

    def destroy(self) -> bool:
        """Delete the entry from the directory.

        Returns:
            True if the entry was deleted.
        """
        if self.is_new or self.dn is None:
            return False

        dn = self.dn
        try:
            deleted = self._manager.connection.delete(dn)
        except DirectoryError as e:
            logger.warning("Delete of %s failed: %s", dn, e)
            return False

        if not deleted:
            logger.warning("Delete of %s was refused", dn)
            return False

        self._manager.forget(self)
        self._dn = dn
        self._entry = None
        self._pending = {}
        return True

    def modify_operations(self, changes: Mapping[str, Any]) -> list[ModifyOperation]:
        """Turn encoded changes into modify operations.

        An empty value deletes the attribute; otherwise the attribute
        is replaced when the entry has it and added when it does not.
        """
        operations: list[ModifyOperation] = []
        for name, value in changes.items():
            if value is None or (isinstance(value, (str, bytes, list, tuple)) and not value):
                operations.append((MODIFY_DELETE, name, None))
            elif self._entry is not None and self._entry.has(name):
                operations.append((MODIFY_REPLACE, name, _as_list(value)))
            else:
                operations.append((MODIFY_ADD, name, _as_list(value)))
        return operations

    def _write(self, changes: Mapping[str, Any]) -> bool:
        if not changes:
            return True
        return self._modify(self.modify_operations(changes))

    def _modify(self, operations: Sequence[ModifyOperation]) -> bool:
        if self.is_new or self.dn is None:
            return False

        try:
            modified = self._manager.connection.modify(self.dn, operations)
        except DirectoryError as e:
            logger.warning("Modify of %s failed: %s", self.dn, e)
            return False

        if not modified:
            logger.warning("Modify of %s was refused", self.dn)
            return False
        return self.reload(attribute for _, attribute, _ in operations)

    def _create(self) -> bool:
        if self.dn is None:
            raise ValidationError("a new record needs a distinguished name")

        attributes = dict(self._pending)
        for name, values in self.required_attributes.items():
            attributes[_field_name(name)] = list(values)

        try:
            added = self._manager.connection.add(self.dn, attributes)
        except DirectoryError as e:
            logger.warning("Add of %s failed: %s", self.dn, e)
            return False

        if not added:
            logger.warning("Add of %s was refused", self.dn)
            return False

        entry = self._manager.fetch(self.dn)
        if entry is None:
            return False

        self._entry = entry
        self._pending = {}
        self._manager.add_to_cache(self)
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        if self.dn is None or other.dn is None:
            return self is other
        return self.dn.lower() == other.dn.lower()

    def __hash__(self) -> int:
        if self.dn is None:
            return id(self)
        return hash(self.dn.lower())

    def __str__(self) -> str:
        cn = self.get("cn")
        return str(cn) if cn else str(self.dn)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


def install_accessors(cls: type[Record], names: Iterable[str] | None = None) -> None:
    """Add read-only properties for a record type's known attributes.

    Known attributes are those with a default codec, the type's
    default attributes, and COMMON_ATTRIBUTES. Existing class members
    are never shadowed.
    """
    if names is None:
        names = (
            list(COMMON_ATTRIBUTES)
            + list(DEFAULT_FIELD_TYPES.get(cls.type_tag, {}))
            + list(cls.default_attributes)
        )

    for name in names:
        attr = name.lower()
        if hasattr(cls, attr):
            continue
        setattr(cls, attr, _accessor(attr))


def _accessor(name: str) -> property:
    def getter(self: Record) -> Any:
        return self.get(name)

    getter.__name__ = name
    return property(getter, doc=f"Decoded value of ``{name}``.")


def _field_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise ValidationError(f"Invalid field name: {name!r}")
    return name.lower()


def _text(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


install_accessors(Record)
