"""Directory facade wiring connection, codecs, caches and record types."""

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from adrecord.core.entities.filter import Filter
from adrecord.core.entities.settings import DirectorySettings
from adrecord.core.interfaces.connection import IDirectoryConnection
from adrecord.core.services.codec_registry import FieldCodecRegistry, FieldType
from adrecord.core.services.filter_compiler import FilterCompiler
from adrecord.exceptions import DirectoryError, ValidationError
from adrecord.infrastructure.codecs import (
    BinaryCodec,
    DateCodec,
    DnArrayCodec,
    PasswordCodec,
    TimestampCodec,
)
from adrecord.infrastructure.connections.ldap3_connection import Ldap3Connection
from adrecord.records import Computer, Group, Record, RecordManager, User

logger = logging.getLogger(__name__)

RECORD_TYPES: tuple[type[Record], ...] = (Record, User, Group, Computer)


class Directory:
    """Entry point to a directory service.

    A Directory owns the connection, the settings, the field codec
    registry and one RecordManager per record type, each with its own
    cache. Nothing is shared through module-level state, so several
    directories can live side by side.

    Example:
        directory = Directory.from_settings({
            "server": {
                "host": "ad.example.org",
                "base": "dc=example,dc=org",
                "auth": {"username": "bind@example.org", "password": "secret"},
            },
            "attributes": {"user": ["department", "title"]},
            "cache": {"timeout": 300, "check_interval": 900},
        })
        directory.users.enable_cache()

        jo = directory.users.find_first({"sAMAccountName": "jo"})
        sales = directory.groups.query().where({"cn": "Sales*"}).all().call()
    """

    def __init__(
        self,
        connection: IDirectoryConnection,
        settings: DirectorySettings | None = None,
        field_types: Mapping[str, Mapping[str, FieldType]] | None = None,
        record_types: Sequence[type[Record]] = RECORD_TYPES,
        timer: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the directory.

        Args:
            connection: The directory protocol collaborator.
            settings: Search root, per-type attributes and cache options.
            field_types: Codec tags per record type; defaults to
                DEFAULT_FIELD_TYPES.
            record_types: Record classes to register.
            timer: Clock used by the record caches.
        """
        self._connection = connection
        self._settings = settings or DirectorySettings()
        self._timer = timer

        codecs = {
            FieldType.BINARY: BinaryCodec(),
            FieldType.DATE: DateCodec(),
            FieldType.TIMESTAMP: TimestampCodec(),
            FieldType.PASSWORD: PasswordCodec(),
            FieldType.DN_ARRAY: DnArrayCodec(self.resolve, (Record.type_tag,)),
            FieldType.USER_DN_ARRAY: DnArrayCodec(self.resolve, (User.type_tag,)),
            FieldType.GROUP_DN_ARRAY: DnArrayCodec(self.resolve, (Group.type_tag,)),
            FieldType.MEMBER_DN_ARRAY: DnArrayCodec(
                self.resolve, (User.type_tag, Group.type_tag)
            ),
        }
        self._codecs = FieldCodecRegistry(codecs, field_types)
        self._compiler = FilterCompiler(self._codecs)

        self._managers: dict[str, RecordManager[Any]] = {}
        for record_type in record_types:
            self.register(record_type)

    @classmethod
    def from_settings(
        cls,
        settings: DirectorySettings | Mapping[str, Any],
        **kwargs: Any,
    ) -> "Directory":
        """Build a directory talking LDAP through ldap3.

        Args:
            settings: Settings object or plain configuration mapping.
            **kwargs: Passed on to the constructor.

        Raises:
            ValidationError: If no server is configured.
        """
        if not isinstance(settings, DirectorySettings):
            settings = DirectorySettings.from_dict(dict(settings))
        if settings.server is None:
            raise ValidationError("settings need a server with at least a host")
        connection = Ldap3Connection(settings.server, base=settings.base)
        return cls(connection, settings, **kwargs)

    @property
    def connection(self) -> IDirectoryConnection:
        """Return the directory connection."""
        return self._connection

    @property
    def settings(self) -> DirectorySettings:
        """Return the directory settings."""
        return self._settings

    @property
    def codecs(self) -> FieldCodecRegistry:
        """Return the field codec registry."""
        return self._codecs

    @property
    def compiler(self) -> FilterCompiler:
        """Return the filter compiler."""
        return self._compiler

    @property
    def timer(self) -> Callable[[], float]:
        """Return the clock used by the caches."""
        return self._timer

    def register(self, record_type: type[Record]) -> RecordManager[Any]:
        """Register a record class, returning its manager."""
        manager: RecordManager[Any] = RecordManager(record_type, self)
        self._managers[record_type.type_tag] = manager
        return manager

    def manager(self, record_type: type[Record] | str) -> RecordManager[Any]:
        """Return the manager of a record class or type tag.

        Raises:
            ValidationError: If the type is not registered.
        """
        tag = record_type if isinstance(record_type, str) else record_type.type_tag
        try:
            return self._managers[tag]
        except KeyError:
            raise ValidationError(f"Unknown record type: {tag}") from None

    def __getitem__(self, record_type: type[Record] | str) -> RecordManager[Any]:
        return self.manager(record_type)

    @property
    def entries(self) -> RecordManager[Record]:
        """Return the manager for untyped entries."""
        return self.manager(Record)

    @property
    def users(self) -> RecordManager[User]:
        """Return the User manager."""
        return self.manager(User)

    @property
    def groups(self) -> RecordManager[Group]:
        """Return the Group manager."""
        return self.manager(Group)

    @property
    def computers(self) -> RecordManager[Computer]:
        """Return the Computer manager."""
        return self.manager(Computer)

    def resolve(self, type_tags: Sequence[str], dns: list[str]) -> list[Record]:
        """Look DNs up as records of the given types.

        DNs matching none of the types are left out.
        """
        records: list[Record] = []
        for tag in type_tags:
            records.extend(self.manager(tag).find_by_dn(dns))
        return records

    def is_connected(self) -> bool:
        """Return True if the connection is bound, binding if needed."""
        return self._connection.is_connected()

    def authenticate(self, username: str, password: str) -> User | None:
        """Authenticate a user by sAMAccountName and password.

        Returns:
            The User on success, otherwise None.
        """
        if not isinstance(password, str) or not password:
            return None
        if not self.is_connected():
            return None

        search_filter = Filter.eq("sAMAccountName", username) & User.filter
        try:
            entry = self._connection.bind_as(search_filter, password)
        except DirectoryError as e:
            logger.warning("Authentication of %s failed: %s", username, e)
            return None

        return self.users.build(entry) if entry is not None else None

    def enable_cache(
        self,
        timeout: int | None = None,
        check_interval: int | None = None,
    ) -> None:
        """Enable caching for every registered type."""
        for manager in self._managers.values():
            manager.enable_cache(timeout=timeout, check_interval=check_interval)

    def disable_cache(self) -> None:
        """Disable caching for every registered type."""
        for manager in self._managers.values():
            manager.disable_cache()

    def clear_cache(self) -> None:
        """Clear every registered type's cache."""
        for manager in self._managers.values():
            manager.clear_cache()
