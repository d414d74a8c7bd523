"""Directory connection backed by ldap3."""

import logging
from collections.abc import Sequence
from typing import Any

from ldap3 import (
    ALL_ATTRIBUTES,
    MODIFY_ADD,
    MODIFY_DELETE,
    MODIFY_REPLACE,
    SUBTREE,
    Connection,
    Server,
)
from ldap3.core.exceptions import LDAPException

from adrecord.core.entities.filter import Filter
from adrecord.core.entities.raw_entry import RawEntry
from adrecord.core.entities.settings import ServerSettings
from adrecord.core.interfaces.connection import ModifyOperation
from adrecord.exceptions import DirectoryError

logger = logging.getLogger(__name__)

_MODIFY_KINDS = {
    "add": MODIFY_ADD,
    "replace": MODIFY_REPLACE,
    "delete": MODIFY_DELETE,
}


class Ldap3Connection:
    """Directory protocol collaborator talking LDAP through ldap3.

    The connection binds lazily, on the first call to ``is_connected``
    or to any operation. Timeouts and TLS are left to ldap3.
    """

    def __init__(self, settings: ServerSettings, base: str | None = None) -> None:
        """Initialize the connection.

        Args:
            settings: Host, port and bind credentials.
            base: Default search root, used when a search has none.
        """
        self._settings = settings
        self._base = base or ""
        self._server = Server(
            settings.host,
            port=settings.port,
            use_ssl=settings.use_ssl,
            connect_timeout=settings.connect_timeout,
        )
        self._connection: Connection | None = None

    @property
    def last_error(self) -> str | None:
        """Return ``"code: message"`` for the last operation, if any."""
        if self._connection is None or not self._connection.result:
            return None
        result = self._connection.result
        return f"{result.get('result')}: {result.get('message') or result.get('description')}"

    def is_connected(self) -> bool:
        """Return True if bound, binding on first use."""
        if self._connection is not None and self._connection.bound:
            return True

        try:
            connection = Connection(
                self._server,
                user=self._settings.username,
                password=self._settings.password,
            )
            if not connection.bind():
                logger.warning("Bind to %s failed: %s", self._settings.host, connection.result)
                return False
        except LDAPException as e:
            logger.warning("Could not connect to %s: %s", self._settings.host, e)
            return False

        self._connection = connection
        return True

    def close(self) -> None:
        """Unbind the connection."""
        if self._connection is not None:
            try:
                self._connection.unbind()
            except LDAPException as e:
                logger.debug("Unbind failed: %s", e)
            self._connection = None

    def search(
        self,
        base: str | None,
        search_filter: Filter,
        attributes: Sequence[str],
    ) -> list[RawEntry]:
        """Run a subtree search and return the raw entries.

        Raises:
            DirectoryError: If not connected or the search fails.
        """
        connection = self._bound()
        try:
            connection.search(
                search_base=base or self._base,
                search_filter=str(search_filter),
                search_scope=SUBTREE,
                attributes=list(attributes) or ALL_ATTRIBUTES,
            )
        except LDAPException as e:
            raise DirectoryError(f"Search failed: {e}") from e

        return [
            RawEntry(dn=item["dn"], attributes=dict(item.get("raw_attributes") or {}))
            for item in connection.response or []
            if item.get("type") == "searchResEntry"
        ]

    def add(self, dn: str, attributes: dict[str, Any]) -> bool:
        """Create an entry."""
        connection = self._bound()
        try:
            return bool(connection.add(dn, attributes=attributes))
        except LDAPException as e:
            raise DirectoryError(f"Add of {dn} failed: {e}") from e

    def modify(self, dn: str, operations: Sequence[ModifyOperation]) -> bool:
        """Apply ``(kind, attribute, values)`` operations to an entry."""
        changes: dict[str, list[tuple[str, list[Any]]]] = {}
        for kind, attribute, values in operations:
            changes.setdefault(attribute, []).append((_MODIFY_KINDS[kind], _as_list(values)))

        connection = self._bound()
        try:
            return bool(connection.modify(dn, changes))
        except LDAPException as e:
            raise DirectoryError(f"Modify of {dn} failed: {e}") from e

    def delete(self, dn: str) -> bool:
        """Delete an entry."""
        connection = self._bound()
        try:
            return bool(connection.delete(dn))
        except LDAPException as e:
            raise DirectoryError(f"Delete of {dn} failed: {e}") from e

    def bind_as(self, search_filter: Filter, password: str) -> RawEntry | None:
        """Authenticate as the entry matched by ``search_filter``.

        The bind happens on a separate connection, so the service
        bind is left untouched.
        """
        entries = self.search(self._base, search_filter, [])
        if not entries:
            return None

        user = Connection(self._server, user=entries[0].dn, password=password)
        try:
            return entries[0] if user.bind() else None
        except LDAPException as e:
            logger.debug("Bind as %s failed: %s", entries[0].dn, e)
            return None
        finally:
            user.unbind()

    def _bound(self) -> Connection:
        if not self.is_connected() or self._connection is None:
            raise DirectoryError(f"Not connected to {self._settings.host}")
        return self._connection


def _as_list(values: Any) -> list[Any]:
    if values is None:
        return []
    if isinstance(values, (list, tuple)):
        return list(values)
    return [values]
