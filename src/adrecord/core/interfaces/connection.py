"""Directory connection interface."""

from collections.abc import Sequence
from typing import Any, Protocol

from adrecord.core.entities.filter import Filter
from adrecord.core.entities.raw_entry import RawEntry

# Modify operation kinds
MODIFY_ADD = "add"
MODIFY_REPLACE = "replace"
MODIFY_DELETE = "delete"

ModifyOperation = tuple[str, str, list[Any] | None]


class IDirectoryConnection(Protocol):
    """Contract for the directory protocol collaborator.

    Reads raise DirectoryError on connection or protocol failures.
    Writes report success as a boolean and may raise DirectoryError
    when the connection itself is unusable.
    """

    def search(
        self,
        base: str | None,
        search_filter: Filter,
        attributes: Sequence[str],
    ) -> list[RawEntry]:
        """Search the directory.

        Args:
            base: The search root.
            search_filter: The filter to evaluate.
            attributes: Attributes to return; empty means all of them.

        Returns:
            The matching entries, empty when nothing matches.
        """
        ...

    def add(self, dn: str, attributes: dict[str, Any]) -> bool:
        """Create an entry."""
        ...

    def modify(self, dn: str, operations: Sequence[ModifyOperation]) -> bool:
        """Apply ``(kind, attribute, values)`` operations to an entry."""
        ...

    def delete(self, dn: str) -> bool:
        """Delete an entry."""
        ...

    def is_connected(self) -> bool:
        """Return True if bound, attempting a lazy bind on first use."""
        ...

    def bind_as(self, search_filter: Filter, password: str) -> RawEntry | None:
        """Authenticate as the entry matched by ``search_filter``.

        Returns:
            The matched entry when the bind succeeds, otherwise None.
        """
        ...
