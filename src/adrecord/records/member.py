"""Behaviour shared by entries that can belong to groups."""

from typing import Any


class MemberMixin:
    """Group membership checks for users and groups."""

    def is_member_of(self: Any, group: Any) -> bool:
        """Return True if this entry directly belongs to ``group``."""
        if group is None or group.dn is None:
            return False
        return group.dn.lower() in (dn.lower() for dn in self.raw("memberof"))

    def groups(self: Any) -> list[Any]:
        """Return the Group records this entry directly belongs to."""
        dns = self.raw("memberof")
        if not dns:
            return []
        return self._manager.directory.groups.find_by_dn(dns)
