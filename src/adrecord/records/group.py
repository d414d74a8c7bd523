"""Group records."""

from typing import Any

from adrecord.core.entities.filter import Filter
from adrecord.core.interfaces.connection import MODIFY_ADD, MODIFY_DELETE
from adrecord.records.base import Record
from adrecord.records.member import MemberMixin
from adrecord.records.user import User


class Group(MemberMixin, Record):
    """A security or distribution group."""

    type_tag = "Group"
    abstract = False
    filter = Filter.eq("objectClass", "group")
    required_attributes = {"objectClass": ["top", "group"]}
    default_attributes = ()

    @property
    def has_members(self) -> bool:
        """Return True if the group has any direct members."""
        return bool(self.raw("member"))

    def is_member(self, record: Any) -> bool:
        """Return True if ``record`` directly belongs to this group."""
        if record is None or record.dn is None:
            return False
        return record.dn.lower() in (dn.lower() for dn in self.raw("member"))

    def member_users(self, recursive: bool = False) -> list[User]:
        """Return the Users in this group.

        Args:
            recursive: Also include the Users of nested groups.
        """
        groups = [self] + (self._nested_groups() if recursive else [])
        users: list[User] = []
        for group in groups:
            dns = group.raw("member")
            if dns:
                users.extend(self._manager.directory.users.find_by_dn(dns))
        return _unique(users)

    def member_groups(self, recursive: bool = False) -> list["Group"]:
        """Return the Groups in this group.

        Args:
            recursive: Also include groups nested at any depth.
        """
        if recursive:
            return self._nested_groups()
        dns = self.raw("member")
        if not dns:
            return []
        return self._manager.find_by_dn(dns)

    def add_member(self, member: Record) -> bool:
        """Add a User or Group to this group.

        Returns:
            True if the member was added or already belonged here.
        """
        if not isinstance(member, (User, Group)) or member.dn is None:
            return False
        if self._modify([(MODIFY_ADD, "member", [member.dn])]):
            return True
        return self.is_member(member)

    def remove_member(self, member: Record) -> bool:
        """Remove a User or Group from this group.

        Returns:
            True if the member was removed or did not belong here.
        """
        if not isinstance(member, (User, Group)) or member.dn is None:
            return False
        if self._modify([(MODIFY_DELETE, "member", [member.dn])]):
            return True
        return not self.is_member(member)

    def _nested_groups(self) -> list["Group"]:
        # Nesting may be cyclic
        seen = {self}
        found: list[Group] = []
        pending = self.member_groups()
        while pending:
            group = pending.pop(0)
            if group in seen:
                continue
            seen.add(group)
            found.append(group)
            pending.extend(group.member_groups())
        return found


def _unique(records: list[Any]) -> list[Any]:
    seen: set[Any] = set()
    unique = []
    for record in records:
        if record in seen:
            continue
        seen.add(record)
        unique.append(record)
    return unique
