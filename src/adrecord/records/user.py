"""User records."""

import logging
import re
from typing import Any

from adrecord.core.entities.filter import Filter
from adrecord.core.interfaces.connection import MODIFY_REPLACE
from adrecord.exceptions import DirectoryError
from adrecord.records.base import Record
from adrecord.records.member import MemberMixin

logger = logging.getLogger(__name__)

UAC_ACCOUNT_DISABLED = 0x0002
UAC_NORMAL_ACCOUNT = 0x0200

_CN_PATTERN = re.compile(r"CN=(.+?),OU", re.IGNORECASE)


class User(MemberMixin, Record):
    """A user account.

    Computer accounts carry the ``user`` object class too, so they are
    excluded by the type's filter.
    """

    type_tag = "User"
    abstract = False
    filter = Filter.eq("objectClass", "user") & ~Filter.eq("objectClass", "computer")
    required_attributes = {"objectClass": ["top", "organizationalPerson", "person", "user"]}
    default_attributes = (
        "userAccountControl",
        "lockoutTime",
        "directReports",
        "manager",
        "memberOf",
        "sAMAccountName",
        "mail",
        "givenName",
        "sn",
        "displayName",
    )

    @staticmethod
    def parse_cn(dn: str) -> str | None:
        """Extract the common name from a ``CN=...,OU=...`` DN."""
        match = _CN_PATTERN.search(dn)
        return match.group(1) if match else None

    def get_manager(self) -> "User | None":
        """Return the User named in the manager attribute, if any."""
        dns = self.raw("manager")
        if not dns:
            return None
        return self._manager.find_first({"distinguishedName": dns[0]})

    def direct_reports(self) -> list["User"]:
        """Return the Users that have this user as their manager."""
        dns = self.raw("directreports")
        if not dns:
            return []
        return self._manager.find_by_dn(dns)

    @property
    def is_locked(self) -> bool:
        """Return True if the account is locked out."""
        lockout = self.get("lockouttime")
        return bool(lockout) and _as_int(lockout) != 0

    @property
    def is_disabled(self) -> bool:
        """Return True if the account is disabled."""
        return _as_int(self.get("useraccountcontrol")) & UAC_ACCOUNT_DISABLED != 0

    @property
    def can_login(self) -> bool:
        """Return True if the account is neither disabled nor locked."""
        return not self.is_disabled and not self.is_locked

    def authenticate(self, password: str) -> bool:
        """Check a password by binding as this user.

        Fails for a wrong password, but also for a locked or disabled
        account; see ``is_locked`` and ``is_disabled``.
        """
        if not password or not self.samaccountname:
            return False

        search_filter = Filter.eq("sAMAccountName", str(self.samaccountname))
        try:
            return self._manager.connection.bind_as(search_filter, password) is not None
        except DirectoryError as e:
            logger.warning("Authentication of %s failed: %s", self.samaccountname, e)
            return False

    def change_password(self, new_password: str, force_change: bool = False) -> bool:
        """Set a new password and unlock the account.

        The change goes over the directory's own connection. The server
        only accepts it over an encrypted connection with a privileged
        bind, so configure ``ServerSettings.use_ssl`` (port 636) for a
        directory that changes passwords. A warning is logged when the
        configured server does not use SSL.

        Args:
            new_password: The plaintext password.
            force_change: Expire the password so it must be changed at
                the next logon.

        Returns:
            True if the directory accepted the change.
        """
        server = self._manager.settings.server
        if server is not None and not server.use_ssl:
            logger.warning(
                "Changing the password of %s without SSL; %s:%s will likely refuse it",
                self.dn,
                server.host,
                server.port,
            )

        password = self._manager.codecs.encode(self.type_tag, "unicodePwd", new_password)
        return self._modify([
            (MODIFY_REPLACE, "lockoutTime", ["0"]),
            (MODIFY_REPLACE, "unicodePwd", [password]),
            (MODIFY_REPLACE, "userAccountControl", [str(UAC_NORMAL_ACCOUNT)]),
            (MODIFY_REPLACE, "pwdLastSet", ["0" if force_change else "-1"]),
        ])

    def unlock(self) -> bool:
        """Clear a lockout."""
        return self._modify([(MODIFY_REPLACE, "lockoutTime", ["0"])])

    def _sort_key(self) -> tuple[str, ...]:
        return tuple(
            str(self.get(name) or "")
            for name in ("displayname", "sn", "givenname", "samaccountname")
        )

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return f"{self.get('displayname')} ({self.get('samaccountname')})"


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0
