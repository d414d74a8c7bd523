"""Tests for InMemoryDirectory."""

import pytest

from adrecord.core.entities.filter import Filter
from adrecord.core.interfaces.connection import MODIFY_ADD, MODIFY_DELETE, MODIFY_REPLACE
from adrecord.exceptions import DirectoryError
from adrecord.infrastructure.connections.memory import InMemoryDirectory
from tests.conftest import BASE, JO_DN, JO_PASSWORD, OUTSIDE_DN


class TestInMemoryDirectory:
    """Tests for InMemoryDirectory."""

    def test_search_by_filter(self, connection: InMemoryDirectory) -> None:
        """Test that only matching entries are returned."""
        entries = connection.search(BASE, Filter.eq("sAMAccountName", "JO"), [])
        assert [e.dn for e in entries] == [JO_DN]

    def test_search_respects_base(self, connection: InMemoryDirectory) -> None:
        """Test that entries outside the search root are skipped."""
        everyone = connection.search(None, Filter.present("cn"), [])
        under_base = connection.search(BASE, Filter.present("cn"), [])

        assert OUTSIDE_DN in [e.dn for e in everyone]
        assert OUTSIDE_DN not in [e.dn for e in under_base]

    def test_search_selects_attributes(self, connection: InMemoryDirectory) -> None:
        """Test that only requested attributes are returned."""
        (entry,) = connection.search(BASE, Filter.eq("cn", "Jo Smith"), ["mail", "SN"])
        assert sorted(entry.attribute_names) == ["mail", "sn"]

    def test_search_never_returns_passwords(self, connection: InMemoryDirectory) -> None:
        """Test that unicodePwd is hidden from searches."""
        (entry,) = connection.search(BASE, Filter.eq("cn", "Jo Smith"), [])
        assert not entry.has("unicodepwd")

    def test_searches_are_recorded(self, connection: InMemoryDirectory) -> None:
        """Test that every search call is kept for inspection."""
        connection.search(BASE, Filter.present("cn"), ["cn"])
        assert connection.searches[-1].base == BASE
        assert connection.searches[-1].attributes == ("cn",)

    def test_failing_search(self, connection: InMemoryDirectory) -> None:
        """Test that searches can be made to fail."""
        connection.fail_searches = True
        with pytest.raises(DirectoryError):
            connection.search(BASE, Filter.present("cn"), [])

    def test_add(self, connection: InMemoryDirectory) -> None:
        """Test that an entry can be added once."""
        dn = "CN=New,OU=Users,DC=example,DC=org"
        assert connection.add(dn, {"cn": "New"}) is True
        assert connection.add(dn, {"cn": "New"}) is False
        assert dn in connection

    def test_modify(self, connection: InMemoryDirectory) -> None:
        """Test replace, add and delete operations."""
        assert connection.modify(
            JO_DN,
            [
                (MODIFY_REPLACE, "mail", ["new@example.org"]),
                (MODIFY_ADD, "title", ["Boss"]),
                (MODIFY_DELETE, "sn", None),
            ],
        )

        attributes = connection.attributes_of(JO_DN)
        assert attributes["mail"] == [b"new@example.org"]
        assert attributes["title"] == [b"Boss"]
        assert "sn" not in attributes

    def test_modify_missing_entry(self, connection: InMemoryDirectory) -> None:
        """Test that modifying an unknown entry fails."""
        assert connection.modify("CN=Nobody,DC=example,DC=org", []) is False

    def test_delete(self, connection: InMemoryDirectory) -> None:
        """Test deleting an entry."""
        assert connection.delete(JO_DN) is True
        assert connection.delete(JO_DN) is False
        assert JO_DN not in connection

    def test_bind_as(self, connection: InMemoryDirectory) -> None:
        """Test password checks."""
        search_filter = Filter.eq("sAMAccountName", "jo")

        entry = connection.bind_as(search_filter, JO_PASSWORD)
        assert entry is not None
        assert entry.dn == JO_DN
        assert connection.bind_as(search_filter, "wrong") is None
        assert connection.bind_as(Filter.eq("sAMAccountName", "nobody"), JO_PASSWORD) is None
