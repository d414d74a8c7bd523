"""Tests for the Record base type."""

from datetime import datetime, timezone

import pytest

from adrecord import Directory, InMemoryDirectory
from adrecord.core.interfaces.connection import MODIFY_ADD, MODIFY_DELETE, MODIFY_REPLACE
from adrecord.exceptions import CodecError, DirectoryError, UnknownAttributeError, ValidationError
from adrecord.records import Group, Record, User
from tests.conftest import BASE, JO_DN, JO_GUID, JO_PWD_LAST_SET, SALES_DN

NEW_DN = "CN=New Person,OU=Users,DC=example,DC=org"


@pytest.fixture
def jo(directory: Directory) -> User:
    """Find Jo with the binary and date attributes included."""
    user = directory.users.find_first(
        {"sAMAccountName": "jo"}, ["objectGUID", "whenCreated", "pwdLastSet", "cn"]
    )
    assert user is not None
    return user


class TestRecordRead:
    """Tests for reading attributes."""

    def test_text_value(self, jo: User) -> None:
        """Test that single text values are returned as scalars."""
        assert jo.get("mail") == "jo@example.org"
        assert jo.get("MAIL") == "jo@example.org"

    def test_binary_value(self, jo: User) -> None:
        """Test that binary attributes are decoded to hex."""
        assert jo.get("objectGUID") == JO_GUID
        assert jo.objectguid == JO_GUID

    def test_date_value(self, jo: User) -> None:
        """Test that generalized time is decoded to a datetime."""
        assert jo.get("whenCreated") == datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_timestamp_value(self, jo: User) -> None:
        """Test that interval timestamps are decoded to a datetime."""
        assert jo.pwdlastset == datetime.fromtimestamp(JO_PWD_LAST_SET, tz=timezone.utc)

    def test_dn_array_value(self, jo: User) -> None:
        """Test that DN-valued attributes are resolved to records."""
        groups = jo.memberof
        assert [g.dn for g in groups] == [SALES_DN]
        assert isinstance(groups[0], Group)

    def test_multiple_values(self, directory: Directory) -> None:
        """Test that multi-valued attributes are returned as lists."""
        user = directory.users.find_first({"sAMAccountName": "jo"}, ["objectClass"])
        assert user is not None
        assert user.get("objectClass") == ["top", "person", "organizationalPerson", "user"]

    def test_missing_attribute(self, jo: User) -> None:
        """Test that absent attributes read as None."""
        assert jo.get("title") is None
        assert jo.has("title") is False

    def test_getitem(self, jo: User) -> None:
        """Test index access."""
        assert jo["mail"] == "jo@example.org"
        with pytest.raises(UnknownAttributeError) as exc_info:
            jo["title"]
        assert exc_info.value.name == "title"

    def test_distinguished_name(self, jo: User) -> None:
        """Test that the DN is readable as an attribute."""
        assert jo.distinguishedname == JO_DN

    def test_raw(self, jo: User) -> None:
        """Test reading wire values as text without codecs."""
        assert jo.raw("memberOf") == [SALES_DN]
        assert jo.raw("title") == []

    def test_invalid_name(self, jo: User) -> None:
        """Test that attribute names must be non-empty strings."""
        with pytest.raises(ValidationError):
            jo.get(42)  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            jo.set("", "x")

    def test_undecodable_value(self, directory: Directory, connection: InMemoryDirectory) -> None:
        """Test that a malformed wire value raises CodecError."""
        connection.load(
            "CN=Odd,OU=Users,DC=example,DC=org",
            {"objectClass": ["user"], "cn": "Odd", "whenCreated": "yesterday"},
        )
        odd = directory.users.find_first({"cn": "Odd"}, ["whenCreated"])
        assert odd is not None
        with pytest.raises(CodecError):
            odd.get("whenCreated")


class TestRecordWrite:
    """Tests for pending changes and saving."""

    def test_set_queues_encoded_change(self, jo: User) -> None:
        """Test that set encodes the value and keeps it pending."""
        jo.set("objectGUID", "00ff")

        assert jo.changed is True
        assert jo.pending == {"objectguid": b"\x00\xff"}
        assert jo.get("objectGUID") == "00ff"

    def test_save(self, jo: User, connection: InMemoryDirectory) -> None:
        """Test that pending changes are sent and cleared."""
        jo["mail"] = "jo.smith@example.org"

        assert jo.save() is True
        assert jo.changed is False
        assert jo.get("mail") == "jo.smith@example.org"
        assert connection.attributes_of(JO_DN)["mail"] == [b"jo.smith@example.org"]

    def test_save_without_changes(self, jo: User, connection: InMemoryDirectory) -> None:
        """Test that saving nothing succeeds without a write."""
        searches = len(connection.searches)
        assert jo.save() is True
        assert len(connection.searches) == searches

    def test_failed_save_keeps_changes(self, jo: User, connection: InMemoryDirectory) -> None:
        """Test that a refused write leaves the changes pending."""
        connection.delete(JO_DN)
        jo.set("mail", "other@example.org")

        assert jo.save() is False
        assert jo.pending == {"mail": "other@example.org"}

    def test_save_directory_error(
        self,
        jo: User,
        connection: InMemoryDirectory,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that a directory error reports failure instead of raising."""

        def broken(*args: object) -> bool:
            raise DirectoryError("down")

        monkeypatch.setattr(connection, "modify", broken)
        jo.set("mail", "other@example.org")

        assert jo.save() is False
        assert jo.changed is True

    def test_update_attribute(self, jo: User, connection: InMemoryDirectory) -> None:
        """Test immediate single-attribute updates."""
        assert jo.update_attribute("title", "Boss") is True
        assert jo.get("title") == "Boss"
        assert connection.attributes_of(JO_DN)["title"] == [b"Boss"]

    def test_update_attributes_deletes_empty(
        self, jo: User, connection: InMemoryDirectory
    ) -> None:
        """Test that an empty value removes the attribute."""
        assert jo.update_attributes({"mail": "", "sn": "Smyth"}) is True
        assert "mail" not in connection.attributes_of(JO_DN)
        assert jo.get("sn") == "Smyth"

    def test_modify_operations(self, jo: User) -> None:
        """Test replace, add and delete selection."""
        operations = jo.modify_operations({"mail": "x", "title": ["a", "b"], "sn": None})
        assert operations == [
            (MODIFY_REPLACE, "mail", ["x"]),
            (MODIFY_ADD, "title", ["a", "b"]),
            (MODIFY_DELETE, "sn", None),
        ]

    def test_reload(self, jo: User, connection: InMemoryDirectory) -> None:
        """Test refreshing from the directory."""
        connection.modify(JO_DN, [(MODIFY_REPLACE, "mail", ["fresh@example.org"])])
        assert jo.get("mail") == "jo@example.org"

        assert jo.reload() is True
        assert jo.get("mail") == "fresh@example.org"


class TestRecordLifecycle:
    """Tests for creating and deleting entries."""

    def test_new_record(self, directory: Directory) -> None:
        """Test an unsaved record."""
        record = directory.users.new(NEW_DN, {"sAMAccountName": "new"})
        assert record.is_new is True
        assert record.dn == NEW_DN
        assert record.get("sAMAccountName") == "new"

    def test_create(self, directory: Directory, connection: InMemoryDirectory) -> None:
        """Test that creating adds the type's required attributes."""
        user = directory.users.create(NEW_DN, {"sAMAccountName": "new", "cn": "New Person"})

        assert user is not None
        assert user.is_new is False
        assert user.changed is False
        assert connection.attributes_of(NEW_DN)["objectclass"] == [
            b"top",
            b"organizationalPerson",
            b"person",
            b"user",
        ]
        assert directory.users.find_first({"sAMAccountName": "new"}) == user

    def test_create_is_cached(self, directory: Directory) -> None:
        """Test that a created record goes into the cache."""
        directory.users.enable_cache()
        user = directory.users.create(NEW_DN, {"sAMAccountName": "new", "cn": "New"})

        assert directory.users.cache is not None
        assert directory.users.cache.get(NEW_DN.lower()) is user

    def test_create_existing_dn(self, directory: Directory) -> None:
        """Test that creating over an existing entry fails."""
        assert directory.users.create(JO_DN, {"sAMAccountName": "jo2"}) is None

    def test_create_needs_dn_and_attributes(self, directory: Directory) -> None:
        """Test that create refuses missing arguments."""
        assert directory.users.create(None, {"cn": "x"}) is None
        assert directory.users.create(NEW_DN, None) is None

    def test_destroy(self, directory: Directory, connection: InMemoryDirectory) -> None:
        """Test deleting an entry and forgetting it in the cache."""
        directory.users.enable_cache()
        jo = directory.users.find_first({"sAMAccountName": "jo"})
        assert jo is not None

        assert jo.destroy() is True
        assert JO_DN not in connection
        assert jo.is_new is True
        assert directory.users.cache is not None
        assert JO_DN.lower() not in directory.users.cache

    def test_destroy_new_record(self, directory: Directory) -> None:
        """Test that an unsaved record cannot be destroyed."""
        assert directory.users.new(NEW_DN).destroy() is False

    def test_destroy_refused(self, jo: User, connection: InMemoryDirectory) -> None:
        """Test that a refused delete reports failure."""
        connection.delete(JO_DN)
        assert jo.destroy() is False


class TestRecordIdentity:
    """Tests for equality and text forms."""

    def test_equality_ignores_dn_case(self, directory: Directory, jo: User) -> None:
        """Test that records with the same DN are equal."""
        other = directory.users.new(JO_DN.upper())
        assert jo == other
        assert hash(jo) == hash(other)
        assert len({jo, other}) == 1

    def test_different_dns(self, directory: Directory, jo: User) -> None:
        """Test that records with different DNs differ."""
        assert jo != directory.users.new(NEW_DN)

    def test_untyped_record(self, directory: Directory) -> None:
        """Test untyped entries."""
        record = directory.entries.find_first({"cn": "Sales"})
        assert type(record) is Record
        assert str(record) == "Sales"
        assert record.dn == SALES_DN

    def test_repr(self, directory: Directory) -> None:
        """Test the debug form."""
        group = directory.groups.find_first({"cn": "Sales"})
        assert repr(group) == "<Group Sales>"

    def test_search_root(self, directory: Directory, connection: InMemoryDirectory) -> None:
        """Test that lookups run under the configured base."""
        directory.groups.find_all()
        assert connection.searches[-1].base == BASE
