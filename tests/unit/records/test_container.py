"""Tests for the Container DN builder."""

from adrecord import Directory
from adrecord.records import Container


class TestContainer:
    """Tests for Container."""

    def test_build_from_root(self) -> None:
        """Test that components are prepended as the DN grows."""
        dn = Container.dc("org").dc("example").ou("Users").cn("Jo")
        assert str(dn) == "cn=Jo,ou=Users,dc=example,dc=org"

    def test_single_component(self) -> None:
        """Test a one-component DN."""
        assert str(Container.ou("Users")) == "ou=Users"

    def test_equals_dn_string(self) -> None:
        """Test comparison with strings, ignoring case."""
        dn = Container.dc("org").dc("example")
        assert dn == "DC=Example,DC=Org"
        assert dn != "dc=other,dc=org"

    def test_parent_is_unchanged(self) -> None:
        """Test that extending a container leaves it untouched."""
        base = Container.dc("org").dc("example")
        users = base.ou("Users")
        groups = base.ou("Groups")

        assert str(base) == "dc=example,dc=org"
        assert str(users) == "ou=Users,dc=example,dc=org"
        assert str(groups) == "ou=Groups,dc=example,dc=org"

    def test_hashable(self) -> None:
        """Test that equal containers hash alike."""
        assert len({Container.ou("Users"), Container.ou("users")}) == 1

    def test_used_as_dn(self, directory: Directory) -> None:
        """Test passing a container where a DN is expected."""
        dn = Container.dc("org").dc("example").ou("Users").cn("New")
        record = directory.users.new(dn)
        assert record.dn == "cn=New,ou=Users,dc=example,dc=org"
