"""Computer records."""

from adrecord.core.entities.filter import Filter
from adrecord.records.base import Record


class Computer(Record):
    """A computer account."""

    type_tag = "Computer"
    abstract = False
    filter = Filter.eq("objectClass", "computer")
    required_attributes = {
        "objectClass": ["top", "person", "organizationalPerson", "user", "computer"],
    }
    default_attributes = ("dNSHostName", "name")

    @property
    def hostname(self) -> str | None:
        """Return the DNS host name, falling back to the name."""
        return self.get("dnshostname") or self.get("name")
