"""Raw directory entry entity."""

from dataclasses import dataclass, field


@dataclass
class RawEntry:
    """A directory entry as returned by a connection's search.

    Attribute names are stored lower-cased; every attribute maps to
    the list of its raw wire values.
    """

    dn: str
    attributes: dict[str, list[bytes | str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.attributes = {
            name.lower(): list(values) for name, values in self.attributes.items()
        }

    def has(self, name: str) -> bool:
        """Return True if the entry carries the attribute."""
        return name.lower() in self.attributes or name.lower() == "distinguishedname"

    def values(self, name: str) -> list[bytes | str] | None:
        """Return the raw values of an attribute, or None when absent."""
        name = name.lower()
        if name in self.attributes:
            return self.attributes[name]
        if name == "distinguishedname":
            return [self.dn]
        return None

    @property
    def attribute_names(self) -> list[str]:
        """Return the lower-cased attribute names on the entry."""
        return list(self.attributes)
