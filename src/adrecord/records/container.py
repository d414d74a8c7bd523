"""Distinguished name builder."""

from collections.abc import Callable
from typing import Any


class _Component:
    """Starts a DN when read from the class, extends one from an instance."""

    def __init__(self, kind: str) -> None:
        self.kind = kind

    def __get__(self, instance: Any, owner: type) -> Callable[[str], "Container"]:
        kind = self.kind
        if instance is None:
            return lambda name: owner(kind, name)
        return lambda name: owner(kind, name, instance)


class Container:
    """A distinguished name built one component at a time.

    Components are appended from the root outwards, so these are the
    same DN:

        "cn=Jo,ou=Users,dc=example,dc=org"
        Container.dc("org").dc("example").ou("Users").cn("Jo")

    Containers compare equal to DN strings, ignoring case.
    """

    ou = _Component("ou")
    dc = _Component("dc")
    cn = _Component("cn")

    def __init__(self, kind: str, name: str, parent: "Container | None" = None) -> None:
        self.kind = kind
        self.name = name
        self.parent = parent

    def __str__(self) -> str:
        own = f"{self.kind}={self.name}"
        return f"{own},{self.parent}" if self.parent is not None else own

    def __repr__(self) -> str:
        return f"<Container {self}>"

    def __eq__(self, other: object) -> bool:
        return str(self).lower() == str(other).lower()

    def __hash__(self) -> int:
        return hash(str(self).lower())
