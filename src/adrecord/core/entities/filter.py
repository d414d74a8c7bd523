"""Directory filter value object."""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ldap3.utils.conv import escape_bytes, escape_filter_chars

EQUALITY = "eq"
PRESENT = "present"
SUBSTRING = "substring"
AND = "and"
OR = "or"
NOT = "not"

_OPERATORS = {AND: "&", OR: "|", NOT: "!"}


@dataclass(frozen=True)
class Filter:
    """Immutable boolean filter expression evaluated by a directory search.

    Filters are composed with the ``&``, ``|`` and ``~`` operators.
    Nested conjunctions and disjunctions are flattened, so filters
    built from the same predicates in the same order compare equal.

    Example:
        users = Filter.eq("objectClass", "user") & ~Filter.eq("objectClass", "computer")
        str(users)  # "(&(objectClass=user)(!(objectClass=computer)))"
    """

    op: str
    attribute: str | None = None
    value: str | bytes | None = None
    children: tuple["Filter", ...] = ()

    @classmethod
    def eq(cls, attribute: str, value: str | bytes) -> "Filter":
        """Create an equality predicate.

        A text value of ``*`` produces a presence predicate, and a text
        value containing ``*`` produces a substring predicate.

        Args:
            attribute: The attribute name.
            value: The already-encoded wire value.

        Returns:
            The predicate filter.
        """
        if isinstance(value, str) and "*" in value:
            if value == "*":
                return cls.present(attribute)
            return cls(op=SUBSTRING, attribute=attribute, value=value)
        return cls(op=EQUALITY, attribute=attribute, value=value)

    @classmethod
    def present(cls, attribute: str) -> "Filter":
        """Create an ``attribute is present`` predicate."""
        return cls(op=PRESENT, attribute=attribute)

    def __and__(self, other: "Filter") -> "Filter":
        return Filter(op=AND, children=self._operands(AND) + other._operands(AND))

    def __or__(self, other: "Filter") -> "Filter":
        return Filter(op=OR, children=self._operands(OR) + other._operands(OR))

    def __invert__(self) -> "Filter":
        return Filter(op=NOT, children=(self,))

    def _operands(self, op: str) -> tuple["Filter", ...]:
        return self.children if self.op == op else (self,)

    def __str__(self) -> str:
        """Render the filter as RFC 4515 text."""
        if self.op in _OPERATORS:
            inner = "".join(str(child) for child in self.children)
            return f"({_OPERATORS[self.op]}{inner})"
        if self.op == PRESENT:
            return f"({self.attribute}=*)"
        if self.op == SUBSTRING:
            parts = str(self.value).split("*")
            return f"({self.attribute}={'*'.join(escape_filter_chars(p) for p in parts)})"
        return f"({self.attribute}={_escape(self.value)})"

    def matches(self, attributes: Mapping[str, Sequence[bytes | str]]) -> bool:
        """Evaluate the filter against an entry's attributes.

        Attribute names are matched case-insensitively, as are text
        values.

        Args:
            attributes: Mapping of attribute name to raw values.

        Returns:
            True if the entry satisfies the filter.
        """
        if self.op == AND:
            return all(child.matches(attributes) for child in self.children)
        if self.op == OR:
            return any(child.matches(attributes) for child in self.children)
        if self.op == NOT:
            return not self.children[0].matches(attributes)

        values = _lookup(attributes, self.attribute or "")
        if self.op == PRESENT:
            return bool(values)
        if self.op == SUBSTRING:
            pattern = _substring_pattern(str(self.value))
            return any(pattern.match(_to_bytes(v).decode("utf-8", "replace")) for v in values)

        wanted = _to_bytes(self.value)
        return any(_same(_to_bytes(v), wanted) for v in values)


def _escape(value: str | bytes | None) -> str:
    if isinstance(value, bytes):
        return escape_bytes(value)
    return escape_filter_chars(str(value))


def _lookup(attributes: Mapping[str, Sequence[bytes | str]], name: str) -> Sequence[bytes | str]:
    name = name.lower()
    for key, values in attributes.items():
        if key.lower() == name:
            return values
    return ()


def _to_bytes(value: bytes | str | None) -> bytes:
    if isinstance(value, bytes):
        return value
    return str(value).encode("utf-8")


def _same(left: bytes, right: bytes) -> bool:
    if left == right:
        return True
    # Only text compares case-insensitively; binary values must match exactly
    try:
        return left.decode("utf-8").lower() == right.decode("utf-8").lower()
    except UnicodeDecodeError:
        return False


def _substring_pattern(value: str) -> re.Pattern[str]:
    parts = (re.escape(part) for part in value.split("*"))
    return re.compile(".*".join(parts) + r"\Z", re.IGNORECASE | re.DOTALL)


# Match-any sentinel: every directory entry of interest carries a cn.
NIL_FILTER = Filter.present("cn")
