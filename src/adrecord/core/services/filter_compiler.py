"""Compiles attribute-match mappings into directory filters."""

import re
from collections.abc import Mapping
from typing import Any

from adrecord.core.entities.filter import NIL_FILTER, Filter
from adrecord.core.services.codec_registry import FieldCodecRegistry

_LIST_BRACKETS = re.compile(r"^\[|\]$")


class FilterCompiler:
    """Turns ``{attribute: value | [values]}`` into a Filter.

    Every pair becomes an equality predicate on the encoded value.
    Values listed under one attribute are ORed together and the
    attributes are ANDed. An empty mapping compiles to NIL_FILTER.
    """

    def __init__(self, codecs: FieldCodecRegistry) -> None:
        """Initialize the compiler.

        Args:
            codecs: Registry used to encode filter values.
        """
        self._codecs = codecs

    def compile(self, type_tag: str, filters: Mapping[str, Any] | None) -> Filter:
        """Compile a filter mapping for a record type.

        Attributes mapped to an empty list are skipped.

        Args:
            type_tag: The record type tag used for value encoding.
            filters: Mapping of attribute name to value or list of values.

        Returns:
            The combined filter.
        """
        combined: Filter | None = None

        for key, value in (filters or {}).items():
            predicate = self.make_filter(type_tag, str(key), value)
            if predicate is None:
                continue
            combined = predicate if combined is None else combined & predicate

        return NIL_FILTER if combined is None else combined

    def make_filter(self, type_tag: str, key: str, value: Any) -> Filter | None:
        """Build the predicate for one attribute.

        Args:
            type_tag: The record type tag.
            key: The attribute name.
            value: A single value or a list of values.

        Returns:
            The predicate, or None for an empty list of values.
        """
        if isinstance(value, (list, tuple, set)):
            combined: Filter | None = None
            for item in value:
                predicate = self.create_filter(type_tag, key, item)
                if predicate is None:
                    continue
                combined = predicate if combined is None else combined | predicate
            return combined

        # Tolerate a stringified list literal such as "[value]"
        if isinstance(value, str):
            value = _LIST_BRACKETS.sub("", value)

        return self.create_filter(type_tag, key, value)

    def create_filter(self, type_tag: str, key: str, value: Any) -> Filter | None:
        """Build an equality predicate on the encoded value.

        Codecs that encode to a list of wire values, such as the DN
        array codecs, produce one predicate per value, ORed together.

        Returns:
            The predicate, or None when the value encodes to nothing.
        """
        encoded = self._codecs.encode(type_tag, key, value)
        if not isinstance(encoded, (list, tuple)):
            return Filter.eq(key, _wire_value(encoded))

        combined: Filter | None = None
        for item in encoded:
            predicate = Filter.eq(key, _wire_value(item))
            combined = predicate if combined is None else combined | predicate
        return combined

    def finalize(self, required: Filter, search_filter: Filter) -> Filter:
        """AND a record type's required filter onto a caller filter.

        Args:
            required: The type's own filter; NIL_FILTER means none.
            search_filter: The compiled caller filter.

        Returns:
            The filter to send to the directory.
        """
        if required == NIL_FILTER:
            return search_filter
        return search_filter & required


def _wire_value(value: Any) -> str | bytes:
    return value if isinstance(value, bytes) else str(value)
