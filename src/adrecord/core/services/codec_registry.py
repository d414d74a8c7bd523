"""Field codec registry and dispatch."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from adrecord.core.interfaces.codec import IFieldCodec
from adrecord.exceptions import ValidationError


class FieldType(str, Enum):
    """Codec tags that can be attached to an attribute."""

    BINARY = "Binary"
    DATE = "Date"
    TIMESTAMP = "Timestamp"
    PASSWORD = "Password"
    DN_ARRAY = "DnArray"
    USER_DN_ARRAY = "UserDnArray"
    GROUP_DN_ARRAY = "GroupDnArray"
    MEMBER_DN_ARRAY = "MemberDnArray"


# Codec tags per record type tag, keyed by lower-cased attribute name
DEFAULT_FIELD_TYPES: dict[str, dict[str, FieldType]] = {
    # All entries
    "Base": {
        "objectguid": FieldType.BINARY,
        "whencreated": FieldType.DATE,
        "whenchanged": FieldType.DATE,
        "memberof": FieldType.DN_ARRAY,
    },
    "User": {
        "objectguid": FieldType.BINARY,
        "whencreated": FieldType.DATE,
        "whenchanged": FieldType.DATE,
        "objectsid": FieldType.BINARY,
        "msexchmailboxguid": FieldType.BINARY,
        "msexchmailboxsecuritydescriptor": FieldType.BINARY,
        "lastlogontimestamp": FieldType.TIMESTAMP,
        "pwdlastset": FieldType.TIMESTAMP,
        "accountexpires": FieldType.TIMESTAMP,
        "unicodepwd": FieldType.PASSWORD,
        "memberof": FieldType.MEMBER_DN_ARRAY,
    },
    "Group": {
        "objectguid": FieldType.BINARY,
        "whencreated": FieldType.DATE,
        "whenchanged": FieldType.DATE,
        "objectsid": FieldType.BINARY,
        "memberof": FieldType.GROUP_DN_ARRAY,
        "member": FieldType.MEMBER_DN_ARRAY,
    },
}


class FieldCodecRegistry:
    """Maps ``(record type, attribute)`` to a codec.

    Attribute names are case-folded before lookup. An attribute with
    no registered codec tag, or whose tag has no codec, passes through
    unchanged in both directions.
    """

    def __init__(
        self,
        codecs: Mapping[FieldType, IFieldCodec],
        field_types: Mapping[str, Mapping[str, FieldType]] | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            codecs: Codec implementation for each codec tag.
            field_types: Codec tags per record type tag. Defaults to
                DEFAULT_FIELD_TYPES.
        """
        self._codecs = dict(codecs)
        source = DEFAULT_FIELD_TYPES if field_types is None else field_types
        self._field_types = {
            type_tag: {name.lower(): FieldType(tag) for name, tag in fields.items()}
            for type_tag, fields in source.items()
        }

    def field_type(self, type_tag: str, name: str) -> FieldType | None:
        """Return the codec tag registered for an attribute.

        Args:
            type_tag: The record type tag.
            name: The attribute name (any case).

        Returns:
            The codec tag, or None when none is registered.

        Raises:
            ValidationError: If the name is not a string.
        """
        if not isinstance(name, str):
            raise ValidationError(f"Invalid field name: {name!r}")
        return self._field_types.get(type_tag, {}).get(name.lower())

    def fields_for(self, type_tag: str) -> list[str]:
        """Return the attribute names with a codec for a record type."""
        return list(self._field_types.get(type_tag, {}))

    def codec_for(self, type_tag: str, name: str) -> IFieldCodec | None:
        """Return the codec for an attribute, or None for pass-through."""
        tag = self.field_type(type_tag, name)
        if tag is None:
            return None
        return self._codecs.get(tag)

    def is_binary(self, type_tag: str, name: str) -> bool:
        """Return True if the attribute's codec works on raw bytes."""
        codec = self.codec_for(type_tag, name)
        return bool(codec is not None and codec.binary)

    def encode(self, type_tag: str, name: str, value: Any) -> Any:
        """Encode a local value into its wire value."""
        codec = self.codec_for(type_tag, name)
        if codec is None:
            return value
        return codec.encode(value)

    def decode(self, type_tag: str, name: str, value: Any) -> Any:
        """Decode a wire value into its local value.

        Raises:
            CodecError: If the codec cannot parse the value.
        """
        codec = self.codec_for(type_tag, name)
        if codec is None:
            return value
        return codec.decode(value)
