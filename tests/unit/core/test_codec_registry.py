"""Tests for FieldCodecRegistry."""

import pytest

from adrecord.core.services.codec_registry import (
    DEFAULT_FIELD_TYPES,
    FieldCodecRegistry,
    FieldType,
)
from adrecord.exceptions import ValidationError
from adrecord.infrastructure.codecs import BinaryCodec, DateCodec, PasswordCodec


class TestFieldCodecRegistry:
    """Tests for FieldCodecRegistry."""

    @pytest.fixture
    def registry(self) -> FieldCodecRegistry:
        return FieldCodecRegistry(
            {
                FieldType.BINARY: BinaryCodec(),
                FieldType.DATE: DateCodec(),
                FieldType.PASSWORD: PasswordCodec(),
            }
        )

    def test_field_type_ignores_case(self, registry: FieldCodecRegistry) -> None:
        """Test that attribute names are case-folded."""
        assert registry.field_type("User", "objectGUID") is FieldType.BINARY
        assert registry.field_type("User", "OBJECTGUID") is FieldType.BINARY

    def test_field_type_per_record_type(self, registry: FieldCodecRegistry) -> None:
        """Test that codec tags are looked up per record type."""
        assert registry.field_type("User", "memberOf") is FieldType.MEMBER_DN_ARRAY
        assert registry.field_type("Group", "memberOf") is FieldType.GROUP_DN_ARRAY
        assert registry.field_type("Base", "memberOf") is FieldType.DN_ARRAY

    def test_unknown_names_pass_through(self, registry: FieldCodecRegistry) -> None:
        """Test that attributes without a codec are left untouched."""
        assert registry.field_type("User", "mail") is None
        assert registry.encode("User", "mail", "jo@example.org") == "jo@example.org"
        assert registry.decode("Nope", "objectGUID", b"\x01") == b"\x01"

    def test_missing_codec_passes_through(self, registry: FieldCodecRegistry) -> None:
        """Test that a tag without a registered codec is a pass-through."""
        assert registry.codec_for("User", "pwdLastSet") is None
        assert registry.decode("User", "pwdLastSet", "0") == "0"

    def test_encode_and_decode(self, registry: FieldCodecRegistry) -> None:
        """Test dispatching to the registered codec."""
        assert registry.encode("User", "objectGUID", "01ff") == b"\x01\xff"
        assert registry.decode("User", "objectGUID", b"\x01\xff") == "01ff"

    def test_is_binary(self, registry: FieldCodecRegistry) -> None:
        """Test binary detection."""
        assert registry.is_binary("User", "objectGUID") is True
        assert registry.is_binary("User", "unicodePwd") is True
        assert registry.is_binary("User", "whenCreated") is False
        assert registry.is_binary("User", "mail") is False

    def test_invalid_name(self, registry: FieldCodecRegistry) -> None:
        """Test that a non-string name is rejected."""
        with pytest.raises(ValidationError):
            registry.field_type("User", 42)  # type: ignore[arg-type]

    def test_custom_field_types(self) -> None:
        """Test replacing the default codec tags."""
        registry = FieldCodecRegistry(
            {FieldType.BINARY: BinaryCodec()},
            {"User": {"thumbnailPhoto": "Binary"}},  # type: ignore[dict-item]
        )
        assert registry.fields_for("User") == ["thumbnailphoto"]
        assert registry.field_type("User", "objectGUID") is None

    def test_fields_for(self, registry: FieldCodecRegistry) -> None:
        """Test listing the attributes with a codec."""
        assert registry.fields_for("Group") == list(DEFAULT_FIELD_TYPES["Group"])
        assert registry.fields_for("Computer") == []
