"""Binary attribute codec."""

from typing import Any

from adrecord.exceptions import CodecError


class BinaryCodec:
    """Codec for binary attributes such as objectGUID and objectSid.

    Locally the value is a lower-case hex string; on the wire it is
    the raw byte string.
    """

    binary = True

    def encode(self, value: Any) -> bytes:
        """Encode a hex string into raw bytes.

        Raises:
            CodecError: If the value is not valid hex.
        """
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        try:
            return bytes.fromhex(str(value))
        except ValueError as e:
            raise CodecError(f"Invalid hex value {value!r}: {e}") from e

    def decode(self, value: Any) -> str:
        """Decode raw bytes into a hex string.

        Raises:
            CodecError: If the value is not a byte string.
        """
        if isinstance(value, str):
            value = value.encode("latin-1", errors="strict")
        if not isinstance(value, (bytes, bytearray)):
            raise CodecError(f"Cannot decode {type(value).__name__} as binary")
        return bytes(value).hex()
