"""Password attribute codec."""

from typing import Any


class PasswordCodec:
    """Codec for unicodePwd.

    Passwords are sent as the quoted plaintext in UTF-16LE, which for
    characters below U+0100 is each character followed by a null
    byte. They can never be read back.
    """

    binary = True

    def encode(self, value: Any) -> bytes:
        """Wrap the plaintext in quotes and encode it as UTF-16LE."""
        return f'"{value}"'.encode("utf-16-le")

    def decode(self, value: Any) -> None:
        """Always return None."""
        return None
