"""Field codec interface."""

from typing import Any, Protocol


class IFieldCodec(Protocol):
    """Contract for attribute codecs.

    A codec converts between the local representation of an attribute
    value and the representation stored by the directory.
    """

    # True when decode expects raw bytes rather than text
    binary: bool

    def encode(self, value: Any) -> Any:
        """Convert a local value to its wire value.

        Raises:
            CodecError: If the value cannot be encoded.
        """
        ...

    def decode(self, value: Any) -> Any:
        """Convert a wire value to its local value.

        Raises:
            CodecError: If the wire value cannot be parsed.
        """
        ...
