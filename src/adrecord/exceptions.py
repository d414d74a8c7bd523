"""Exceptions raised by adrecord."""


class AdRecordError(Exception):
    """Base class for all adrecord errors."""

    pass


class ValidationError(AdRecordError, ValueError):
    """Raised when a builder or finder receives a malformed argument."""

    pass


class CodecError(AdRecordError, ValueError):
    """Raised when an attribute value cannot be encoded or decoded."""

    pass


class UnknownAttributeError(AdRecordError, KeyError):
    """Raised when reading an attribute the record does not carry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown attribute: {self.name}"


class DirectoryError(AdRecordError):
    """Raised by directory connections on connection or protocol failures."""

    pass
