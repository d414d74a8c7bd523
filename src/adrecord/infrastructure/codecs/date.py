"""Generalized-time attribute codec."""

import re
from datetime import datetime, timezone
from typing import Any

from adrecord.exceptions import CodecError

DATE_FORMAT = "%Y%m%d%H%M%S.0Z"

_GENERALIZED_TIME = re.compile(r"^(\d{14})(?:\.\d+)?Z$")


class DateCodec:
    """Codec for generalized-time attributes (whenCreated, whenChanged).

    The wire format is ``YYYYMMDDHHMMSS.0Z`` in UTC. Naive datetimes
    are treated as UTC.
    """

    binary = False

    def encode(self, value: Any) -> str:
        """Encode a datetime as ``YYYYMMDDHHMMSS.0Z``."""
        if not isinstance(value, datetime):
            raise CodecError(f"Cannot encode {type(value).__name__} as a date")
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(DATE_FORMAT)

    def decode(self, value: Any) -> datetime:
        """Parse ``YYYYMMDDHHMMSS.0Z`` into an aware UTC datetime.

        Raises:
            CodecError: If the value does not follow the pattern.
        """
        if isinstance(value, bytes):
            value = value.decode("ascii", errors="replace")
        match = _GENERALIZED_TIME.match(str(value))
        if match is None:
            raise CodecError(f"Invalid generalized time: {value!r}")
        try:
            parsed = datetime.strptime(match.group(1), "%Y%m%d%H%M%S")
        except ValueError as e:
            raise CodecError(f"Invalid generalized time: {value!r}") from e
        return parsed.replace(tzinfo=timezone.utc)
