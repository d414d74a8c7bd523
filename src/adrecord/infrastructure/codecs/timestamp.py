"""Interval timestamp attribute codec."""

from datetime import datetime, timedelta, timezone
from typing import Any

from adrecord.exceptions import CodecError

AD_DIVISOR = 10_000_000
AD_OFFSET = 11_644_473_600

# Largest interval value, stored by accountExpires for accounts that never expire
NEVER = 2**63 - 1

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
_LATEST = datetime.max.replace(tzinfo=timezone.utc)


class TimestampCodec:
    """Codec for interval timestamps (pwdLastSet, accountExpires).

    The wire value counts 100-nanosecond ticks since 1601-01-01, which
    lies ``AD_OFFSET`` seconds before the Unix epoch.
    """

    binary = False

    def encode(self, value: Any) -> int:
        """Encode a datetime or Unix seconds as ticks.

        Sub-second precision is dropped before scaling.
        """
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            seconds = int((value - _UNIX_EPOCH) // timedelta(seconds=1))
        else:
            try:
                seconds = int(value)
            except (TypeError, ValueError) as e:
                raise CodecError(f"Cannot encode {value!r} as a timestamp") from e
        return (seconds + AD_OFFSET) * AD_DIVISOR

    def decode(self, value: Any) -> datetime | None:
        """Decode ticks into an aware UTC datetime.

        ``NEVER`` decodes to None. Other values past the ``datetime``
        range are clamped to its first or last representable moment.

        Raises:
            CodecError: If the value is not an integer.
        """
        if isinstance(value, bytes):
            value = value.decode("ascii", errors="replace")
        try:
            ticks = int(value)
        except (TypeError, ValueError) as e:
            raise CodecError(f"Invalid timestamp: {value!r}") from e

        if ticks == NEVER:
            return None

        seconds = _truncating_div(ticks, AD_DIVISOR) - AD_OFFSET
        try:
            return _UNIX_EPOCH + timedelta(seconds=seconds)
        except OverflowError:
            return _LATEST if seconds > 0 else _EARLIEST


def _truncating_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient
