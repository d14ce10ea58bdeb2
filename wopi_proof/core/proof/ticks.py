"""
.NET Tick Timestamps

WOPI hosts compare ``X-WOPI-TimeStamp`` against ``DateTime.UtcNow.Ticks``: the
number of 100-nanosecond intervals since 0001-01-01T00:00:00Z.

All arithmetic is on integers so that the signed value and the emitted header
value are always the same number.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import Union

# Ticks between 0001-01-01T00:00:00Z and 1970-01-01T00:00:00Z
DOTNET_EPOCH_OFFSET = 621355968000000000

NANOSECONDS_PER_TICK = 100

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _datetime_to_unix_ns(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    delta = moment - _UNIX_EPOCH
    seconds = delta.days * 86400 + delta.seconds
    return seconds * 1_000_000_000 + delta.microseconds * 1000


def ticks_since_epoch(now: Union[int, datetime]) -> int:
    """
    Convert a wall-clock instant to .NET ticks.

    Args:
        now: Unix time in nanoseconds, or a datetime (naive values are UTC)

    Returns:
        Tick count since 0001-01-01T00:00:00Z

    Example:
        >>> ticks_since_epoch(0)
        621355968000000000
    """
    if isinstance(now, datetime):
        unix_ns = _datetime_to_unix_ns(now)
    else:
        unix_ns = int(now)

    # Truncate toward zero, as .NET integer division does
    if unix_ns >= 0:
        unix_ticks = unix_ns // NANOSECONDS_PER_TICK
    else:
        unix_ticks = -(-unix_ns // NANOSECONDS_PER_TICK)
    return unix_ticks + DOTNET_EPOCH_OFFSET


def current_ticks() -> int:
    """Tick count for the current wall-clock time."""
    return ticks_since_epoch(time.time_ns())


def ticks_to_datetime(ticks: int) -> datetime:
    """
    Convert a tick count back to an aware UTC datetime (microsecond precision).

    Raises:
        OverflowError: If the instant is outside years 1..9999
    """
    return _UNIX_EPOCH + timedelta(microseconds=(ticks - DOTNET_EPOCH_OFFSET) // 10)
