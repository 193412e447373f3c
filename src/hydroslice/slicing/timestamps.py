"""Filename timestamp parsing and interval snapping.

Observation files carry their query time in the filename as ``YYYYMMDD``
followed by an optional ``_``, ``-`` or ``T`` separator and ``HHMM`` or
``HHMMSS``, e.g. ``20150415_1203.usgs.csv`` or ``usgs_20150415T120327.csv``.
All times are UTC.

Snapping rounds half up: a time exactly halfway between two boundaries goes
to the later one (12:03:30 snaps to 12:04:00 on a 1-minute interval).
"""

import re
from datetime import datetime, timedelta, timezone

from hydroslice.contracts.failure import MalformedTimestamp

__all__ = ['parse_file_timestamp', 'snap_time', 'EPOCH']

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

TIMESTAMP_PATTERN = re.compile(
    r"(?<!\d)(?P<date>\d{8})[_\-T]?(?P<hm>\d{4})(?P<sec>\d{2})?(?!\d)"
)

_ONE_US = timedelta(microseconds=1)


def parse_file_timestamp(name: str) -> datetime:
    """Extract the UTC query time embedded in an observation filename.

    Parameters
    ----------
    name : str
        Bare filename (directory components are ignored if present).

    Returns
    -------
    datetime
        Timezone-aware UTC timestamp.

    Raises
    ------
    MalformedTimestamp
        If no timestamp pattern is found or the digits are not a valid date.

    Examples
    --------
    >>> parse_file_timestamp("20150415_120327.usgs.csv")
    datetime.datetime(2015, 4, 15, 12, 3, 27, tzinfo=datetime.timezone.utc)
    """
    base = re.split(r"[\\/]", name)[-1]
    match = TIMESTAMP_PATTERN.search(base)
    if match is None:
        raise MalformedTimestamp(f"No timestamp in filename: {base}")

    digits = match.group("date") + match.group("hm") + (match.group("sec") or "00")
    try:
        parsed = datetime.strptime(digits, "%Y%m%d%H%M%S")
    except ValueError as e:
        raise MalformedTimestamp(f"Invalid timestamp in filename {base}: {e}") from e

    return parsed.replace(tzinfo=timezone.utc)


def _as_utc(t: datetime) -> datetime:
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


def _interval(interval) -> timedelta:
    if not isinstance(interval, timedelta):
        interval = timedelta(minutes=interval)
    if interval <= timedelta(0):
        raise ValueError(f"Snapping interval must be positive, got {interval}")
    return interval


def snap_time(t: datetime, interval) -> datetime:
    """Round a timestamp to the nearest multiple of ``interval``.

    Boundaries are multiples of the interval counted from the Unix epoch.
    Ties round half up. Naive inputs are taken as UTC; the result is always
    timezone-aware UTC.

    Parameters
    ----------
    t : datetime
        Timestamp to snap.
    interval : timedelta or int
        Snapping interval; an int is a number of minutes.

    Examples
    --------
    >>> snap_time(datetime(2015, 4, 15, 12, 3, 27), 1).time()
    datetime.time(12, 3)
    >>> snap_time(datetime(2015, 4, 15, 12, 3, 30), 1).time()
    datetime.time(12, 4)
    """
    step = _interval(interval) // _ONE_US
    offset = (_as_utc(t) - EPOCH) // _ONE_US
    snapped = ((offset + step // 2) // step) * step
    return EPOCH + timedelta(microseconds=snapped)
