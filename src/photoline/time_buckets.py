"""Time bucket keys.

A bucket is a calendar month or day of an asset's local capture time. Keys are
never stored: they are derived from the timestamp on every query, so the same
timestamp always lands in the same bucket.
"""

import enum
import re
from datetime import date, datetime, timedelta

from photoline.exceptions import BadRequestError

_MONTH_KEY = re.compile(r"^(\d{4})-(\d{2})$")


class TimeBucketSize(enum.StrEnum):
    DAY = "DAY"
    MONTH = "MONTH"


def truncate(value: date | datetime, size: TimeBucketSize) -> date:
    """Return the first day of the bucket containing ``value``."""
    if size == TimeBucketSize.MONTH:
        return date(value.year, value.month, 1)
    return date(value.year, value.month, value.day)


def bucket_key(value: date | datetime, size: TimeBucketSize) -> str:
    start = truncate(value, size)
    if size == TimeBucketSize.MONTH:
        return start.strftime("%Y-%m")
    return start.isoformat()


def parse_bucket_key(key: str) -> date:
    """Parse ``YYYY-MM``, ``YYYY-MM-DD`` or an ISO-8601 timestamp into a date."""
    key = key.strip()
    match = _MONTH_KEY.match(key)
    try:
        if match:
            return date(int(match.group(1)), int(match.group(2)), 1)
        if len(key) == 10:
            return date.fromisoformat(key)
        return datetime.fromisoformat(key.replace("Z", "+00:00")).date()
    except ValueError:
        raise BadRequestError(f"Invalid time bucket: {key!r}") from None


def bucket_range(key: str, size: TimeBucketSize) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` range of local capture times covered by ``key``."""
    start = truncate(parse_bucket_key(key), size)
    try:
        if size == TimeBucketSize.MONTH:
            end = date(start.year + 1, 1, 1) if start.month == 12 else date(start.year, start.month + 1, 1)
        else:
            end = start + timedelta(days=1)
    except (ValueError, OverflowError):
        # The last bucket of year 9999 has no representable end
        raise BadRequestError(f"Invalid time bucket: {key!r}") from None
    return datetime.combine(start, datetime.min.time()), datetime.combine(end, datetime.min.time())
