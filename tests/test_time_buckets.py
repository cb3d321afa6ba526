from datetime import date, datetime

import pytest

from photoline.exceptions import BadRequestError
from photoline.time_buckets import TimeBucketSize, bucket_key, bucket_range, parse_bucket_key, truncate


def test_truncate_to_month_and_day():
    """Test truncation to month and day starts."""
    taken = datetime(2024, 3, 17, 22, 45)
    assert truncate(taken, TimeBucketSize.MONTH) == date(2024, 3, 1)
    assert truncate(taken, TimeBucketSize.DAY) == date(2024, 3, 17)


def test_bucket_key_formats():
    """Test month and day key formats."""
    taken = datetime(2024, 3, 7, 8, 0)
    assert bucket_key(taken, TimeBucketSize.MONTH) == "2024-03"
    assert bucket_key(taken, TimeBucketSize.DAY) == "2024-03-07"


def test_same_timestamp_always_lands_in_same_bucket():
    """Test bucketing is deterministic."""
    taken = datetime(2023, 12, 31, 23, 59, 59)
    keys = {bucket_key(taken, TimeBucketSize.MONTH) for _ in range(5)}
    assert keys == {"2023-12"}


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("2024-03", date(2024, 3, 1)),
        ("2024-03-15", date(2024, 3, 15)),
        ("2024-03-01T00:00:00.000Z", date(2024, 3, 1)),
        (" 2024-03 ", date(2024, 3, 1)),
    ],
)
def test_parse_bucket_key(key, expected):
    """Test accepted bucket key forms."""
    assert parse_bucket_key(key) == expected


@pytest.mark.parametrize("key", ["2024-13", "March 2024", "2024-02-30", "2024/03"])
def test_parse_bucket_key_rejects_garbage(key):
    """Test malformed keys are a 400."""
    with pytest.raises(BadRequestError) as exc_info:
        parse_bucket_key(key)
    assert exc_info.value.status_code == 400


def test_month_range_is_half_open():
    """Test a month range ends at the start of the next month."""
    start, end = bucket_range("2024-03", TimeBucketSize.MONTH)
    assert start == datetime(2024, 3, 1)
    assert end == datetime(2024, 4, 1)


def test_december_range_rolls_over_year():
    """Test a December range ends in the next year."""
    start, end = bucket_range("2023-12", TimeBucketSize.MONTH)
    assert start == datetime(2023, 12, 1)
    assert end == datetime(2024, 1, 1)


def test_day_range_covers_leap_day():
    """Test a leap day range."""
    start, end = bucket_range("2024-02-29", TimeBucketSize.DAY)
    assert (start, end) == (datetime(2024, 2, 29), datetime(2024, 3, 1))


@pytest.mark.parametrize(("key", "size"), [("9999-12", TimeBucketSize.MONTH), ("9999-12-31", TimeBucketSize.DAY)])
def test_last_representable_bucket_is_rejected(key, size):
    """A bucket whose end falls past year 9999 is a bad request, not a crash."""
    with pytest.raises(BadRequestError) as exc_info:
        bucket_range(key, size)
    assert exc_info.value.status_code == 400
