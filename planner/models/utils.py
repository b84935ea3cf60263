from datetime import datetime, timezone


def utcnow() -> datetime:
    # Naive UTC, which is what the DateTime columns store
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc_naive(value: datetime) -> datetime:
    """Shift an aware datetime to UTC and drop the offset; naive values are taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
