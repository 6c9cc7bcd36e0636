from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_naive_utc(moment: datetime) -> datetime:
    """Rows store naive UTC; aware inputs are converted, naive ones trusted."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)
