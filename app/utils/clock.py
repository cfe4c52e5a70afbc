import time
from datetime import datetime, timezone


def now_ms() -> int:
    return int(time.time() * 1000)


def to_epoch_ms(value: datetime) -> int:
    # sqlite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
