"""
Timestamp rendering shared by the encoder and the record encoder.
"""

import datetime

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def as_utc(tim: datetime.datetime) -> datetime.datetime:
    """
    Return tim as an aware datetime. Naive datetimes are taken to be UTC.
    """
    if tim.utcoffset() is None:
        return tim.replace(tzinfo=datetime.timezone.utc)
    return tim


def unix_nano(tim: datetime.datetime) -> int:
    delta = as_utc(tim) - EPOCH
    return (delta.days * 86400 + delta.seconds) * 10**9 + delta.microseconds * 1000


def unix_milli(tim: datetime.datetime) -> int:
    return unix_nano(tim) // 10**6


def unix(tim: datetime.datetime) -> int:
    return unix_nano(tim) // 10**9


def format_rfc3339(tim: datetime.datetime) -> str:
    """
    Format as "2006-01-02T15:04:05Z07:00": whole seconds, "Z" for UTC.
    """
    offset = tim.utcoffset()
    zone = "Z"
    if offset:
        total = int(offset.total_seconds())
        sign = "-" if total < 0 else "+"
        total = abs(total)
        zone = f"{sign}{total // 3600:02d}:{total % 3600 // 60:02d}"
    return (
        f"{tim.year:04d}-{tim.month:02d}-{tim.day:02d}T"
        f"{tim.hour:02d}:{tim.minute:02d}:{tim.second:02d}{zone}"
    )


def format_time(tim: datetime.datetime, layout: str = "") -> str:
    if layout:
        return tim.strftime(layout)
    return format_rfc3339(tim)
