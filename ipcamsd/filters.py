"""
Date/time range filtering of remote dates and records.

Dates are zero-padded ``YYYYMMDD`` strings and times ``HHMMSS`` strings, so
plain string comparison orders them chronologically and no calendar
arithmetic is needed for the range tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

DATE_FORMAT = "%Y%m%d"
TIME_FORMAT = "%H%M%S"

# Placeholder marker of recordings that are still being written
SENTINEL = "999999"

_LOWER_DEFAULT = "000000"
_UPPER_DEFAULT = "999999"


def process_record_filter(value: Optional[str]) -> Optional[str]:
    """Pad a partial ``HHMMSS`` value to six digits.

    A single digit gets one leading zero first, then zeros are appended
    (``"1"`` -> ``"010000"``, ``"13"`` -> ``"130000"``). Empty or missing
    input stays ``None``.
    """
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    if len(value) < 6:
        if len(value) == 1:
            value = "0" + value
        value += "0" * (6 - len(value))
    return value


def resolve_date(value: Optional[str], now: Optional[datetime] = None) -> Optional[str]:
    """Resolve the ``today``/``yesterday`` keywords to ``YYYYMMDD``.

    Any other value is returned unchanged.
    """
    if not value:
        return value
    now = now or datetime.now()
    keyword = value.lower()
    if keyword == "today":
        return now.strftime(DATE_FORMAT)
    if keyword == "yesterday":
        return (now - timedelta(days=1)).strftime(DATE_FORMAT)
    return value


def is_date_in_range(date: str, start: Optional[str] = None,
                     end: Optional[str] = None) -> bool:
    """True if ``date`` lies in ``[start, end]``; absent bounds are open."""
    return (not start or date >= start) and (not end or date <= end)


@dataclass(frozen=True)
class DateTimeRange:
    """Resolved date/time filter of one fetch or list run.

    An instance with every field unset is unbounded and matches everything.
    """

    date_start: Optional[str] = None
    date_end: Optional[str] = None
    time_start: Optional[str] = None
    time_end: Optional[str] = None
    separate_by_date: bool = False
    last_minutes: Optional[int] = None
    start_delay: Optional[int] = None

    @property
    def is_unbounded(self) -> bool:
        return not (self.date_start or self.date_end
                    or self.time_start or self.time_end)

    @property
    def lower_bound(self) -> str:
        return f"{self.date_start or _LOWER_DEFAULT}_{self.time_start or _LOWER_DEFAULT}"

    @property
    def upper_bound(self) -> str:
        return f"{self.date_end or _UPPER_DEFAULT}_{self.time_end or _UPPER_DEFAULT}"

    @classmethod
    def build(cls, start_date: Optional[str] = None, end_date: Optional[str] = None,
              start_time: Optional[str] = None, end_time: Optional[str] = None,
              separate_by_date: bool = False, last_minutes: Optional[int] = None,
              start_delay: Optional[int] = None,
              now: Optional[datetime] = None) -> "DateTimeRange":
        """Resolve command line values into a range.

        The start date defaults to today. Without an end date the range ends
        on the start date, or on the following day when both times are given
        and the end time precedes the start time (a range across midnight).
        ``last_minutes`` then replaces the start date and time with
        ``now - last_minutes``.
        """
        now = now or datetime.now()

        date_start = resolve_date(start_date or "today", now)
        date_end = resolve_date(end_date, now)
        time_start = process_record_filter(start_time)
        time_end = process_record_filter(end_time)

        if not date_end:
            if time_start and time_end and time_end < time_start:
                day = datetime.strptime(date_start, DATE_FORMAT) + timedelta(days=1)
                date_end = day.strftime(DATE_FORMAT)
            else:
                date_end = date_start

        if last_minutes:
            begin = now - timedelta(minutes=int(last_minutes))
            date_start = begin.strftime(DATE_FORMAT)
            time_start = begin.strftime(TIME_FORMAT)

        return cls(
            date_start=date_start,
            date_end=date_end,
            time_start=time_start,
            time_end=time_end,
            separate_by_date=bool(separate_by_date),
            last_minutes=last_minutes,
            start_delay=start_delay,
        )


def is_record_in_range(date: str, record, time_range: Optional[DateTimeRange],
                       codec) -> bool:
    """Test whether a record overlaps the requested window.

    The record's ``date_start`` and ``date_end`` keys are built from the
    remote date directory and the times decoded from its name. A record
    passes when either key is at or after the lower bound and either key is
    at or before the upper bound, so partially overlapping records count.
    Sentinel records and names without decodable times never pass.
    """
    if SENTINEL in str(record):
        return False

    start_time = codec.decode(record, "time", "start")
    end_time = codec.decode(record, "time", "end")
    if start_time is None or end_time is None:
        return False

    time_range = time_range or DateTimeRange()
    lower = time_range.lower_bound
    upper = time_range.upper_bound
    start_key = f"{date}_{start_time}"
    end_key = f"{date}_{end_time}"

    return ((start_key >= lower or end_key >= lower)
            and (end_key <= upper or start_key <= upper))
