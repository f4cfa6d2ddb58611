"""
Reolink firmware adapter.

Records are found through the JSON command API (``/cgi-bin/api.cgi``) with
one ``Search`` command per calendar day and downloaded through the
``Playback`` command. Credentials travel as query parameters. The MP4
stream needs no repair.
"""

import logging
import posixpath
from datetime import date as date_cls
from datetime import datetime, timedelta
from typing import Optional
from urllib.parse import urlencode

from ipcamsd.codec import DelimitedCodec
from ipcamsd.filters import DATE_FORMAT, DateTimeRange
from ipcamsd.firmwares.base import DateEntry, FirmwareAdapter, Record

logger = logging.getLogger(__name__)

DAY_START = "000000"
DAY_END = "235959"


def date_range(start: Optional[str], end: Optional[str],
               today: Optional[date_cls] = None) -> list[date_cls]:
    """Inclusive day sequence from ``start`` to ``end``.

    Missing bounds default to today. An end before the start yields only
    the end day.
    """
    today = today or date_cls.today()
    first = datetime.strptime(start, DATE_FORMAT).date() if start else today
    last = datetime.strptime(end, DATE_FORMAT).date() if end else today
    days = (last - first).days
    return [first + timedelta(days=i) for i in range(days)] + [last]


def bound_time(value: Optional[str], index: int, length: int, end: bool) -> str:
    """Time bound of the search on day ``index`` of ``length`` days.

    Only the first day uses the real start time and only the last day the
    real end time; every other bound covers the whole day.
    """
    first = index == 0
    last = index == length - 1
    multiple = length > 1
    if (not value
            or (not first and not last)
            or (first and multiple and end)
            or (last and multiple and not end)):
        return DAY_END if end else DAY_START
    return value


def _time_fields(day: date_cls, hhmmss: str) -> dict:
    return {
        "year": day.year,
        "mon": day.month,
        "day": day.day,
        "hour": int(hhmmss[0:2]),
        "min": int(hhmmss[2:4]),
        "sec": int(hhmmss[4:6]),
    }


def search_payload(day: date_cls, start: str, end: str) -> list:
    """Body of one ``Search`` command for the main stream of channel 0."""
    return [{
        "cmd": "Search",
        "action": 0,
        "param": {
            "Search": {
                "channel": 0,
                "onlyStatus": 0,
                "streamType": "main",
                "StartTime": _time_fields(day, start),
                "EndTime": _time_fields(day, end),
            }
        },
    }]


def _search_files(result) -> list:
    try:
        return result[0]["value"]["SearchResult"]["File"] or []
    except (KeyError, IndexError, TypeError):
        return []


class Reolink(FirmwareAdapter):
    """Adapter for cameras with the Reolink HTTP API."""

    name = "reolink"
    codec = DelimitedCodec()
    supports_listing = False

    def set_base_url(self) -> None:
        query = urlencode({
            "user": self.auth.username or "",
            "password": self.auth.password or "",
        })
        self.base_url = f"{self.auth.scheme}://{self.host}/cgi-bin/api.cgi?{query}"

    def command_url(self, command: str, query: str = "") -> str:
        return f"{self.base_url}&cmd={command}{query}"

    def get_records(self, time_range: Optional[DateTimeRange]) -> list[DateEntry]:
        time_range = time_range or DateTimeRange()
        days = date_range(time_range.date_start, time_range.date_end)
        url = self.command_url("Search")

        dates = []
        for index, day in enumerate(days):
            start = bound_time(time_range.time_start, index, len(days), end=False)
            end = bound_time(time_range.time_end, index, len(days), end=True)
            result = self.client.search(url, search_payload(day, start, end))
            files = _search_files(result)
            if not files:
                logger.debug("No files on %s", day.isoformat(), extra={"host": self.host})
                continue
            dates.append(DateEntry(
                date=day.strftime(DATE_FORMAT),
                records=[Record(name=posixpath.basename(f.get("name", "")))
                         for f in files if f.get("name")],
            ))
        return dates

    def record_url(self, entry: DateEntry, record: Record) -> str:
        day = f"{entry.date[0:4]}-{entry.date[4:6]}-{entry.date[6:8]}"
        return self.command_url(
            "Playback", f"&source=Mp4Record/{day}/{record.name}&output={record.name}")
