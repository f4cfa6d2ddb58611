"""
HI3510 firmware adapter.

Records are served from the SD card as plain HTML directory listings below
``/sd``: one folder per day (``20230101/``), which holds one or two levels
of record folders with ``.264`` files. The raw files are ``HXVS``
containers and are repaired before concatenation.
"""

import logging
from pathlib import Path
from typing import Optional

from ipcamsd.codec import FixedOffsetCodec
from ipcamsd.filters import DateTimeRange, is_date_in_range, is_record_in_range
from ipcamsd.firmwares.base import (
    DateEntry,
    FirmwareAdapter,
    Record,
    basic_auth_headers,
)
from ipcamsd.repair import repair_file

logger = logging.getLogger(__name__)

# Database file kept next to the record folders
IGNORED_ENTRY = "recdata.db"

# Folder levels below a date directory searched for records
MAX_DEPTH = 2


class Hi3510(FirmwareAdapter):
    """Adapter for cameras with the HI3510 web interface."""

    name = "hi3510"
    codec = FixedOffsetCodec()

    def set_base_url(self) -> None:
        self.base_url = f"{self.auth.scheme}://{self.host}/sd"

    def set_auth_headers(self) -> None:
        self.headers = basic_auth_headers(self.auth.username, self.auth.password)

    def get_records(self, time_range: Optional[DateTimeRange]) -> list[DateEntry]:
        time_range = time_range or DateTimeRange()
        dates = []
        for date in self._get_date_entries(time_range.date_start, time_range.date_end):
            records = self._get_record_entries(date, time_range)
            dates.append(DateEntry(date=date, records=records))
        return dates

    def _get_date_entries(self, start: Optional[str], end: Optional[str]) -> list[str]:
        # Listing entries carry a trailing delimiter, e.g. "20230101/"
        dates = [entry[:-1] for entry in self.client.list_entries(self.base_url) if entry]
        return [date for date in dates if is_date_in_range(date, start, end)]

    def _get_record_entries(self, date: str, time_range: DateTimeRange) -> list[Record]:
        records: list[Record] = []
        self._walk(f"{self.base_url}/{date}", date, "", 0, time_range, records)
        return records

    def _walk(self, url: str, date: str, relative: str, depth: int,
              time_range: DateTimeRange, records: list) -> None:
        for entry in self.client.list_entries(url):
            name = entry.rstrip("/")
            if not name or name == IGNORED_ENTRY:
                continue
            if entry.endswith("/"):
                if depth < MAX_DEPTH:
                    child = f"{relative}/{name}" if relative else name
                    self._walk(f"{url}/{name}", date, child, depth + 1,
                               time_range, records)
                else:
                    logger.debug("Skipping nested folder %s/%s", url, name)
                continue
            if is_record_in_range(date, name, time_range, self.codec):
                records.append(Record(name=name, directory=relative or None))

    def record_url(self, entry: DateEntry, record: Record) -> str:
        return f"{self.base_url}/{entry.date}/{record.remote_path}"

    def repair_record_file(self, local_file: Path) -> None:
        repair_file(local_file)
