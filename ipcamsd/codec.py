"""
Record filename codecs.

Camera firmwares embed the recording date and the start/end times of a
segment at fixed positions of the record filename. A codec extracts those
substrings; it never raises, returning ``None`` for empty or malformed names
so callers can test range membership unconditionally.
"""

from dataclasses import dataclass
from typing import Optional

DATE = "date"
TIME = "time"
START = "start"
END = "end"


@dataclass(frozen=True)
class RecordTimes:
    """Decoded parts of one record name."""

    date: Optional[str]
    start: Optional[str]
    end: Optional[str]


def _basename(record) -> str:
    name = str(record or "")
    return name.rsplit("/", 1)[-1]


class FilenameCodec:
    """Base codec reading ``(begin, end)`` slices of a record name."""

    # (begin, end) slices, end exclusive
    date_slice = (0, 0)
    start_slice = (0, 0)
    end_slice = (0, 0)

    def _payload(self, name: str) -> Optional[str]:
        return name

    def decode(self, record, part: str = DATE, boundary: str = START) -> Optional[str]:
        """Return the date or the start/end time embedded in ``record``.

        Args:
            record: Record name, optionally prefixed with ``dir/`` components
            part: ``"date"`` or ``"time"``
            boundary: ``"start"`` or ``"end"`` (only used for ``"time"``)

        Returns:
            The digit substring, or None if the name is too short or the
            slice is not all digits.
        """
        payload = self._payload(_basename(record))
        if not payload:
            return None
        if part == DATE:
            begin, end = self.date_slice
        elif part == TIME:
            begin, end = self.end_slice if boundary == END else self.start_slice
        else:
            return None
        value = payload[begin:end]
        if len(value) != end - begin or not value.isdigit():
            return None
        return value

    def parts(self, record) -> RecordTimes:
        """Decode date, start time and end time in one call."""
        return RecordTimes(
            date=self.decode(record, DATE),
            start=self.decode(record, TIME, START),
            end=self.decode(record, TIME, END),
        )


class FixedOffsetCodec(FilenameCodec):
    """Names like ``P230101_120000_123000.264``."""

    date_slice = (1, 7)
    start_slice = (8, 14)
    end_slice = (15, 21)


class DelimitedCodec(FilenameCodec):
    """Names like ``RecM01_20230101_120000_123000_...mp4``.

    The text before the first underscore is dropped; offsets apply to the
    remainder.
    """

    date_slice = (2, 8)
    start_slice = (9, 15)
    end_slice = (16, 22)

    def _payload(self, name: str) -> Optional[str]:
        if "_" not in name:
            return None
        return name.split("_", 1)[1]
