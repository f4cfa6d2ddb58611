"""
Tests for record filename codecs — ipcamsd/codec.py
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ipcamsd.codec import DelimitedCodec, FixedOffsetCodec, RecordTimes


class TestFixedOffsetCodec:
    codec = FixedOffsetCodec()
    name = "P230101_120000_123000.264"

    def test_date(self):
        assert self.codec.decode(self.name) == "230101"
        assert self.codec.decode(self.name, "date") == "230101"

    def test_start_and_end_time(self):
        assert self.codec.decode(self.name, "time", "start") == "120000"
        assert self.codec.decode(self.name, "time", "end") == "123000"

    def test_offsets_are_exact(self):
        """Each field is read from its own distinct digits."""
        name = "A" + "111111" + "_" + "222222" + "_" + "333333" + ".264"
        assert self.codec.parts(name) == RecordTimes("111111", "222222", "333333")

    def test_directory_prefix_ignored(self):
        assert self.codec.decode("record000/" + self.name, "time", "end") == "123000"

    @pytest.mark.parametrize("value", [None, "", "P2301", "recdata.db", "Pabcdef_120000_123000"])
    def test_malformed_returns_none(self, value):
        assert self.codec.decode(value) is None

    def test_unknown_part(self):
        assert self.codec.decode(self.name, "size") is None


class TestDelimitedCodec:
    codec = DelimitedCodec()
    name = "RecM01_20230101_120000_123000_6B8C000_1A2B3C.mp4"

    def test_parts(self):
        assert self.codec.parts(self.name) == RecordTimes("230101", "120000", "123000")

    def test_prefix_before_first_underscore_dropped(self):
        other = "X_20230101_120000_123000_0.mp4"
        assert self.codec.parts(other) == self.codec.parts(self.name)

    def test_no_underscore(self):
        assert self.codec.decode("RecM01.mp4") is None

    def test_empty(self):
        assert self.codec.parts("") == RecordTimes(None, None, None)
