"""
Tests for utils/common.py

Verifies format_bytes, elapsed and sanitize_filename.
"""
import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.common import format_bytes, elapsed, sanitize_filename


# ── format_bytes ──────────────────────────────────────────────────────────────

class TestFormatBytes:
    def test_kilobytes(self):
        assert format_bytes(512 * 1024) == "512 KB"

    def test_megabytes(self):
        assert format_bytes(1536 * 1024) == "1.5 MB"

    def test_gigabytes(self):
        assert format_bytes(2 * 1024 * 1024 * 1024) == "2.00 GB"

    def test_zero(self):
        assert format_bytes(0) == "0 KB"


# ── elapsed ───────────────────────────────────────────────────────────────────

class TestElapsed:
    def test_seconds(self):
        with patch("utils.common.time.time", return_value=1000.0 + 30):
            assert elapsed(1000.0) == "0m 30s"

    def test_hours(self):
        with patch("utils.common.time.time", return_value=1000.0 + 3930):
            assert elapsed(1000.0) == "1h 05m 30s"


# ── sanitize_filename ────────────────────────────────────────────────────────

class TestSanitizeFilename:
    def test_host_port_kept(self):
        assert (sanitize_filename("10.0.0.5:8080_20230101_120000_123000.mp4")
                == "10.0.0.5:8080_20230101_120000_123000.mp4")

    def test_path_separators_replaced(self):
        assert sanitize_filename("yard/front\\cam.mp4") == "yard_front_cam.mp4"

    def test_query_like_text_kept(self):
        assert sanitize_filename("cam?1_20230101.mp4") == "cam?1_20230101.mp4"

    def test_normal_filename_unchanged(self):
        assert sanitize_filename("cam_20230101_120000_123000.mp4") == "cam_20230101_120000_123000.mp4"
