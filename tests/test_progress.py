"""
Tests for progress trackers — utils/progress.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.progress import SilentProgressTracker, TerminalProgressTracker


class TestSilentTracker:
    def test_result_lines(self):
        t = SilentProgressTracker()
        t.file_done("a.264", 2048)
        t.file_done("b.264", 0, ok=False)

        assert t.lines == ["    [OK] a.264 (2 KB)", "    [FAIL] b.264 (0 KB)"]

    def test_progress_not_recorded_as_lines(self):
        t = SilentProgressTracker()
        t.file_progress("a.264", 10, 100)
        t.inline("FFmpeg: 5 frames processed")
        assert t.progress_updates == 2
        assert t.lines == []


class TestTerminalTracker:
    def test_message(self, capsys):
        TerminalProgressTracker().message("1. Download recorded files")
        assert capsys.readouterr().out == "1. Download recorded files\n"

    def test_heading_underlined(self, capsys):
        TerminalProgressTracker().heading("192.168.1.10")
        assert capsys.readouterr().out == "\n192.168.1.10\n------------\n"

    def test_progress_line_closed_before_message(self, capsys):
        t = TerminalProgressTracker(interval=0)
        t.file_progress("P230101_120000_123000.264", 512, 1024)
        t.file_done("P230101_120000_123000.264", 1024)

        out = capsys.readouterr().out
        assert out.startswith("\r    P230101_120000_123000.264")
        assert "50.0%" in out
        assert out.endswith("\n    [OK] P230101_120000_123000.264 (1 KB)\n")

    def test_unknown_size(self, capsys):
        t = TerminalProgressTracker(interval=0)
        t.file_progress("a.264", 2048, 0)
        assert "2 KB" in capsys.readouterr().out

    def test_throttled(self, capsys):
        t = TerminalProgressTracker(interval=3600)
        t.inline("FFmpeg: 1 frames processed")
        t.inline("FFmpeg: 2 frames processed")
        out = capsys.readouterr().out
        assert "1 frames" in out
        assert "2 frames" not in out

    def test_end_progress_without_line(self, capsys):
        TerminalProgressTracker().end_progress()
        assert capsys.readouterr().out == ""
