"""
Tests for logging setup — utils/logs.py
"""
import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.logs import _JsonFormatter, configure_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg="Request failed", level=logging.ERROR, **extra):
    record = logging.LogRecord("ipcamsd.listing", level, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_basic_fields(self):
        data = json.loads(_JsonFormatter().format(_record()))
        assert data["level"] == "ERROR"
        assert data["logger"] == "ipcamsd.listing"
        assert data["message"] == "Request failed"
        assert "timestamp" in data

    def test_extra_fields(self):
        record = _record(host="cam", url="http://cam/sd", date="20230101", ignored="x")
        data = json.loads(_JsonFormatter().format(record))
        assert data["host"] == "cam"
        assert data["url"] == "http://cam/sd"
        assert data["date"] == "20230101"
        assert "ignored" not in data


class TestConfigureLogging:
    def test_text(self, restore_root):
        handler = configure_logging("text", "debug")
        assert restore_root.handlers == [handler]
        assert restore_root.level == logging.DEBUG
        assert not isinstance(handler.formatter, _JsonFormatter)

    def test_json(self, restore_root):
        handler = configure_logging("json", "WARNING")
        assert isinstance(handler.formatter, _JsonFormatter)
        assert restore_root.level == logging.WARNING

    def test_unknown_level(self, restore_root):
        configure_logging("text", "chatty")
        assert restore_root.level == logging.INFO
