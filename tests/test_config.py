"""
Tests for configuration — utils/config.py
"""
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.config import Config, DownloadConfig

ENV_VARS = (
    "IPCAMSD_HTTP_TIMEOUT",
    "IPCAMSD_DOWNLOAD_TIMEOUT",
    "IPCAMSD_FFMPEG",
    "IPCAMSD_TARGET_FILE_TYPE",
    "IPCAMSD_LOG_FORMAT",
    "IPCAMSD_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestDownloadConfig:
    def test_defaults(self, clean_env):
        cfg = DownloadConfig()
        assert cfg.timeout_seconds == 5
        assert cfg.download_timeout_seconds == 120
        assert cfg.chunk_size == 8192
        assert cfg.ffmpeg_binary == "ffmpeg"
        assert cfg.target_file_type == "mp4"
        assert cfg.temp_prefix == "ipcamsd"
        assert cfg.log_format == "text"
        assert cfg.log_level == "INFO"

    def test_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("IPCAMSD_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("IPCAMSD_FFMPEG", "/opt/ffmpeg/bin/ffmpeg")
        monkeypatch.setenv("IPCAMSD_LOG_FORMAT", "json")

        cfg = DownloadConfig.from_env()
        assert cfg.timeout_seconds == 2.5
        assert cfg.ffmpeg_binary == "/opt/ffmpeg/bin/ffmpeg"
        assert cfg.log_format == "json"

    def test_to_dict(self, clean_env):
        d = DownloadConfig().to_dict()
        assert "timeout_seconds" in d
        assert "ffmpeg_binary" in d
        assert "target_file_type" in d

    def test_roundtrip_json(self, clean_env, tmp_path):
        cfg = DownloadConfig()
        cfg.timeout_seconds = 10
        cfg.target_file_type = "mkv"
        path = tmp_path / "ipcamsd.json"
        path.write_text(json.dumps(cfg.to_dict()))

        loaded = DownloadConfig.load_json(path)
        assert isinstance(loaded, DownloadConfig)
        assert loaded.timeout_seconds == 10
        assert loaded.target_file_type == "mkv"

    def test_partial_file_keeps_defaults(self, clean_env, tmp_path):
        path = tmp_path / "ipcamsd.json"
        path.write_text(json.dumps({"ffmpeg_binary": "avconv"}))

        loaded = DownloadConfig.load_json(path)
        assert loaded.ffmpeg_binary == "avconv"
        assert loaded.download_timeout_seconds == 120

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.load_json(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            DownloadConfig.load_json(path)
