"""Configuration management utilities for ipcamsd.

Provides reusable classes for:
- Loading configuration files
- Managing environment-specific settings
"""

import json
import os as _os
from pathlib import Path
from typing import Any, Dict


class Config:
    """Base configuration class for organizing application settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance with values from dictionary
        """
        config = cls()
        for key, value in data.items():
            setattr(config, key, value)
        return config

    @classmethod
    def load_json(cls, path: Path) -> "Config":
        """Load configuration from JSON file.

        Values in the file override the defaults of ``cls()``.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


class DownloadConfig(Config):
    """Settings for record discovery, download and assembly.

    Every value has a default so the tool works without any configuration.

    Environment variables:
        IPCAMSD_HTTP_TIMEOUT: Seconds to wait for a camera response (default: 5)
        IPCAMSD_DOWNLOAD_TIMEOUT: Seconds to wait for a record download (default: 120)
        IPCAMSD_FFMPEG: FFmpeg executable name or path (default: ffmpeg)
        IPCAMSD_TARGET_FILE_TYPE: Output container extension (default: mp4)
        IPCAMSD_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        IPCAMSD_LOG_LEVEL: Root log level name (default: INFO)
    """

    def __init__(self) -> None:
        super().__init__()
        self.timeout_seconds = float(_os.getenv("IPCAMSD_HTTP_TIMEOUT", "5"))
        self.download_timeout_seconds = float(
            _os.getenv("IPCAMSD_DOWNLOAD_TIMEOUT", "120"))
        self.chunk_size = 8192
        self.ffmpeg_binary = _os.getenv("IPCAMSD_FFMPEG", "ffmpeg")
        self.target_file_type = _os.getenv("IPCAMSD_TARGET_FILE_TYPE", "mp4")
        self.temp_prefix = "ipcamsd"
        self.log_format = _os.getenv("IPCAMSD_LOG_FORMAT", "text")
        self.log_level = _os.getenv("IPCAMSD_LOG_LEVEL", "INFO")

    @classmethod
    def from_env(cls) -> "DownloadConfig":
        """Create a DownloadConfig instance populated from environment variables."""
        return cls()
