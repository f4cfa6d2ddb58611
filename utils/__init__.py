"""Shared utilities for the ipcamsd tools."""

# Common utilities
from utils.common import format_bytes, elapsed, sanitize_filename

# Progress tracking
from utils.progress import (
    ProgressTracker,
    TerminalProgressTracker,
    SilentProgressTracker,
)

# HTTP utilities
from utils.http import SessionManager

# Configuration
from utils.config import Config, DownloadConfig

# Logging
from utils.logs import configure_logging

__all__ = [
    # Common
    "format_bytes",
    "elapsed",
    "sanitize_filename",
    # Progress
    "ProgressTracker",
    "TerminalProgressTracker",
    "SilentProgressTracker",
    # HTTP
    "SessionManager",
    # Config
    "Config",
    "DownloadConfig",
    # Logging
    "configure_logging",
]
