"""Common utility functions used across the ipcamsd tools."""

import time

PATH_SEPARATORS = ("/", "\\")


def format_bytes(b: int) -> str:
    """Format bytes into human-readable size string.

    Examples:
        512 KB, 1.5 MB, 2.34 GB
    """
    if b < 1024 * 1024:
        return f"{b / 1024:.0f} KB"
    if b < 1024 * 1024 * 1024:
        return f"{b / (1024 * 1024):.1f} MB"
    return f"{b / (1024 * 1024 * 1024):.2f} GB"


def elapsed(start_time: float) -> str:
    """Format elapsed time from start_time to now as human-readable string.

    Examples:
        30s, 2m 15s, 1h 05m 30s
    """
    secs = int(time.time() - start_time)
    m, s = divmod(secs, 60)
    h, m = divmod(m, 60)
    if h:
        return f"{h}h {m:02d}m {s:02d}s"
    return f"{m}m {s:02d}s"


def sanitize_filename(name: str) -> str:
    """Replace path separators so ``name`` stays a single path component.

    Every other character, including the ``:`` of a ``host:port``, is kept.
    """
    for sep in PATH_SEPARATORS:
        name = name.replace(sep, "_")
    return name
