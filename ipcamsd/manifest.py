"""
Concatenation manifests for FFmpeg.

A manifest is a text file listing the staged record files of one output
file, one ``file '<path>'`` line each, in concatenation order. It is read by
FFmpeg's concat demuxer and never reused.
"""

from pathlib import Path
from typing import Iterable

# Manifest of a combined run, written to the staging root
COMBINED_MANIFEST_NAME = "0000"


def escape_concat_path(path) -> str:
    """Quote a path for a concat demuxer ``file`` directive."""
    return "'" + str(path).replace("'", "'\\''") + "'"


def manifest_path(directory: Path, name: str) -> Path:
    """Path of manifest ``name`` inside ``directory``."""
    return Path(directory) / f"{name}.txt"


def write_manifest(path: Path, files: Iterable) -> Path:
    """Write the manifest listing ``files`` to ``path``.

    Args:
        path: Destination text file
        files: Local record paths, in concatenation order

    Returns:
        The manifest path
    """
    path = Path(path)
    with open(path, "w", encoding="utf-8") as fh:
        for f in files:
            fh.write(f"file {escape_concat_path(f)}\n")
    return path

