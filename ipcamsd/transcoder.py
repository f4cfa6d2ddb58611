"""
FFmpeg invocation for record concatenation.

Runs the concat demuxer over one manifest and writes exactly one output
file. Without video filters the streams are copied; with filters they are
re-encoded through a single ``-vf`` chain applied in the given order.
"""

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_FFMPEG = "ffmpeg"


class MissingToolError(RuntimeError):
    """Raised when the FFmpeg executable cannot be found."""


class TranscodeError(RuntimeError):
    """Raised when FFmpeg exits with a non-zero status."""


def find_ffmpeg(binary: str = DEFAULT_FFMPEG) -> str:
    """Return the full path of ``binary``.

    Raises:
        MissingToolError: If it is not on the PATH
    """
    path = shutil.which(binary)
    if path is None:
        raise MissingToolError("FFmpeg is not installed")
    return path


def build_command(manifest: Path, output: Path,
                  video_filters: Optional[Sequence[str]] = None,
                  binary: str = DEFAULT_FFMPEG) -> list[str]:
    """Command line concatenating the files of ``manifest`` into ``output``."""
    cmd = [binary, "-y", "-loglevel", "error",
           "-f", "concat", "-safe", "0", "-i", str(manifest)]
    if video_filters:
        cmd += ["-vf", ",".join(video_filters)]
    else:
        cmd += ["-c", "copy"]
    cmd += [str(output), "-progress", "pipe:1", "-nostats"]
    return cmd


def concatenate(manifest: Path, output: Path,
                video_filters: Optional[Sequence[str]] = None,
                binary: str = DEFAULT_FFMPEG, tracker=None) -> Path:
    """Run FFmpeg and report processed frames while it works.

    Returns:
        The output path

    Raises:
        TranscodeError: If FFmpeg fails
    """
    output = Path(output)
    cmd = build_command(manifest, output, video_filters, binary)
    logger.debug("FFMPEG %s", " ".join(cmd))

    # Only stdout is read while FFmpeg runs; stderr is collected in a file
    with tempfile.TemporaryFile(mode="w+") as err_file:
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=err_file,
            text=True,
            bufsize=1,
        )
        frames = 0
        if proc.stdout:
            for line in proc.stdout:
                key, _, value = line.strip().partition("=")
                if key == "frame" and value.isdigit():
                    frames = int(value)
                    if tracker:
                        tracker.inline(f"FFmpeg: {frames} frames processed")
            proc.stdout.close()
        proc.wait()
        err_file.seek(0)
        err = err_file.read()
    if tracker:
        tracker.end_progress()

    if proc.returncode != 0:
        raise TranscodeError(
            f"FFmpeg exited with status {proc.returncode}: {(err or '').strip()}")
    if tracker:
        tracker.message(f"FFmpeg: {frames} frames processed")
    return output
