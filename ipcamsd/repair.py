"""
Repair of raw HI3510 ``.264`` records.

The firmware stores segments in an ``HXVS`` container: a 16-byte file
header followed by tagged frames. Each frame has a 16-byte header whose
bytes 4-8 hold the little-endian payload length. ``HXVF`` frames carry
H.264 video, ``HXAF`` frames carry audio and an ``HXFI`` block holds the
trailing index. Writing only the video payloads yields a raw H.264 stream
that FFmpeg can concatenate.
"""

import logging
import os
import shutil
import struct
from pathlib import Path

logger = logging.getLogger(__name__)

FILE_MAGIC = b"HXVS"
VIDEO_FRAME = b"HXVF"
AUDIO_FRAME = b"HXAF"
INDEX_BLOCK = b"HXFI"

HEADER_SIZE = 16
_FRAME_HEADER = struct.Struct("<4sI8x")


def convert_file(source: Path, target: Path) -> int:
    """Write the video payloads of ``source`` to ``target``.

    A file that does not start with the ``HXVS`` magic is copied unchanged.
    Parsing stops at the index block, at an unknown tag or at a truncated
    frame.

    Returns:
        Number of video frames written (0 for a plain copy)
    """
    source, target = Path(source), Path(target)
    frames = 0
    with open(source, "rb") as src:
        header = src.read(HEADER_SIZE)
        if not header.startswith(FILE_MAGIC):
            src.seek(0)
            with open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
            return 0

        with open(target, "wb") as dst:
            while True:
                raw = src.read(HEADER_SIZE)
                if len(raw) < HEADER_SIZE:
                    break
                tag, length = _FRAME_HEADER.unpack(raw)
                if tag == VIDEO_FRAME:
                    payload = src.read(length)
                    dst.write(payload)
                    frames += 1
                    if len(payload) < length:
                        logger.debug("Truncated frame in %s", source.name)
                        break
                elif tag == AUDIO_FRAME:
                    src.seek(length, os.SEEK_CUR)
                else:
                    # HXFI index or an unknown tag ends the stream
                    break
    return frames


def repair_file(local_file: Path) -> Path:
    """Repair ``local_file`` in place.

    The converted stream is written to a sibling ``<name>_`` and then
    atomically moved over the original.
    """
    local_file = Path(local_file)
    converted = local_file.with_name(local_file.name + "_")
    try:
        frames = convert_file(local_file, converted)
        os.replace(converted, local_file)
    except OSError:
        converted.unlink(missing_ok=True)
        raise
    logger.debug("Repaired %s (%d video frames)", local_file.name, frames)
    return local_file
