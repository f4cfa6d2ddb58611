"""
ipcamsd - fetch, combine and convert recorded files of IP cameras.

Discovers the recorded segments of HI3510 and Reolink cameras, filters them
by date/time range, downloads (and repairs) them and concatenates them with
FFmpeg into one output file per range or per date.
"""

# ---- Codecs and filters ----
from ipcamsd.codec import DelimitedCodec, FixedOffsetCodec, RecordTimes
from ipcamsd.filters import (
    DateTimeRange,
    is_date_in_range,
    is_record_in_range,
    process_record_filter,
)

# ---- Sessions ----
from ipcamsd.session import Auth, FetchOptions, HostOptions, HostSession, value_at

# ---- Firmwares ----
from ipcamsd.firmwares import DateEntry, FirmwareAdapter, Record, get_firmware

# ---- Collaborators ----
from ipcamsd.listing import RemoteDirectoryClient
from ipcamsd.manifest import write_manifest
from ipcamsd.repair import repair_file
from ipcamsd.report import HostReport
from ipcamsd.transcoder import MissingToolError, TranscodeError

# ---- Core: orchestration and CLI ----
from ipcamsd.core import (
    VERSION as __version__,
    build_output_filename,
    main,
    process,
)

__all__ = [
    # Codecs / filters
    "DelimitedCodec",
    "FixedOffsetCodec",
    "RecordTimes",
    "DateTimeRange",
    "is_date_in_range",
    "is_record_in_range",
    "process_record_filter",
    # Sessions
    "Auth",
    "FetchOptions",
    "HostOptions",
    "HostSession",
    "value_at",
    # Firmwares
    "DateEntry",
    "FirmwareAdapter",
    "Record",
    "get_firmware",
    # Collaborators
    "RemoteDirectoryClient",
    "write_manifest",
    "repair_file",
    "HostReport",
    "MissingToolError",
    "TranscodeError",
    # Core
    "__version__",
    "build_output_filename",
    "main",
    "process",
]
