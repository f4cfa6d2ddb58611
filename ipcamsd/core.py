"""
Core orchestration for ipcamsd.

Drives one firmware adapter per configured host through record discovery,
per-date staging (download and repair), manifest creation and FFmpeg
concatenation, or through the read-only list mode. Hosts, dates and records
are processed strictly one after another so manifests and output names
follow the remote listing order. Also contains the CLI entry point (main).
"""

import argparse
import dataclasses
import logging
import re
import sys
import tempfile
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from utils import (
    DownloadConfig,
    TerminalProgressTracker,
    configure_logging,
    elapsed,
    sanitize_filename,
)

from ipcamsd.codec import RecordTimes
from ipcamsd.filters import DATE_FORMAT, DateTimeRange
from ipcamsd.firmwares import FIRMWARES, get_firmware
from ipcamsd.manifest import COMBINED_MANIFEST_NAME, manifest_path, write_manifest
from ipcamsd.report import HostReport
from ipcamsd.session import DEFAULT_FIRMWARE, FetchOptions, HostOptions
from ipcamsd.transcoder import (
    MissingToolError,
    TranscodeError,
    concatenate,
    find_ffmpeg,
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

FETCH = "fetch"
LIST = "list"
COMMANDS = (FETCH, LIST)

NO_RECORDS = "No records found"
NOT_SUPPORTED = "Feature not supported"


# ---- Output names ----

def build_output_filename(first: RecordTimes, last: Optional[RecordTimes], host: str,
                          prefix: Optional[str] = None, file_type: str = "mp4") -> str:
    """Derive an output file name from the first and last record of a group.

    ``last`` is None for a single record. The last record's date is only
    included when it differs from the first one's.

    Example:
        1.2.3.4_20230101_120000_20230102_010000.mp4
    """
    head = (f"{prefix}_" if prefix else "") + f"{host}_"
    span = f"{first.date}_{first.start}"
    if last is not None:
        if last.date != first.date:
            span += f"_{last.date}"
        span += f"_{last.end}"
    else:
        span += f"_{first.end}"
    return sanitize_filename(f"{head}{span}.{file_type.lower()}")


def output_filename(records: list, codec, host: str, options: FetchOptions,
                    index: int) -> str:
    """Name of the output file for ``records`` of host ``index``.

    An explicit file name given for the host is used as is.
    """
    explicit = options.filename_for(index)
    if explicit:
        return f"{explicit}.{options.file_type}"
    first = codec.parts(records[0])
    last = codec.parts(records[-1]) if len(records) > 1 else None
    return build_output_filename(first, last, host, options.filename_prefix,
                                 options.file_type)


def summarize_records(records: list) -> Optional[str]:
    """``first`` or ``first - last`` for a date's records; None if empty."""
    if not records:
        return None
    if len(records) == 1:
        return str(records[0])
    return f"{records[0]} - {records[-1]}"


# ---- Fetch ----

def _log_download_stage(adapter, tracker) -> None:
    convert = " and convert" if adapter.can_repair else ""
    tracker.message(f"1. Download{convert} recorded files")


def _create_output(manifest: Path, filename: str, options: FetchOptions,
                   ffmpeg: str, tracker, report: HostReport) -> Path:
    tracker.message("2. Merge downloaded files")
    directory = Path(options.target_directory) if options.target_directory else Path.cwd()
    directory.mkdir(parents=True, exist_ok=True)
    output = concatenate(manifest, directory / filename, options.video_filters,
                         binary=ffmpeg, tracker=tracker)
    tracker.message("3. Create output file")
    tracker.message(filename)
    report.outputs.append(str(output))
    return output


def _stage_date(adapter, entry, date_dir: Path, tracker, report: HostReport) -> list:
    """Download (and repair) the records of one date; return the staged ones."""
    date_dir.mkdir(parents=True, exist_ok=True)
    staged = adapter.download_record_files(entry, date_dir, tracker)
    report.records_downloaded += len(staged)
    report.records_failed += len(entry.records) - len(staged)
    if adapter.can_repair:
        for record in staged:
            adapter.repair_record_file(date_dir / record.name)
    return staged


def fetch_host(adapter, time_range: DateTimeRange, options: FetchOptions,
               config: DownloadConfig, ffmpeg: str, tracker,
               report: HostReport) -> None:
    """Discover, stage and concatenate the records of one host.

    The staging directory is removed when this returns or raises.
    """
    if time_range.start_delay:
        tracker.message(f"Start delay: {time_range.start_delay} minute(s)")
        time.sleep(time_range.start_delay * 60)

    with tempfile.TemporaryDirectory(prefix=config.temp_prefix) as tmp:
        staging = Path(tmp)
        dates = adapter.get_records(time_range)
        report.dates = len(dates)
        if not dates:
            tracker.message(NO_RECORDS)
            report.status = "no_records"
            return

        separate = time_range.separate_by_date
        if not separate:
            _log_download_stage(adapter, tracker)

        combined: list = []
        for entry in dates:
            if not entry.records:
                tracker.message(NO_RECORDS)
                continue

            tracker.message(entry.date)
            if separate:
                _log_download_stage(adapter, tracker)

            date_dir = staging / entry.date
            staged = _stage_date(adapter, entry, date_dir, tracker, report)
            if not staged:
                logger.warning("No records of %s could be downloaded", entry.date,
                               extra={"host": adapter.host, "date": entry.date})
                continue

            if separate:
                manifest = write_manifest(
                    manifest_path(date_dir, entry.date),
                    [date_dir / record.name for record in staged],
                )
                name = output_filename(staged, adapter.codec, adapter.host,
                                       options, adapter.index)
                _create_output(manifest, name, options, ffmpeg, tracker, report)
            else:
                combined.extend((date_dir / record.name, record) for record in staged)

        if not separate and combined:
            manifest = write_manifest(
                manifest_path(staging, COMBINED_MANIFEST_NAME),
                [path for path, _ in combined],
            )
            name = output_filename([record for _, record in combined], adapter.codec,
                                   adapter.host, options, adapter.index)
            _create_output(manifest, name, options, ffmpeg, tracker, report)

    if report.outputs:
        report.status = "completed"
    elif report.records_failed:
        report.status = "failed"
        report.add_error("no record could be downloaded")
    else:
        report.status = "no_records"


# ---- List ----

def list_host(adapter, tracker, report: HostReport) -> None:
    """Print every date of one host with its first and last record."""
    if not adapter.supports_listing:
        tracker.message(NOT_SUPPORTED)
        report.status = "unsupported"
        return

    dates = adapter.get_records(DateTimeRange())
    report.dates = len(dates)
    if not dates:
        tracker.message(NO_RECORDS)
        report.status = "no_records"
        return

    for entry in dates:
        tracker.message(entry.date)
        line = summarize_records(entry.records)
        if line:
            tracker.message(line)
            report.listing.append(line)
    report.status = "completed"


# ---- Orchestration ----

def _process_host(command: str, session, time_range: DateTimeRange,
                  options: FetchOptions, config: DownloadConfig,
                  ffmpeg: Optional[str], tracker) -> HostReport:
    report = HostReport(host=session.host, command=command,
                        firmware=session.firmware_name)
    started = time.time()

    firmware_cls = get_firmware(session.firmware_name)
    if firmware_cls is None:
        logger.warning("Firmware %s not found", session.firmware_name,
                       extra={"host": session.host})
        report.status = "skipped"
        report.add_error(f"unknown firmware {session.firmware_name}")
        return report

    tracker.message(f"Firmware: {firmware_cls.name}")
    adapter = firmware_cls(session, config=config)
    try:
        if command == LIST:
            list_host(adapter, tracker, report)
        else:
            fetch_host(adapter, time_range, options, config, ffmpeg, tracker, report)
    except (OSError, ValueError, TranscodeError) as exc:
        logger.error("Error: %s", exc, extra={"host": session.host})
        report.status = "failed"
        report.add_error(str(exc))
    finally:
        adapter.close()
        report.elapsed_seconds = time.time() - started

    logger.debug("%s: %s (%s)", session.host, report.console_summary(), elapsed(started))
    return report


def process(command: Optional[str], hosts: HostOptions,
            time_range: Optional[DateTimeRange] = None,
            options: Optional[FetchOptions] = None,
            config: Optional[DownloadConfig] = None,
            tracker=None) -> list[HostReport]:
    """Run ``command`` ("fetch" or "list") for every configured host.

    Args:
        command: Command name; None means "fetch"
        hosts: Hosts with their positionally aligned firmware/auth lists
        time_range: Resolved date/time filter (fetch only)
        options: Output settings (fetch only)
        config: Timeouts, FFmpeg binary and defaults
        tracker: Progress/status output; a terminal tracker if None

    Returns:
        One HostReport per host, in host order

    Raises:
        MissingToolError: If FFmpeg is needed and not installed
        ValueError: If the command is unknown
    """
    command = command or FETCH
    if command not in COMMANDS:
        raise ValueError(f"Unknown command: {command}")

    config = config or DownloadConfig.from_env()
    tracker = tracker or TerminalProgressTracker()
    options = options or FetchOptions()
    if options.target_file_type is None:
        options = dataclasses.replace(options, target_file_type=config.target_file_type)

    ffmpeg = None
    if command == FETCH:
        ffmpeg = find_ffmpeg(config.ffmpeg_binary)
        time_range = time_range or DateTimeRange.build()

    reports = []
    for session in hosts.sessions():
        if session.index > 0:
            tracker.message("")
        tracker.heading(session.host)
        reports.append(_process_host(command, session, time_range, options,
                                     config, ffmpeg, tracker))
    return reports


# ---- CLI ----

_DATE_RE = re.compile(r"^\d{8}$")
_TIME_RE = re.compile(r"^\d{1,6}$")


def _date_arg(value: str) -> str:
    if value.lower() in ("today", "yesterday"):
        return value
    if _DATE_RE.match(value):
        try:
            datetime.strptime(value, DATE_FORMAT)
        except ValueError:
            raise argparse.ArgumentTypeError(f"not a calendar date: {value!r}") from None
        return value
    raise argparse.ArgumentTypeError(f"expected yyyymmdd, today or yesterday: {value!r}")


def _time_arg(value: str) -> str:
    if _TIME_RE.match(value.strip()):
        return value.strip()
    raise argparse.ArgumentTypeError(f"expected hhmmss: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ipcamsd",
        description="Fetch, combine and convert recorded files of IP cameras.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "command", nargs="?", choices=COMMANDS, default=FETCH,
        help="fetch records into output files (default) or list them",
    )

    hosts = parser.add_argument_group("hosts")
    hosts.add_argument("--host", nargs="+", action="extend", required=True,
                       help="host of IP camera (repeatable)")
    hosts.add_argument("--firmware", nargs="+", action="extend",
                       help=f"firmware of IP camera: {', '.join(FIRMWARES)} "
                            f"(default: {DEFAULT_FIRMWARE})")
    hosts.add_argument("--username", nargs="+", action="extend",
                       help="username of IP camera")
    hosts.add_argument("--password", nargs="+", action="extend",
                       help="password of IP camera")
    hosts.add_argument("--ssl", nargs="+", action="extend", metavar="true|false",
                       help="use secure socket layer")

    fetch = parser.add_argument_group("fetch")
    fetch.add_argument("--start-date", type=_date_arg, metavar="yyyymmdd|today|yesterday",
                       help="start date of records (default: today)")
    fetch.add_argument("--end-date", type=_date_arg, metavar="yyyymmdd|today|yesterday",
                       help="end date of records")
    fetch.add_argument("--start-time", type=_time_arg, metavar="hhmmss",
                       help="start time of records")
    fetch.add_argument("--end-time", type=_time_arg, metavar="hhmmss",
                       help="end time of records")
    fetch.add_argument("--separate-by-date", action="store_true",
                       help="write one output file per date")
    fetch.add_argument("--last-minutes", type=int,
                       help="last minutes of records till now (start date and time skipped)")
    fetch.add_argument("--start-delay", type=int,
                       help="start delay in minutes")
    fetch.add_argument("--target-directory",
                       help="target directory for output files (default: current)")
    fetch.add_argument("--target-file-type",
                       help="target file type used by FFmpeg (default: mp4)")
    fetch.add_argument("--filename-prefix", help="output filename prefix")
    fetch.add_argument("--filename", nargs="+", action="extend", dest="filenames",
                       help="explicit output filename per host, without extension")
    fetch.add_argument("--video-filter", action="append", dest="video_filters",
                       help="video filter in FFmpeg format (repeatable, applied in order)")

    general = parser.add_argument_group("general")
    general.add_argument("--config", type=Path, metavar="PATH",
                         help="JSON file with settings (timeouts, FFmpeg binary, logging)")
    general.add_argument("--log-level", help="log level, e.g. DEBUG or WARNING")
    return parser


def main(argv: Optional[list] = None) -> int:
    """Parse CLI arguments and run the requested command for every host."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config:
        try:
            config = DownloadConfig.load_json(args.config)
        except (OSError, ValueError) as exc:
            parser.error(f"cannot read config {args.config}: {exc}")
    else:
        config = DownloadConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level
    configure_logging(config.log_format, config.log_level)
    logger.debug("Settings: %s", config.to_dict())

    hosts = HostOptions(
        hosts=args.host,
        firmwares=args.firmware or [DEFAULT_FIRMWARE],
        usernames=args.username or [],
        passwords=args.password or [],
        ssls=args.ssl or [],
    )

    time_range = None
    if args.command == FETCH:
        try:
            time_range = DateTimeRange.build(
                start_date=args.start_date,
                end_date=args.end_date,
                start_time=args.start_time,
                end_time=args.end_time,
                separate_by_date=args.separate_by_date,
                last_minutes=args.last_minutes,
                start_delay=args.start_delay,
            )
        except ValueError as exc:
            parser.error(f"invalid date: {exc}")

    options = FetchOptions(
        target_directory=args.target_directory,
        target_file_type=args.target_file_type,
        filename_prefix=args.filename_prefix,
        filenames=args.filenames or [],
        video_filters=args.video_filters or [],
    )

    tracker = TerminalProgressTracker()
    try:
        reports = process(args.command, hosts, time_range, options, config, tracker)
    except MissingToolError as exc:
        tracker.message(str(exc))
        return 1

    return 1 if any(r.status == "failed" for r in reports) else 0


if __name__ == "__main__":
    sys.exit(main())
