"""
Pytest fixtures for ipcamsd tests.

Provides HTML listing builders, a fake HTTP client, registrable fake firmware
adapters and a fake FFmpeg so orchestration tests run without network access
or an FFmpeg installation.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ipcamsd.codec import FixedOffsetCodec  # noqa: E402
from ipcamsd.firmwares import FIRMWARES  # noqa: E402
from ipcamsd.firmwares.base import DateEntry, FirmwareAdapter, Record  # noqa: E402
from utils.progress import SilentProgressTracker  # noqa: E402


# ── Helpers ───────────────────────────────────────────────────────────────────

def make_listing(entries: list[str]) -> str:
    """Build a firmware-style HTML listing: three leading rows, then one anchor per row."""
    rows = [
        "<tr><th>Name</th><th>Size</th></tr>",
        "<tr><td colspan='2'><hr></td></tr>",
        "<tr><td><a href='../'>Parent Directory</a></td><td></td></tr>",
    ]
    for entry in entries:
        rows.append(f"<tr><td><a href='{entry}'>{entry}</a></td><td>1k</td></tr>")
    return ("<html><body><table><tbody>" + "".join(rows)
            + "</tbody></table></body></html>")


def read_manifest(path) -> list[str]:
    """Return the file paths listed in a concat manifest."""
    files = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        if line.startswith("file "):
            files.append(line[len("file "):][1:-1].replace("'\\''", "'"))
    return files


class FakeClient:
    """Stand-in for RemoteDirectoryClient keyed by URL."""

    def __init__(self, listings=None, searches=None, fail=()):
        self.headers = {}
        self.listings = listings or {}
        self.searches = list(searches or [])
        self.fail = set(fail)
        self.requested = []
        self.payloads = []
        self.downloads = []
        self.closed = False

    def list_entries(self, url):
        self.requested.append(url)
        return list(self.listings.get(url, []))

    def search(self, url, payload):
        self.requested.append(url)
        self.payloads.append(payload)
        return self.searches.pop(0) if self.searches else None

    def download(self, url, dest_path, tracker=None):
        self.downloads.append(url)
        if dest_path.name in self.fail:
            return False
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_bytes(b"data:" + dest_path.name.encode())
        return True

    def close(self):
        self.closed = True


class FakeAdapter(FirmwareAdapter):
    """Firmware adapter serving a fixed list of date entries."""

    name = "fake"
    codec = FixedOffsetCodec()
    entries: list = []
    fail: set = set()
    staging_dirs: list = []
    ranges: list = []

    def __init__(self, session, config=None, client=None):
        super().__init__(session, config=config, client=client or FakeClient(fail=self.fail))

    def set_base_url(self):
        self.base_url = f"http://{self.host}/fake"

    def get_records(self, time_range):
        self.ranges.append(time_range)
        return [DateEntry(e.date, list(e.records)) for e in self.entries]

    def record_url(self, entry, record):
        return f"{self.base_url}/{entry.date}/{record.name}"

    def download_record_files(self, entry, staging_dir, tracker=None):
        self.staging_dirs.append(Path(staging_dir))
        return super().download_record_files(entry, staging_dir, tracker)


class FakeRepairAdapter(FakeAdapter):
    """Fake adapter that also repairs downloaded records."""

    repaired: list = []

    def repair_record_file(self, local_file):
        self.repaired.append(Path(local_file).name)


def entry(date: str, *names: str) -> DateEntry:
    return DateEntry(date, [Record(n) for n in names])


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def tracker():
    return SilentProgressTracker()


@pytest.fixture
def register_firmware(monkeypatch):
    """Register a fake firmware under ``name`` for the duration of a test."""
    def _register(entries, name="fake", repair=False, listing=True, fail=()):
        base = FakeRepairAdapter if repair else FakeAdapter
        attrs = {
            "name": name,
            "entries": entries,
            "supports_listing": listing,
            "fail": set(fail),
            "staging_dirs": [],
            "ranges": [],
        }
        if repair:
            attrs["repaired"] = []
        cls = type("FakeFirmware", (base,), attrs)
        monkeypatch.setitem(FIRMWARES, name, cls)
        return cls
    return _register


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    """Replace FFmpeg lookup and concatenation; return the recorded calls."""
    calls = []

    def _concatenate(manifest, output, video_filters=None, binary="ffmpeg", tracker=None):
        calls.append({
            "manifest": Path(manifest),
            "files": [Path(f) for f in read_manifest(manifest)],
            "output": Path(output),
            "filters": list(video_filters or []),
            "binary": binary,
        })
        return Path(output)

    monkeypatch.setattr("ipcamsd.core.find_ffmpeg", lambda binary="ffmpeg": "/usr/bin/ffmpeg")
    monkeypatch.setattr("ipcamsd.core.concatenate", _concatenate)
    return calls
