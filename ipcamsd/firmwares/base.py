"""
Firmware adapter interface.

An adapter hides one camera firmware family behind a uniform contract:
derive the base URL and auth headers from a ``HostSession``, enumerate the
records matching a date/time range, and download them into a staging
directory. Adapters whose raw stream needs repair also define
``repair_record_file``.
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ipcamsd.filters import DateTimeRange
from ipcamsd.listing import RemoteDirectoryClient
from ipcamsd.session import HostSession


@dataclass(frozen=True)
class Record:
    """One remote record file.

    ``directory`` is the remote parent path below the date directory, for
    firmwares that spread one day over several folders.
    """

    name: str
    directory: Optional[str] = None

    @property
    def remote_path(self) -> str:
        if self.directory:
            return f"{self.directory}/{self.name}"
        return self.name

    def __str__(self) -> str:
        return self.name


@dataclass
class DateEntry:
    """Records of one calendar day, in remote listing order."""

    date: str
    records: list = field(default_factory=list)


def basic_auth_headers(username: Optional[str], password: Optional[str]) -> dict:
    """Authorization header for HTTP Basic auth, or {} without full credentials."""
    if not (username and password):
        return {}
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


class FirmwareAdapter(ABC):
    """Base class of the per-firmware adapters."""

    name = ""
    codec = None
    supports_listing = True

    def __init__(self, session: HostSession, config=None,
                 client: Optional[RemoteDirectoryClient] = None):
        self.session = session
        self.host = session.host
        self.auth = session.auth
        self.index = session.index
        self.base_url = ""
        self.headers: dict = {}

        self.set_base_url()
        self.set_auth_headers()

        if client is None:
            kwargs = {}
            if config is not None:
                kwargs = dict(
                    timeout=config.timeout_seconds,
                    download_timeout=config.download_timeout_seconds,
                    chunk_size=config.chunk_size,
                )
            client = RemoteDirectoryClient(**kwargs)
        client.headers.update(self.headers)
        self.client = client

    @property
    def can_repair(self) -> bool:
        return callable(getattr(self, "repair_record_file", None))

    def close(self) -> None:
        self.client.close()

    @abstractmethod
    def set_base_url(self) -> None:
        """Set ``self.base_url`` from the host session."""

    def set_auth_headers(self) -> None:
        """Set ``self.headers`` sent with every request."""
        self.headers = {}

    @abstractmethod
    def get_records(self, time_range: Optional[DateTimeRange]) -> list[DateEntry]:
        """Return the date entries with records matching ``time_range``."""

    @abstractmethod
    def record_url(self, entry: DateEntry, record: Record) -> str:
        """URL to download ``record`` of ``entry`` from."""

    def download_record_files(self, entry: DateEntry, staging_dir: Path,
                              tracker=None) -> list[Record]:
        """Download every record of ``entry`` into ``staging_dir``.

        Local files keep the remote base name. Returns the records that
        were downloaded; failed ones are logged by the client and left out.
        """
        staged = []
        for record in entry.records:
            dest = Path(staging_dir) / record.name
            if self.client.download(self.record_url(entry, record), dest, tracker):
                staged.append(record)
        return staged
