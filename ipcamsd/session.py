"""
Per-host settings for the ipcamsd orchestrator.

Host options given on the command line are positionally aligned lists: the
Nth host takes the Nth username/password/ssl flag/firmware, or the last one
given when a list is shorter. A fresh, immutable ``HostSession`` is built for
every host and passed to its firmware adapter.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

DEFAULT_FIRMWARE = "hi3510"
DEFAULT_TARGET_FILE_TYPE = "mp4"


def value_at(values: Optional[Sequence[Any]], index: int) -> Any:
    """Return ``values[index]``, or the last value if the list is shorter.

    An empty or missing list yields ``None`` for every index.
    """
    if not values:
        return None
    if index < len(values):
        return values[index]
    return values[-1]


def parse_bool(value) -> bool:
    """Parse a ``true``/``false`` command line value (case-insensitive)."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


@dataclass(frozen=True)
class Auth:
    """Credentials and transport of one host."""

    username: Optional[str] = None
    password: Optional[str] = None
    use_ssl: bool = False

    @property
    def scheme(self) -> str:
        return "https" if self.use_ssl else "http"


@dataclass(frozen=True)
class HostSession:
    """Resolved settings of one camera for one run."""

    host: str
    firmware_name: str
    auth: Auth
    index: int


@dataclass
class HostOptions:
    """Positionally aligned per-host lists, as given on the command line."""

    hosts: list = field(default_factory=list)
    firmwares: list = field(default_factory=lambda: [DEFAULT_FIRMWARE])
    usernames: list = field(default_factory=list)
    passwords: list = field(default_factory=list)
    ssls: list = field(default_factory=list)

    def session_for(self, index: int) -> HostSession:
        """Build the session of host ``index`` with the broadcast rule."""
        ssl = value_at(self.ssls, index)
        return HostSession(
            host=self.hosts[index],
            firmware_name=value_at(self.firmwares, index) or DEFAULT_FIRMWARE,
            auth=Auth(
                username=value_at(self.usernames, index),
                password=value_at(self.passwords, index),
                use_ssl=parse_bool(ssl) if ssl is not None else False,
            ),
            index=index,
        )

    def sessions(self):
        """Yield one session per host, in command line order."""
        for index in range(len(self.hosts)):
            yield self.session_for(index)


@dataclass
class FetchOptions:
    """Output settings of the fetch command."""

    target_directory: Optional[str] = None
    target_file_type: Optional[str] = None
    filename_prefix: Optional[str] = None
    filenames: list = field(default_factory=list)
    video_filters: list = field(default_factory=list)

    @property
    def file_type(self) -> str:
        return (self.target_file_type or DEFAULT_TARGET_FILE_TYPE).lower()

    def filename_for(self, index: int) -> Optional[str]:
        """Explicit output name of host ``index``, if any was given."""
        return value_at(self.filenames, index) or None
