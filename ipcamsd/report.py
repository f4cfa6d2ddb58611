"""
Per-host run reports.

``process()`` returns one ``HostReport`` per configured host describing what
happened to it: the files written (fetch), the range summaries printed
(list), and the reason a host was skipped or failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class HostReport:
    """Structured summary of one host's run."""

    host: str
    command: str
    firmware: str = ""
    status: str = "not_started"     # completed | no_records | skipped | unsupported | failed
    dates: int = 0
    records_downloaded: int = 0
    records_failed: int = 0
    outputs: list[str] = field(default_factory=list)
    listing: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def ok(self) -> bool:
        return self.status in ("completed", "no_records")

    def console_summary(self) -> str:
        """One-line summary suitable for the terminal."""
        parts: list[str] = [self.status.replace("_", " ")]
        if self.records_downloaded:
            parts.append(f"{self.records_downloaded:,} records")
        if self.records_failed:
            parts.append(f"{self.records_failed:,} failed")
        if self.outputs:
            parts.append(f"{len(self.outputs)} output file(s)")
        if self.errors:
            parts.append(f"{len(self.errors)} errors")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        d = {
            "host": self.host,
            "command": self.command,
            "firmware": self.firmware,
            "status": self.status,
            "dates": self.dates,
            "records_downloaded": self.records_downloaded,
            "records_failed": self.records_failed,
            "elapsed_seconds": round(self.elapsed_seconds, 2),
        }
        if self.outputs:
            d["outputs"] = self.outputs
        if self.listing:
            d["listing"] = self.listing
        if self.errors:
            d["errors"] = self.errors
        return d
