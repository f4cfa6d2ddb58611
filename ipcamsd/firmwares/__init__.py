"""Firmware adapters, looked up by lower-case name."""

from typing import Optional

from ipcamsd.firmwares.base import DateEntry, FirmwareAdapter, Record
from ipcamsd.firmwares.hi3510 import Hi3510
from ipcamsd.firmwares.reolink import Reolink

FIRMWARES = {
    Hi3510.name: Hi3510,
    Reolink.name: Reolink,
}


def get_firmware(name: Optional[str]) -> Optional[type]:
    """Return the adapter class registered as ``name`` (case-insensitive)."""
    if not name:
        return None
    return FIRMWARES.get(name.strip().lower())


__all__ = [
    "DateEntry",
    "FIRMWARES",
    "FirmwareAdapter",
    "Hi3510",
    "Record",
    "Reolink",
    "get_firmware",
]
